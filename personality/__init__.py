"""EDA, model comparison and cutoff analysis for the personality dataset."""
