"""
run_eda.py
Run the EDA plots on the raw dataset and write a short summary of the class
balance and the strongest feature correlations.
Run from project root.
"""

import os

from personality.config import RAW_CSV, FIGS_DIR, REPORTS_DIR, TARGET, POSITIVE_LABEL, NUMERIC_COLS, FLAG_COLS
from personality.load_data import load_data
from personality.preprocess import encode_flags
from personality.utils import class_distribution, save_lines
import personality.eda as eda

REPORT_SUMMARY = os.path.join(REPORTS_DIR, "eda_summary.txt")


def main():
    df = load_data(RAW_CSV)

    dist_path = eda.plot_class_distribution(df, FIGS_DIR)
    eda.plot_histograms(df, NUMERIC_COLS, FIGS_DIR, hue=TARGET)
    eda.plot_boxplots(df, NUMERIC_COLS, FIGS_DIR, by=TARGET)
    for col in ("Time_spent_Alone", "Friends_circle_size"):
        eda.plot_qq(df, col, FIGS_DIR)

    # correlation over numeric features, encoded flags and the label as 0/1
    df_num = encode_flags(df)
    df_num[f"is_{POSITIVE_LABEL}"] = (df[TARGET] == POSITIVE_LABEL).astype(float).where(df[TARGET].notna())
    corr_cols = NUMERIC_COLS + FLAG_COLS + [f"is_{POSITIVE_LABEL}"]
    corr_path = eda.plot_corr_heatmap(df_num, corr_cols, FIGS_DIR, annot=True)

    dist = class_distribution(df, TARGET)
    target_corr = df_num[corr_cols].corr()[f"is_{POSITIVE_LABEL}"].drop(f"is_{POSITIVE_LABEL}")
    strongest = target_corr.abs().sort_values(ascending=False).index[:3]

    observations = ["Class balance: " + "; ".join(
        f"{label}={int(row['count'])} ({row['percent']:.2f}%)" for label, row in dist.iterrows())]
    observations += [f"Correlation with {POSITIVE_LABEL}: {col} r={target_corr[col]:+.3f}" for col in strongest]
    observations += [f"Figures: {dist_path}, {corr_path}"]

    save_lines(observations, REPORT_SUMMARY)
    print("EDA finished. Figures saved to:", FIGS_DIR)
    print("EDA summary saved to:", REPORT_SUMMARY)


if __name__ == "__main__":
    main()
