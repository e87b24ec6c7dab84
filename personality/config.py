import os

import numpy as np

# Reproducibility
SEED = 42
TEST_SIZE = 0.2

# File locations
DATASET_NAME = "personality"
RAW_CSV = os.path.join("data", "raw", "personality_dataset.csv")
PROCESSED_DIR = os.path.join("data", "processed")
REPORTS_DIR = "reports"
FIGS_DIR = os.path.join(REPORTS_DIR, "figs")
RESULTS_DIR = os.path.join(REPORTS_DIR, "results")
PREDICTIONS_DIR = os.path.join(RESULTS_DIR, "predictions")

# Columns
TARGET = "Personality"
POSITIVE_LABEL = "Extrovert"
NEGATIVE_LABEL = "Introvert"
NUMERIC_COLS = [
    "Time_spent_Alone",
    "Social_event_attendance",
    "Going_outside",
    "Friends_circle_size",
    "Post_frequency",
]
FLAG_COLS = ["Stage_fear", "Drained_after_socializing"]
FLAG_MAPPING = {"Yes": 1, "No": 0}
FEATURE_COLS = NUMERIC_COLS + FLAG_COLS
EXPECTED_COLUMNS = FEATURE_COLS + [TARGET]

# Imputation
NUMERIC_IMPUTATION = "median"
CATEGORICAL_IMPUTATION = "most_frequent"

# Models
RandomForest = {
    "name": "RandomForest",
    "estimator": "random_forest",
    "param_grid": {"clf__max_features": [2, 3, 4, 5, 6, 7]},
    "fixed_params": {"n_estimators": 300},
    "notes": "Bagged trees; max_features plays the role of mtry. No scaling needed."
}

ElasticNet = {
    "name": "ElasticNet",
    "estimator": "elastic_net",
    "param_grid": {
        "clf__l1_ratio": [0.0, 0.25, 0.5, 0.75, 1.0],
        "clf__C": [0.01, 0.1, 1.0, 10.0],
    },
    "fixed_params": {"max_iter": 5000},
    "notes": "Penalised logistic regression mixing L1 and L2; features are z-scored first."
}

MODEL_SPECS = [RandomForest, ElasticNet]

# Model selection
CV_FOLDS = 10                         # number of cross-validation folds
PRIMARY_METRIC = "roc_auc"            # GridSearchCV scoring string

# Threshold sweep: 0.10 .. 0.90 inclusive, step 0.05 (17 cutoffs)
CUTOFFS = [float(c) for c in np.round(np.arange(0.10, 0.90 + 1e-9, 0.05), 2)]
