"""
prepare_inputs.py
Prepare modelling inputs from the processed dataset:
- Separate X (features) and y (Personality)
- Stratified train/test split (80/20) with an explicit seed
- Save train/test CSVs and split index files for reproducibility
"""

import os
import json
from typing import Dict, Tuple

import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split

from .config import PROCESSED_DIR, DATASET_NAME, SEED, TEST_SIZE, TARGET
from .utils import ensure_dir


def split_paths(out_dir: str) -> Dict[str, str]:
    return {
        "X_train": os.path.join(out_dir, "X_train.csv"),
        "X_test": os.path.join(out_dir, "X_test.csv"),
        "y_train": os.path.join(out_dir, "y_train.csv"),
        "y_test": os.path.join(out_dir, "y_test.csv"),
    }


def save_split_indices(outdir: str, train_idx: np.ndarray, test_idx: np.ndarray, extra: Dict = None):
    """Save train/test indices as .npy and a small JSON summary for easy inspection."""
    ensure_dir(outdir)
    np.save(os.path.join(outdir, "train_idx.npy"), train_idx)
    np.save(os.path.join(outdir, "test_idx.npy"), test_idx)
    summary = {
        "n_train": int(len(train_idx)),
        "n_test": int(len(test_idx)),
        "train_idx_path": "train_idx.npy",
        "test_idx_path": "test_idx.npy"
    }
    summary.update(extra or {})
    with open(os.path.join(outdir, "split_summary.json"), "w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2)


def split_indices(y: pd.Series, test_size: float = TEST_SIZE, seed: int = SEED) -> Tuple[np.ndarray, np.ndarray]:
    """
    Row positions (train_idx, test_idx) for a split of y. Stratified on y when
    it holds more than one class; plain random split otherwise.
    """
    idx = np.arange(len(y))
    stratify = y if y.nunique() > 1 else None
    idx_train, idx_test = train_test_split(idx, test_size=test_size, random_state=seed, stratify=stratify)
    return idx_train, idx_test


def _class_proportions(y: pd.Series) -> Dict[str, float]:
    return {str(k): round(float(v), 4) for k, v in y.value_counts(normalize=True).sort_index().items()}


def prepare_inputs(processed_csv_path: str = os.path.join(PROCESSED_DIR, f"{DATASET_NAME}_processed.csv"),
                   out_dir: str = os.path.join(PROCESSED_DIR, "split"),
                   test_size: float = TEST_SIZE,
                   seed: int = SEED,
                   target_col: str = TARGET) -> Dict:
    """
    Split the processed CSV into X/y train/test CSVs under out_dir and save the
    row indices. Returns a summary dict with saved paths, sizes and class proportions.
    """
    ensure_dir(out_dir)

    if not os.path.isfile(processed_csv_path):
        raise FileNotFoundError(f"Processed CSV not found: {processed_csv_path}")

    df = pd.read_csv(processed_csv_path)
    if target_col not in df.columns:
        raise RuntimeError(f"'{target_col}' column not found in processed CSV: {processed_csv_path}")

    y = df[target_col].copy()
    X = df.drop(columns=[target_col])

    train_idx, test_idx = split_indices(y, test_size=test_size, seed=seed)
    X_train = X.iloc[train_idx].reset_index(drop=True)
    X_test = X.iloc[test_idx].reset_index(drop=True)
    y_train = y.iloc[train_idx].reset_index(drop=True)
    y_test = y.iloc[test_idx].reset_index(drop=True)

    paths = split_paths(out_dir)
    X_train.to_csv(paths["X_train"], index=False)
    X_test.to_csv(paths["X_test"], index=False)
    y_train.to_csv(paths["y_train"], index=False)
    y_test.to_csv(paths["y_test"], index=False)

    proportions = {
        "all": _class_proportions(y),
        "train": _class_proportions(y_train),
        "test": _class_proportions(y_test),
    }
    save_split_indices(out_dir, train_idx, test_idx, extra={"seed": seed, "test_size": test_size,
                                                            "class_proportions": proportions})

    summary = dict(paths)
    summary.update({
        "train_idx": os.path.join(out_dir, "train_idx.npy"),
        "test_idx": os.path.join(out_dir, "test_idx.npy"),
        "n_train": int(len(train_idx)),
        "n_test": int(len(test_idx)),
        "class_proportions": proportions,
    })
    return summary


def load_split(out_dir: str = os.path.join(PROCESSED_DIR, "split")) -> Tuple[pd.DataFrame, pd.DataFrame, pd.Series, pd.Series]:
    """
    Read the split written by prepare_inputs.
    Raises FileNotFoundError if expected files are missing.
    """
    paths = split_paths(out_dir)
    for p in paths.values():
        if not os.path.isfile(p):
            raise FileNotFoundError(f"Required split file missing: {p}")
    X_train = pd.read_csv(paths["X_train"])
    X_test = pd.read_csv(paths["X_test"])
    y_train = pd.read_csv(paths["y_train"]).squeeze("columns")
    y_test = pd.read_csv(paths["y_test"]).squeeze("columns")
    return X_train, X_test, y_train, y_test
