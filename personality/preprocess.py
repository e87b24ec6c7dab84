"""
preprocess.py
Clean the raw table and save the modelling input:
- numeric columns imputed with the median of the observed values
- categorical columns imputed with the most frequent observed value
- Yes/No flags encoded as 1/0
Writes the cleaned CSV, the processed (encoded) CSV and a short preprocessing log.
"""

import os
from typing import List, Dict, Tuple, Any

import numpy as np
import pandas as pd
from sklearn.impute import SimpleImputer
from sklearn.compose import ColumnTransformer

from .config import (
    RAW_CSV, PROCESSED_DIR, DATASET_NAME, SEED, TARGET, FEATURE_COLS, FLAG_COLS, FLAG_MAPPING,
    NUMERIC_IMPUTATION, CATEGORICAL_IMPUTATION,
)
from .load_data import load_data
from .utils import ensure_dir, save_lines


def _detect_columns(df: pd.DataFrame) -> Tuple[List[str], List[str]]:
    """Split columns into (numeric_cols, categorical_cols) by dtype."""
    numeric_cols = df.select_dtypes(include=[np.number]).columns.tolist()
    categorical_cols = [c for c in df.columns if c not in numeric_cols]
    return numeric_cols, categorical_cols


def _build_imputer(numeric_cols: List[str], categorical_cols: List[str]) -> ColumnTransformer:
    return ColumnTransformer(
        transformers=[
            ("num", SimpleImputer(strategy=NUMERIC_IMPUTATION), numeric_cols),
            ("cat", SimpleImputer(strategy=CATEGORICAL_IMPUTATION), categorical_cols),
        ],
        remainder="drop",
        sparse_threshold=0,
    )


def clean_dataset(df_raw: pd.DataFrame) -> Tuple[pd.DataFrame, Dict[str, Any]]:
    """
    Impute every missing cell. Returns (cleaned_df, imputation_values) where
    imputation_values maps column -> fill value. Column order, index and
    numeric dtypes are preserved. A column with no observed value raises ValueError.
    """
    df = df_raw.copy(deep=True)

    empty = [c for c in df.columns if df[c].notna().sum() == 0]
    if empty:
        raise ValueError(f"Cannot impute columns with no observed values: {empty}")

    numeric_cols, categorical_cols = _detect_columns(df)
    for c in categorical_cols:
        df[c] = df[c].astype(object).where(df[c].notna(), np.nan)
    imputer = _build_imputer(numeric_cols, categorical_cols)
    transformed = imputer.fit_transform(df)

    out = pd.DataFrame(transformed, columns=numeric_cols + categorical_cols, index=df.index)
    for c in numeric_cols:
        out[c] = out[c].astype(float)
    out = out[list(df.columns)]

    values = {}
    for name, cols in (("num", numeric_cols), ("cat", categorical_cols)):
        if not cols:
            continue
        stats = imputer.named_transformers_[name].statistics_
        for c, v in zip(cols, stats):
            values[c] = v.item() if hasattr(v, "item") else v
    return out, values


def encode_flags(df: pd.DataFrame, flag_cols: List[str] = FLAG_COLS,
                 mapping: Dict[str, int] = FLAG_MAPPING) -> pd.DataFrame:
    """Map Yes/No flags to 1/0. Values outside mapping raise ValueError."""
    out = df.copy()
    for c in flag_cols:
        if c not in out.columns:
            continue
        observed = out[c].dropna()
        unknown = sorted(set(observed.astype(str)) - set(mapping))
        if unknown:
            raise ValueError(f"Unexpected values in flag column '{c}': {unknown}")
        out[c] = out[c].map(mapping)
    return out


def run_preprocess(csv_path: str = RAW_CSV, out_base: str = PROCESSED_DIR, dataset_name: str = DATASET_NAME) -> Dict:
    """
    Load the raw CSV, clean and encode it, and save:
    - cleaned CSV: out_base/<dataset_name>_cleaned.csv (original Yes/No flags)
    - processed CSV: out_base/<dataset_name>_processed.csv (features encoded, target last)
    - log file listing the imputation values
    Returns a summary dict with paths and metadata.
    """
    ensure_dir(out_base)
    df_raw = load_data(csv_path)
    n_missing_before = int(df_raw.isna().sum().sum())

    df_clean, imputation_values = clean_dataset(df_raw)
    if df_clean.isna().any().any():
        raise RuntimeError("Cleaning left missing values behind")

    df_processed = encode_flags(df_clean)
    features = [c for c in FEATURE_COLS if c in df_processed.columns]
    df_processed = df_processed[features + [TARGET]]

    cleaned_csv = os.path.join(out_base, f"{dataset_name}_cleaned.csv")
    processed_csv = os.path.join(out_base, f"{dataset_name}_processed.csv")
    df_clean.to_csv(cleaned_csv, index=False)
    df_processed.to_csv(processed_csv, index=False)

    numeric_cols, categorical_cols = _detect_columns(df_raw)
    log_path = os.path.join(out_base, f"{dataset_name}_preprocessing_log.txt")
    log_lines = [
        f"source_csv: {csv_path}",
        f"numeric_imputation: {NUMERIC_IMPUTATION}",
        f"categorical_imputation: {CATEGORICAL_IMPUTATION}",
        f"numeric_columns: {numeric_cols}",
        f"categorical_columns: {categorical_cols}",
        f"flag_encoding: {FLAG_MAPPING}",
        f"missing_cells_before: {n_missing_before}",
        f"missing_cells_after: {int(df_clean.isna().sum().sum())}",
    ]
    log_lines += [f"impute[{c}]: {v}" for c, v in imputation_values.items()]
    log_lines += [
        f"cleaned_csv: {cleaned_csv}",
        f"processed_csv: {processed_csv}",
        f"seed: {SEED}",
    ]
    save_lines(log_lines, log_path)
    print(f"Imputed {n_missing_before} missing cells in {len(df_raw)} rows")

    return {
        "cleaned_csv": cleaned_csv,
        "processed_csv": processed_csv,
        "log": log_path,
        "n_rows": int(df_processed.shape[0]),
        "n_columns": int(df_processed.shape[1]),
        "imputation_values": imputation_values,
    }
