import os
from typing import List, Optional

import numpy as np
import pandas as pd

from .config import EXPECTED_COLUMNS, NUMERIC_COLS


def load_data(csv_path: str, required_columns: Optional[List[str]] = EXPECTED_COLUMNS,
              numeric_columns: Optional[List[str]] = NUMERIC_COLS) -> pd.DataFrame:
    """
    Read the raw CSV. Text cells are stripped, empty and whitespace-only cells
    are returned as NaN, and numeric_columns are coerced to float.
    Raises FileNotFoundError for a missing file and ValueError when the file
    cannot be parsed, lacks any of required_columns, or holds non-numeric
    text in a numeric column.
    """
    if not os.path.isfile(csv_path):
        raise FileNotFoundError(f"CSV not found at: {csv_path}")

    try:
        df = pd.read_csv(csv_path, skipinitialspace=True)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise ValueError(f"Could not parse CSV at {csv_path}: {e}") from e

    if required_columns:
        missing = [c for c in required_columns if c not in df.columns]
        if missing:
            raise ValueError(f"CSV at {csv_path} is missing expected columns: {missing}")

    for col in df.columns:
        if pd.api.types.is_string_dtype(df[col]):
            df[col] = df[col].str.strip()
    df_raw = df.replace(r"^\s*$", np.nan, regex=True)

    for col in numeric_columns or []:
        if col not in df_raw.columns:
            continue
        try:
            df_raw[col] = pd.to_numeric(df_raw[col]).astype(float)
        except (ValueError, TypeError) as e:
            raise ValueError(f"Non-numeric value in column '{col}' of {csv_path}: {e}") from e

    return df_raw
