"""
missing.py
Missing-value report (counts and percentages per column) and a short
heuristic note on whether missingness looks random or tied to the label.
"""

import os

import pandas as pd

from .config import TARGET
from .utils import ensure_dir


def missing_table(df: pd.DataFrame) -> pd.DataFrame:
    """
    One row per column: column, missing_count, missing_percent.
    Sorted by missing_percent descending.
    """
    total = len(df)
    cols = []
    for col in df.columns:
        miss = int(df[col].isna().sum())
        pct = (miss / total) * 100 if total > 0 else 0.0
        cols.append({"column": col, "missing_count": miss, "missing_percent": round(pct, 3)})
    table = pd.DataFrame(cols, columns=["column", "missing_count", "missing_percent"])
    return table.sort_values("missing_percent", ascending=False, kind="stable").reset_index(drop=True)


def save_missing_report(df: pd.DataFrame, outdir: str, filename: str = "missing_report.csv") -> str:
    ensure_dir(outdir)
    table = missing_table(df)
    csv_path = os.path.join(outdir, filename)
    txt_path = os.path.join(outdir, filename.replace(".csv", ".txt"))

    table.to_csv(csv_path, index=False)

    with open(txt_path, "w", encoding="utf-8") as f:
        f.write("column,missing_count,missing_percent\n")
        for _, row in table.iterrows():
            f.write(f"{row['column']},{row['missing_count']},{row['missing_percent']}%\n")

    return csv_path


def heuristic_missingness_assessment(df: pd.DataFrame, target_col: str = TARGET, threshold_pct: float = 5.0) -> str:
    """
    Not a formal MCAR test: flags columns above threshold_pct and reports the
    share of missing cells within each label class.
    """
    table = missing_table(df)
    if table["missing_count"].sum() == 0:
        return "No missing values detected."

    high = table[table["missing_percent"] > threshold_pct]

    if target_col in df.columns:
        by_target = []
        for val in sorted(df[target_col].dropna().unique()):
            subset = df[df[target_col] == val]
            pct_missing = subset.isna().sum().sum() / (len(subset) * len(df.columns)) * 100 if len(subset) > 0 else 0
            by_target.append((val, round(pct_missing, 3)))
        target_note = "Missingness by class, share of cells: " + "; ".join(f"{v}:{p}%" for v, p in by_target)
    else:
        target_note = "Target column not found; cannot compare missingness by class."

    if len(high) == 0:
        return f"Missing values present but all columns <= {threshold_pct}% missing (likely low or random). {target_note}"
    cols = ", ".join(high["column"].tolist())
    if len(high) <= 3:
        return f"Missingness concentrated in columns: {cols} (each > {threshold_pct}%). {target_note}"
    return f"Multiple columns ({len(high)}) have > {threshold_pct}% missing: {cols}. Investigate systematic causes. {target_note}"
