"""
utils.py
Small file helpers and the initial dataset audit (head, info, describe,
class distribution) written as plain-text files.
"""

import os
import io
from typing import Dict

import pandas as pd

from .config import TARGET


def ensure_dir(path: str):
    os.makedirs(path, exist_ok=True)


def save_text(path: str, text: str):
    ensure_dir(os.path.dirname(path) or ".")
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


def save_lines(lines, path: str):
    """Write one line per entry, overwriting any existing file."""
    ensure_dir(os.path.dirname(path) or ".")
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(str(line).rstrip() + "\n")


def class_distribution(df: pd.DataFrame, target_col: str = TARGET) -> pd.DataFrame:
    counts = df[target_col].value_counts(dropna=False).sort_index()
    percents = df[target_col].value_counts(normalize=True, dropna=False).sort_index() * 100
    return pd.DataFrame({"count": counts, "percent": percents.round(2)})


def save_initial_audit(df: pd.DataFrame, outdir: str, target_col: str = TARGET) -> Dict[str, str]:
    ensure_dir(outdir)
    paths = {
        "head": os.path.join(outdir, "head.txt"),
        "info": os.path.join(outdir, "info.txt"),
        "describe": os.path.join(outdir, "describe.txt"),
        "class_distribution": os.path.join(outdir, "class_distribution.txt"),
    }

    save_text(paths["head"], df.head(10).to_csv(index=False))

    buf = io.StringIO()
    df.info(buf=buf)
    save_text(paths["info"], buf.getvalue())

    save_text(paths["describe"], df.describe(include="all").to_string())

    if target_col in df.columns:
        dist = class_distribution(df, target_col)
        lines = ["Value\tCount\tPercent"]
        for val, row in dist.iterrows():
            lines.append(f"{val}\t{int(row['count'])}\t{row['percent']:.2f}%")
        save_text(paths["class_distribution"], "\n".join(lines))
    else:
        save_text(
            paths["class_distribution"],
            f"Target column '{target_col}' not found in DataFrame columns: {list(df.columns)}",
        )
    return paths
