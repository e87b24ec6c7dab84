"""
eda.py
Functions to create and save the EDA figures:
- class distribution bar chart
- correlation heatmap
- histograms and boxplots of the numeric features
- Q-Q plots
Each plotting function saves a PNG into the provided outdir and returns the filepath.
"""

import os
from typing import List, Sequence

import matplotlib.pyplot as plt
import seaborn as sns
import pandas as pd
import scipy.stats as stats

from .config import TARGET
from .utils import ensure_dir

sns.set(style="whitegrid", context="talk")


def _save_fig(fig, filepath: str):
    """Tighten, save and close a Matplotlib figure."""
    fig.tight_layout()
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath


def plot_class_distribution(df: pd.DataFrame, outdir: str, target_col: str = TARGET) -> str:
    ensure_dir(outdir)
    counts = df[target_col].value_counts().sort_index()
    fig, ax = plt.subplots(figsize=(6, 4))
    sns.barplot(x=counts.index.astype(str), y=counts.values, color="#2b8cbe", ax=ax)
    total = counts.sum()
    for i, v in enumerate(counts.values):
        ax.text(i, v, f"{v} ({v / total:.1%})", ha="center", va="bottom", fontsize=11)
    ax.set_title(f"Class distribution of {target_col}")
    ax.set_xlabel(target_col)
    ax.set_ylabel("Count")
    path = os.path.join(outdir, f"class_distribution_{target_col}.png")
    return _save_fig(fig, path)


def plot_histograms(df: pd.DataFrame, cols: Sequence[str], outdir: str, hue: str = None) -> List[str]:
    ensure_dir(outdir)
    saved = []
    for col in cols:
        fig, ax = plt.subplots(figsize=(6, 4))
        if hue:
            sns.histplot(data=df, x=col, hue=hue, multiple="layer", ax=ax)
        else:
            sns.histplot(df[col].dropna(), kde=True, ax=ax, color="#2b8cbe")
        ax.set_title(f"Histogram of {col}")
        ax.set_xlabel(col)
        ax.set_ylabel("Count")
        path = os.path.join(outdir, f"hist_{col}.png")
        saved.append(_save_fig(fig, path))
    return saved


def plot_boxplots(df: pd.DataFrame, cols: Sequence[str], outdir: str, by: str = TARGET) -> List[str]:
    ensure_dir(outdir)
    saved = []
    for col in cols:
        fig, ax = plt.subplots(figsize=(6, 4))
        if by and by in df.columns:
            sns.boxplot(data=df, x=by, y=col, color="#f03b20", ax=ax)
            ax.set_title(f"{col} by {by}")
        else:
            sns.boxplot(x=df[col], color="#f03b20", ax=ax)
            ax.set_title(f"Boxplot of {col}")
        path = os.path.join(outdir, f"box_{col}.png")
        saved.append(_save_fig(fig, path))
    return saved


def plot_qq(df: pd.DataFrame, col: str, outdir: str) -> str:
    ensure_dir(outdir)
    fig = plt.figure(figsize=(6, 6))
    ax = fig.add_subplot(111)
    stats.probplot(df[col].dropna(), dist="norm", plot=ax)
    ax.set_title(f"Q-Q plot of {col}")
    path = os.path.join(outdir, f"qq_{col}.png")
    return _save_fig(fig, path)


def plot_corr_heatmap(df: pd.DataFrame, cols: Sequence[str], outdir: str, annot: bool = True) -> str:
    """Pearson correlation over pairwise-complete observations of cols."""
    ensure_dir(outdir)
    corr = df[list(cols)].corr()
    fig, ax = plt.subplots(figsize=(9, 7))
    sns.heatmap(corr, annot=annot, fmt=".2f", cmap="vlag", center=0, vmin=-1, vmax=1, ax=ax)
    ax.set_title("Correlation heatmap")
    path = os.path.join(outdir, "corr_heatmap.png")
    return _save_fig(fig, path)
