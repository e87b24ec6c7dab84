"""
run_tune.py
Cross-validated grid search for every model spec; saves the CV tables and a
plot of mean CV score per parameter set.
"""

import os

import matplotlib.pyplot as plt
import seaborn as sns
import pandas as pd

from personality.tune_cv import run_grid
from personality.config import FIGS_DIR, PRIMARY_METRIC, CV_FOLDS, SEED
from personality.utils import ensure_dir

sns.set(style="whitegrid", context="talk")


def plot_cv_scores(agg_df: pd.DataFrame, outdir: str):
    ensure_dir(outdir)
    saved = []
    for model, group in agg_df.groupby("model"):
        group_sorted = group.sort_values("mean_metric")
        fig, ax = plt.subplots(figsize=(9, max(3, 0.4 * len(group_sorted))))
        ax.errorbar(group_sorted["mean_metric"], range(len(group_sorted)), xerr=group_sorted["std_metric"],
                    fmt="o", capsize=4)
        ax.set_yticks(range(len(group_sorted)))
        ax.set_yticklabels(group_sorted["params"], fontsize=9)
        ax.set_xlabel(f"Mean CV {PRIMARY_METRIC}")
        ax.set_title(f"{model}: {CV_FOLDS}-fold CV")
        fig.tight_layout()
        path = os.path.join(outdir, f"{model}_cv_scores.png")
        fig.savefig(path, dpi=150)
        plt.close(fig)
        saved.append(path)
    return saved


def main():
    res = run_grid(cv_folds=CV_FOLDS, seed=SEED)
    agg_df = res["agg"]
    for path in plot_cv_scores(agg_df, FIGS_DIR):
        print("Saved CV score plot to:", path)
    print("Best parameters per model (by mean metric, tie-broken by std):")
    for model, group in agg_df.groupby("model"):
        best = group.sort_values(["mean_metric", "std_metric"], ascending=[False, True]).iloc[0]
        print(f"- {model}: {best['params']}, mean={best['mean_metric']:.4f}, std={best['std_metric']:.4f}")


if __name__ == "__main__":
    main()
