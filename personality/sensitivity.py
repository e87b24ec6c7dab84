"""
sensitivity.py
Decision-cutoff sensitivity of the fitted models.

evaluate_cutoffs is a pure function of (probabilities, labels, cutoffs): for each
cutoff c a record is predicted positive when p >= c, and accuracy, sensitivity
and specificity are derived from the 2x2 confusion counts. Sensitivity is NaN
when there are no actual positives and specificity is NaN when there are no
actual negatives; such rows are still emitted.

The remaining functions read the per-model test-set probabilities written by
evaluate.py and produce:
- reports/results/<model>_cutoff_performance.csv
- reports/figs/<model>_cutoff_tradeoff.png
- reports/results/model_comparison.txt
"""

import os
from typing import Dict, List, NamedTuple, Sequence

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from sklearn.metrics import confusion_matrix

from .config import CUTOFFS, POSITIVE_LABEL, NEGATIVE_LABEL, MODEL_SPECS, RESULTS_DIR, FIGS_DIR, PREDICTIONS_DIR, PRIMARY_METRIC
from .utils import ensure_dir, save_text

sns.set(style="whitegrid", context="talk")

UNDEFINED = "undefined"


class ThresholdResult(NamedTuple):
    cutoff: float
    accuracy: float
    sensitivity: float
    specificity: float
    tp: int
    fp: int
    tn: int
    fn: int


def _ratio(num: int, den: int) -> float:
    return float(num / den) if den > 0 else float("nan")


def _validate(probabilities: Sequence[float], labels: Sequence, cutoffs: Sequence[float], classes: Sequence):
    p = np.asarray(probabilities, dtype=float).ravel()
    y = np.asarray(labels).ravel()
    c = np.asarray(cutoffs, dtype=float).ravel()
    if len(p) != len(y):
        raise ValueError(f"probabilities and labels differ in length: {len(p)} != {len(y)}")
    if len(p) == 0:
        raise ValueError("No predictions to evaluate")
    if len(c) == 0:
        raise ValueError("Cutoff sequence is empty")
    if np.isnan(p).any() or (p < 0).any() or (p > 1).any():
        bad = p[np.isnan(p) | (p < 0) | (p > 1)]
        raise ValueError(f"Probabilities must lie in [0, 1]; got {bad[:5].tolist()}")
    if np.isnan(c).any():
        raise ValueError("Cutoffs must not be NaN")
    unknown = sorted(set(y[~pd.Series(y).isin(list(classes)).to_numpy()].astype(str)))
    if unknown:
        raise ValueError(f"Labels must be one of {list(classes)}; got {unknown[:5]}")
    return p, y, c


def evaluate_cutoffs(probabilities: Sequence[float], labels: Sequence, cutoffs: Sequence[float] = CUTOFFS,
                     positive_label=POSITIVE_LABEL, negative_label=NEGATIVE_LABEL) -> List[ThresholdResult]:
    """
    One ThresholdResult per cutoff, in the order given. A record is an actual
    positive when its label equals positive_label, and a predicted positive
    when its probability is >= the cutoff, so p = 1.0 is positive at cutoff 1.0.
    Raises ValueError on length mismatch, probabilities outside [0, 1], a label
    that is neither positive_label nor negative_label, or an empty cutoff or
    probability sequence.
    """
    p, y, c = _validate(probabilities, labels, cutoffs, (positive_label, negative_label))
    actual = y == positive_label
    n = len(p)

    results = []
    for cutoff in c:
        predicted = p >= cutoff
        tn, fp, fn, tp = confusion_matrix(actual, predicted, labels=[False, True]).ravel()
        results.append(ThresholdResult(
            cutoff=float(cutoff),
            accuracy=float((tp + tn) / n),
            sensitivity=_ratio(tp, tp + fn),
            specificity=_ratio(tn, tn + fp),
            tp=int(tp), fp=int(fp), tn=int(tn), fn=int(fn),
        ))
    return results


def cutoff_table(results: Sequence[ThresholdResult]) -> pd.DataFrame:
    return pd.DataFrame([r._asdict() for r in results], columns=list(ThresholdResult._fields))


def format_cutoff_table(table: pd.DataFrame) -> str:
    """Fixed-width rendering with undefined metrics spelled out."""
    return table.to_string(index=False, float_format=lambda v: f"{v:.4f}", na_rep=UNDEFINED)


def plot_cutoff_tradeoff(table: pd.DataFrame, model_name: str, outpath: str) -> str:
    ensure_dir(os.path.dirname(outpath) or ".")
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.plot(table["cutoff"], table["accuracy"], marker="o", label="Accuracy")
    ax.plot(table["cutoff"], table["sensitivity"], marker="o", label="Sensitivity")
    ax.plot(table["cutoff"], table["specificity"], marker="o", label="Specificity")
    ax.set_xlabel("Cutoff")
    ax.set_ylabel("Score")
    ax.set_ylim(0, 1.05)
    ax.set_title(f"Cutoff trade-off: {model_name}")
    ax.legend(loc="lower center")
    fig.tight_layout()
    fig.savefig(outpath, dpi=150)
    plt.close(fig)
    return outpath


def _load_predictions(model_name: str, predictions_dir: str) -> pd.DataFrame:
    path = os.path.join(predictions_dir, f"{model_name}_test_predictions.csv")
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Test-set predictions not found for {model_name}: {path}")
    return pd.read_csv(path)


def run_cutoff_sweep(predictions_dir: str = PREDICTIONS_DIR, model_names: List[str] = None,
                     cutoffs: Sequence[float] = CUTOFFS, out_dir: str = RESULTS_DIR,
                     figs_dir: str = FIGS_DIR) -> Dict[str, pd.DataFrame]:
    """Evaluate every model's test-set probabilities over cutoffs and save tables and plots."""
    ensure_dir(out_dir)
    if model_names is None:
        model_names = [spec["name"] for spec in MODEL_SPECS]

    tables = {}
    for name in model_names:
        preds = _load_predictions(name, predictions_dir)
        table = cutoff_table(evaluate_cutoffs(preds["p_positive"], preds["y_true"], cutoffs))

        csv_path = os.path.join(out_dir, f"{name}_cutoff_performance.csv")
        table.to_csv(csv_path, index=False, na_rep=UNDEFINED)
        plot_cutoff_tradeoff(table, name, os.path.join(figs_dir, f"{name}_cutoff_tradeoff.png"))

        n_undefined = int(table[["sensitivity", "specificity"]].isna().any(axis=1).sum())
        if n_undefined:
            print(f"{name}: {n_undefined} cutoff(s) with an undefined sensitivity or specificity")
        print(f"Cutoff performance for {name}:")
        print(format_cutoff_table(table))
        print("Saved to:", csv_path)
        tables[name] = table
    return tables


def compare_models(metrics_csv: str = os.path.join(RESULTS_DIR, "model_performance.csv"),
                   out_path: str = os.path.join(RESULTS_DIR, "model_comparison.txt")) -> str:
    """One-paragraph comparison of the evaluated models, saved to out_path."""
    if not os.path.isfile(metrics_csv):
        raise FileNotFoundError(f"Model performance CSV not found: {metrics_csv}")
    final = pd.read_csv(metrics_csv)
    if len(final) < 2:
        raise RuntimeError("Expected at least two evaluated models in the performance table")

    ranked = final.sort_values(["auc", "f1"], ascending=False).reset_index(drop=True)
    parts = []
    for _, row in ranked.iterrows():
        part = (f"{row['model']} reached test AUC = {row['auc']:.4f}, F1 = {row['f1']:.4f}, "
                f"accuracy = {row['accuracy']:.4f}")
        if not pd.isna(row.get("cv_metric", np.nan)):
            part += f" (mean CV {PRIMARY_METRIC} = {row['cv_metric']:.4f})"
        parts.append(part)

    best, runner_up = ranked.iloc[0], ranked.iloc[1]
    para = "On the held-out test set, " + "; ".join(parts) + "."
    gap = best["auc"] - runner_up["auc"]
    if abs(gap) < 0.005:
        para += (f" The AUC gap between {best['model']} and {runner_up['model']} is below 0.005, so the"
                 " simpler or more interpretable model is a reasonable choice.")
    else:
        para += f" {best['model']} ranks records better by {gap:.4f} AUC."
    para += " See the per-cutoff tables for the sensitivity/specificity trade-off of each model."

    save_text(out_path, para + "\n")
    return para
