"""
evaluate.py
Refit each model on the training split with the parameters chosen by
cross-validation (read from the aggregated CV CSV when available) and evaluate
on the reserved test set.

Outputs per model:
- confusion matrix image: reports/figs/<model>_confusion_matrix.png
- feature importance image: reports/figs/<model>_feature_importance.png
- test-set probabilities: reports/results/predictions/<model>_test_predictions.csv
  columns: y_true, p_positive, y_pred
Across models:
- ROC overlay: reports/figs/roc_curves.png
- metrics CSV (overwritten): reports/results/model_performance.csv with columns
  model, params, cv_metric, accuracy, precision, recall, f1, auc, n_test, ...
"""

import os
import json
from typing import Dict, Any, List, Sequence

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from sklearn.metrics import (
    accuracy_score, precision_score, recall_score, f1_score, roc_auc_score, roc_curve, confusion_matrix,
)

from .config import (
    MODEL_SPECS, PROCESSED_DIR, RESULTS_DIR, FIGS_DIR, PREDICTIONS_DIR, SEED, POSITIVE_LABEL, NEGATIVE_LABEL,
)
from .prepare_inputs import load_split
from .tune_cv import TrainedClassifier, choose_params, cv_score_for, fit_classifier
from .utils import ensure_dir

sns.set(style="whitegrid", context="talk")


def classification_metrics(y_true, y_pred, p_positive, positive_label: str = POSITIVE_LABEL) -> Dict[str, float]:
    """Accuracy, precision, recall, F1 with positive_label as the positive class, plus ROC AUC."""
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)
    actual = (y_true == positive_label).astype(int)
    metrics = {
        "accuracy": float(accuracy_score(y_true, y_pred)),
        "precision": float(precision_score(y_true, y_pred, pos_label=positive_label, zero_division=0)),
        "recall": float(recall_score(y_true, y_pred, pos_label=positive_label, zero_division=0)),
        "f1": float(f1_score(y_true, y_pred, pos_label=positive_label, zero_division=0)),
    }
    if len(np.unique(actual)) == 2:
        metrics["auc"] = float(roc_auc_score(actual, p_positive))
    else:
        metrics["auc"] = float("nan")
    return metrics


def _plot_confusion(y_true, y_pred, outpath: str, model_name: str,
                    labels: Sequence[str] = (POSITIVE_LABEL, NEGATIVE_LABEL)) -> str:
    ensure_dir(os.path.dirname(outpath) or ".")
    cm = confusion_matrix(y_true, y_pred, labels=list(labels))
    plt.figure(figsize=(5, 4))
    sns.heatmap(cm, annot=True, fmt="d", cmap="Blues", xticklabels=labels, yticklabels=labels)
    plt.xlabel("Predicted")
    plt.ylabel("Actual")
    plt.title(f"{model_name}  Confusion Matrix")
    plt.tight_layout()
    plt.savefig(outpath, dpi=150)
    plt.close()
    return outpath


def _plot_feature_importance(classifier: TrainedClassifier, outpath: str) -> str:
    ensure_dir(os.path.dirname(outpath) or ".")
    imp = classifier.feature_importances()
    clf = classifier.estimator.named_steps["clf"]
    xlabel = "Mean decrease in impurity" if hasattr(clf, "feature_importances_") else "|standardised coefficient|"
    plt.figure(figsize=(8, 5))
    sns.barplot(x=imp.values, y=imp.index, color="#2b8cbe")
    plt.xlabel(xlabel)
    plt.ylabel("")
    plt.title(f"{classifier.name}  Feature importance")
    plt.tight_layout()
    plt.savefig(outpath, dpi=150)
    plt.close()
    return outpath


def plot_roc_overlay(curves: Dict[str, Dict[str, Any]], outpath: str) -> str:
    """curves maps model name -> {"y_true", "p_positive", "auc"}."""
    ensure_dir(os.path.dirname(outpath) or ".")
    plt.figure(figsize=(6, 6))
    for name, c in curves.items():
        fpr, tpr, _ = roc_curve(c["y_true"], c["p_positive"], pos_label=POSITIVE_LABEL)
        plt.plot(fpr, tpr, label=f"{name} (AUC={c['auc']:.3f})")
    plt.plot([0, 1], [0, 1], linestyle="--", color="#9CA3AF")
    plt.xlabel("False positive rate")
    plt.ylabel("True positive rate")
    plt.title("ROC curves (test set)")
    plt.legend(loc="lower right")
    plt.tight_layout()
    plt.savefig(outpath, dpi=150)
    plt.close()
    return outpath


def evaluate_models(split_dir: str = os.path.join(PROCESSED_DIR, "split"),
                    agg_csv_path: str = os.path.join(RESULTS_DIR, "cv_agg.csv"),
                    model_specs: List[Dict] = MODEL_SPECS, seed: int = SEED,
                    results_dir: str = RESULTS_DIR, figs_dir: str = FIGS_DIR,
                    predictions_dir: str = PREDICTIONS_DIR) -> List[Dict[str, Any]]:
    """
    For each model spec:
    - Choose parameters (from agg_csv_path or the first grid point)
    - Fit on the full training split
    - Predict the test split and compute accuracy, precision, recall, F1, AUC
    - Save the confusion matrix, feature importances and test-set probabilities
    Then save the ROC overlay and model_performance.csv.
    Returns list of per-model result dicts.
    """
    ensure_dir(results_dir)
    ensure_dir(figs_dir)
    ensure_dir(predictions_dir)

    X_train, X_test, y_train, y_test = load_split(split_dir)
    results_rows = []
    curves = {}

    for spec in model_specs:
        name = spec["name"]
        print(f"Evaluating model: {name}")

        params = choose_params(spec, agg_csv_path)
        classifier = fit_classifier(spec, params, X_train, y_train, seed=seed)

        p_positive = classifier.predict_proba(X_test)
        y_pred = classifier.predict_label(X_test)
        metrics = classification_metrics(y_test, y_pred, p_positive)

        cm_path = _plot_confusion(np.asarray(y_test), y_pred,
                                  os.path.join(figs_dir, f"{name}_confusion_matrix.png"), name)
        imp_path = _plot_feature_importance(classifier, os.path.join(figs_dir, f"{name}_feature_importance.png"))

        predictions_csv = os.path.join(predictions_dir, f"{name}_test_predictions.csv")
        pd.DataFrame({"y_true": np.asarray(y_test), "p_positive": p_positive, "y_pred": y_pred}).to_csv(
            predictions_csv, index=False)

        curves[name] = {"y_true": np.asarray(y_test), "p_positive": p_positive, "auc": metrics["auc"]}

        row = {
            "model": name,
            "params": json.dumps(params, sort_keys=True),
            "cv_metric": cv_score_for(name, params, agg_csv_path),
        }
        row.update(metrics)
        row.update({
            "n_test": int(len(y_test)),
            "confusion_matrix_png": cm_path,
            "feature_importance_png": imp_path,
            "predictions_csv": predictions_csv,
        })
        results_rows.append(row)
        print(f"- {name}: acc={metrics['accuracy']:.4f}, precision={metrics['precision']:.4f}, "
              f"recall={metrics['recall']:.4f}, f1={metrics['f1']:.4f}, auc={metrics['auc']:.4f}")

    roc_path = plot_roc_overlay(curves, os.path.join(figs_dir, "roc_curves.png"))
    print("Saved ROC overlay to:", roc_path)

    final_metrics_path = os.path.join(results_dir, "model_performance.csv")
    pd.DataFrame(results_rows).to_csv(final_metrics_path, index=False)
    print("Saved model performance to:", final_metrics_path)
    return results_rows
