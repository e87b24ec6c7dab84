"""
tune_cv.py
Cross-validated hyperparameter search for the Random Forest and Elastic Net
models, and refitting of a chosen parameter set on the training split.

Outputs of run_grid:
- detailed CSV: reports/results/cv_results.csv
  columns: model, params, fold, metric_value
- aggregated CSV: reports/results/cv_agg.csv
  columns: model, params, mean_metric, std_metric, rank
params are stored as JSON strings so they can be read back by choose_params.
"""

import os
import json
from typing import List, Dict, Any, Optional

import numpy as np
import pandas as pd
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler
from sklearn.ensemble import RandomForestClassifier
from sklearn.linear_model import LogisticRegression
from sklearn.model_selection import GridSearchCV, StratifiedKFold

from .config import (
    MODEL_SPECS, PROCESSED_DIR, RESULTS_DIR, CV_FOLDS, PRIMARY_METRIC, SEED, POSITIVE_LABEL, NEGATIVE_LABEL,
)
from .prepare_inputs import load_split
from .utils import ensure_dir


class TrainedClassifier:
    """
    A fitted binary classifier over named feature columns. Labels are the
    original strings; the positive class is positive_label.
    """

    def __init__(self, name: str, estimator: Pipeline, feature_names: List[str], params: Dict[str, Any],
                 positive_label: str = POSITIVE_LABEL, negative_label: str = NEGATIVE_LABEL):
        self.name = name
        self.estimator = estimator
        self.feature_names = list(feature_names)
        self.params = dict(params)
        self.positive_label = positive_label
        self.negative_label = negative_label

    def _features(self, X) -> pd.DataFrame:
        if isinstance(X, pd.DataFrame):
            return X[self.feature_names]
        return pd.DataFrame(np.atleast_2d(X), columns=self.feature_names)

    def predict_proba(self, X) -> np.ndarray:
        """Probability of positive_label for each row of X."""
        proba = self.estimator.predict_proba(self._features(X))
        pos_idx = list(self.estimator.classes_).index(1)
        return proba[:, pos_idx]

    def predict_label(self, X) -> np.ndarray:
        pred = self.estimator.predict(self._features(X))
        return np.where(pred == 1, self.positive_label, self.negative_label)

    def feature_importances(self) -> pd.Series:
        """
        Impurity importances for tree ensembles; absolute coefficients on the
        standardised features for linear models. Sorted descending.
        """
        clf = self.estimator.named_steps["clf"]
        if hasattr(clf, "feature_importances_"):
            values = clf.feature_importances_
        elif hasattr(clf, "coef_"):
            values = np.abs(clf.coef_).ravel()
        else:
            raise RuntimeError(f"{self.name}: estimator exposes no importances")
        return pd.Series(values, index=self.feature_names, name="importance").sort_values(ascending=False)


def encode_target(y: pd.Series, positive_label: str = POSITIVE_LABEL, negative_label: str = NEGATIVE_LABEL) -> np.ndarray:
    """positive_label -> 1, negative_label -> 0; anything else raises ValueError."""
    y = pd.Series(y)
    unknown = sorted(set(y.astype(str)) - {positive_label, negative_label})
    if unknown:
        raise ValueError(f"Unexpected target labels: {unknown}")
    return (y == positive_label).astype(int).values


def build_estimator(model_spec: Dict, seed: int = SEED) -> Pipeline:
    kind = model_spec["estimator"]
    fixed = model_spec.get("fixed_params", {})
    if kind == "random_forest":
        clf = RandomForestClassifier(random_state=seed, n_jobs=-1, **fixed)
        return Pipeline([("clf", clf)])
    if kind == "elastic_net":
        # penalty follows l1_ratio: 0 is L2, 1 is L1, anything between is elastic net
        clf = LogisticRegression(solver="saga", l1_ratio=0.5, random_state=seed, **fixed)
        return Pipeline([("scaler", StandardScaler()), ("clf", clf)])
    raise ValueError(f"Unknown estimator kind '{kind}' in model spec {model_spec.get('name')}")


def default_params(model_spec: Dict) -> Dict[str, Any]:
    return {k: v[0] for k, v in model_spec.get("param_grid", {}).items()}


def params_key(params: Dict[str, Any]) -> str:
    return json.dumps(params, sort_keys=True)


def run_grid(split_dir: str = os.path.join(PROCESSED_DIR, "split"), model_specs: List[Dict] = MODEL_SPECS,
             cv_folds: int = CV_FOLDS, seed: int = SEED, out_dir: str = RESULTS_DIR,
             scoring: str = PRIMARY_METRIC) -> Dict[str, Any]:
    """
    Stratified k-fold grid search per model on the training split.
    Returns a dictionary with detailed per-fold results, the aggregate and saved paths.
    """
    X_train, _, y_train, _ = load_split(split_dir)
    y = encode_target(y_train)

    results = []
    summaries = []

    for spec in model_specs:
        name = spec["name"]
        print(f"Tuning model: {name} ({cv_folds}-fold CV, scoring={scoring})")
        skf = StratifiedKFold(n_splits=cv_folds, shuffle=True, random_state=seed)
        search = GridSearchCV(build_estimator(spec, seed), spec["param_grid"], scoring=scoring,
                              cv=skf, n_jobs=-1, refit=False)
        search.fit(X_train, y)
        cv = search.cv_results_

        for i, params in enumerate(cv["params"]):
            key = params_key(params)
            for fold in range(cv_folds):
                results.append({
                    "model": name,
                    "params": key,
                    "fold": fold + 1,
                    "metric_value": float(cv[f"split{fold}_test_score"][i])
                })
            summaries.append({
                "model": name,
                "params": key,
                "mean_metric": float(cv["mean_test_score"][i]),
                "std_metric": float(cv["std_test_score"][i]),
                "rank": int(cv["rank_test_score"][i])
            })
        print(f"- best {scoring} for {name}: {search.best_score_:.4f} with {search.best_params_}")

    ensure_dir(out_dir)
    results_df = pd.DataFrame(results)
    agg_df = pd.DataFrame(summaries).sort_values(["model", "rank"]).reset_index(drop=True)

    results_csv = os.path.join(out_dir, "cv_results.csv")
    agg_csv = os.path.join(out_dir, "cv_agg.csv")
    results_df.to_csv(results_csv, index=False)
    agg_df.to_csv(agg_csv, index=False)

    print(f"Saved detailed CV results to: {results_csv}")
    print(f"Saved aggregated CV results to: {agg_csv}")

    return {"detailed": results_df, "agg": agg_df, "paths": {"results_csv": results_csv, "agg_csv": agg_csv}}


def choose_params(model_spec: Dict, agg_csv_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Best parameters for a model: highest mean_metric, ties broken by smaller
    std_metric. Without an aggregated CSV, the first point of the grid.
    """
    name = model_spec["name"]
    if agg_csv_path and os.path.isfile(agg_csv_path):
        agg = pd.read_csv(agg_csv_path)
        group = agg[agg["model"] == name]
        if group.empty:
            raise RuntimeError(f"No aggregated CV results found for model: {name}")
        best = group.sort_values(["mean_metric", "std_metric"], ascending=[False, True], kind="stable").iloc[0]
        return json.loads(best["params"])
    print(f"No CV results at {agg_csv_path}; using first grid point for {name}")
    return default_params(model_spec)


def cv_score_for(model_name: str, params: Dict[str, Any], agg_csv_path: Optional[str]) -> float:
    """Mean CV metric recorded for params, NaN when not available."""
    if not agg_csv_path or not os.path.isfile(agg_csv_path):
        return float("nan")
    agg = pd.read_csv(agg_csv_path)
    row = agg[(agg["model"] == model_name) & (agg["params"] == params_key(params))]
    return float(row["mean_metric"].iloc[0]) if not row.empty else float("nan")


def fit_classifier(model_spec: Dict, params: Dict[str, Any], X_train: pd.DataFrame, y_train: pd.Series,
                   seed: int = SEED) -> TrainedClassifier:
    estimator = build_estimator(model_spec, seed)
    estimator.set_params(**params)
    estimator.fit(X_train, encode_target(y_train))
    return TrainedClassifier(model_spec["name"], estimator, list(X_train.columns), params)
