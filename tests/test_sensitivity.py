"""Tests for the cutoff evaluator and its reporting helpers."""

from __future__ import annotations

import math
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from personality.config import CUTOFFS
from personality.sensitivity import (
    ThresholdResult,
    compare_models,
    cutoff_table,
    evaluate_cutoffs,
    format_cutoff_table,
    run_cutoff_sweep,
)

PROBS = [0.2, 0.4, 0.6, 0.8]
LABELS = ["Introvert", "Introvert", "Extrovert", "Extrovert"]


def test_default_cutoff_grid() -> None:
    assert len(CUTOFFS) == 17
    assert CUTOFFS[0] == 0.10
    assert CUTOFFS[-1] == 0.90
    assert CUTOFFS[8] == 0.50


def test_perfect_separation_at_half() -> None:
    (res,) = evaluate_cutoffs(PROBS, LABELS, [0.5])
    assert (res.tp, res.fp, res.tn, res.fn) == (2, 0, 2, 0)
    assert res.accuracy == 1.0
    assert res.sensitivity == 1.0
    assert res.specificity == 1.0


def test_high_cutoff_gives_zero_sensitivity_not_undefined() -> None:
    (res,) = evaluate_cutoffs(PROBS, LABELS, [0.9])
    assert res.tp == 0 and res.fn == 2
    assert res.sensitivity == 0.0
    assert res.specificity == 1.0
    assert res.accuracy == 0.5


def test_cutoff_equal_to_probability_is_positive() -> None:
    (res,) = evaluate_cutoffs([0.5], ["Extrovert"], [0.5])
    assert res.tp == 1 and res.fn == 0
    assert res.sensitivity == 1.0
    assert math.isnan(res.specificity)


def test_zero_cutoff_classifies_everything_positive() -> None:
    (res,) = evaluate_cutoffs(PROBS, LABELS, [0.0])
    assert res.tp + res.fp == len(PROBS)
    assert res.sensitivity == 1.0
    assert res.specificity == 0.0


def test_cutoff_above_max_classifies_everything_negative() -> None:
    for cutoff in (1.0, 0.81):
        (res,) = evaluate_cutoffs(PROBS, LABELS, [cutoff])
        assert res.tp + res.fp == 0
        assert res.sensitivity == 0.0


def test_one_row_per_cutoff_in_input_order() -> None:
    cutoffs = [0.7, 0.1, 0.5, 0.5, 0.3]
    results = evaluate_cutoffs(PROBS, LABELS, cutoffs)
    assert [r.cutoff for r in results] == cutoffs
    assert all(isinstance(r, ThresholdResult) for r in results)


def test_predicted_positive_count_non_increasing() -> None:
    rng = np.random.default_rng(3)
    probs = rng.random(300)
    labels = np.where(rng.random(300) < 0.5, "Extrovert", "Introvert")
    results = evaluate_cutoffs(probs, labels, CUTOFFS)
    predicted_pos = [r.tp + r.fp for r in results]
    assert all(a >= b for a, b in zip(predicted_pos, predicted_pos[1:]))
    assert all(r.tp + r.fp + r.tn + r.fn == 300 for r in results)


def test_rerun_is_identical() -> None:
    rng = np.random.default_rng(7)
    probs = rng.random(50)
    labels = np.where(rng.random(50) < 0.4, "Extrovert", "Introvert")
    first = cutoff_table(evaluate_cutoffs(probs, labels))
    second = cutoff_table(evaluate_cutoffs(probs, labels))
    pd.testing.assert_frame_equal(first, second)


def test_no_positives_gives_undefined_sensitivity() -> None:
    results = evaluate_cutoffs([0.1, 0.7], ["Introvert", "Introvert"], [0.5, 0.9])
    assert all(math.isnan(r.sensitivity) for r in results)
    assert [r.specificity for r in results] == [0.5, 1.0]


def test_numeric_labels_with_custom_positive() -> None:
    (res,) = evaluate_cutoffs(PROBS, [0, 0, 1, 1], [0.5], positive_label=1, negative_label=0)
    assert res.accuracy == 1.0


def test_probability_of_one_is_positive_at_cutoff_one() -> None:
    (res,) = evaluate_cutoffs([1.0, 0.2], ["Extrovert", "Introvert"], [1.0])
    assert (res.tp, res.fp, res.tn, res.fn) == (1, 0, 1, 0)
    assert res.accuracy == 1.0


@pytest.mark.parametrize(
    "probs, labels, cutoffs",
    [
        ([0.2, 0.4], ["Extrovert"], [0.5]),
        ([0.2, 1.2], ["Extrovert", "Introvert"], [0.5]),
        ([-0.1, 0.4], ["Extrovert", "Introvert"], [0.5]),
        ([float("nan"), 0.4], ["Extrovert", "Introvert"], [0.5]),
        ([0.2, 0.4], ["Extrovert", "Introvert"], []),
        ([], [], [0.5]),
        ([0.9, 0.1], ["extrovert", "Introvert"], [0.5]),
        ([0.9, 0.1], ["Extrovert", "Ambivert"], [0.5]),
        ([0.9, 0.1], ["Extrovert", None], [0.5]),
        ([0.9, 0.1], [1, 0], [0.5]),
    ],
)
def test_invalid_input_raises(probs, labels, cutoffs) -> None:
    with pytest.raises(ValueError):
        evaluate_cutoffs(probs, labels, cutoffs)


def test_format_renders_undefined() -> None:
    table = cutoff_table(evaluate_cutoffs([0.5], ["Extrovert"], [0.5]))
    assert "undefined" in format_cutoff_table(table)
    assert list(table.columns) == ["cutoff", "accuracy", "sensitivity", "specificity", "tp", "fp", "tn", "fn"]


def test_run_cutoff_sweep_writes_tables(tmp_path: Path) -> None:
    pred_dir = tmp_path / "predictions"
    pred_dir.mkdir()
    pd.DataFrame({"y_true": LABELS, "p_positive": PROBS, "y_pred": LABELS}).to_csv(
        pred_dir / "ModelA_test_predictions.csv", index=False)

    tables = run_cutoff_sweep(str(pred_dir), ["ModelA"], cutoffs=[0.5, 0.9],
                              out_dir=str(tmp_path / "results"), figs_dir=str(tmp_path / "figs"))

    assert list(tables) == ["ModelA"]
    saved = pd.read_csv(tmp_path / "results" / "ModelA_cutoff_performance.csv")
    assert saved["cutoff"].tolist() == [0.5, 0.9]
    assert (tmp_path / "figs" / "ModelA_cutoff_tradeoff.png").is_file()


def test_run_cutoff_sweep_missing_predictions(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        run_cutoff_sweep(str(tmp_path), ["Nope"], out_dir=str(tmp_path), figs_dir=str(tmp_path))


def test_compare_models_names_the_better_model(tmp_path: Path) -> None:
    metrics = tmp_path / "model_performance.csv"
    pd.DataFrame([
        {"model": "RandomForest", "auc": 0.95, "f1": 0.93, "accuracy": 0.92, "cv_metric": 0.94},
        {"model": "ElasticNet", "auc": 0.90, "f1": 0.91, "accuracy": 0.90, "cv_metric": float("nan")},
    ]).to_csv(metrics, index=False)
    out = tmp_path / "comparison.txt"

    para = compare_models(str(metrics), str(out))

    assert para.index("RandomForest") < para.index("ElasticNet")
    assert "RandomForest ranks records better by 0.0500 AUC" in para
    assert out.read_text(encoding="utf-8").strip() == para


def test_run_cutoff_sweep_writes_undefined_for_single_class(tmp_path: Path) -> None:
    pred_dir = tmp_path / "predictions"
    pred_dir.mkdir()
    pd.DataFrame({"y_true": ["Extrovert"], "p_positive": [0.7], "y_pred": ["Extrovert"]}).to_csv(
        pred_dir / "ModelA_test_predictions.csv", index=False)

    run_cutoff_sweep(str(pred_dir), ["ModelA"], cutoffs=[0.5],
                     out_dir=str(tmp_path / "results"), figs_dir=str(tmp_path / "figs"))

    saved = pd.read_csv(tmp_path / "results" / "ModelA_cutoff_performance.csv", keep_default_na=False)
    assert saved["specificity"].tolist() == ["undefined"]
    assert saved["sensitivity"].tolist() == [1.0]
    assert saved[["tp", "fp", "tn", "fn"]].iloc[0].tolist() == [1, 0, 0, 0]
