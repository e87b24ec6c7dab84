"""Tests for loading, missing-value reporting and cleaning."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from personality.config import FEATURE_COLS, TARGET
from personality.load_data import load_data
from personality.missing import heuristic_missingness_assessment, missing_table, save_missing_report
from personality.preprocess import clean_dataset, encode_flags, run_preprocess
from personality.utils import save_initial_audit

HEADER = ("Time_spent_Alone,Stage_fear,Social_event_attendance,Going_outside,"
          "Drained_after_socializing,Friends_circle_size,Post_frequency,Personality\n")


def test_load_data_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_data(str(tmp_path / "nope.csv"))


def test_load_data_missing_columns(tmp_path: Path) -> None:
    path = tmp_path / "bad.csv"
    path.write_text("a,b\n1,2\n")
    with pytest.raises(ValueError, match="missing expected columns"):
        load_data(str(path))


def test_load_data_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.csv"
    path.write_text("")
    with pytest.raises(ValueError):
        load_data(str(path))


def test_load_data_non_numeric_value(tmp_path: Path) -> None:
    path = tmp_path / "text.csv"
    path.write_text(HEADER + "lots,No,4,6,No,13,5,Extrovert\n")
    with pytest.raises(ValueError, match="Time_spent_Alone"):
        load_data(str(path))


def test_load_data_blank_cells_are_missing(tmp_path: Path) -> None:
    path = tmp_path / "blank.csv"
    path.write_text(HEADER + "4, ,,6,No,13,5,Extrovert\n9,Yes,0,0,Yes,0,3,Introvert\n")
    df = load_data(str(path))
    assert np.isnan(df.loc[0, "Social_event_attendance"])
    assert pd.isna(df.loc[0, "Stage_fear"])
    assert df["Time_spent_Alone"].dtype == float


def test_missing_table_counts(personality_df: pd.DataFrame) -> None:
    table = missing_table(personality_df)
    assert set(table["column"]) == set(personality_df.columns)
    row = table[table["column"] == TARGET].iloc[0]
    assert row["missing_count"] == 0
    assert table["missing_percent"].is_monotonic_decreasing


def test_missing_report_and_assessment(tmp_path: Path, personality_df: pd.DataFrame) -> None:
    csv_path = save_missing_report(personality_df, str(tmp_path))
    assert Path(csv_path).is_file()
    assert (tmp_path / "missing_report.txt").is_file()
    note = heuristic_missingness_assessment(personality_df)
    assert "Extrovert" in note
    assert heuristic_missingness_assessment(personality_df.dropna()) == "No missing values detected."


def test_initial_audit_files(tmp_path: Path, personality_df: pd.DataFrame) -> None:
    paths = save_initial_audit(personality_df, str(tmp_path))
    text = Path(paths["class_distribution"]).read_text(encoding="utf-8")
    assert text.startswith("Value\tCount\tPercent")
    assert "Introvert" in text


def test_clean_dataset_median_and_mode() -> None:
    df = pd.DataFrame({
        "Time_spent_Alone": [1.0, np.nan, 3.0, 10.0],
        "Stage_fear": ["Yes", np.nan, "No", "Yes"],
        "Personality": ["Introvert", "Extrovert", "Extrovert", "Introvert"],
    })
    cleaned, values = clean_dataset(df)
    assert cleaned.loc[1, "Time_spent_Alone"] == 3.0
    assert cleaned.loc[1, "Stage_fear"] == "Yes"
    assert values["Time_spent_Alone"] == 3.0
    assert list(cleaned.columns) == list(df.columns)
    assert not cleaned.isna().any().any()
    assert cleaned["Time_spent_Alone"].dtype == float


def test_clean_dataset_mode_tie_is_deterministic() -> None:
    df = pd.DataFrame({"Stage_fear": ["Yes", "No", np.nan]})
    first, _ = clean_dataset(df)
    second, _ = clean_dataset(df)
    assert first.loc[2, "Stage_fear"] == second.loc[2, "Stage_fear"] == "No"


def test_clean_dataset_rejects_empty_column() -> None:
    df = pd.DataFrame({"a": [np.nan, np.nan], "b": [1.0, 2.0]})
    with pytest.raises(ValueError, match="no observed values"):
        clean_dataset(df)


def test_encode_flags() -> None:
    df = pd.DataFrame({"Stage_fear": ["Yes", "No"], "Drained_after_socializing": ["No", "No"]})
    out = encode_flags(df)
    assert out["Stage_fear"].tolist() == [1, 0]
    assert out["Drained_after_socializing"].tolist() == [0, 0]
    with pytest.raises(ValueError):
        encode_flags(pd.DataFrame({"Stage_fear": ["Maybe"]}))


def test_run_preprocess_writes_clean_outputs(tmp_path: Path, raw_csv: Path) -> None:
    out = tmp_path / "processed"
    summary = run_preprocess(str(raw_csv), str(out), dataset_name="demo")

    processed = pd.read_csv(summary["processed_csv"])
    cleaned = pd.read_csv(summary["cleaned_csv"])
    assert list(processed.columns) == FEATURE_COLS + [TARGET]
    assert not processed.isna().any().any()
    assert not cleaned.isna().any().any()
    assert set(processed["Stage_fear"].unique()) <= {0, 1}
    assert summary["n_rows"] == len(cleaned)
    assert "impute[Time_spent_Alone]" in Path(summary["log"]).read_text(encoding="utf-8")


def test_load_data_strips_text_cells(tmp_path: Path) -> None:
    path = tmp_path / "padded.csv"
    path.write_text(HEADER + "4,Yes ,3,6, No,13,5,Extrovert \n")
    df = load_data(str(path))
    assert df.loc[0, "Stage_fear"] == "Yes"
    assert df.loc[0, "Personality"] == "Extrovert"
    assert encode_flags(df)[["Stage_fear", "Drained_after_socializing"]].iloc[0].tolist() == [1, 0]
