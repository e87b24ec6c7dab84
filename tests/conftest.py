"""Shared fixtures: a small synthetic personality dataset and fast model specs."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest


def make_personality_df(n: int = 240, seed: int = 0, missing_frac: float = 0.03) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    extrovert = rng.random(n) < 0.6
    df = pd.DataFrame({
        "Time_spent_Alone": np.where(extrovert, rng.integers(0, 5, n), rng.integers(4, 12, n)).astype(float),
        "Stage_fear": np.where(extrovert ^ (rng.random(n) < 0.1), "No", "Yes"),
        "Social_event_attendance": np.where(extrovert, rng.integers(4, 11, n), rng.integers(0, 5, n)).astype(float),
        "Going_outside": np.where(extrovert, rng.integers(3, 8, n), rng.integers(0, 4, n)).astype(float),
        "Drained_after_socializing": np.where(extrovert ^ (rng.random(n) < 0.1), "No", "Yes"),
        "Friends_circle_size": np.where(extrovert, rng.integers(5, 16, n), rng.integers(0, 7, n)).astype(float),
        "Post_frequency": np.where(extrovert, rng.integers(3, 11, n), rng.integers(0, 5, n)).astype(float),
        "Personality": np.where(extrovert, "Extrovert", "Introvert"),
    })
    features = [c for c in df.columns if c != "Personality"]
    df[features] = df[features].astype(object)
    for col in features:
        mask = rng.random(n) < missing_frac
        df.loc[mask, col] = np.nan
    return df


@pytest.fixture
def personality_df() -> pd.DataFrame:
    return make_personality_df()


@pytest.fixture
def raw_csv(tmp_path: Path, personality_df: pd.DataFrame) -> Path:
    path = tmp_path / "raw" / "personality_dataset.csv"
    path.parent.mkdir(parents=True)
    personality_df.to_csv(path, index=False)
    return path


@pytest.fixture
def fast_model_specs() -> List[Dict]:
    return [
        {
            "name": "RandomForest",
            "estimator": "random_forest",
            "param_grid": {"clf__max_features": [2, 3]},
            "fixed_params": {"n_estimators": 25},
        },
        {
            "name": "ElasticNet",
            "estimator": "elastic_net",
            "param_grid": {"clf__l1_ratio": [0.5], "clf__C": [0.1, 1.0]},
            "fixed_params": {"max_iter": 2000},
        },
    ]
