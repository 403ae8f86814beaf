from __future__ import annotations

"""
Data preparation for the wine-quality posterior: labels, standardized covariates,
design matrix and the covariate vector of a new wine.
"""

from pathlib import Path
from typing import Mapping, Sequence

import numpy as np
import pandas as pd

from .constants import FEATURE_COLUMNS, INTERCEPT_NAME, QUALITY_THRESHOLD, TARGET_COLUMN


def _clean_name(name: str) -> str:
    """Lightweight normalizer for column names ("fixed acidity", "fixed.acidity")."""
    return (
        name.strip()
        .strip('"')
        .lower()
        .replace(" ", "_")
        .replace(".", "_")
    )


def load_wine_data(csv_path: Path, sep: str = ";") -> pd.DataFrame:
    """Read the wine CSV and normalize its column names."""
    df = pd.read_csv(csv_path, sep=sep)
    df.columns = [_clean_name(c) for c in df.columns]
    return df


def make_binary_target(quality: pd.Series, threshold: float = QUALITY_THRESHOLD) -> pd.Series:
    """1 when quality >= threshold, else 0."""
    return (quality >= threshold).astype(int).rename("good")


def standardize(features: pd.DataFrame) -> tuple[pd.DataFrame, pd.Series, pd.Series]:
    means = features.mean()
    stds = features.std(ddof=1)
    stds[stds == 0] = 1.0
    return (features - means) / stds, means, stds


def prepare_design_matrix(
    df: pd.DataFrame,
    feature_cols: Sequence[str] = FEATURE_COLUMNS,
    target_col: str = TARGET_COLUMN,
    threshold: float = QUALITY_THRESHOLD,
):
    """
    Build (X, y, meta) from an already loaded frame.

    X carries an intercept column followed by the z-scored covariates.
    Rows with missing values in the used columns are dropped.
    """
    required = list(feature_cols) + [target_col]
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"Missing columns in wine data: {missing}")

    used = df[required]
    complete = used.dropna()
    dropped = len(used) - len(complete)
    if complete.empty:
        raise ValueError("No complete rows left after dropping missing values")

    y = make_binary_target(complete[target_col], threshold)
    scaled, means, stds = standardize(complete[list(feature_cols)].astype(float))
    X = scaled.copy()
    X.insert(0, INTERCEPT_NAME, 1.0)

    meta = {
        "num_rows": len(X),
        "positive_rate": float(y.mean()),
        "feature_count": len(feature_cols),
        "means": means,
        "stds": stds,
        "dropped_missing": dropped,
    }
    return X, y, meta


def build_design_matrix(
    csv_path: Path,
    feature_cols: Sequence[str] = FEATURE_COLUMNS,
    target_col: str = TARGET_COLUMN,
    threshold: float = QUALITY_THRESHOLD,
    sep: str = ";",
):
    """Load the CSV and return (X, y, meta); see prepare_design_matrix."""
    df = load_wine_data(csv_path, sep=sep)
    return prepare_design_matrix(df, feature_cols, target_col, threshold)


def build_new_observation(
    values: Mapping[str, float],
    means: pd.Series,
    stds: pd.Series,
) -> np.ndarray:
    """
    Standardize raw covariates of a new wine with the training means/stds and
    prepend the intercept. Covariates not given default to their mean.
    """
    cleaned = {_clean_name(k): float(v) for k, v in values.items()}
    unknown = sorted(set(cleaned) - set(means.index))
    if unknown:
        raise ValueError(f"Unknown covariates for new observation: {unknown}")

    raw = means.copy()
    for name, value in cleaned.items():
        raw[name] = value
    scaled = (raw - means) / stds
    return np.concatenate([[1.0], scaled.to_numpy(dtype=float)])


def parse_new_wine(text: str | None) -> dict[str, float]:
    """Parse "alcohol=12.5,ph=3.2" into a dict; empty or None gives {}."""
    if not text:
        return {}
    values = {}
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, value = item.partition("=")
        if not sep:
            raise ValueError(f"Expected name=value, got {item!r}")
        values[name.strip()] = float(value)
    return values
