"""Feature standardization and column projection."""
from __future__ import annotations

import logging
from typing import Sequence, Tuple

import numpy as np

from ..exceptions import DegenerateFeature, DimensionMismatch
from ..utils.validate import as_table

logger = logging.getLogger(__name__)

DEGENERATE_POLICIES = ("zero", "raise")


def standardize_features(
    features, on_degenerate: str = "zero"
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Z-score every column using the population standard deviation.

    Returns a new table together with the per-column mean and std; the input
    is left untouched.

    A constant column (max == min) cannot be scaled. With
    ``on_degenerate="zero"`` it is written as all zeros and its reported std
    is 0.0; with ``on_degenerate="raise"`` a ``DegenerateFeature`` is raised
    naming the first such column.
    """
    if on_degenerate not in DEGENERATE_POLICIES:
        raise ValueError(f"on_degenerate must be one of {DEGENERATE_POLICIES}, got {on_degenerate!r}")
    table = as_table(features)

    mean = table.mean(axis=0)
    std = table.std(axis=0)  # ddof=0
    constant = table.max(axis=0) == table.min(axis=0)

    if constant.any():
        cols = np.flatnonzero(constant).tolist()
        if on_degenerate == "raise":
            raise DegenerateFeature(f"Column(s) {cols} have zero variance")
        logger.warning("Zero-variance column(s) %s standardized to 0", cols)

    safe_std = np.where(constant, 1.0, std)
    normalized = (table - mean) / safe_std
    normalized[:, constant] = 0.0
    std = np.where(constant, 0.0, std)
    return normalized, mean, std


def select_columns(table: np.ndarray, indices: Sequence[int]) -> np.ndarray:
    """Project ``table`` onto ``indices`` (in the given order)."""
    table = as_table(table)
    idx = [int(i) for i in indices]
    if not idx:
        raise DimensionMismatch("At least one column index is required")
    n_features = table.shape[1]
    bad = [i for i in idx if i < 0 or i >= n_features]
    if bad:
        raise DimensionMismatch(f"Column indices {bad} out of range for {n_features} feature(s)")
    return table[:, idx].copy()
