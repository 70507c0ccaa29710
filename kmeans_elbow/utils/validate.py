from __future__ import annotations
import numpy as np

from ..exceptions import DimensionMismatch, EmptyDataset, InvalidClusterCount


def expect_non_empty(table: np.ndarray) -> None:
    if table.shape[0] == 0:
        raise EmptyDataset("Table has no samples")


def expect_rectangular(table: np.ndarray) -> None:
    if table.ndim != 2:
        raise DimensionMismatch(
            f"Table must be 2-dimensional (samples x features), got {table.ndim} dimension(s)"
        )
    if table.shape[1] == 0:
        raise DimensionMismatch("Table has no feature columns")


def expect_finite(table: np.ndarray) -> None:
    bad = ~np.isfinite(table)
    if bad.any():
        rows, cols = np.nonzero(bad)
        raise ValueError(
            f"Table contains {int(bad.sum())} non-finite value(s), first at row {rows[0]}, column {cols[0]}"
        )


def expect_cluster_count(k: int, n_samples: int) -> None:
    if k < 1 or k > n_samples:
        raise InvalidClusterCount(f"k must be between 1 and {n_samples} (sample count), got {k}")


def as_table(data) -> np.ndarray:
    """Coerce rows (list of lists, ndarray, DataFrame) into a validated float64 table.

    Ragged input is reported as ``DimensionMismatch`` rather than numpy's
    object-array error.
    """
    if hasattr(data, "to_numpy"):
        data = data.to_numpy()
    try:
        table = np.asarray(data, dtype=np.float64)
    except ValueError as e:
        raise DimensionMismatch(f"Every sample must have the same feature count: {e}") from e
    if table.ndim == 1 and table.size == 0:
        table = table.reshape(0, 0)
    expect_non_empty(table)
    expect_rectangular(table)
    expect_finite(table)
    return table
