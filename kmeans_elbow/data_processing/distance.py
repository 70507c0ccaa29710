"""Euclidean distance between samples and centroids."""
from __future__ import annotations

import numpy as np

from ..exceptions import DimensionMismatch


def euclidean_distance(a, b) -> float:
    """``sqrt(sum((a_i - b_i) ** 2))`` for two equal-length vectors."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise DimensionMismatch(f"Cannot compare vectors of shape {a.shape} and {b.shape}")
    diff = a - b
    return float(np.sqrt(np.sum(diff * diff)))


def pairwise_distances(table: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Distance from every sample to every centroid, shape (n_samples, k)."""
    table = np.asarray(table, dtype=np.float64)
    centroids = np.asarray(centroids, dtype=np.float64)
    if table.ndim != 2 or centroids.ndim != 2:
        raise DimensionMismatch(
            f"Table and centroids must be 2-dimensional, got {table.ndim} and {centroids.ndim} dimension(s)"
        )
    if table.shape[1] != centroids.shape[1]:
        raise DimensionMismatch(
            f"Table has {table.shape[1]} feature(s) but centroids have {centroids.shape[1]}"
        )
    # (N, K, D) -> (N, K)
    diff = table[:, None, :] - centroids[None, :, :]
    return np.sqrt(np.sum(diff * diff, axis=2))
