"""
Clustering Utilities

Lloyd refinement (assign / update) on top of k-means++ style seeding, plus
the within-cluster sum of squares used by the elbow sweep.

Policies
--------
- Assignment ties go to the lowest centroid index.
- An empty cluster keeps its previous centroid (``empty_cluster="keep"``).
  Such a centroid can stay stranded for the rest of the run; pass
  ``empty_cluster="reseed"`` to move it onto a random sample instead.
- The loop stops when the updated centroids are exactly equal to the
  previous ones (``tol=0.0``) or after ``max_iterations`` passes. A positive
  ``tol`` stops once no centroid moves further than ``tol``.
- The returned labels always refer to the returned centroids.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ..exceptions import DimensionMismatch
from ..utils.validate import as_table, expect_cluster_count
from .distance import pairwise_distances
from .seeding import RandomState, seed_centroids

logger = logging.getLogger(__name__)

EMPTY_CLUSTER_POLICIES = ("keep", "reseed")


@dataclass
class ClusterResult:
    """Result of one Lloyd run."""

    centroids: np.ndarray
    labels: np.ndarray
    wcss: float
    n_iter: int
    converged: bool

    @property
    def k(self) -> int:
        return int(self.centroids.shape[0])

    @property
    def inertia(self) -> float:
        return self.wcss


def assign_clusters(table: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Index of the nearest centroid for every sample (lowest index on ties)."""
    distances = pairwise_distances(table, centroids)
    # argmin returns the first minimum
    return np.argmin(distances, axis=1)


def update_centroids(
    table: np.ndarray,
    labels: np.ndarray,
    centroids: np.ndarray,
    empty_cluster: str = "keep",
    rng: Optional[np.random.Generator] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Mean of each cluster's members.

    Returns ``(new_centroids, empty)`` where ``empty`` lists the indices of
    clusters that received no samples.
    """
    k = centroids.shape[0]
    new_centroids = centroids.copy()
    counts = np.bincount(labels, minlength=k)
    for j in range(k):
        if counts[j]:
            new_centroids[j] = table[labels == j].mean(axis=0)
    empty = np.flatnonzero(counts == 0)
    if empty.size and empty_cluster == "reseed":
        if rng is None:
            raise ValueError("empty_cluster='reseed' requires a random generator")
        new_centroids[empty] = table[rng.integers(table.shape[0], size=empty.size)]
    return new_centroids, empty


def compute_wcss(table: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> float:
    """Sum of squared distances from every sample to its assigned centroid."""
    labels = np.asarray(labels)
    if labels.shape[0] != table.shape[0]:
        raise DimensionMismatch(f"{labels.shape[0]} label(s) for {table.shape[0]} sample(s)")
    diff = table - centroids[labels]
    return float(np.sum(diff * diff))


def fit_kmeans(
    features,
    k: int,
    max_iterations: int = 100,
    random_state: RandomState = None,
    weighting: str = "distance",
    empty_cluster: str = "keep",
    tol: float = 0.0,
    initial_centroids: Optional[np.ndarray] = None,
) -> ClusterResult:
    """Cluster ``features`` into ``k`` groups with Lloyd's algorithm.

    Args:
        features: 2D table (rows are samples).
        k: Number of clusters, 1 <= k <= n_samples.
        max_iterations: Cap on assign/update passes.
        random_state: Seed, ``SeedSequence`` or ``Generator`` for seeding and reseeding.
        weighting: Seeding weight, ``"distance"`` or ``"squared"``.
        empty_cluster: ``"keep"`` or ``"reseed"``.
        tol: 0.0 for exact fixed-point termination, else max centroid shift.
        initial_centroids: Skip seeding and start from these centroids.
    Returns:
        ClusterResult with final centroids, labels and convergence info.
    """
    if empty_cluster not in EMPTY_CLUSTER_POLICIES:
        raise ValueError(f"empty_cluster must be one of {EMPTY_CLUSTER_POLICIES}, got {empty_cluster!r}")
    if max_iterations < 0:
        raise ValueError(f"max_iterations must be >= 0, got {max_iterations}")
    if tol < 0:
        raise ValueError(f"tol must be >= 0, got {tol}")
    table = as_table(features)
    expect_cluster_count(k, table.shape[0])
    rng = np.random.default_rng(random_state)

    if initial_centroids is None:
        centroids = seed_centroids(table, k, random_state=rng, weighting=weighting)
    else:
        centroids = np.array(initial_centroids, dtype=np.float64)
        if centroids.ndim != 2 or centroids.shape != (k, table.shape[1]):
            raise DimensionMismatch(
                f"initial_centroids must have shape ({k}, {table.shape[1]}), got {centroids.shape}"
            )

    labels = assign_clusters(table, centroids)
    converged = False
    n_iter = 0
    warned_empty = False
    for n_iter in range(1, max_iterations + 1):
        new_centroids, empty = update_centroids(table, labels, centroids, empty_cluster, rng)
        if empty.size:
            if not warned_empty:
                logger.warning("k=%d: empty cluster(s) %s at iteration %d (%s)", k, empty.tolist(), n_iter, empty_cluster)
                warned_empty = True
            logger.debug("Iteration %d: %d empty cluster(s) %s", n_iter, empty.size, empty.tolist())
        if tol == 0.0:
            converged = np.array_equal(new_centroids, centroids)
        else:
            converged = float(np.max(np.linalg.norm(new_centroids - centroids, axis=1))) <= tol
        centroids = new_centroids
        labels = assign_clusters(table, centroids)
        logger.debug("Iteration %d: converged=%s", n_iter, converged)
        if converged:
            break

    wcss = compute_wcss(table, labels, centroids)
    logger.debug("k=%d finished after %d iteration(s), converged=%s, wcss=%.6g", k, n_iter, converged, wcss)
    return ClusterResult(centroids=centroids, labels=labels, wcss=wcss, n_iter=n_iter, converged=converged)
