"""k-means++ style centroid seeding."""
from __future__ import annotations

import logging
from typing import Optional, Union

import numpy as np

from ..utils.validate import as_table, expect_cluster_count
from .distance import pairwise_distances

logger = logging.getLogger(__name__)

RandomState = Optional[Union[int, np.random.Generator, np.random.SeedSequence]]

# "distance" weights candidates by their distance to the nearest chosen
# centroid, "squared" by its square (textbook k-means++).
SEEDING_WEIGHTINGS = ("distance", "squared")


def seed_centroids(
    features,
    k: int,
    random_state: RandomState = None,
    weighting: str = "distance",
) -> np.ndarray:
    """Pick ``k`` distinct rows of ``features`` as initial centroids.

    The first row is drawn uniformly. Each following row is drawn with
    probability proportional to its distance (or squared distance, see
    ``weighting``) to the nearest centroid chosen so far: one uniform draw in
    [0, 1) selects the first row whose cumulative probability exceeds it.
    Rows already chosen have weight zero and are never drawn twice. If every
    remaining weight is zero (all rows coincide with chosen centroids), the
    next row is drawn uniformly among rows not yet chosen.

    Returns a (k, n_features) copy; the table is not modified.
    """
    if weighting not in SEEDING_WEIGHTINGS:
        raise ValueError(f"weighting must be one of {SEEDING_WEIGHTINGS}, got {weighting!r}")
    table = as_table(features)
    n_samples = table.shape[0]
    expect_cluster_count(k, n_samples)
    rng = np.random.default_rng(random_state)

    chosen = [int(rng.integers(n_samples))]
    while len(chosen) < k:
        nearest = pairwise_distances(table, table[chosen]).min(axis=1)
        weights = nearest * nearest if weighting == "squared" else nearest
        weights[chosen] = 0.0
        total = weights.sum()

        if total <= 0.0:
            remaining = np.setdiff1d(np.arange(n_samples), chosen)
            idx = int(rng.choice(remaining))
            logger.debug("All remaining rows coincide with chosen centroids; uniform pick %d", idx)
        else:
            cumulative = np.cumsum(weights / total)
            idx = int(np.searchsorted(cumulative, rng.random(), side="right"))
            # cumulative[-1] can land just below 1.0
            if idx >= n_samples:
                idx = int(np.flatnonzero(weights)[-1])
        chosen.append(idx)

    return table[chosen].copy()
