"""
WCSS sweep for elbow analysis.

Every k in 1..max_k is fitted independently from its own random stream,
spawned from one ``SeedSequence``. Results are therefore identical whether
the sweep runs sequentially or across joblib workers, and always come back
ordered by k.

The curve is non-increasing in expectation only. Random seeding and the
iteration cap can make WCSS at k+1 exceed WCSS at k.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

import numpy as np
import pandas as pd
from joblib import Parallel, delayed
from sklearn.metrics import silhouette_score

from ..utils.validate import as_table, expect_cluster_count
from .clustering_utils import ClusterResult, fit_kmeans

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WcssPoint:
    k: int
    wcss: float


def _spawn_streams(random_state, n: int) -> List[np.random.SeedSequence]:
    if isinstance(random_state, np.random.Generator):
        return random_state.bit_generator.seed_seq.spawn(n)
    if isinstance(random_state, np.random.SeedSequence):
        return random_state.spawn(n)
    return np.random.SeedSequence(random_state).spawn(n)


def _sweep_results(
    table: np.ndarray,
    max_k: int,
    max_iterations: int,
    random_state,
    n_jobs: Optional[int],
    **fit_kwargs,
) -> List[ClusterResult]:
    expect_cluster_count(max_k, table.shape[0])
    streams = _spawn_streams(random_state, max_k)
    ks = range(1, max_k + 1)
    if n_jobs is None or n_jobs == 1:
        return [fit_kmeans(table, k, max_iterations, random_state=s, **fit_kwargs) for k, s in zip(ks, streams)]
    # Parallel returns results in submission order
    return Parallel(n_jobs=n_jobs)(
        delayed(fit_kmeans)(table, k, max_iterations, random_state=s, **fit_kwargs)
        for k, s in zip(ks, streams)
    )


def elbow_sweep(
    features,
    max_k: int,
    max_iterations: int = 100,
    random_state: Union[int, np.random.SeedSequence, np.random.Generator, None] = None,
    n_jobs: Optional[int] = 1,
    **fit_kwargs,
) -> List[WcssPoint]:
    """Total WCSS for k = 1..max_k, ordered by k.

    Extra keyword arguments (``weighting``, ``empty_cluster``, ``tol``) are
    passed to ``fit_kmeans``.
    """
    table = as_table(features)
    results = _sweep_results(table, max_k, max_iterations, random_state, n_jobs, **fit_kwargs)
    curve = [WcssPoint(k=r.k, wcss=r.wcss) for r in results]
    logger.info("WCSS sweep k=1..%d: %s", max_k, ", ".join(f"{p.k}:{p.wcss:.4g}" for p in curve))
    return curve


def elbow_frame(curve: List[WcssPoint]) -> pd.DataFrame:
    return pd.DataFrame([(p.k, p.wcss) for p in curve], columns=["k", "wcss"])


def scan_k(
    features,
    max_k: int,
    max_iterations: int = 100,
    random_state: Union[int, np.random.SeedSequence, np.random.Generator, None] = None,
    n_jobs: Optional[int] = 1,
    **fit_kwargs,
) -> pd.DataFrame:
    """Sweep summary with columns k, wcss, silhouette, n_iter, converged.

    Silhouette is NaN where it is undefined (a single distinct label, or
    every sample in its own cluster).
    """
    table = as_table(features)
    results = _sweep_results(table, max_k, max_iterations, random_state, n_jobs, **fit_kwargs)
    out = []
    for r in results:
        n_labels = len(np.unique(r.labels))
        sil = silhouette_score(table, r.labels) if 1 < n_labels < table.shape[0] else np.nan
        out.append((r.k, r.wcss, sil, r.n_iter, r.converged))
    return pd.DataFrame(out, columns=["k", "wcss", "silhouette", "n_iter", "converged"])
