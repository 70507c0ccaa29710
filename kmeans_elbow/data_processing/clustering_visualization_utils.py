"""
clustering_visualization_utils.py

Chart rendering for clustering results.

Key functions
-------------
- plot_clusters(table, labels, centroids, x_index, y_index, path, title):
  2D scatter of two chosen features, colored by cluster, centroids in black
- plot_elbow(curve, path): WCSS vs k line chart

Both write a PNG and return its path. Figures are closed after saving so
long sweeps do not accumulate open figures.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt

from ..exceptions import DimensionMismatch
from .elbow import WcssPoint

logger = logging.getLogger(__name__)

FIGSIZE = (8, 6)  # 800x600 at DPI
DPI = 100


def _color_cycle(n: int) -> List[Tuple[float, float, float, float]]:
    cmap = plt.get_cmap("tab10" if n <= 10 else "hsv", max(n, 1))
    return [cmap(i) for i in range(n)]


def _prepare_path(output_path: str | Path) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def plot_clusters(
    table: np.ndarray,
    labels: Sequence[int],
    centroids: np.ndarray,
    x_index: int,
    y_index: int,
    output_path: str | Path,
    title: str = "Clusters",
    x_label: str | None = None,
    y_label: str | None = None,
) -> Path:
    table = np.asarray(table, dtype=np.float64)
    centroids = np.asarray(centroids, dtype=np.float64)
    labels = np.asarray(labels)
    n_features = table.shape[1]
    for idx in (x_index, y_index):
        if idx < 0 or idx >= n_features:
            raise DimensionMismatch(f"Feature index {idx} out of range for {n_features} feature(s)")
    if labels.shape[0] != table.shape[0]:
        raise DimensionMismatch(f"{labels.shape[0]} label(s) for {table.shape[0]} sample(s)")

    colors = _color_cycle(centroids.shape[0])
    fig, ax = plt.subplots(figsize=FIGSIZE)
    for j, color in enumerate(colors):
        members = table[labels == j]
        if members.size:
            ax.scatter(members[:, x_index], members[:, y_index], s=9, color=color, label=f"Cluster {j}")
    ax.scatter(centroids[:, x_index], centroids[:, y_index], s=120, color="black", marker="o", label="Centroids")
    ax.set_title(title)
    ax.set_xlabel(x_label or f"Feature {x_index}")
    ax.set_ylabel(y_label or f"Feature {y_index}")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="best", fontsize="small")

    path = _prepare_path(output_path)
    fig.tight_layout()
    fig.savefig(path, dpi=DPI)
    plt.close(fig)
    logger.info("Cluster scatter written to %s", path)
    return path


def plot_elbow(
    curve: Sequence[WcssPoint],
    output_path: str | Path,
    title: str = "Elbow Method",
) -> Path:
    if not curve:
        raise ValueError("Elbow curve is empty")
    ks = [p.k for p in curve]
    wcss = [p.wcss for p in curve]

    fig, ax = plt.subplots(figsize=FIGSIZE)
    ax.plot(ks, wcss, color="tab:blue", marker="o")
    ax.set_title(title)
    ax.set_xlabel("Number of Clusters (k)")
    ax.set_ylabel("WCSS")
    ax.set_xticks(ks)
    ax.grid(True, alpha=0.3)

    path = _prepare_path(output_path)
    fig.tight_layout()
    fig.savefig(path, dpi=DPI)
    plt.close(fig)
    logger.info("Elbow chart written to %s", path)
    return path
