"""Top-level package exports

K-means clustering with k-means++ style seeding and a WCSS sweep for the
elbow method:

    from kmeans_elbow import load_table, standardize_features, elbow_sweep, fit_kmeans
"""
from __future__ import annotations
import logging

from .exceptions import (
    ClusteringError,
    DegenerateFeature,
    DimensionMismatch,
    EmptyDataset,
    InvalidClusterCount,
)
from .utils.io import load_table
from .utils.validate import as_table
from .data_processing.normalization_utils import standardize_features, select_columns
from .data_processing.distance import euclidean_distance, pairwise_distances
from .data_processing.seeding import seed_centroids
from .data_processing.clustering_utils import (
    ClusterResult,
    assign_clusters,
    update_centroids,
    compute_wcss,
    fit_kmeans,
)
from .data_processing.elbow import WcssPoint, elbow_sweep, elbow_frame, scan_k
from .data_processing.clustering_visualization_utils import plot_clusters, plot_elbow
from .data_processing.clustering_pipeline import ClusteringPipeline

__all__ = [
    # Errors
    "ClusteringError", "DegenerateFeature", "DimensionMismatch",
    "EmptyDataset", "InvalidClusterCount",
    # Loading / preparation
    "load_table", "as_table", "standardize_features", "select_columns",
    # Core
    "euclidean_distance", "pairwise_distances", "seed_centroids",
    "ClusterResult", "assign_clusters", "update_centroids", "compute_wcss", "fit_kmeans",
    "WcssPoint", "elbow_sweep", "elbow_frame", "scan_k",
    # Rendering / pipeline
    "plot_clusters", "plot_elbow", "ClusteringPipeline",
]

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
