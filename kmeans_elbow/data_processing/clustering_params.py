"""
Centralized Parameters for Clustering Analysis

This module provides a single place to define all clustering analysis parameters.
Any value can be overridden through a KMEANS_* environment variable (a .env
file in the working directory is loaded automatically).
"""
import os

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else default


def _env_int_list(name: str, default: list) -> list:
    value = os.getenv(name)
    if value in (None, ""):
        return list(default)
    return [int(v) for v in value.split(",") if v.strip()]


# =============================================================================
# DATA SOURCE
# =============================================================================

DATA_PATH = os.getenv("KMEANS_DATA_PATH", "winequality-white.csv")
DELIMITER = os.getenv("KMEANS_DELIMITER", ";")

# Feature columns (by position, after standardization) used for clustering:
# density, residual sugar, alcohol, chlorides
SELECTED_COLUMNS = _env_int_list("KMEANS_SELECTED_COLUMNS", [7, 3, 10, 4])

# Zero-variance columns: 'zero' writes them as 0, 'raise' fails with DegenerateFeature
DEGENERATE_FEATURE_POLICY = "zero"

# =============================================================================
# CLUSTERING PARAMETERS
# =============================================================================

# Elbow sweep covers k = 1..MAX_CLUSTERS
MAX_CLUSTERS = _env_int("KMEANS_MAX_CLUSTERS", 10)
MAX_ITERATIONS = _env_int("KMEANS_MAX_ITERATIONS", 100)

# Number of clusters for the final fit
N_CLUSTERS = _env_int("KMEANS_N_CLUSTERS", 3)

# Random state for reproducible results
RANDOM_STATE = _env_int("KMEANS_RANDOM_STATE", 42)

# Seeding weight: 'distance' (reference behavior) or 'squared' (textbook k-means++)
SEEDING_WEIGHTING = "distance"

# Empty clusters: 'keep' previous centroid or 'reseed' onto a random sample
EMPTY_CLUSTER_POLICY = "keep"

# 0.0 stops only at an exact fixed point
CONVERGENCE_TOLERANCE = 0.0

# Worker count for the elbow sweep (joblib); 1 runs sequentially
N_JOBS = _env_int("KMEANS_N_JOBS", 1)

# =============================================================================
# OUTPUT AND VISUALIZATION
# =============================================================================

OUTPUT_DIR = os.getenv("KMEANS_OUTPUT_DIR", ".")
ELBOW_PLOT_FILE = "elbow_method.png"

# (x feature, y feature, file name, title), indices relative to SELECTED_COLUMNS
SCATTER_PLOTS = [
    (0, 1, "clusters_density_sugar.png", "Density vs Residual Sugar"),
    (2, 3, "clusters_alcohol_chlorides.png", "Alcohol vs Chlorides"),
]

SHOW_VISUALIZATIONS = True
EXPORT_RESULTS = True
