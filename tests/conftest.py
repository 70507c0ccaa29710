import numpy as np
import pandas as pd
import tempfile
import os
import shutil

SCENARIO_A = [[1.0, 2.0], [1.1, 2.1], [5.0, 6.0], [5.1, 6.1]]


def make_blobs(centers, n_per_center=20, spread=0.1, seed=0):
    """Gaussian blobs around ``centers``; returns (table, true_labels)."""
    rng = np.random.default_rng(seed)
    centers = np.asarray(centers, dtype=float)
    rows, labels = [], []
    for i, c in enumerate(centers):
        rows.append(c + rng.normal(scale=spread, size=(n_per_center, centers.shape[1])))
        labels.extend([i] * n_per_center)
    return np.vstack(rows), np.asarray(labels)


def make_temp_dir():
    return tempfile.mkdtemp(prefix='kmeans_')


def write_csv(path, df, sep=';'):
    df.to_csv(path, sep=sep, index=False)


def make_wine_like_frame(n=60, seed=1):
    """Five-column frame shaped like the wine data (density, sugar, alcohol, chlorides, quality)."""
    rng = np.random.default_rng(seed)
    half = n // 2
    return pd.DataFrame({
        'density': np.r_[rng.normal(0.99, 0.001, half), rng.normal(1.0, 0.001, n - half)],
        'residual sugar': np.r_[rng.normal(2.0, 0.5, half), rng.normal(12.0, 0.5, n - half)],
        'alcohol': np.r_[rng.normal(12.0, 0.3, half), rng.normal(9.0, 0.3, n - half)],
        'chlorides': np.r_[rng.normal(0.03, 0.005, half), rng.normal(0.06, 0.005, n - half)],
        'quality': rng.integers(3, 9, n),
    })


def cleanup_dir(d):
    if os.path.isdir(d):
        shutil.rmtree(d)
