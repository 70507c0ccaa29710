"""
Clustering Pipeline

Structured pipeline that loads a delimited table, standardizes it, selects
feature columns, sweeps k for the elbow curve, fits the final k and renders
and exports the results.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from ..utils.io import load_table
from ..utils.validate import as_table
from . import clustering_params as params
from .clustering_utils import ClusterResult, fit_kmeans
from .clustering_visualization_utils import plot_clusters, plot_elbow
from .elbow import WcssPoint, elbow_frame, elbow_sweep
from .normalization_utils import select_columns, standardize_features

logger = logging.getLogger(__name__)


@dataclass
class ClusteringPipeline:
    """
    End-to-end k-means analysis: load -> standardize -> select -> sweep -> fit.
    """

    # Configuration
    data_path: str = params.DATA_PATH
    delimiter: str = params.DELIMITER
    selected_columns: Optional[List[int]] = field(default_factory=lambda: list(params.SELECTED_COLUMNS))
    max_clusters: int = params.MAX_CLUSTERS
    max_iterations: int = params.MAX_ITERATIONS
    n_clusters: int = params.N_CLUSTERS
    random_state: Optional[int] = params.RANDOM_STATE
    weighting: str = params.SEEDING_WEIGHTING
    empty_cluster: str = params.EMPTY_CLUSTER_POLICY
    degenerate_policy: str = params.DEGENERATE_FEATURE_POLICY
    tol: float = params.CONVERGENCE_TOLERANCE
    n_jobs: int = params.N_JOBS
    output_dir: str = params.OUTPUT_DIR

    # Data containers
    data: Optional[np.ndarray] = field(default=None, repr=False)
    column_names: Optional[List[str]] = field(default=None, repr=False)
    X_scaled: Optional[np.ndarray] = field(default=None, repr=False)
    X_for_clustering: Optional[np.ndarray] = field(default=None, repr=False)
    feature_columns: Optional[List[str]] = field(default=None, repr=False)
    mean: Optional[np.ndarray] = field(default=None, repr=False)
    std: Optional[np.ndarray] = field(default=None, repr=False)

    # Results containers
    elbow_curve: List[WcssPoint] = field(default_factory=list)
    clustering_result: Optional[ClusterResult] = field(default=None, repr=False)
    plot_files: Dict[str, str] = field(default_factory=dict)
    export_files: Dict[str, str] = field(default_factory=dict)

    # Pipeline state
    _data_loaded: bool = field(default=False, init=False, repr=False)
    _features_prepared: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        logger.info("Clustering pipeline initialized: data=%s, k=%d, sweep 1..%d", self.data_path, self.n_clusters, self.max_clusters)

    def _seed_sequences(self) -> Tuple[np.random.SeedSequence, np.random.SeedSequence]:
        # Sweep and final fit draw from independent streams
        sweep_seq, fit_seq = np.random.SeedSequence(self.random_state).spawn(2)
        return sweep_seq, fit_seq

    def _fit_kwargs(self) -> Dict[str, Any]:
        return {"weighting": self.weighting, "empty_cluster": self.empty_cluster, "tol": self.tol}

    # Steps
    def load_data(self, data=None, column_names: Optional[List[str]] = None) -> np.ndarray:
        """Load the table from ``data_path`` or take an in-memory table."""
        if data is None:
            self.data, self.column_names = load_table(self.data_path, delimiter=self.delimiter)
        else:
            if column_names is None and hasattr(data, "columns"):
                column_names = [str(c) for c in data.columns]
            self.data = as_table(data)
            self.column_names = list(column_names) if column_names else [f"feature_{i}" for i in range(self.data.shape[1])]
        self._data_loaded = True
        logger.info("Data loaded with %d records and %d features.", self.data.shape[0], self.data.shape[1])
        return self.data

    def prepare_features(self) -> np.ndarray:
        if not self._data_loaded:
            raise ValueError("Data must be loaded first. Call load_data().")
        self.X_scaled, self.mean, self.std = standardize_features(self.data, on_degenerate=self.degenerate_policy)
        if self.selected_columns:
            self.X_for_clustering = select_columns(self.X_scaled, self.selected_columns)
            self.feature_columns = [self.column_names[i] for i in self.selected_columns]
        else:
            self.X_for_clustering = self.X_scaled
            self.feature_columns = list(self.column_names)
        self._features_prepared = True
        logger.info("Features prepared and standardized: %s", ", ".join(self.feature_columns))
        return self.X_for_clustering

    def optimize_clusters(self) -> List[WcssPoint]:
        if not self._features_prepared:
            raise ValueError("Features must be prepared first. Call prepare_features().")
        max_k = min(self.max_clusters, self.X_for_clustering.shape[0])
        if max_k < self.max_clusters:
            logger.warning("Only %d samples; elbow sweep capped at k=%d", max_k, max_k)
        sweep_seq, _ = self._seed_sequences()
        self.elbow_curve = elbow_sweep(
            self.X_for_clustering,
            max_k,
            self.max_iterations,
            random_state=sweep_seq,
            n_jobs=self.n_jobs,
            **self._fit_kwargs(),
        )
        return self.elbow_curve

    def run_kmeans_clustering(self, n_clusters: Optional[int] = None) -> ClusterResult:
        if not self._features_prepared:
            raise ValueError("Features must be prepared first. Call prepare_features().")
        k = n_clusters if n_clusters is not None else self.n_clusters
        _, fit_seq = self._seed_sequences()
        self.clustering_result = fit_kmeans(
            self.X_for_clustering,
            k,
            self.max_iterations,
            random_state=fit_seq,
            **self._fit_kwargs(),
        )
        res = self.clustering_result
        sizes = np.bincount(res.labels, minlength=k).tolist()
        logger.info("K-means completed with %d clusters after %d iteration(s) (converged=%s); sizes=%s, WCSS=%.4f", k, res.n_iter, res.converged, sizes, res.wcss)
        return res

    def generate_visualizations(self, scatter_plots=None) -> Dict[str, str]:
        out_dir = Path(self.output_dir)
        plots: Dict[str, str] = {}
        if self.elbow_curve:
            plots["elbow"] = str(plot_elbow(self.elbow_curve, out_dir / params.ELBOW_PLOT_FILE))
        if self.clustering_result is not None:
            res = self.clustering_result
            n_features = self.X_for_clustering.shape[1]
            for x_idx, y_idx, file_name, title in scatter_plots if scatter_plots is not None else params.SCATTER_PLOTS:
                if max(x_idx, y_idx) >= n_features:
                    logger.warning("Skipping %s - needs feature %d, only %d selected", file_name, max(x_idx, y_idx), n_features)
                    continue
                plots[file_name] = str(
                    plot_clusters(
                        self.X_for_clustering,
                        res.labels,
                        res.centroids,
                        x_idx,
                        y_idx,
                        out_dir / file_name,
                        title=title,
                        x_label=self.feature_columns[x_idx],
                        y_label=self.feature_columns[y_idx],
                    )
                )
        if not plots:
            raise ValueError("Nothing to plot. Run optimize_clusters() or run_kmeans_clustering() first.")
        self.plot_files.update(plots)
        return plots

    def cluster_table(self) -> pd.DataFrame:
        """Selected standardized features with a ``kmeans_cluster`` column."""
        if self.clustering_result is None:
            raise ValueError("No clustering results available. Run run_kmeans_clustering() first.")
        df = pd.DataFrame(self.X_for_clustering, columns=self.feature_columns)
        df["kmeans_cluster"] = self.clustering_result.labels
        return df

    def centroids_df(self) -> pd.DataFrame:
        if self.clustering_result is None:
            raise ValueError("No clustering results available. Run run_kmeans_clustering() first.")
        dfc = pd.DataFrame(self.clustering_result.centroids, columns=self.feature_columns)
        dfc.insert(0, "cluster", range(len(dfc)))
        return dfc

    def export_results(self) -> Dict[str, str]:
        if self.clustering_result is None and not self.elbow_curve:
            raise ValueError("No results available. Run the clustering steps first.")
        out_dir = Path(self.output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        exported: Dict[str, str] = {}
        if self.elbow_curve:
            path = out_dir / "elbow_curve.csv"
            elbow_frame(self.elbow_curve).to_csv(path, index=False)
            exported["elbow_curve"] = str(path)
        if self.clustering_result is not None:
            path = out_dir / "cluster_assignments.csv"
            self.cluster_table().to_csv(path, index=False)
            exported["assignments"] = str(path)
            path = out_dir / "cluster_centroids.csv"
            self.centroids_df().to_csv(path, index=False)
            exported["centroids"] = str(path)
        self.export_files = exported
        logger.info("Results exported: %d file(s)", len(exported))
        return exported

    def run_complete_analysis(
        self,
        show_visualizations: bool = params.SHOW_VISUALIZATIONS,
        export_results: bool = params.EXPORT_RESULTS,
    ) -> Dict[str, Any]:
        logger.info("Starting full clustering analysis at %s", datetime.now().strftime("%Y-%m-%d %H:%M:%S"))
        if not self._data_loaded:
            self.load_data()
        self.prepare_features()
        self.optimize_clusters()
        self.run_kmeans_clustering()
        if show_visualizations:
            self.generate_visualizations()
        if export_results:
            self.export_results()
        final = {
            "data_shape": self.data.shape,
            "feature_columns": self.feature_columns,
            "elbow_curve": self.elbow_curve,
            "clustering_result": self.clustering_result,
            "plot_files": self.plot_files,
            "export_files": self.export_files,
            "completion_time": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        }
        logger.info("Full analysis pipeline completed at %s", final["completion_time"])
        return final
