"""Command-line entrypoint for the k-means elbow analysis."""
from __future__ import annotations

import argparse
import logging

from .data_processing import clustering_params as params
from .data_processing.clustering_pipeline import ClusteringPipeline


def _int_list(value: str) -> list[int]:
    return [int(v) for v in value.split(",") if v.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="K-means clustering with elbow analysis")
    parser.add_argument("--data", default=params.DATA_PATH, help="Path to the delimited data file.")
    parser.add_argument("--delimiter", default=params.DELIMITER, help="Field delimiter.")
    parser.add_argument(
        "--columns",
        type=_int_list,
        default=params.SELECTED_COLUMNS,
        help="Comma-separated feature column indices to cluster on.",
    )
    parser.add_argument("--max-k", type=int, default=params.MAX_CLUSTERS, help="Largest k in the elbow sweep.")
    parser.add_argument("--k", type=int, default=params.N_CLUSTERS, help="Number of clusters for the final fit.")
    parser.add_argument("--max-iterations", type=int, default=params.MAX_ITERATIONS)
    parser.add_argument("--seed", type=int, default=params.RANDOM_STATE, help="Random seed.")
    parser.add_argument(
        "--weighting",
        choices=["distance", "squared"],
        default=params.SEEDING_WEIGHTING,
        help="Seeding weight for k-means++ style initialization.",
    )
    parser.add_argument(
        "--empty-cluster",
        choices=["keep", "reseed"],
        default=params.EMPTY_CLUSTER_POLICY,
        help="What to do with a centroid whose cluster becomes empty.",
    )
    parser.add_argument(
        "--degenerate",
        choices=["zero", "raise"],
        default=params.DEGENERATE_FEATURE_POLICY,
        help="Handling of zero-variance columns during standardization.",
    )
    parser.add_argument("--tol", type=float, default=params.CONVERGENCE_TOLERANCE, help="0 for exact convergence.")
    parser.add_argument("--n-jobs", type=int, default=params.N_JOBS, help="Workers for the elbow sweep.")
    parser.add_argument("--output-dir", default=params.OUTPUT_DIR, help="Directory for charts and CSV exports.")
    parser.add_argument("--no-plots", action="store_true", help="Skip chart rendering.")
    parser.add_argument("--no-export", action="store_true", help="Skip CSV exports.")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pipeline = ClusteringPipeline(
        data_path=args.data,
        delimiter=args.delimiter,
        selected_columns=args.columns,
        max_clusters=args.max_k,
        max_iterations=args.max_iterations,
        n_clusters=args.k,
        random_state=args.seed,
        weighting=args.weighting,
        empty_cluster=args.empty_cluster,
        degenerate_policy=args.degenerate,
        tol=args.tol,
        n_jobs=args.n_jobs,
        output_dir=args.output_dir,
    )
    pipeline.run_complete_analysis(
        show_visualizations=not args.no_plots,
        export_results=not args.no_export,
    )


if __name__ == "__main__":
    main()
