"""Error taxonomy for the clustering engine.

All errors derive from ``ValueError`` so callers that already guard input
validation with ``except ValueError`` keep working.
"""
from __future__ import annotations


class ClusteringError(ValueError):
    """Base class for clustering input errors."""


class DimensionMismatch(ClusteringError):
    """Vectors or tables have incompatible feature counts."""


class DegenerateFeature(ClusteringError):
    """A feature column has zero variance and cannot be standardized."""


class InvalidClusterCount(ClusteringError):
    """k is below 1 or exceeds the number of samples."""


class EmptyDataset(ClusteringError):
    """The table has no samples."""
