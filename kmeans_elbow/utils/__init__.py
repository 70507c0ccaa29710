from __future__ import annotations
from .io import load_table
from .validate import (
    as_table,
    expect_cluster_count,
    expect_finite,
    expect_non_empty,
    expect_rectangular,
)

__all__ = [
    "load_table",
    "as_table", "expect_cluster_count", "expect_finite",
    "expect_non_empty", "expect_rectangular",
]
