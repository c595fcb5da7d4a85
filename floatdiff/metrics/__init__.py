"""
Difference metrics for comparing expected and actual floating-point values.
"""

from .core import (
    DiffMetric,
    DiffResult,
    available_metrics,
    cyclic,
    diff_abs,
    diff_cyclic,
    diff_lesser,
    diff_rel,
    diff_ulps,
    get_metric,
    is_diff_worse,
)

__all__ = [
    "DiffMetric",
    "DiffResult",
    "available_metrics",
    "cyclic",
    "diff_abs",
    "diff_cyclic",
    "diff_lesser",
    "diff_rel",
    "diff_ulps",
    "get_metric",
    "is_diff_worse",
]
