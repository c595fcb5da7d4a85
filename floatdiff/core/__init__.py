"""
Aggregation of difference metrics: sample tracking, log10 histogram and
the per-measurement summary.
"""

from .part_summary import DiffPartSummary
from .histogram import LogHistogram, MIN_DISPLAY_BUCKETS
from .summary import (
    DEFAULT_BUCKET_COUNT,
    DiffSummary,
    all_ok,
    assert_all,
    format_report,
    log_report,
)

__all__ = [
    "DEFAULT_BUCKET_COUNT",
    "DiffPartSummary",
    "DiffSummary",
    "LogHistogram",
    "MIN_DISPLAY_BUCKETS",
    "all_ok",
    "assert_all",
    "format_report",
    "log_report",
]
