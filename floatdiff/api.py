"""
Single-shot comparison entry point.

``log_assert_delta`` is the one-comparison counterpart of DiffSummary:
roughly ``assert_approx_eq!(x, y, allow_diff)`` with a logged diagnostic.
"""

from __future__ import annotations

import logging

from .core.summary import sign_failure_line, tolerance_failure_line
from .exceptions import DiffAssertionError
from .metrics.core import DiffMetric
from .utils import format_sci, format_signed

logger = logging.getLogger(__name__)


def log_assert_delta(
    name: str,
    x: float,
    y: float,
    allow_diff: float,
    allow_sign_change: bool,
    calc_diff: DiffMetric,
) -> None:
    """
    Compare one pair of values, log the result, and assert on it.

    Parameters
    ----------
    name : str
        Name used in the log line and failure message
    x, y : float
        Expected and actual value
    allow_diff : float
        Inclusive tolerance on the metric's magnitude
    allow_sign_change : bool
        Whether a sign change is acceptable
    calc_diff : callable
        Metric from :mod:`floatdiff.metrics`

    Raises
    ------
    DiffAssertionError
        If the magnitude is outside tolerance or a disallowed sign change
        occurred. Both conditions are reported when both fail.
    """
    x = float(x)
    y = float(y)
    diff, sign_change = calc_diff(x, y)
    logger.info(
        f"{name}: {format_signed(x)} vs {format_signed(y)} "
        f"diff {format_sci(diff)}, sign diff {str(sign_change).lower()}"
    )

    failures = []
    if not (diff <= allow_diff):
        failures.append(tolerance_failure_line(name, x, y, diff, allow_diff))
    if not allow_sign_change and sign_change:
        failures.append(sign_failure_line(name, x, y))
    if failures:
        for line in failures:
            logger.error(line)
        raise DiffAssertionError(failures)
