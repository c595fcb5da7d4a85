"""
Aggregation of one difference metric over a stream of comparisons.

A DiffSummary tracks the worst magnitude seen, how many comparisons failed
the tolerance, the first sign change, and a log10 histogram of every
magnitude. It answers "is this run within tolerance" and renders a one-line
report suitable for test logs.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, List, Sequence, Tuple

import numpy as np
from numpy.typing import ArrayLike

from ..exceptions import DiffAssertionError, PreconditionError
from ..metrics.core import DiffMetric, is_diff_worse
from ..utils import format_sci, format_signed, to_percent
from .histogram import LogHistogram
from .part_summary import DiffPartSummary

logger = logging.getLogger(__name__)

DEFAULT_BUCKET_COUNT = 4

# (name, tolerance, allow_sign, metric)
SummaryInfo = Tuple[str, float, bool, DiffMetric]


def tolerance_failure_line(where: str, x: float, y: float, diff: float, tolerance: float) -> str:
    return (
        f"assert failed {where}: {format_signed(x)} vs {format_signed(y)} "
        f"diff abs {format_sci(diff)} outside inclusive {format_sci(tolerance)}"
    )


def sign_failure_line(where: str, x: float, y: float) -> str:
    return f"assert failed {where}: {format_signed(x)} vs {format_signed(y)} sign difference disallowed."


class DiffSummary:
    """
    Running comparison statistics for one measurement.

    Parameters
    ----------
    name : str
        Name shown in reports and failure messages
    tolerance : float
        Largest magnitude still considered a pass (inclusive)
    allow_sign : bool
        Whether sign changes are acceptable
    bucket_count : int
        Display bucket cap of the histogram, at least 3
    metric : callable
        ``(x, y) -> (magnitude, sign_changed)``, see :mod:`floatdiff.metrics`
    group : str, optional
        Label shared by summaries built together with :meth:`new_group`

    Examples
    --------
    >>> from floatdiff.metrics import diff_abs
    >>> summary = DiffSummary("simple", 1.0, False, 4, diff_abs)
    >>> summary.add(1.0, 3.0, 0)
    >>> summary.is_ok()
    False
    """

    def __init__(
        self,
        name: str,
        tolerance: float,
        allow_sign: bool,
        bucket_count: int,
        metric: DiffMetric,
        group: str = "",
    ):
        self.name = name
        self.group = group
        self.tolerance = tolerance
        self.allow_sign = allow_sign
        self.metric = metric

        self.worst_diff = 0.0
        self.num_total = 0
        self.num_diff_fail = 0
        # Count of non-zero magnitudes, sample is the worst one
        self.worst = DiffPartSummary()
        # Count of sign changes, sample is the first one
        self.first_sign_change = DiffPartSummary()
        self.histogram = LogHistogram(bucket_count)

    @classmethod
    def new_group(
        cls,
        bucket_count: int,
        infos: Iterable[SummaryInfo],
        group: str = "",
    ) -> List[DiffSummary]:
        """Build one summary per ``(name, tolerance, allow_sign, metric)`` tuple."""
        return [
            cls(name, tolerance, allow_sign, bucket_count, metric, group=group)
            for name, tolerance, allow_sign, metric in infos
        ]

    @property
    def label(self) -> str:
        if self.group:
            return f"{self.group}/{self.name}"
        return self.name

    def add(self, x: float, y: float, index: int) -> None:
        """
        Compare ``x`` (expected) against ``y`` (actual).

        ``index`` is only used to identify samples in reports.
        """
        x = float(x)
        y = float(y)
        self.num_total += 1
        diff, sign_change = self.metric(x, y)
        is_worst = is_diff_worse(diff, self.worst_diff)
        # Negated tests below are deliberate so that NaN counts as non-zero and failing
        if not (diff == 0.0):
            self.worst.add(x, y, index, force_update=is_worst)
            if is_worst:
                self.worst_diff = diff
            if not (diff <= self.tolerance):
                self.num_diff_fail += 1
        if sign_change:
            self.first_sign_change.add(x, y, index)
        self.histogram.add(diff)

    def extend(self, expected: ArrayLike, actual: ArrayLike, start_index: int = 0) -> None:
        """Add element-wise comparisons of two equally shaped arrays."""
        expected = np.asarray(expected, dtype=np.float64).ravel()
        actual = np.asarray(actual, dtype=np.float64).ravel()
        if expected.shape != actual.shape:
            raise ValueError(
                f"expected and actual must have the same size, got {expected.size} and {actual.size}"
            )
        for offset, (x, y) in enumerate(zip(expected.tolist(), actual.tolist())):
            self.add(x, y, start_index + offset)

    @property
    def num_sign_change(self) -> int:
        return self.first_sign_change.count

    def is_within_tolerance(self) -> bool:
        return self.worst_diff <= self.tolerance

    def is_sign_ok(self) -> bool:
        return self.allow_sign or self.first_sign_change.count == 0

    def is_ok(self) -> bool:
        """True if the worst magnitude is within tolerance and any sign changes are allowed."""
        return self.is_within_tolerance() and self.is_sign_ok()

    def failures(self) -> List[str]:
        """Failure lines for the tolerance check and the sign check, both evaluated."""
        lines = []
        if not self.is_within_tolerance():
            lines.append(tolerance_failure_line(
                f"item {self.worst.sample_index}, {self.label}",
                self.worst.sample_x,
                self.worst.sample_y,
                self.worst_diff,
                self.tolerance,
            ))
        if not self.is_sign_ok():
            lines.append(sign_failure_line(
                f"item {self.first_sign_change.sample_index}, {self.label}",
                self.first_sign_change.sample_x,
                self.first_sign_change.sample_y,
            ))
        return lines

    def assert_ok(self) -> None:
        """
        Raise DiffAssertionError if either check fails.

        Both checks run before raising, so the error lists every failure.
        """
        lines = self.failures()
        if lines:
            for line in lines:
                logger.error(line)
            raise DiffAssertionError(lines)

    def copy(self) -> DiffSummary:
        other = DiffSummary(
            self.name, self.tolerance, self.allow_sign,
            self.histogram.max_display_buckets, self.metric, group=self.group,
        )
        other.worst_diff = self.worst_diff
        other.num_total = self.num_total
        other.num_diff_fail = self.num_diff_fail
        other.worst = dataclasses.replace(self.worst)
        other.first_sign_change = dataclasses.replace(self.first_sign_change)
        other.histogram = self.histogram.copy()
        return other

    def as_text(self) -> str:
        if self.num_diff_fail > self.num_total:
            raise PreconditionError(
                f"Internal error: {self.num_diff_fail} failures out of {self.num_total} items"
            )
        label = self.label
        out = [f"{label}{': ' if label else ''}count {self.num_total}"]
        if self.worst.count > 0:
            out.append(
                f", worst index {self.worst.sample_index} "
                f"{format_signed(self.worst.sample_x)} vs {format_signed(self.worst.sample_y)} "
                f"diff {format_sci(self.worst_diff)}, "
                f"{to_percent(self.num_diff_fail, self.num_total)}% failed tolerance "
                f"{format_sci(self.tolerance)}, {self.histogram}"
            )
        elif self.num_total > 0:
            out.append(f", zero 100%, 0% failed tolerance {format_sci(self.tolerance)}")
        if self.num_total > 0:
            out.append(f", sign diffs {to_percent(self.first_sign_change.count, self.num_total)}%")
            if self.first_sign_change.count > 0:
                out.append(
                    f" first index {self.first_sign_change.sample_index} "
                    f"{format_signed(self.first_sign_change.sample_x)} vs "
                    f"{format_signed(self.first_sign_change.sample_y)}"
                )
        return "".join(out)

    def __str__(self) -> str:
        return self.as_text()

    def __repr__(self) -> str:
        return (
            f"DiffSummary(name={self.name!r}, tolerance={self.tolerance!r}, "
            f"allow_sign={self.allow_sign!r}, num_total={self.num_total})"
        )


def format_report(summaries: Sequence[DiffSummary]) -> str:
    """One rendered line per summary."""
    return "\n".join(summary.as_text() for summary in summaries)


def log_report(summaries: Sequence[DiffSummary], level: int = logging.INFO) -> None:
    for summary in summaries:
        logger.log(level, summary.as_text())


def all_ok(summaries: Sequence[DiffSummary]) -> bool:
    return all(summary.is_ok() for summary in summaries)


def assert_all(summaries: Sequence[DiffSummary], stop_on_first: bool = False) -> None:
    """
    Assert every summary in a group.

    By default failures from all summaries are collected into one error.
    """
    lines: List[str] = []
    for summary in summaries:
        failed = summary.failures()
        for line in failed:
            logger.error(line)
        lines.extend(failed)
        if failed and stop_on_first:
            break
    if lines:
        raise DiffAssertionError(lines)
