"""
Bounded-cardinality log10 histogram of difference magnitudes.

Values are split into NaN, infinity and exact-zero counters, and log10
buckets for everything else. Rendering collapses sparse buckets into their
neighbours until at most ``max_display_buckets`` remain, so a large dataset
can be summarized on a single line.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Tuple

from ..exceptions import PreconditionError
from ..utils import to_percent

logger = logging.getLogger(__name__)

# (exp_min, exp_max, count) of a possibly merged bucket
ReducedBucket = Tuple[int, int, int]

MIN_DISPLAY_BUCKETS = 3


class LogHistogram:
    """
    Frequency summary of non-negative magnitudes.

    Parameters
    ----------
    max_display_buckets : int
        Maximum number of log10 buckets shown when rendering, not counting
        the zero, infinity and NaN counters. Must be at least 3.

    Notes
    -----
    The bucket exponent is ``int(log10(value))``, which truncates toward zero
    rather than flooring. Magnitudes below 1 therefore land one exponent
    higher than a strict floor would give (0.05 goes to e-1, not e-2).
    Existing bucket boundaries depend on this, so it is kept as is.
    """

    def __init__(self, max_display_buckets: int):
        if max_display_buckets < MIN_DISPLAY_BUCKETS:
            raise PreconditionError(
                f"max_display_buckets must be >= {MIN_DISPLAY_BUCKETS}, got {max_display_buckets}"
            )
        self.max_display_buckets = max_display_buckets
        self.num_nan = 0
        self.num_inf = 0
        self.num_zero = 0
        self.log10_buckets: Dict[int, int] = {}

    def add(self, diff: float) -> None:
        """Add one magnitude. Negative-signed values, including -0.0, are rejected."""
        if math.copysign(1.0, diff) < 0:
            raise PreconditionError(f"LogHistogram only accepts sign-positive values, got {diff!r}")
        if math.isnan(diff):
            self.num_nan += 1
        elif math.isinf(diff):
            self.num_inf += 1
        elif diff == 0.0:
            self.num_zero += 1
        else:
            exp = int(math.log10(diff))
            self.log10_buckets[exp] = self.log10_buckets.get(exp, 0) + 1

    @property
    def total(self) -> int:
        """Number of values added."""
        return self.num_nan + self.num_inf + self.num_zero + sum(self.log10_buckets.values())

    def copy(self) -> LogHistogram:
        other = LogHistogram(self.max_display_buckets)
        other.num_nan = self.num_nan
        other.num_inf = self.num_inf
        other.num_zero = self.num_zero
        other.log10_buckets = dict(self.log10_buckets)
        return other

    def reduced_buckets(self) -> Dict[int, ReducedBucket]:
        """
        Collapse the log10 buckets down to ``max_display_buckets``.

        Returns a dict in ascending key order. Keys are the surviving
        original exponents; values are ``(exp_min, exp_max, count)``.
        The live bucket counts are not modified.

        Each round merges the bucket with the smallest count (lowest
        exponent on ties) into its less populated neighbour (the lower one
        on ties). End buckets merge into their only neighbour.
        """
        keys_asc: List[int] = sorted(self.log10_buckets)
        reduced: Dict[int, ReducedBucket] = {
            key: (key, key, self.log10_buckets[key]) for key in keys_asc
        }

        # The cap of at least 3 guarantees both neighbours exist for inner buckets
        while len(reduced) > self.max_display_buckets:
            collapse_from = keys_asc[0]
            for key in keys_asc:
                if reduced[key][2] < reduced[collapse_from][2]:
                    collapse_from = key

            index = keys_asc.index(collapse_from)
            if index == 0:
                collapse_to = keys_asc[1]
            elif index == len(keys_asc) - 1:
                collapse_to = keys_asc[index - 1]
            else:
                key_prev = keys_asc[index - 1]
                key_next = keys_asc[index + 1]
                if reduced[key_next][2] < reduced[key_prev][2]:
                    collapse_to = key_next
                else:
                    collapse_to = key_prev

            src_min, src_max, src_count = reduced.pop(collapse_from)
            dst_min, dst_max, dst_count = reduced[collapse_to]
            reduced[collapse_to] = (
                min(dst_min, src_min),
                max(dst_max, src_max),
                dst_count + src_count,
            )
            del keys_asc[index]

        if len(reduced) < len(self.log10_buckets):
            logger.debug(f"Collapsed {len(self.log10_buckets)} log10 buckets into {len(reduced)}")
        return reduced

    def segments(self) -> List[str]:
        """Rendered pieces: zero, log10 buckets ascending, inf, nan."""
        num_total = self.total
        parts: List[str] = []
        if self.num_zero > 0:
            parts.append(f"zero {to_percent(self.num_zero, num_total)}%")
        for key, (exp_min, exp_max, count) in self.reduced_buckets().items():
            if count == 0:
                raise PreconditionError(f"Internal error: bucket e{key} contains no items")
            percent = to_percent(count, num_total)
            if exp_min == exp_max:
                parts.append(f"e{key} {percent}%")
            else:
                parts.append(f"e{exp_min} to e{exp_max} {percent}%")
        if self.num_inf > 0:
            parts.append(f"inf {to_percent(self.num_inf, num_total)}%")
        if self.num_nan > 0:
            parts.append(f"nan {to_percent(self.num_nan, num_total)}%")
        return parts

    def as_text(self) -> str:
        return ", ".join(self.segments())

    def __str__(self) -> str:
        return self.as_text()

    def __repr__(self) -> str:
        return (
            f"LogHistogram(max_display_buckets={self.max_display_buckets}, "
            f"num_zero={self.num_zero}, num_inf={self.num_inf}, num_nan={self.num_nan}, "
            f"log10_buckets={self.log10_buckets!r})"
        )
