"""
Running count of one kind of comparison event plus a remembered sample.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class DiffPartSummary:
    """
    Count of events of one kind and a representative occurrence.

    DiffSummary keeps one for non-zero magnitudes (sample is the worst) and
    one for sign changes (sample is the first).
    """
    sample_x: float = math.nan
    sample_y: float = math.nan
    sample_index: int = 0
    count: int = 0

    def add(self, x: float, y: float, index: int, force_update: bool = False) -> None:
        """
        Count one event.

        The sample is replaced on the first event, or whenever
        ``force_update`` is set.
        """
        if force_update or self.count == 0:
            self.sample_x = x
            self.sample_y = y
            self.sample_index = index
        self.count += 1
