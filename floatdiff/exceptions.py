"""
Exception types raised by floatdiff.

Precondition violations signal a caller or internal defect and are never
expected during normal comparisons. Tolerance and sign-change failures are
ordinary outcomes that only become errors when a caller asserts on them.
"""

from __future__ import annotations

from typing import List, Sequence


class PreconditionError(ValueError):
    """Raised when an argument or internal invariant is violated."""
    pass


class DiffAssertionError(AssertionError):
    """
    Raised when an asserted comparison is outside tolerance or changes sign.

    Attributes
    ----------
    failures : list of str
        One human-readable line per failed check, in evaluation order.
    """

    def __init__(self, failures: Sequence[str]) -> None:
        self.failures: List[str] = list(failures)
        super().__init__("\n".join(self.failures))
