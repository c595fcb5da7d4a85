"""
Formatting helpers shared by the histogram and summary renderers.
"""

from __future__ import annotations

import math

import numpy as np


def to_percent(num_part: int, num_all: int) -> int:
    """
    Round ``num_part / num_all`` to a whole percentage for display.

    Never reports 0 for a non-zero part, and never reports 100 unless the
    part is the whole. Halves round away from zero. An empty total
    reports 0.
    """
    if num_all == 0:
        return 0
    percent = 100.0 * num_part / num_all
    if percent < 1.0 and num_part != 0:
        return 1
    if percent > 99.0 and num_part != num_all:
        return 99
    return int(math.floor(percent + 0.5))


def sign_prefix(x: float) -> str:
    """Return "-" for negative zero and negative NaN, otherwise ""."""
    if (x == 0.0 or math.isnan(x)) and math.copysign(1.0, x) < 0:
        return "-"
    return ""


def format_sci(x: float) -> str:
    """
    Format a float in shortest round-trip scientific notation.

    ``1e0``, ``-2.5e-3``, ``5e200``; ``inf``/``-inf`` and ``NaN`` for the
    special values. Zero and NaN are rendered unsigned, use
    :func:`sign_prefix` to make their sign visible.
    """
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    if x == 0.0:
        return "0e0"
    text = np.format_float_scientific(x, unique=True, trim="-", exp_digits=1)
    return text.replace("e+", "e")


def format_signed(x: float) -> str:
    """Format a float with an explicit sign for negative zero and NaN."""
    return f"{sign_prefix(x)}{format_sci(x)}"
