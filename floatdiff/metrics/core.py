"""
Difference metrics for pairs of double-precision values.

Every metric takes ``(x, y)`` and returns ``(magnitude, sign_changed)``.
Magnitudes are never negative in sign bit: positive zero, positive finite,
positive infinity or positive NaN. ``sign_changed`` is reported
independently of the magnitude and compares sign bits, so (NaN, NaN) is not
a sign change while (0.0, -0.0) and (NaN, -NaN) are.
"""

from __future__ import annotations

import functools
import math
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from ..exceptions import PreconditionError

DiffResult = Tuple[float, bool]
DiffMetric = Callable[[float, float], DiffResult]

_INT64_SPAN = 1 << 64
_INT64_HALF = 1 << 63


def _is_sign_negative(x: float) -> bool:
    return math.copysign(1.0, x) < 0


def _sign_change(x: float, y: float) -> bool:
    return _is_sign_negative(x) != _is_sign_negative(y)


def is_diff_worse(a: float, b: float) -> bool:
    """
    Return True if magnitude ``a`` is worse than magnitude ``b``.

    NaN is worse than infinity, which is worse than anything finite.
    """
    if _is_sign_negative(a) or _is_sign_negative(b):
        raise PreconditionError(f"Magnitudes must be sign-positive, got {a!r} and {b!r}")
    return (math.isnan(a) and not math.isnan(b)) or a > b


def diff_abs(x: float, y: float) -> DiffResult:
    """
    Absolute difference.

    Two NaNs, or two infinities of the same sign, differ by 0. Infinities
    of opposite sign differ by infinity. A single NaN propagates.
    """
    if math.isnan(x) and math.isnan(y):
        diff = 0.0
    elif math.isinf(x) and math.isinf(y):
        diff = 0.0 if _is_sign_negative(x) == _is_sign_negative(y) else math.inf
    else:
        diff = abs(x - y)
    return diff, _sign_change(x, y)


def diff_rel(x: float, y: float) -> DiffResult:
    """Relative difference, ``|x - y| * 2 / (|x| + |y|)``."""
    diff, sign_change = diff_abs(x, y)
    # NaN also takes this branch and stays NaN
    if diff != 0.0:
        diff = abs(diff * (2.0 / (abs(x) + abs(y))))
    return diff, sign_change


def diff_lesser(x: float, y: float) -> DiffResult:
    """
    Lesser of the absolute and relative difference.

    Relative scaling only applies when ``|x| + |y| > 2``, where it can only
    shrink a finite non-zero difference. Near zero this behaves like an
    absolute difference, for large values like a relative one.
    """
    diff, sign_change = diff_abs(x, y)
    if diff != 0.0 and not math.isinf(diff) and not math.isnan(diff):
        sum_abs = abs(x) + abs(y)
        if sum_abs > 2.0:
            diff *= 2.0 / sum_abs
    return diff, sign_change


def _float_bits(x: float) -> int:
    return int(np.float64(x).view(np.int64))


def diff_ulps(x: float, y: float) -> DiffResult:
    """
    Distance in units in the last place between the bit patterns of x and y.

    A NaN against a non-NaN gives NaN, two NaNs give 0, and a finite value
    against an infinity gives infinity. The bit difference wraps like a
    signed 64-bit subtraction and is returned as a float to match the other
    metrics.
    """
    if math.isnan(x) != math.isnan(y):
        ulps = math.nan
    elif math.isnan(x):
        ulps = 0.0
    elif math.isfinite(x) != math.isfinite(y):
        ulps = math.inf
    else:
        delta = (_float_bits(x) - _float_bits(y) + _INT64_HALF) % _INT64_SPAN - _INT64_HALF
        ulps = abs(float(delta))
    return ulps, _sign_change(x, y)


def _check_cyclic_range(range_min: float, range_max: float) -> None:
    if not range_min < range_max:
        raise PreconditionError(
            f"range_min must be less than range_max, got [{range_min}, {range_max}]"
        )
    if not (range_min <= 0.0 <= range_max):
        raise PreconditionError(
            f"0.0 must fall within [range_min, range_max], got [{range_min}, {range_max}]"
        )


def _cyclic_reduce(x: float, range_min: float, range_max: float) -> float:
    span = range_max - range_min
    # np.fmod keeps the dividend's sign (including -0.0) and yields NaN for inf
    with np.errstate(invalid="ignore"):
        xmod = float(np.fmod(x, span))
    if xmod < range_min:
        return xmod + span
    if xmod > range_max:
        return xmod - span
    return xmod


def diff_cyclic(x: float, y: float, range_min: float, range_max: float) -> DiffResult:
    """
    Absolute difference on a wraparound domain such as angles.

    The domain must straddle zero. Any range adjustment of an input, and
    taking the short way around the cycle, is reported as a sign change:
    for [0, 360], (0, 1) is not a sign change but (1, -1), (359, 361),
    (0, 361) and (720, 721) all are.
    """
    _check_cyclic_range(range_min, range_max)
    span = range_max - range_min
    xmod = _cyclic_reduce(x, range_min, range_max)
    ymod = _cyclic_reduce(y, range_min, range_max)

    if (math.isnan(xmod) and not math.isnan(x)) or (math.isnan(ymod) and not math.isnan(y)):
        # Infinite or otherwise degenerate input
        direct = (math.nan, True)
    else:
        direct = diff_abs(xmod, ymod)

    if xmod < ymod:
        wrapped = diff_abs(xmod + span, ymod)
    elif xmod > ymod:
        wrapped = diff_abs(xmod, ymod + span)
    else:
        wrapped = direct

    if wrapped[0] < direct[0]:
        return wrapped[0], True
    return direct[0], x != xmod or y != ymod or direct[1]


def cyclic(range_min: float, range_max: float) -> DiffMetric:
    """Bind a cyclic range, returning a two-argument metric."""
    _check_cyclic_range(range_min, range_max)
    metric = functools.partial(diff_cyclic, range_min=range_min, range_max=range_max)
    functools.update_wrapper(metric, diff_cyclic, assigned=("__name__", "__doc__"), updated=())
    return metric


# Dispatch dictionary for metric name -> metric function
_METRICS: Dict[str, DiffMetric] = {
    'abs': diff_abs,
    'rel': diff_rel,
    'lesser': diff_lesser,
    'ulps': diff_ulps,
}


def available_metrics() -> Tuple[str, ...]:
    """Names accepted by :func:`get_metric`."""
    return tuple(_METRICS) + ('cyclic',)


def get_metric(
    name: str,
    range_min: Optional[float] = None,
    range_max: Optional[float] = None,
) -> DiffMetric:
    """
    Look up a metric by name.

    Parameters
    ----------
    name : str
        One of 'abs', 'rel', 'lesser', 'ulps' or 'cyclic'
    range_min, range_max : float, optional
        Domain bounds, required for 'cyclic' and rejected otherwise

    Raises
    ------
    PreconditionError
        If the name is unknown or the range arguments do not fit the metric
    """
    key = name.lower()
    if key == 'cyclic':
        if range_min is None or range_max is None:
            raise PreconditionError("cyclic metric requires range_min and range_max")
        return cyclic(range_min, range_max)
    metric = _METRICS.get(key)
    if metric is None:
        raise PreconditionError(f"Unknown metric: {name}. Must be one of {list(available_metrics())}")
    if range_min is not None or range_max is not None:
        raise PreconditionError(f"{name} metric does not take a range")
    return metric
