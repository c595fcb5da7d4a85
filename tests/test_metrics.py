"""Unit tests for the difference metrics."""
import inspect
import math
import sys

import numpy as np
import pytest

from floatdiff.exceptions import PreconditionError
from floatdiff.metrics import (
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

NAN = math.nan
NEG_NAN = math.copysign(math.nan, -1.0)
INF = math.inf


def _is_positive(x):
    return math.copysign(1.0, x) > 0


class TestAbsoluteDifference:
    """Edge cases of the absolute difference."""

    @pytest.mark.parametrize("x, y, expected", [
        (0.0, 0.5, (0.5, False)),
        (10.0, 10.5, (0.5, False)),
        (-0.25, 0.25, (0.5, True)),
        (0.0, 0.0, (0.0, False)),
        (-0.0, 0.0, (0.0, True)),
        (NAN, NAN, (0.0, False)),
        (NAN, NEG_NAN, (0.0, True)),
        (INF, INF, (0.0, False)),
        (INF, -INF, (INF, True)),
    ])
    def test_table(self, x, y, expected):
        assert diff_abs(x, y) == expected

    def test_inf_vs_nan(self):
        diff, sign_change = diff_abs(INF, NAN)
        assert math.isnan(diff)
        assert not sign_change

    def test_negative_nan_magnitude_is_sign_positive(self):
        diff, sign_change = diff_abs(-1.0, NEG_NAN)
        assert math.isnan(diff)
        assert _is_positive(diff)
        assert not sign_change

    def test_finite_values_match_abs(self):
        rng = np.random.default_rng(7)
        for x, y in rng.normal(scale=1e3, size=(200, 2)).tolist():
            diff, sign_change = diff_abs(x, y)
            assert diff == abs(x - y)
            assert sign_change == ((x < 0) != (y < 0))


class TestRelativeDifference:
    """Edge cases of the relative difference."""

    @pytest.mark.parametrize("x, y, expected", [
        (0.0, 0.5, (2.0, False)),
        (10.0, 10.5, (1.0 / 20.5, False)),
        (-0.25, 0.25, (2.0, True)),
        (0.0, 0.0, (0.0, False)),
        (-0.0, 0.0, (0.0, True)),
        (NAN, NAN, (0.0, False)),
        (NAN, NEG_NAN, (0.0, True)),
        (INF, INF, (0.0, False)),
    ])
    def test_table(self, x, y, expected):
        assert diff_rel(x, y) == expected

    def test_inf_vs_nan(self):
        diff, sign_change = diff_rel(INF, NAN)
        assert math.isnan(diff)
        assert not sign_change

    def test_opposite_infinities(self):
        diff, sign_change = diff_rel(INF, -INF)
        assert math.isnan(diff)
        assert _is_positive(diff)
        assert sign_change


class TestLesserDifference:
    """Edge cases of the lesser-of difference."""

    @pytest.mark.parametrize("x, y, expected", [
        (0.0, 0.5, (0.5, False)),
        (10.0, 10.5, (1.0 / 20.5, False)),
        (-0.25, 0.25, (0.5, True)),
        (0.0, 0.0, (0.0, False)),
        (-0.0, 0.0, (0.0, True)),
        (NAN, NAN, (0.0, False)),
        (NAN, NEG_NAN, (0.0, True)),
        (INF, INF, (0.0, False)),
        (INF, -INF, (INF, True)),
    ])
    def test_table(self, x, y, expected):
        assert diff_lesser(x, y) == expected

    def test_inf_vs_nan(self):
        diff, sign_change = diff_lesser(INF, NAN)
        assert math.isnan(diff)
        assert not sign_change

    def test_matches_absolute_below_threshold(self):
        assert diff_lesser(0.5, 1.5) == diff_abs(0.5, 1.5)
        assert diff_lesser(-1.0, 1.0) == diff_abs(-1.0, 1.0)

    def test_never_exceeds_absolute(self):
        rng = np.random.default_rng(11)
        values = rng.normal(scale=100.0, size=(300, 2)).tolist()
        values += [[1e300, -1e300], [3.0, 3.5], [0.1, 2.5]]
        for x, y in values:
            assert diff_lesser(x, y)[0] <= diff_abs(x, y)[0]


class TestUlpsDifference:
    """Edge cases of the ULP distance."""

    def test_equal(self):
        assert diff_ulps(0.0, 0.0) == (0.0, False)

    def test_one_ulp(self):
        assert diff_ulps(1.0, 1.0 + sys.float_info.epsilon) == (1.0, False)
        assert diff_ulps(1.0 + sys.float_info.epsilon, 1.0) == (1.0, False)

    def test_nan_against_number(self):
        assert math.isnan(diff_ulps(1.0, NAN)[0])
        assert math.isnan(diff_ulps(NAN, -3.5)[0])

    def test_nan_against_nan(self):
        assert diff_ulps(NAN, NAN) == (0.0, False)
        assert diff_ulps(NAN, NEG_NAN) == (0.0, True)

    def test_finite_against_infinite(self):
        assert diff_ulps(sys.float_info.max, INF) == (INF, False)

    def test_signed_zero_uses_bit_patterns(self):
        assert diff_ulps(0.0, -0.0) == (2.0 ** 63, True)

    def test_adjacent_values(self):
        x = 123.456
        assert diff_ulps(x, float(np.nextafter(x, INF))) == (1.0, False)
        assert diff_ulps(x, float(np.nextafter(np.nextafter(x, 0.0), 0.0))) == (2.0, False)


class TestCyclicDifference:
    """Edge cases of the cyclic difference on [-180, 180]."""

    @pytest.mark.parametrize("x, y, expected", [
        (0.0, 0.5, (0.5, False)),
        (10.0, 10.5, (0.5, False)),
        (-0.25, 0.25, (0.5, True)),
        (0.0, 0.0, (0.0, False)),
        (-0.0, 0.0, (0.0, True)),
        (NAN, NAN, (0.0, True)),
        (NAN, NEG_NAN, (0.0, True)),
        (-180.0, 180.0, (0.0, True)),
        (-179.0, 179.0, (2.0, True)),
        (-179.0, -179.0, (0.0, False)),
        (181.0, 181.0, (0.0, True)),
        (0.0, 721.0, (1.0, True)),
    ])
    def test_table(self, x, y, expected):
        assert diff_cyclic(x, y, -180.0, 180.0) == expected

    @pytest.mark.parametrize("x, y", [(INF, NAN), (INF, INF), (INF, -INF)])
    def test_degenerate_inputs(self, x, y):
        diff, sign_change = diff_cyclic(x, y, -180.0, 180.0)
        assert math.isnan(diff)
        assert sign_change

    def test_flooring_reduction(self):
        # -181 reduces to 179, so it is 1 away from 180 going the short way
        assert diff_cyclic(-181.0, 179.0, -180.0, 180.0) == (0.0, True)
        assert diff_cyclic(-1.0, 359.0, 0.0, 360.0) == (0.0, True)

    def test_zero_based_range(self):
        assert diff_cyclic(0.0, 1.0, 0.0, 360.0) == (1.0, False)
        assert diff_cyclic(1.0, -1.0, 0.0, 360.0) == (2.0, True)
        assert diff_cyclic(359.0, 361.0, 0.0, 360.0) == (2.0, True)
        assert diff_cyclic(720.0, 721.0, 0.0, 360.0) == (1.0, True)

    @pytest.mark.parametrize("range_min, range_max", [(10.0, 20.0), (-20.0, -10.0), (5.0, -5.0), (0.0, 0.0)])
    def test_invalid_range(self, range_min, range_max):
        with pytest.raises(PreconditionError):
            diff_cyclic(0.0, 1.0, range_min, range_max)
        with pytest.raises(PreconditionError):
            cyclic(range_min, range_max)

    def test_bound_metric(self):
        metric = cyclic(-180.0, 180.0)
        assert metric(0.0, 721.0) == (1.0, True)
        assert metric.__name__ == "diff_cyclic"

    def test_bound_metric_signature(self):
        metric = cyclic(-180.0, 180.0)
        assert not hasattr(metric, "__wrapped__")
        params = inspect.signature(metric).parameters
        assert [name for name, p in params.items() if p.default is inspect.Parameter.empty] == ["x", "y"]


class TestWorseOrdering:
    """NaN is worse than infinity, which is worse than any finite value."""

    def test_ordering(self):
        assert is_diff_worse(NAN, INF)
        assert is_diff_worse(INF, 1e308)
        assert is_diff_worse(2.0, 1.0)
        assert not is_diff_worse(1.0, 2.0)
        assert not is_diff_worse(NAN, NAN)
        assert not is_diff_worse(INF, NAN)

    def test_rejects_negative(self):
        with pytest.raises(PreconditionError):
            is_diff_worse(-1.0, 0.0)
        with pytest.raises(PreconditionError):
            is_diff_worse(0.0, -0.0)


class TestMetricLookup:
    """Named metric dispatch."""

    def test_names(self):
        assert set(available_metrics()) == {"abs", "rel", "lesser", "ulps", "cyclic"}
        assert get_metric("abs") is diff_abs
        assert get_metric("ULPS") is diff_ulps

    def test_cyclic(self):
        metric = get_metric("cyclic", range_min=0.0, range_max=360.0)
        assert metric(359.0, 1.0) == (2.0, True)

    def test_errors(self):
        with pytest.raises(PreconditionError, match="Unknown metric"):
            get_metric("euclidean")
        with pytest.raises(PreconditionError):
            get_metric("cyclic")
        with pytest.raises(PreconditionError):
            get_metric("abs", range_min=0.0, range_max=1.0)
