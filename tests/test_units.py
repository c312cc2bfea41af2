"""Tests for volatility unit normalization."""

import math

import numpy as np
import pytest

from voltracker.config import UnitConvention
from voltracker.units import normalize_volatility, sanitize_volatility, to_number


class TestNormalizeVolatility:
    @pytest.mark.parametrize("raw", [1.0001, 1.5786, 18.0, 250.0])
    def test_percentages_divided(self, raw):
        assert normalize_volatility(raw) == raw / 100

    @pytest.mark.parametrize("raw", [0.0, 0.0918, 0.18, 0.999])
    def test_fractions_unchanged(self, raw):
        assert normalize_volatility(raw) == raw

    def test_one_is_decimal_by_default(self):
        assert normalize_volatility(1) == 1

    def test_one_as_percent_when_configured(self):
        assert normalize_volatility(1, UnitConvention.PERCENT) == 0.01
        # The tie-break only affects exactly 1
        assert normalize_volatility(0.5, UnitConvention.PERCENT) == 0.5
        assert normalize_volatility(20.0, UnitConvention.PERCENT) == 0.2

    @pytest.mark.parametrize("raw", [-0.1, -25.0, math.nan, math.inf, -math.inf, None])
    def test_corrupt_input_clamped(self, raw):
        assert normalize_volatility(raw) == 0


class TestSanitize:
    def test_keeps_magnitude(self):
        assert sanitize_volatility(1.5786) == 1.5786

    def test_clamps(self):
        assert sanitize_volatility(-3.0) == 0.0
        assert sanitize_volatility(float("nan")) == 0.0
        assert sanitize_volatility(10**400) == 0.0


class TestToNumber:
    def test_numbers_and_strings(self):
        assert to_number(3) == 3.0
        assert to_number("18.5") == 18.5
        assert to_number(" 0.2 ") == 0.2

    def test_rejects_junk(self):
        assert to_number(None) is None
        assert to_number(True) is None
        assert to_number("") is None
        assert to_number("n/a") is None
        assert to_number({"v": 1}) is None

    def test_non_finite_passes_through(self):
        assert math.isnan(to_number("nan"))

    def test_oversized_int_becomes_infinite(self):
        assert to_number(10**400) == math.inf
        assert to_number(-(10**400)) == -math.inf

    def test_numpy_scalars(self):
        assert to_number(np.int64(7)) == 7.0
        assert to_number(np.float64(0.25)) == 0.25
