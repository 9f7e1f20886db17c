"""Tests for the shared rounding and ratio helpers."""

import pytest

from cdp_dashboard.synthetic._utils import (
    clamp,
    round_half_up,
    round_to_tenth,
    safe_ratio,
)


class TestRounding:
    """Halves always round towards +inf, unlike the built-in round."""

    def test_half_rounds_up(self):
        assert round_half_up(22.5) == 23
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3

    def test_negative_half_rounds_towards_zero(self):
        assert round_half_up(-0.5) == 0
        assert round_half_up(-1.5) == -1

    def test_non_half_values(self):
        assert round_half_up(22.49) == 22
        assert round_half_up(22.51) == 23

    def test_round_to_tenth(self):
        assert round_to_tenth(0.25) == 0.3
        assert round_to_tenth(10.44) == 10.4
        assert round_to_tenth(92.0) == 92.0


class TestSafeRatio:
    def test_zero_denominator(self):
        assert safe_ratio(7, 0) == 0.0
        assert safe_ratio(0, 0) == 0.0

    def test_ratio(self):
        assert safe_ratio(1, 4) == pytest.approx(0.25)


class TestClamp:
    def test_above_upper(self):
        assert clamp(1.3) == 1.0

    def test_below_lower(self):
        assert clamp(-0.1) == 0.0

    def test_inside_range(self):
        assert clamp(0.42) == 0.42

    def test_custom_bounds(self):
        assert clamp(150, 0, 100) == 100
