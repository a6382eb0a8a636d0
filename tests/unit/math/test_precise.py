"""Tests for exact square roots of ratios."""

import math

import pytest

from exchange.constants import U256_MAX
from exchange.math import sqrt_ratio_half_down, sqrt_ratio_half_up
from exchange.safe_int import AmountOverflow, DivisionByZero


class TestSqrtRatioHalfUp:
    """Round to nearest, ties away from zero."""

    def test_perfect_squares(self):
        assert sqrt_ratio_half_up(4, 1) == 2
        assert sqrt_ratio_half_up(100, 4) == 5
        assert sqrt_ratio_half_up(0, 7) == 0

    def test_rounds_down_below_half(self):
        """sqrt(2) = 1.41 and sqrt(6) = 2.45 round down."""
        assert sqrt_ratio_half_up(2, 1) == 1
        assert sqrt_ratio_half_up(6, 1) == 2

    def test_rounds_up_above_half(self):
        """sqrt(7) = 2.65 rounds up."""
        assert sqrt_ratio_half_up(7, 1) == 3

    def test_tie_rounds_up(self):
        """sqrt(9/4) = 1.5 and sqrt(25/4) = 2.5 are ties."""
        assert sqrt_ratio_half_up(9, 4) == 2
        assert sqrt_ratio_half_up(25, 4) == 3

    def test_large_operands(self):
        """Matches math.isqrt on a scaled square."""
        supply = 10**9
        assert sqrt_ratio_half_up(supply * supply * 11 * 10**11, 10**12) == 1_048_808_848


class TestSqrtRatioHalfDown:
    """Round to nearest, ties toward zero."""

    def test_non_ties_match_half_up(self):
        for numerator, denominator in [(2, 1), (6, 1), (7, 1), (10**18 * 95, 100)]:
            assert sqrt_ratio_half_down(numerator, denominator) == sqrt_ratio_half_up(
                numerator, denominator
            )

    def test_tie_rounds_down(self):
        assert sqrt_ratio_half_down(9, 4) == 1
        assert sqrt_ratio_half_down(25, 4) == 2

    def test_perfect_squares(self):
        assert sqrt_ratio_half_down(4, 1) == 2
        assert sqrt_ratio_half_down(0, 3) == 0

    def test_scenario_withdrawal_root(self):
        """sqrt(1e18 * 0.95) = 974679434.48."""
        assert sqrt_ratio_half_down(10**18 * 950, 1000) == 974_679_434


class TestSqrtRatioErrors:
    """Tests for invalid operands."""

    def test_zero_denominator(self):
        with pytest.raises(DivisionByZero):
            sqrt_ratio_half_up(4, 0)
        with pytest.raises(DivisionByZero):
            sqrt_ratio_half_down(4, 0)

    def test_operand_beyond_256_bits(self):
        with pytest.raises(AmountOverflow):
            sqrt_ratio_half_up(U256_MAX, 1)

    def test_within_256_bits(self):
        """The largest accepted numerator still evaluates exactly."""
        numerator = U256_MAX // 4
        assert sqrt_ratio_half_down(numerator, 1) == (math.isqrt(4 * numerator) + 1) // 2
