"""Tests for SafeInt checked arithmetic."""

import pytest

from exchange.constants import U64_MAX, U128_MAX
from exchange.errors import ArithmeticOverflow, ExchangeError
from exchange.safe_int import AmountOverflow, DivisionByZero, S, SafeInt, Underflow


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        """SafeInt wraps a plain int."""
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        """SafeInt can be constructed from another SafeInt."""
        assert SafeInt(SafeInt(7)).value == 7

    def test_alias_s(self):
        """S is an alias for SafeInt."""
        assert S is SafeInt

    def test_negative_raises_underflow(self):
        """Token amounts are never negative."""
        with pytest.raises(Underflow):
            SafeInt(-1)

    def test_above_u128_raises(self):
        """Values beyond u128 are rejected at construction."""
        assert SafeInt(U128_MAX).value == U128_MAX
        with pytest.raises(AmountOverflow):
            SafeInt(U128_MAX + 1)

    def test_rejects_non_int(self):
        """Floats, strings and bools are not amounts."""
        with pytest.raises(TypeError):
            SafeInt(1.5)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            SafeInt("1")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            SafeInt(True)


class TestSafeIntArithmetic:
    """Tests for checked operators."""

    def test_add(self):
        assert (S(2) + S(3)).value == 5
        assert (S(2) + 3).value == 5
        assert (2 + S(3)).value == 5

    def test_add_overflow(self):
        """Sums beyond u128 raise."""
        with pytest.raises(AmountOverflow):
            S(U128_MAX) + 1

    def test_sub(self):
        assert (S(5) - S(3)).value == 2
        assert (10 - S(4)).value == 6

    def test_sub_underflow(self):
        """Subtraction below zero raises Underflow."""
        with pytest.raises(Underflow):
            S(3) - S(5)
        with pytest.raises(Underflow):
            3 - S(5)

    def test_mul_overflow(self):
        """u64 * u64 fits; u128 * 2 does not."""
        assert (S(U64_MAX) * S(U64_MAX)).value == U64_MAX * U64_MAX
        with pytest.raises(AmountOverflow):
            S(U128_MAX) * 2

    def test_floordiv(self):
        assert (S(7) // S(2)).value == 3

    def test_floordiv_by_zero(self):
        with pytest.raises(DivisionByZero):
            S(7) // 0

    def test_ceiling_div(self):
        """ceiling_div rounds up on a remainder, exact otherwise."""
        assert S(7).ceiling_div(2).value == 4
        assert S(8).ceiling_div(2).value == 4
        assert S(0).ceiling_div(5).value == 0

    def test_ceiling_div_by_zero(self):
        with pytest.raises(DivisionByZero):
            S(7).ceiling_div(0)

    def test_min(self):
        assert S(3).min(S(9)).value == 3
        assert S(9).min(3).value == 3


class TestSafeIntComparison:
    """Tests for comparisons and conversions."""

    def test_equality_with_int(self):
        assert S(5) == 5
        assert S(5) == S(5)
        assert S(5) != S(6)

    def test_ordering(self):
        assert S(1) < S(2)
        assert S(2) <= 2
        assert S(3) > 2
        assert S(3) >= S(3)

    def test_bool(self):
        assert not S(0)
        assert S(1)

    def test_to_u64(self):
        """to_u64 passes u64 values and rejects anything larger."""
        assert S(U64_MAX).to_u64() == U64_MAX
        with pytest.raises(AmountOverflow):
            S(U64_MAX + 1).to_u64()


class TestSafeIntErrors:
    """Checked-integer errors map onto the exchange hierarchy."""

    @pytest.mark.parametrize("error", [Underflow, DivisionByZero, AmountOverflow])
    def test_errors_are_arithmetic_overflow(self, error):
        assert issubclass(error, ArithmeticOverflow)
        assert issubclass(error, ExchangeError)
        assert issubclass(error, ArithmeticError)

    def test_codes(self):
        assert Underflow.code == "arithmetic_underflow"
        assert DivisionByZero.code == "division_by_zero"
        assert AmountOverflow.code == "arithmetic_overflow"
