"""Checked integer wrapper for pool settlement math.

Python integers never overflow, but the token ledger stores u64 amounts and
the pool math runs over u128 intermediates. SafeInt makes those
limits explicit:
- Division by zero raises DivisionByZero
- Subtraction below zero raises Underflow
- Multiplication and addition beyond u128 raise AmountOverflow
- Values handed back to the ledger are checked against u64 via to_u64()

Usage pattern:
    from exchange.safe_int import S

    def pool_tokens(amount: int, supply: int, reserve: int) -> int:
        return (S(amount) * S(supply) // S(reserve)).to_u64()
"""

from __future__ import annotations

from exchange.constants import U64_MAX, U128_MAX
from exchange.errors import ArithmeticOverflow


class Underflow(ArithmeticOverflow):
    """Subtraction would produce a negative result."""

    code = "arithmetic_underflow"


class DivisionByZero(ArithmeticOverflow):
    """Division by zero."""

    code = "division_by_zero"


class AmountOverflow(ArithmeticOverflow):
    """Value exceeds u128 during computation or u64 on conversion."""


class SafeInt:
    """Non-negative integer with checked arithmetic.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
            return
        # bool is an int subclass, but never a token amount
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")
        if value < 0:
            raise Underflow(f"Negative amount: {value}")
        if value > U128_MAX:
            raise AmountOverflow(f"Value exceeds u128 max: {value}")
        self._value = value

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    def __radd__(self, other: int) -> SafeInt:
        return SafeInt(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __rsub__(self, other: int) -> SafeInt:
        result = other - self._value
        if result < 0:
            raise Underflow(f"Underflow: {other} - {self._value} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        """Multiply two values.

        Raises:
            AmountOverflow: If the product exceeds u128
        """
        return SafeInt(self._value * _extract_value(other))

    def __rmul__(self, other: int) -> SafeInt:
        return SafeInt(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division rounding down.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    # --- Named operations ---

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Ceiling division (rounds up).

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Ceiling division by zero: {self._value}")
        return SafeInt(-(-self._value // other_val))

    def min(self, other: SafeInt | int) -> SafeInt:
        """Return minimum of self and other."""
        return SafeInt(min(self._value, _extract_value(other)))

    def to_u64(self) -> int:
        """Convert to int, validating the ledger's u64 bound.

        Raises:
            AmountOverflow: If value exceeds 2^64-1
        """
        if self._value > U64_MAX:
            raise AmountOverflow(f"Value exceeds u64 max: {self._value}")
        return self._value


def _extract_value(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt

__all__ = ["SafeInt", "S", "Underflow", "DivisionByZero", "AmountOverflow"]
