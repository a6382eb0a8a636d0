"""Exact square roots of rational ratios with explicit rounding.

The single-sided liquidity formulas need ``supply * sqrt(new / old)``. Rather
than approximating the root in floating or fixed point, both sides are
squared and folded into one rational ``supply^2 * new / old``, whose root is
then rounded exactly with ``math.isqrt``:

    round_half_up(y)   = floor(y + 1/2) = (isqrt(floor(4q)) + 1) // 2
    round_half_down(y) = ceil(y - 1/2)

where ``y = sqrt(q)``. Ties (``2y`` an odd integer) are detected exactly by
checking whether ``4q`` is a perfect square.
"""

from __future__ import annotations

import math

from exchange.constants import U256_MAX
from exchange.safe_int import AmountOverflow, DivisionByZero


def _isqrt_of_quadruple(numerator: int, denominator: int) -> tuple[int, bool]:
    """Return (floor(sqrt(4 * n / d)), whether that root is exact)."""
    if denominator == 0:
        raise DivisionByZero(f"Square root of {numerator}/0")
    if numerator < 0 or denominator < 0:
        raise ValueError(f"Square root of negative ratio {numerator}/{denominator}")
    quadruple = 4 * numerator
    if quadruple > U256_MAX:
        raise AmountOverflow(f"Square root operand exceeds 256 bits: {numerator}")
    root = math.isqrt(quadruple // denominator)
    return root, root * root * denominator == quadruple


def sqrt_ratio_half_up(numerator: int, denominator: int) -> int:
    """sqrt(numerator / denominator) rounded to nearest, ties away from zero.

    Raises:
        DivisionByZero: If denominator is zero
        AmountOverflow: If the scaled numerator exceeds 256 bits
    """
    root, _ = _isqrt_of_quadruple(numerator, denominator)
    return (root + 1) // 2


def sqrt_ratio_half_down(numerator: int, denominator: int) -> int:
    """sqrt(numerator / denominator) rounded to nearest, ties toward zero.

    Raises:
        DivisionByZero: If denominator is zero
        AmountOverflow: If the scaled numerator exceeds 256 bits
    """
    root, exact = _isqrt_of_quadruple(numerator, denominator)
    if exact:
        return root // 2
    return (root + 1) // 2


__all__ = ["sqrt_ratio_half_up", "sqrt_ratio_half_down"]
