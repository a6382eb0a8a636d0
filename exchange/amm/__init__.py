"""AMM curve implementations."""

from exchange.amm.constant_product import (
    ConstantProductCurve,
    DepositAmounts,
    SwapAmounts,
    constant_product,
)

__all__ = [
    "ConstantProductCurve",
    "DepositAmounts",
    "SwapAmounts",
    "constant_product",
]
