"""Constant-product pool engine with single-sided liquidity."""

from exchange.exchange import Exchange

__version__ = "0.1.0"
__all__ = ["Exchange", "__version__"]
