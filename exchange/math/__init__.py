"""Mathematical utilities for the exchange.

This package provides exact integer primitives for liquidity math:
- sqrt_ratio_half_up / sqrt_ratio_half_down: rounded roots of rational ratios
"""

from exchange.math.precise import sqrt_ratio_half_down, sqrt_ratio_half_up

__all__ = ["sqrt_ratio_half_up", "sqrt_ratio_half_down"]
