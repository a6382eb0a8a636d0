"""Fee schedule for a pool.

A pool charges three fees, each a (numerator, denominator) fraction:
- trade fee: taken from swap input and left in the reserves for all LPs
- owner trade fee: taken from swap input, credited to the fee account as pool tokens
- owner withdraw fee: charged in pool tokens on single-sided withdrawals
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from exchange.errors import InvalidFeeSchedule
from exchange.models.types import U64
from exchange.safe_int import S


def calculate_fee(amount: int, numerator: int, denominator: int) -> int:
    """Fee on an amount, rounded down.

    Args:
        amount: Amount the fee is charged on
        numerator: Fee numerator
        denominator: Fee denominator (non-zero)

    Returns:
        floor(amount * numerator / denominator)
    """
    if numerator == 0 or amount == 0:
        return 0
    return (S(amount) * S(numerator) // S(denominator)).value


class FeeSchedule(BaseModel):
    """Immutable fee fractions stored verbatim in the pool state."""

    model_config = ConfigDict(frozen=True)

    trade_fee_numerator: U64
    trade_fee_denominator: U64
    owner_trade_fee_numerator: U64
    owner_trade_fee_denominator: U64
    owner_withdraw_fee_numerator: U64
    owner_withdraw_fee_denominator: U64

    @model_validator(mode="after")
    def _check_fractions(self) -> FeeSchedule:
        # InvalidFeeSchedule is not a ValueError, so pydantic lets it propagate as-is
        for name, numerator, denominator in self.fractions():
            if denominator == 0:
                raise InvalidFeeSchedule(f"{name} fee denominator is zero")
            if numerator > denominator:
                raise InvalidFeeSchedule(
                    f"{name} fee numerator {numerator} exceeds denominator {denominator}"
                )
        return self

    @classmethod
    def from_payload(cls, data: Any) -> FeeSchedule:
        """Validate raw instruction data into a FeeSchedule.

        Raises:
            InvalidFeeSchedule: If any field is missing, out of u64 range, or
                breaks the fraction invariant
        """
        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise InvalidFeeSchedule(f"Malformed fee schedule: {err.error_count()} error(s)") from err

    def fractions(self) -> list[tuple[str, int, int]]:
        """(name, numerator, denominator) for each fee."""
        return [
            ("trade", self.trade_fee_numerator, self.trade_fee_denominator),
            ("owner_trade", self.owner_trade_fee_numerator, self.owner_trade_fee_denominator),
            (
                "owner_withdraw",
                self.owner_withdraw_fee_numerator,
                self.owner_withdraw_fee_denominator,
            ),
        ]

    def trading_fee(self, amount: int) -> int:
        return calculate_fee(amount, self.trade_fee_numerator, self.trade_fee_denominator)

    def owner_trading_fee(self, amount: int) -> int:
        return calculate_fee(
            amount, self.owner_trade_fee_numerator, self.owner_trade_fee_denominator
        )

    def owner_withdraw_fee(self, pool_tokens: int) -> int:
        return calculate_fee(
            pool_tokens, self.owner_withdraw_fee_numerator, self.owner_withdraw_fee_denominator
        )


__all__ = ["FeeSchedule", "calculate_fee"]
