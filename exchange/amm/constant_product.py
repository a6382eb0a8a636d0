"""Constant product curve.

Swaps follow x * y = k on the amount left after fees. Liquidity is priced
on the assumption that the pool-token supply tracks sqrt(A * B):

    P_new = P * sqrt((A + A') * (B + B')) / sqrt(A * B)

A single-sided deposit (B' = 0) therefore mints
    P' = P * (sqrt((A + A') / A) - 1)
and a single-sided withdrawal burns
    P' = P * (1 - sqrt((A - A') / A))

Rounding, per quantity:
- fees and swap output: floor
- single-sided mint and burn: nearest, ties rounded up
- tokens consumed by a proportional deposit: ceiling
"""

from __future__ import annotations

from dataclasses import dataclass

from exchange.errors import ReserveExhausted, ZeroReserve, ZeroTradingTokens
from exchange.fees import FeeSchedule
from exchange.math import sqrt_ratio_half_down, sqrt_ratio_half_up
from exchange.safe_int import S


@dataclass(frozen=True)
class SwapAmounts:
    """Result of pricing a swap against the current reserves."""

    amount_in: int
    amount_in_after_fee: int
    amount_out: int
    trading_fee: int
    owner_fee: int
    new_reserve_in: int
    new_reserve_out: int


@dataclass(frozen=True)
class DepositAmounts:
    """Result of pricing a proportional deposit."""

    pool_tokens: int
    token_a_amount: int
    token_b_amount: int


def _require_reserve(reserve: int, label: str) -> None:
    if reserve == 0:
        raise ZeroReserve(f"{label} is zero")


class ConstantProductCurve:
    """Stateless liquidity math over integer reserves and pool-token supply.

    The curve holds no state: callers pass the live reserves and supply and
    receive plain integers back. Results are checked against u64, the widest
    amount the token ledger can hold.
    """

    def swap(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fees: FeeSchedule,
    ) -> SwapAmounts:
        """Price an exact-input swap.

        The full amount_in (fees included) joins the source reserve; only the
        after-fee amount is priced on the curve, so the product grows by the
        fees on every trade.

        Args:
            amount_in: Source tokens paid by the trader
            reserve_in: Pool balance of the source token
            reserve_out: Pool balance of the destination token
            fees: Pool fee schedule

        Returns:
            SwapAmounts with output, fee split and post-swap reserves

        Raises:
            ZeroTradingTokens: If amount_in, the after-fee amount, or the output is zero
            ZeroReserve: If either reserve is zero
            ReserveExhausted: If the output would drain the destination reserve
            ArithmeticOverflow: If any amount leaves its representable range
        """
        if amount_in == 0:
            raise ZeroTradingTokens("Swap amount is zero")
        _require_reserve(reserve_in, "Source reserve")
        _require_reserve(reserve_out, "Destination reserve")

        trading_fee = fees.trading_fee(amount_in)
        owner_fee = fees.owner_trading_fee(amount_in)
        total_fee = S(trading_fee) + S(owner_fee)
        if total_fee >= amount_in:
            raise ZeroTradingTokens(
                f"Fees {total_fee.value} consume the whole swap amount {amount_in}"
            )
        after_fee = S(amount_in) - total_fee

        # out = floor(R_out * a / (R_in + a)) == R_out - ceil(k / (R_in + a))
        invariant = S(reserve_in) * S(reserve_out)
        remaining_out = invariant.ceiling_div(S(reserve_in) + after_fee)
        amount_out = S(reserve_out) - remaining_out

        if amount_out == 0:
            raise ZeroTradingTokens(f"Swap of {amount_in} yields no output")
        if amount_out >= reserve_out:
            raise ReserveExhausted(
                f"Output {amount_out.value} would drain reserve {reserve_out}"
            )

        return SwapAmounts(
            amount_in=amount_in,
            amount_in_after_fee=after_fee.value,
            amount_out=amount_out.to_u64(),
            trading_fee=trading_fee,
            owner_fee=owner_fee,
            new_reserve_in=(S(reserve_in) + S(amount_in)).to_u64(),
            new_reserve_out=remaining_out.to_u64(),
        )

    def deposit_all_tokens(
        self,
        max_token_a: int,
        max_token_b: int,
        reserve_a: int,
        reserve_b: int,
        pool_supply: int,
    ) -> DepositAmounts:
        """Price a proportional deposit bounded by per-side caps.

        Mints min(floor(maxA * P / A), floor(maxB * P / B)) pool tokens and
        consumes the proportional amounts of each side, rounded up.

        Raises:
            ZeroReserve: If either reserve or the supply is zero
            ZeroTradingTokens: If the caps buy no pool tokens
        """
        _require_reserve(reserve_a, "Token A reserve")
        _require_reserve(reserve_b, "Token B reserve")
        _require_reserve(pool_supply, "Pool token supply")

        from_a = S(max_token_a) * S(pool_supply) // S(reserve_a)
        from_b = S(max_token_b) * S(pool_supply) // S(reserve_b)
        pool_tokens = from_a.min(from_b)
        if pool_tokens == 0:
            raise ZeroTradingTokens(
                f"Deposit caps ({max_token_a}, {max_token_b}) buy no pool tokens"
            )

        token_a_amount, token_b_amount = self.trading_tokens_for_pool_tokens(
            pool_tokens.value, pool_supply, reserve_a, reserve_b
        )
        return DepositAmounts(
            pool_tokens=pool_tokens.to_u64(),
            token_a_amount=token_a_amount,
            token_b_amount=token_b_amount,
        )

    def trading_tokens_for_pool_tokens(
        self,
        pool_tokens: int,
        pool_supply: int,
        reserve_a: int,
        reserve_b: int,
    ) -> tuple[int, int]:
        """Reserve amounts a pool-token amount represents, rounded up.

        token = ceil(pool_tokens * reserve / supply)
        """
        _require_reserve(pool_supply, "Pool token supply")
        token_a = (S(pool_tokens) * S(reserve_a)).ceiling_div(S(pool_supply))
        token_b = (S(pool_tokens) * S(reserve_b)).ceiling_div(S(pool_supply))
        return token_a.to_u64(), token_b.to_u64()

    def pool_tokens_for_deposit(
        self,
        amount_in: int,
        reserve: int,
        pool_supply: int,
    ) -> int:
        """Pool tokens minted for a single-sided deposit.

        round_half_up(P * sqrt((A + A') / A) - P), evaluated exactly as
        round_half_up(sqrt(P^2 * (A + A') / A)) - P since P is an integer.

        Raises:
            ZeroReserve: If the reserve is zero
            ArithmeticOverflow: If the minted amount exceeds u64
        """
        _require_reserve(reserve, "Deposit reserve")
        new_reserve = S(reserve) + S(amount_in)
        scaled = sqrt_ratio_half_up(pool_supply * pool_supply * new_reserve.value, reserve)
        return (S(scaled) - S(pool_supply)).to_u64()

    def pool_tokens_for_withdrawal(
        self,
        amount_out: int,
        reserve: int,
        pool_supply: int,
    ) -> int:
        """Pool tokens burned for a single-sided withdrawal.

        round_half_up(P - P * sqrt((A - A') / A)), evaluated exactly as
        P - round_half_down(sqrt(P^2 * (A - A') / A)).

        Raises:
            ZeroReserve: If the reserve is zero
            ReserveExhausted: If amount_out is not strictly below the reserve
        """
        _require_reserve(reserve, "Withdrawal reserve")
        if amount_out >= reserve:
            raise ReserveExhausted(f"Withdrawal {amount_out} would drain reserve {reserve}")
        new_reserve = S(reserve) - S(amount_out)
        scaled = sqrt_ratio_half_down(pool_supply * pool_supply * new_reserve.value, reserve)
        return (S(pool_supply) - S(scaled)).to_u64()

    def owner_fee_pool_tokens(
        self,
        owner_fee: int,
        new_reserve_in: int,
        pool_supply: int,
    ) -> int:
        """Pool tokens worth the owner's swap fee, valued after the swap.

        The owner fee stays in the source reserve; its claim is priced as a
        single-sided withdrawal of that fee from the post-swap reserve.
        """
        if owner_fee == 0:
            return 0
        return self.pool_tokens_for_withdrawal(owner_fee, new_reserve_in, pool_supply)


# Singleton instance
constant_product = ConstantProductCurve()


__all__ = [
    "ConstantProductCurve",
    "DepositAmounts",
    "SwapAmounts",
    "constant_product",
]
