"""Result types returned by instruction handlers."""

from __future__ import annotations

from dataclasses import dataclass

from solders.pubkey import Pubkey


@dataclass(frozen=True)
class InitializeResult:
    """Outcome of pool initialization.

    Attributes:
        pool: Derived pool address
        pool_authority: Derived authority address (mint authority, reserve owner)
        pool_mint: Bound pool-token mint
        pool_tokens_minted: Initial supply credited to the receipt account
        pool_mint_created: Whether the mint was created rather than bound
    """

    pool: Pubkey
    pool_authority: Pubkey
    pool_mint: Pubkey
    pool_tokens_minted: int
    pool_mint_created: bool


@dataclass(frozen=True)
class DepositAllTokensResult:
    pool_tokens_minted: int
    token_a_deposited: int
    token_b_deposited: int


@dataclass(frozen=True)
class DepositSingleTokenResult:
    source_mint: Pubkey
    amount_in: int
    pool_tokens_minted: int


@dataclass(frozen=True)
class WithdrawSingleTokenResult:
    """Outcome of a single-sided withdrawal.

    The caller's pool-token balance drops by pool_tokens_burned plus
    withdraw_fee; the fee is moved to the pool fee account, not burned.
    """

    destination_mint: Pubkey
    amount_out: int
    pool_tokens_burned: int
    withdraw_fee: int

    @property
    def pool_tokens_spent(self) -> int:
        return self.pool_tokens_burned + self.withdraw_fee


@dataclass(frozen=True)
class SwapResult:
    """Outcome of a swap.

    Attributes:
        source_mint: Mint paid into the pool
        destination_mint: Mint paid out of the pool
        amount_in: Source tokens taken from the trader, fees included
        amount_out: Destination tokens paid to the trader
        trading_fee: Portion of amount_in left in the reserve for all LPs
        owner_fee: Portion of amount_in claimed by the fee account
        owner_fee_pool_tokens: Pool tokens minted to the fee account for owner_fee
    """

    source_mint: Pubkey
    destination_mint: Pubkey
    amount_in: int
    amount_out: int
    trading_fee: int
    owner_fee: int
    owner_fee_pool_tokens: int


__all__ = [
    "InitializeResult",
    "DepositAllTokensResult",
    "DepositSingleTokenResult",
    "WithdrawSingleTokenResult",
    "SwapResult",
]
