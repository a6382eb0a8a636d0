"""Account references each instruction operates on.

Callers name every account explicitly; handlers check each one against the
stored pool state and the ledger before anything is moved.
"""

from pydantic import BaseModel, ConfigDict, Field

from exchange.models.types import PubkeyField

_ACCOUNTS_CONFIG = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")


class InitializeAccounts(BaseModel):
    """Accounts for pool initialization."""

    model_config = _ACCOUNTS_CONFIG

    token_a: PubkeyField = Field(description="Pre-funded token A reserve, owned by the pool authority")
    token_b: PubkeyField = Field(description="Pre-funded token B reserve, owned by the pool authority")
    pool_mint: PubkeyField = Field(description="Pool-token mint to bind, or address to create it at")
    pool_fee_account: PubkeyField
    pool_token_receipt: PubkeyField = Field(description="Receives the initial pool-token supply")
    creator: PubkeyField


class DepositAllTokensAccounts(BaseModel):
    """Accounts for a proportional two-sided deposit."""

    model_config = _ACCOUNTS_CONFIG

    pool: PubkeyField
    pool_authority: PubkeyField
    pool_mint: PubkeyField
    token_a: PubkeyField
    token_b: PubkeyField
    pool_fee_account: PubkeyField
    user_pool_token_account: PubkeyField
    user_token_a: PubkeyField
    user_token_b: PubkeyField
    user: PubkeyField


class DepositSingleTokenAccounts(BaseModel):
    """Accounts for a single-sided deposit."""

    model_config = _ACCOUNTS_CONFIG

    pool: PubkeyField
    pool_authority: PubkeyField
    pool_mint: PubkeyField
    token_a: PubkeyField
    token_b: PubkeyField
    user_pool_token_account: PubkeyField
    user_source: PubkeyField
    source_mint: PubkeyField = Field(description="Selects the reserve being deposited into")
    user: PubkeyField


class WithdrawSingleTokenAccounts(BaseModel):
    """Accounts for a single-sided withdrawal."""

    model_config = _ACCOUNTS_CONFIG

    pool: PubkeyField
    pool_authority: PubkeyField
    pool_mint: PubkeyField
    pool_fee_account: PubkeyField
    token_a: PubkeyField
    token_b: PubkeyField
    user_pool_token_account: PubkeyField
    user_destination: PubkeyField
    destination_mint: PubkeyField = Field(description="Selects the reserve being withdrawn from")
    user: PubkeyField


class SwapAccounts(BaseModel):
    """Accounts for a swap; the source account's mint selects the direction."""

    model_config = _ACCOUNTS_CONFIG

    pool: PubkeyField
    pool_authority: PubkeyField
    pool_mint: PubkeyField
    token_a: PubkeyField
    token_b: PubkeyField
    pool_fee_account: PubkeyField
    user_source: PubkeyField
    user_destination: PubkeyField
    user: PubkeyField


__all__ = [
    "InitializeAccounts",
    "DepositAllTokensAccounts",
    "DepositSingleTokenAccounts",
    "WithdrawSingleTokenAccounts",
    "SwapAccounts",
]
