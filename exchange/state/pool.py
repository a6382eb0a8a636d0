"""Persistent per-pool record.

A PoolState is written once, at initialization, and never changes after.
Balances and pool-token supply are not part of it: they live in the token
ledger and are read fresh on every operation.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from solders.pubkey import Pubkey

from exchange.authority import PoolAuthority, derive_pool_address
from exchange.fees import FeeSchedule
from exchange.models.types import PubkeyField


class PoolState(BaseModel):
    """Flat state record of one pool."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    address: PubkeyField = Field(description="Program-derived pool address")
    bump: int = Field(ge=0, le=255)
    token_a: PubkeyField = Field(description="Token A reserve account")
    token_b: PubkeyField = Field(description="Token B reserve account")
    token_a_mint: PubkeyField
    token_b_mint: PubkeyField
    pool_mint: PubkeyField = Field(description="Pool-token mint")
    pool_fee_account: PubkeyField = Field(description="Pool-token account collecting owner fees")
    creator: PubkeyField
    fees: FeeSchedule

    def authority(self, program_id: Pubkey) -> PoolAuthority:
        """Re-derive the pool's keyless authority."""
        return PoolAuthority.derive(self.address, program_id)

    def expected_address(self, program_id: Pubkey) -> Pubkey:
        """Address this pool's identity triple derives to."""
        address, _ = derive_pool_address(
            self.token_a_mint, self.token_b_mint, self.creator, program_id
        )
        return address

    def reserve_for_mint(self, mint: Pubkey) -> tuple[Pubkey, Pubkey] | None:
        """(reserve for mint, reserve for the other side), or None if mint is foreign."""
        if mint == self.token_a_mint:
            return self.token_a, self.token_b
        if mint == self.token_b_mint:
            return self.token_b, self.token_a
        return None


__all__ = ["PoolState"]
