"""Pool identity and keyless pool authority.

Pools, their authorities and their canonical pool-token mints live at
program-derived addresses: deterministic, off-curve keys that have no private
key. Anyone holding the seeds and the program id can re-derive them, so no
lookup table is needed to locate a pool.

Ledger moves out of pool-held accounts are authorized by passing the
authority's Signer capability explicitly; nothing is signed implicitly.
"""

from __future__ import annotations

from dataclasses import dataclass

from solders.pubkey import Pubkey

from exchange.constants import AUTHORITY_SEED, POOL_MINT_SEED, POOL_SEED


@dataclass(frozen=True)
class Signer:
    """Proof that an account approved the current instruction.

    For users this is produced by the host after verifying a signature; for
    a pool it is produced by PoolAuthority.signer().
    """

    pubkey: Pubkey


def derive_pool_address(
    token_a_mint: Pubkey,
    token_b_mint: Pubkey,
    creator: Pubkey,
    program_id: Pubkey,
) -> tuple[Pubkey, int]:
    """Pool address and bump for a (token A mint, token B mint, creator) triple."""
    return Pubkey.find_program_address(
        [POOL_SEED, bytes(token_a_mint), bytes(token_b_mint), bytes(creator)],
        program_id,
    )


def derive_pool_authority(pool: Pubkey, program_id: Pubkey) -> tuple[Pubkey, int]:
    """Authority address and bump for a pool."""
    return Pubkey.find_program_address([POOL_SEED, bytes(pool), AUTHORITY_SEED], program_id)


def derive_pool_mint_address(pool: Pubkey, program_id: Pubkey) -> tuple[Pubkey, int]:
    """Canonical pool-token mint address and bump for a pool."""
    return Pubkey.find_program_address([POOL_SEED, bytes(pool), POOL_MINT_SEED], program_id)


@dataclass(frozen=True)
class PoolAuthority:
    """Keyless signer bound to exactly one pool.

    Never stored: re-derive it from the pool address on every operation.
    """

    pool: Pubkey
    address: Pubkey
    bump: int

    @classmethod
    def derive(cls, pool: Pubkey, program_id: Pubkey) -> PoolAuthority:
        address, bump = derive_pool_authority(pool, program_id)
        return cls(pool=pool, address=address, bump=bump)

    def signer(self) -> Signer:
        """Capability to move funds and mint tokens on the pool's behalf."""
        return Signer(self.address)


__all__ = [
    "Signer",
    "PoolAuthority",
    "derive_pool_address",
    "derive_pool_authority",
    "derive_pool_mint_address",
]
