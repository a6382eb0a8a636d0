"""Token-ledger interface consumed by the exchange.

The exchange never keeps balances itself. Reserves, pool-token supply and
user balances all live in a token ledger reached through this narrow
protocol, so the engine can run against any ledger that implements it.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from solders.pubkey import Pubkey

from exchange.authority import Signer


@dataclass(frozen=True)
class Mint:
    """A fungible token definition and its outstanding supply."""

    address: Pubkey
    mint_authority: Pubkey
    supply: int
    decimals: int


@dataclass(frozen=True)
class TokenAccount:
    """A balance of one mint, controlled by its owner."""

    address: Pubkey
    mint: Pubkey
    owner: Pubkey
    amount: int


@runtime_checkable
class TokenLedger(Protocol):
    """Protocol for token ledgers.

    Mutating calls take the approving Signer explicitly:
    - transfer and burn: the source account's owner
    - mint_to: the mint's mint authority

    Implementations raise exchange errors: AccountMismatch for unknown or
    mismatched accounts, UnauthorizedSigner for a wrong authority,
    InsufficientBalance for short balances and ArithmeticOverflow when a
    balance or supply would exceed u64.
    """

    def get_mint(self, address: Pubkey) -> Mint | None:
        """Look up a mint, or None if it does not exist."""
        ...

    def get_account(self, address: Pubkey) -> TokenAccount | None:
        """Look up a token account, or None if it does not exist."""
        ...

    def create_mint(self, address: Pubkey, *, mint_authority: Pubkey, decimals: int) -> Mint:
        """Create an empty mint at address."""
        ...

    def open_account(self, address: Pubkey, *, mint: Pubkey, owner: Pubkey) -> TokenAccount:
        """Open an empty token account for an existing mint."""
        ...

    def mint_to(self, mint: Pubkey, destination: Pubkey, amount: int, *, authority: Signer) -> None:
        """Create amount new tokens in destination."""
        ...

    def transfer(
        self, source: Pubkey, destination: Pubkey, amount: int, *, authority: Signer
    ) -> None:
        """Move amount between two accounts of the same mint."""
        ...

    def burn(self, source: Pubkey, mint: Pubkey, amount: int, *, authority: Signer) -> None:
        """Destroy amount tokens held in source."""
        ...

    def balance(self, account: Pubkey) -> int:
        """Current amount held by a token account."""
        ...

    def supply(self, mint: Pubkey) -> int:
        """Current supply of a mint."""
        ...

    def atomic(self) -> AbstractContextManager[None]:
        """Group ledger effects so that they commit together or not at all."""
        ...


__all__ = ["Mint", "TokenAccount", "TokenLedger"]
