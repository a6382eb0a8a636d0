"""Shared context and account checks for instruction handlers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

from solders.pubkey import Pubkey

from exchange.amm import ConstantProductCurve, constant_product
from exchange.authority import PoolAuthority, Signer
from exchange.config import ExchangeConfig
from exchange.errors import (
    AccountMismatch,
    InsufficientBalance,
    SlippageExceeded,
    UnauthorizedSigner,
)
from exchange.ledger import Mint, TokenAccount, TokenLedger
from exchange.state import PoolState, PoolStore

InstructionT = TypeVar("InstructionT")
ResultT = TypeVar("ResultT")


@dataclass(frozen=True)
class InstructionContext:
    """Collaborators every handler works against."""

    ledger: TokenLedger
    store: PoolStore
    config: ExchangeConfig
    curve: ConstantProductCurve = constant_product


@dataclass(frozen=True)
class PoolAccounts:
    """Pool-side accounts after validation, read fresh from the ledger."""

    pool: PoolState
    authority: PoolAuthority
    pool_mint: Mint
    token_a: TokenAccount
    token_b: TokenAccount

    @property
    def supply(self) -> int:
        return self.pool_mint.supply

    def is_reserve(self, address: Pubkey) -> bool:
        return address in (self.token_a.address, self.token_b.address)

    def reserves_for(self, mint: Pubkey) -> tuple[TokenAccount, TokenAccount]:
        """(reserve holding mint, the other reserve).

        Raises:
            AccountMismatch: If mint is neither of the pool's mints
        """
        if mint == self.pool.token_a_mint:
            return self.token_a, self.token_b
        if mint == self.pool.token_b_mint:
            return self.token_b, self.token_a
        raise AccountMismatch(f"Mint {mint} is not traded by pool {self.pool.address}")


class BaseHandler(Generic[InstructionT, ResultT]):
    """Base class with the checks shared by all handlers.

    Every handler validates first and mutates last: all reads and checks run
    before the ledger is touched, and the mutations themselves run inside
    ledger.atomic() so a failing ledger call leaves nothing behind.
    """

    def __init__(self, context: InstructionContext) -> None:
        self.context = context

    @property
    def ledger(self) -> TokenLedger:
        return self.context.ledger

    @property
    def program_id(self) -> Pubkey:
        return self.context.config.program_id

    def execute(self, instruction: InstructionT, signers: Iterable[Signer]) -> ResultT:
        raise NotImplementedError

    # --- Signers ---

    def _require_signer(self, key: Pubkey, signers: Iterable[Signer]) -> Signer:
        for signer in signers:
            if signer.pubkey == key:
                return signer
        raise UnauthorizedSigner(f"Missing signature of {key}")

    # --- Accounts ---

    def _account(self, address: Pubkey) -> TokenAccount:
        account = self.ledger.get_account(address)
        if account is None:
            raise AccountMismatch(f"Token account {address} does not exist")
        return account

    def _mint(self, address: Pubkey) -> Mint:
        mint = self.ledger.get_mint(address)
        if mint is None:
            raise AccountMismatch(f"Mint {address} does not exist")
        return mint

    def _load_pool(
        self,
        pool_address: Pubkey,
        authority_address: Pubkey,
        pool_mint: Pubkey,
        token_a: Pubkey,
        token_b: Pubkey,
    ) -> PoolAccounts:
        """Load a pool and check the supplied pool-side accounts against it.

        Raises:
            PoolNotFound: If no pool is stored at pool_address
            AccountMismatch: If any account differs from the pool's record,
                or a reserve is not owned by the derived authority
        """
        pool = self.context.store.get(pool_address)
        if pool.expected_address(self.program_id) != pool.address:
            raise AccountMismatch(f"Pool {pool_address} does not derive from its mints and creator")

        authority = pool.authority(self.program_id)
        if authority_address != authority.address:
            raise AccountMismatch(
                f"Authority {authority_address} is not the authority of pool {pool_address}"
            )

        if pool_mint != pool.pool_mint:
            raise AccountMismatch(f"Pool mint {pool_mint} does not belong to pool {pool_address}")
        mint = self._mint(pool_mint)
        if mint.mint_authority != authority.address:
            raise AccountMismatch(f"Pool mint {pool_mint} is not controlled by the pool authority")

        reserve_a = self._reserve(token_a, pool.token_a, pool.token_a_mint, authority)
        reserve_b = self._reserve(token_b, pool.token_b, pool.token_b_mint, authority)
        return PoolAccounts(
            pool=pool,
            authority=authority,
            pool_mint=mint,
            token_a=reserve_a,
            token_b=reserve_b,
        )

    def _reserve(
        self,
        supplied: Pubkey,
        recorded: Pubkey,
        mint: Pubkey,
        authority: PoolAuthority,
    ) -> TokenAccount:
        if supplied != recorded:
            raise AccountMismatch(f"Reserve {supplied} does not match pool reserve {recorded}")
        account = self._account(supplied)
        if account.mint != mint:
            raise AccountMismatch(f"Reserve {supplied} holds mint {account.mint}, expected {mint}")
        if account.owner != authority.address:
            raise AccountMismatch(f"Reserve {supplied} is not owned by the pool authority")
        return account

    def _fee_account(self, pool: PoolState, supplied: Pubkey) -> TokenAccount:
        if supplied != pool.pool_fee_account:
            raise AccountMismatch(
                f"Fee account {supplied} does not match pool fee account {pool.pool_fee_account}"
            )
        account = self._account(supplied)
        if account.mint != pool.pool_mint:
            raise AccountMismatch(f"Fee account {supplied} does not hold the pool mint")
        return account

    def _user_account(
        self,
        address: Pubkey,
        mint: Pubkey,
        owner: Pubkey | None = None,
    ) -> TokenAccount:
        """Fetch a caller account, checking its mint and (for sources) its owner."""
        account = self._account(address)
        if account.mint != mint:
            raise AccountMismatch(f"Account {address} holds mint {account.mint}, expected {mint}")
        if owner is not None and account.owner != owner:
            raise AccountMismatch(f"Account {address} is not owned by {owner}")
        return account

    # --- Amount checks ---

    @staticmethod
    def _require_balance(account: TokenAccount, amount: int) -> None:
        if account.amount < amount:
            raise InsufficientBalance(
                f"Account {account.address} holds {account.amount}, needs {amount}"
            )

    @staticmethod
    def _require_at_least(label: str, actual: int, minimum: int) -> None:
        if actual < minimum:
            raise SlippageExceeded(f"{label} {actual} is below the minimum {minimum}")

    @staticmethod
    def _require_at_most(label: str, actual: int, maximum: int | None) -> None:
        if maximum is not None and actual > maximum:
            raise SlippageExceeded(f"{label} {actual} exceeds the maximum {maximum}")


__all__ = ["InstructionContext", "PoolAccounts", "BaseHandler"]
