"""In-memory token ledger.

Reference TokenLedger used by the test-suite and by hosts that embed the
exchange without an external ledger. Records are immutable dataclasses kept
in two dicts, so a snapshot for atomic() is a shallow copy of each dict.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace

import structlog
from solders.pubkey import Pubkey

from exchange.authority import Signer
from exchange.constants import U64_MAX
from exchange.errors import AccountMismatch, InsufficientBalance, UnauthorizedSigner
from exchange.ledger.base import Mint, TokenAccount
from exchange.models.types import short_key
from exchange.safe_int import AmountOverflow

logger = structlog.get_logger()


class InMemoryTokenLedger:
    """Dict-backed token ledger with all-or-nothing transactions."""

    def __init__(self) -> None:
        self._mints: dict[Pubkey, Mint] = {}
        self._accounts: dict[Pubkey, TokenAccount] = {}
        self._depth = 0

    # --- Queries ---

    def get_mint(self, address: Pubkey) -> Mint | None:
        return self._mints.get(address)

    def get_account(self, address: Pubkey) -> TokenAccount | None:
        return self._accounts.get(address)

    def balance(self, account: Pubkey) -> int:
        return self._require_account(account).amount

    def supply(self, mint: Pubkey) -> int:
        return self._require_mint(mint).supply

    # --- Account creation ---

    def create_mint(self, address: Pubkey, *, mint_authority: Pubkey, decimals: int) -> Mint:
        self._require_unused(address)
        mint = Mint(address=address, mint_authority=mint_authority, supply=0, decimals=decimals)
        self._mints[address] = mint
        logger.debug("mint_created", mint=short_key(address), authority=short_key(mint_authority))
        return mint

    def open_account(self, address: Pubkey, *, mint: Pubkey, owner: Pubkey) -> TokenAccount:
        self._require_unused(address)
        self._require_mint(mint)
        account = TokenAccount(address=address, mint=mint, owner=owner, amount=0)
        self._accounts[address] = account
        logger.debug(
            "token_account_opened",
            account=short_key(address),
            mint=short_key(mint),
            owner=short_key(owner),
        )
        return account

    # --- Mutations ---

    def mint_to(self, mint: Pubkey, destination: Pubkey, amount: int, *, authority: Signer) -> None:
        mint_record = self._require_mint(mint)
        account = self._require_account(destination)
        if account.mint != mint:
            raise AccountMismatch(
                f"Account {destination} holds mint {account.mint}, not {mint}"
            )
        if authority.pubkey != mint_record.mint_authority:
            raise UnauthorizedSigner(f"{authority.pubkey} is not the mint authority of {mint}")
        new_supply = _checked_add(mint_record.supply, amount)
        new_amount = _checked_add(account.amount, amount)
        self._mints[mint] = replace(mint_record, supply=new_supply)
        self._accounts[destination] = replace(account, amount=new_amount)

    def transfer(
        self, source: Pubkey, destination: Pubkey, amount: int, *, authority: Signer
    ) -> None:
        src = self._require_account(source)
        dst = self._require_account(destination)
        if src.mint != dst.mint:
            raise AccountMismatch(f"Cannot transfer between mints {src.mint} and {dst.mint}")
        self._require_owner(src, authority)
        if src.amount < amount:
            raise InsufficientBalance(
                f"Account {source} holds {src.amount}, transfer needs {amount}"
            )
        if source == destination:
            return
        self._accounts[source] = replace(src, amount=src.amount - amount)
        self._accounts[destination] = replace(dst, amount=_checked_add(dst.amount, amount))

    def burn(self, source: Pubkey, mint: Pubkey, amount: int, *, authority: Signer) -> None:
        src = self._require_account(source)
        mint_record = self._require_mint(mint)
        if src.mint != mint:
            raise AccountMismatch(f"Account {source} holds mint {src.mint}, not {mint}")
        self._require_owner(src, authority)
        if src.amount < amount:
            raise InsufficientBalance(f"Account {source} holds {src.amount}, burn needs {amount}")
        self._accounts[source] = replace(src, amount=src.amount - amount)
        self._mints[mint] = replace(mint_record, supply=mint_record.supply - amount)

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Roll every effect inside the block back if an exception escapes.

        Nested blocks join the outermost one.
        """
        if self._depth:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        mints, accounts = dict(self._mints), dict(self._accounts)
        self._depth = 1
        try:
            yield
        except BaseException:
            self._mints, self._accounts = mints, accounts
            logger.debug("ledger_rolled_back")
            raise
        finally:
            self._depth = 0

    # --- Helpers ---

    def _require_mint(self, address: Pubkey) -> Mint:
        mint = self._mints.get(address)
        if mint is None:
            raise AccountMismatch(f"Unknown mint {address}")
        return mint

    def _require_account(self, address: Pubkey) -> TokenAccount:
        account = self._accounts.get(address)
        if account is None:
            raise AccountMismatch(f"Unknown token account {address}")
        return account

    def _require_unused(self, address: Pubkey) -> None:
        if address in self._mints or address in self._accounts:
            raise AccountMismatch(f"Address {address} is already in use")

    @staticmethod
    def _require_owner(account: TokenAccount, authority: Signer) -> None:
        if authority.pubkey != account.owner:
            raise UnauthorizedSigner(f"{authority.pubkey} does not own account {account.address}")


def _checked_add(current: int, amount: int) -> int:
    total = current + amount
    if total > U64_MAX:
        raise AmountOverflow(f"Ledger amount exceeds u64 max: {current} + {amount}")
    return total


__all__ = ["InMemoryTokenLedger"]
