"""Pool initialization."""

from __future__ import annotations

from collections.abc import Iterable

import structlog
from solders.pubkey import Pubkey

from exchange.authority import PoolAuthority, Signer, derive_pool_address
from exchange.errors import AccountMismatch, PoolAlreadyExists, SameTokenMints
from exchange.instructions.base import BaseHandler
from exchange.instructions.types import InitializeResult
from exchange.models.instructions import Initialize
from exchange.models.types import short_key
from exchange.state import PoolState

logger = structlog.get_logger()


class InitializeHandler(BaseHandler[Initialize, InitializeResult]):
    """Create a pool over two pre-funded reserves.

    The reserves must already be owned by the pool authority; liquidity is
    not moved by this instruction. The pool-token mint is bound if it exists
    (zero supply, pool authority as mint authority) and created otherwise.
    Exactly config.initial_pool_token_supply pool tokens are minted to the
    receipt account, whatever the reserves hold.
    """

    def execute(self, instruction: Initialize, signers: Iterable[Signer]) -> InitializeResult:
        accounts = instruction.accounts
        self._require_signer(accounts.creator, signers)

        reserve_a = self._account(accounts.token_a)
        reserve_b = self._account(accounts.token_b)
        if reserve_a.mint == reserve_b.mint:
            raise SameTokenMints(f"Both reserves hold mint {reserve_a.mint}")

        pool_address, bump = derive_pool_address(
            reserve_a.mint, reserve_b.mint, accounts.creator, self.program_id
        )
        if pool_address in self.context.store:
            raise PoolAlreadyExists(
                f"Pool for ({reserve_a.mint}, {reserve_b.mint}, {accounts.creator}) already exists"
            )

        authority = PoolAuthority.derive(pool_address, self.program_id)
        for reserve in (reserve_a, reserve_b):
            if reserve.owner != authority.address:
                raise AccountMismatch(
                    f"Reserve {reserve.address} is owned by {reserve.owner}, "
                    f"not the pool authority {authority.address}"
                )

        create_mint = self._check_pool_mint(accounts.pool_mint, authority)
        to_open = [
            address
            for address in dict.fromkeys([accounts.pool_token_receipt, accounts.pool_fee_account])
            if self._check_pool_token_account(address, accounts.pool_mint)
        ]

        pool = PoolState(
            address=pool_address,
            bump=bump,
            token_a=reserve_a.address,
            token_b=reserve_b.address,
            token_a_mint=reserve_a.mint,
            token_b_mint=reserve_b.mint,
            pool_mint=accounts.pool_mint,
            pool_fee_account=accounts.pool_fee_account,
            creator=accounts.creator,
            fees=instruction.fees,
        )
        initial_supply = self.context.config.initial_pool_token_supply

        with self.ledger.atomic():
            if create_mint:
                self.ledger.create_mint(
                    accounts.pool_mint,
                    mint_authority=authority.address,
                    decimals=self.context.config.pool_mint_decimals,
                )
            for address in to_open:
                self.ledger.open_account(address, mint=accounts.pool_mint, owner=accounts.creator)
            self.ledger.mint_to(
                accounts.pool_mint,
                accounts.pool_token_receipt,
                initial_supply,
                authority=authority.signer(),
            )
            self.context.store.create(pool)

        logger.info(
            "pool_initialized",
            pool=short_key(pool_address),
            token_a_mint=short_key(reserve_a.mint),
            token_b_mint=short_key(reserve_b.mint),
            creator=short_key(accounts.creator),
            pool_mint_created=create_mint,
            supply=initial_supply,
        )
        return InitializeResult(
            pool=pool_address,
            pool_authority=authority.address,
            pool_mint=accounts.pool_mint,
            pool_tokens_minted=initial_supply,
            pool_mint_created=create_mint,
        )

    def _check_pool_mint(self, address: Pubkey, authority: PoolAuthority) -> bool:
        """Validate the pool-mint slot. Returns True when the mint must be created."""
        if self.ledger.get_account(address) is not None:
            raise AccountMismatch(f"Pool mint address {address} is a token account")
        mint = self.ledger.get_mint(address)
        if mint is None:
            return True
        if mint.mint_authority != authority.address:
            raise AccountMismatch(f"Pool mint {address} is not controlled by the pool authority")
        if mint.supply != 0:
            raise AccountMismatch(f"Pool mint {address} already has supply {mint.supply}")
        return False

    def _check_pool_token_account(self, address: Pubkey, pool_mint: Pubkey) -> bool:
        """Validate a pool-token account slot. Returns True when it must be opened."""
        if address == pool_mint:
            raise AccountMismatch(f"Pool-token account {address} collides with the pool mint")
        if self.ledger.get_mint(address) is not None:
            raise AccountMismatch(f"Pool-token account address {address} is a mint")
        account = self.ledger.get_account(address)
        if account is None:
            return True
        if account.mint != pool_mint:
            raise AccountMismatch(f"Account {address} does not hold the pool mint {pool_mint}")
        return False


__all__ = ["InitializeHandler"]
