"""Constant-product swap."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from exchange.authority import Signer
from exchange.errors import AccountMismatch
from exchange.instructions.base import BaseHandler, PoolAccounts
from exchange.instructions.types import SwapResult
from exchange.ledger import TokenAccount
from exchange.models.instructions import Swap
from exchange.models.types import short_key

logger = structlog.get_logger()


@dataclass(frozen=True)
class _SwapPlan:
    pool: PoolAccounts
    reserve_in: TokenAccount
    reserve_out: TokenAccount
    result: SwapResult


class SwapHandler(BaseHandler[Swap, SwapResult]):
    """Exact-input swap in either direction.

    The trade direction follows the mint of the caller's source account.
    The whole input, fees included, joins the source reserve; the owner's
    share is additionally credited to the fee account as newly minted pool
    tokens.
    """

    def execute(self, instruction: Swap, signers: Iterable[Signer]) -> SwapResult:
        accounts = instruction.accounts
        user = self._require_signer(accounts.user, signers)
        plan = self._prepare(instruction)
        result = plan.result
        pool_signer = plan.pool.authority.signer()

        with self.ledger.atomic():
            self.ledger.transfer(
                accounts.user_source, plan.reserve_in.address, result.amount_in, authority=user
            )
            self.ledger.transfer(
                plan.reserve_out.address,
                accounts.user_destination,
                result.amount_out,
                authority=pool_signer,
            )
            if result.owner_fee_pool_tokens:
                self.ledger.mint_to(
                    accounts.pool_mint,
                    accounts.pool_fee_account,
                    result.owner_fee_pool_tokens,
                    authority=pool_signer,
                )

        logger.info(
            "swap_executed",
            pool=short_key(accounts.pool),
            user=short_key(accounts.user),
            source_mint=short_key(result.source_mint),
            amount_in=result.amount_in,
            amount_out=result.amount_out,
            trading_fee=result.trading_fee,
            owner_fee=result.owner_fee,
            owner_fee_pool_tokens=result.owner_fee_pool_tokens,
        )
        return result

    def quote(self, instruction: Swap) -> SwapResult:
        return self._prepare(instruction).result

    def _prepare(self, instruction: Swap) -> _SwapPlan:
        accounts = instruction.accounts
        pool = self._load_pool(
            accounts.pool,
            accounts.pool_authority,
            accounts.pool_mint,
            accounts.token_a,
            accounts.token_b,
        )
        self._fee_account(pool.pool, accounts.pool_fee_account)

        source = self._account(accounts.user_source)
        if source.owner != accounts.user:
            raise AccountMismatch(f"Source account {source.address} is not owned by the user")
        reserve_in, reserve_out = pool.reserves_for(source.mint)
        if pool.is_reserve(accounts.user_destination):
            raise AccountMismatch(f"Destination {accounts.user_destination} is a pool reserve")
        self._user_account(accounts.user_destination, reserve_out.mint)

        amounts = self.context.curve.swap(
            instruction.amount_in,
            reserve_in.amount,
            reserve_out.amount,
            pool.pool.fees,
        )
        self._require_at_least("Swap output", amounts.amount_out, instruction.minimum_amount_out)
        self._require_balance(source, instruction.amount_in)

        owner_fee_pool_tokens = self.context.curve.owner_fee_pool_tokens(
            amounts.owner_fee, amounts.new_reserve_in, pool.supply
        )

        return _SwapPlan(
            pool=pool,
            reserve_in=reserve_in,
            reserve_out=reserve_out,
            result=SwapResult(
                source_mint=reserve_in.mint,
                destination_mint=reserve_out.mint,
                amount_in=amounts.amount_in,
                amount_out=amounts.amount_out,
                trading_fee=amounts.trading_fee,
                owner_fee=amounts.owner_fee,
                owner_fee_pool_tokens=owner_fee_pool_tokens,
            ),
        )


__all__ = ["SwapHandler"]
