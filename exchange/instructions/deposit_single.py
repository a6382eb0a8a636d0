"""Single-sided deposit."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from exchange.authority import Signer
from exchange.errors import ZeroTradingTokens
from exchange.instructions.base import BaseHandler, PoolAccounts
from exchange.instructions.types import DepositSingleTokenResult
from exchange.ledger import TokenAccount
from exchange.models.instructions import DepositSingleTokenIn
from exchange.models.types import short_key

logger = structlog.get_logger()


@dataclass(frozen=True)
class _DepositPlan:
    pool: PoolAccounts
    reserve: TokenAccount
    result: DepositSingleTokenResult


class DepositSingleTokenHandler(BaseHandler[DepositSingleTokenIn, DepositSingleTokenResult]):
    """Deposit one token and mint pool tokens on the square-root curve.

    Only the deposited side's reserve prices the mint, so the pool price
    moves toward the other token.
    """

    def execute(
        self, instruction: DepositSingleTokenIn, signers: Iterable[Signer]
    ) -> DepositSingleTokenResult:
        accounts = instruction.accounts
        user = self._require_signer(accounts.user, signers)
        plan = self._prepare(instruction)
        result = plan.result

        with self.ledger.atomic():
            self.ledger.transfer(
                accounts.user_source, plan.reserve.address, result.amount_in, authority=user
            )
            self.ledger.mint_to(
                accounts.pool_mint,
                accounts.user_pool_token_account,
                result.pool_tokens_minted,
                authority=plan.pool.authority.signer(),
            )

        logger.info(
            "single_token_deposited",
            pool=short_key(accounts.pool),
            user=short_key(accounts.user),
            mint=short_key(result.source_mint),
            amount_in=result.amount_in,
            pool_tokens=result.pool_tokens_minted,
        )
        return result

    def quote(self, instruction: DepositSingleTokenIn) -> DepositSingleTokenResult:
        return self._prepare(instruction).result

    def _prepare(self, instruction: DepositSingleTokenIn) -> _DepositPlan:
        accounts = instruction.accounts
        pool = self._load_pool(
            accounts.pool,
            accounts.pool_authority,
            accounts.pool_mint,
            accounts.token_a,
            accounts.token_b,
        )
        reserve, _ = pool.reserves_for(accounts.source_mint)
        self._user_account(accounts.user_pool_token_account, pool.pool.pool_mint)
        source = self._user_account(accounts.user_source, accounts.source_mint, accounts.user)

        if instruction.amount_in == 0:
            raise ZeroTradingTokens("Deposit amount is zero")
        pool_tokens = self.context.curve.pool_tokens_for_deposit(
            instruction.amount_in, reserve.amount, pool.supply
        )
        if pool_tokens == 0:
            raise ZeroTradingTokens(f"Deposit of {instruction.amount_in} mints no pool tokens")
        self._require_at_least("Pool tokens out", pool_tokens, instruction.minimum_pool_token_amount)
        self._require_balance(source, instruction.amount_in)

        return _DepositPlan(
            pool=pool,
            reserve=reserve,
            result=DepositSingleTokenResult(
                source_mint=accounts.source_mint,
                amount_in=instruction.amount_in,
                pool_tokens_minted=pool_tokens,
            ),
        )


__all__ = ["DepositSingleTokenHandler"]
