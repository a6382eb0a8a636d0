"""Proportional two-sided deposit."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from exchange.authority import Signer
from exchange.instructions.base import BaseHandler, PoolAccounts
from exchange.instructions.types import DepositAllTokensResult
from exchange.models.instructions import DepositAllTokensIn
from exchange.models.types import short_key

logger = structlog.get_logger()


@dataclass(frozen=True)
class _DepositPlan:
    pool: PoolAccounts
    result: DepositAllTokensResult


class DepositAllTokensHandler(BaseHandler[DepositAllTokensIn, DepositAllTokensResult]):
    """Mint pool tokens for both tokens deposited in the current reserve ratio."""

    def execute(
        self, instruction: DepositAllTokensIn, signers: Iterable[Signer]
    ) -> DepositAllTokensResult:
        accounts = instruction.accounts
        user = self._require_signer(accounts.user, signers)
        plan = self._prepare(instruction)
        result = plan.result

        with self.ledger.atomic():
            self.ledger.transfer(
                accounts.user_token_a, accounts.token_a, result.token_a_deposited, authority=user
            )
            self.ledger.transfer(
                accounts.user_token_b, accounts.token_b, result.token_b_deposited, authority=user
            )
            self.ledger.mint_to(
                accounts.pool_mint,
                accounts.user_pool_token_account,
                result.pool_tokens_minted,
                authority=plan.pool.authority.signer(),
            )

        logger.info(
            "all_tokens_deposited",
            pool=short_key(accounts.pool),
            user=short_key(accounts.user),
            token_a=result.token_a_deposited,
            token_b=result.token_b_deposited,
            pool_tokens=result.pool_tokens_minted,
        )
        return result

    def quote(self, instruction: DepositAllTokensIn) -> DepositAllTokensResult:
        return self._prepare(instruction).result

    def _prepare(self, instruction: DepositAllTokensIn) -> _DepositPlan:
        accounts = instruction.accounts
        pool = self._load_pool(
            accounts.pool,
            accounts.pool_authority,
            accounts.pool_mint,
            accounts.token_a,
            accounts.token_b,
        )
        self._fee_account(pool.pool, accounts.pool_fee_account)
        self._user_account(accounts.user_pool_token_account, pool.pool.pool_mint)
        user_a = self._user_account(accounts.user_token_a, pool.pool.token_a_mint, accounts.user)
        user_b = self._user_account(accounts.user_token_b, pool.pool.token_b_mint, accounts.user)

        amounts = self.context.curve.deposit_all_tokens(
            instruction.max_token_a,
            instruction.max_token_b,
            pool.token_a.amount,
            pool.token_b.amount,
            pool.supply,
        )
        self._require_at_least("Pool tokens out", amounts.pool_tokens, instruction.min_pool_tokens_out)
        self._require_balance(user_a, amounts.token_a_amount)
        self._require_balance(user_b, amounts.token_b_amount)

        return _DepositPlan(
            pool=pool,
            result=DepositAllTokensResult(
                pool_tokens_minted=amounts.pool_tokens,
                token_a_deposited=amounts.token_a_amount,
                token_b_deposited=amounts.token_b_amount,
            ),
        )


__all__ = ["DepositAllTokensHandler"]
