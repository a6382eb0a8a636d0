"""Single-sided withdrawal."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from exchange.authority import Signer
from exchange.errors import AccountMismatch, ReserveExhausted, ZeroTradingTokens
from exchange.instructions.base import BaseHandler, PoolAccounts
from exchange.instructions.types import WithdrawSingleTokenResult
from exchange.ledger import TokenAccount
from exchange.models.instructions import WithdrawSingleTokenOut
from exchange.models.types import short_key

logger = structlog.get_logger()


@dataclass(frozen=True)
class _WithdrawPlan:
    pool: PoolAccounts
    reserve: TokenAccount
    result: WithdrawSingleTokenResult


class WithdrawSingleTokenHandler(BaseHandler[WithdrawSingleTokenOut, WithdrawSingleTokenResult]):
    """Pay out an exact amount of one token against burned pool tokens.

    The owner withdraw fee is charged in pool tokens on top of the burn and
    moved to the pool fee account. Withdrawing from the fee account itself
    is not charged.
    """

    def execute(
        self, instruction: WithdrawSingleTokenOut, signers: Iterable[Signer]
    ) -> WithdrawSingleTokenResult:
        accounts = instruction.accounts
        user = self._require_signer(accounts.user, signers)
        plan = self._prepare(instruction)
        result = plan.result

        with self.ledger.atomic():
            if result.withdraw_fee:
                self.ledger.transfer(
                    accounts.user_pool_token_account,
                    accounts.pool_fee_account,
                    result.withdraw_fee,
                    authority=user,
                )
            self.ledger.burn(
                accounts.user_pool_token_account,
                accounts.pool_mint,
                result.pool_tokens_burned,
                authority=user,
            )
            self.ledger.transfer(
                plan.reserve.address,
                accounts.user_destination,
                result.amount_out,
                authority=plan.pool.authority.signer(),
            )

        logger.info(
            "single_token_withdrawn",
            pool=short_key(accounts.pool),
            user=short_key(accounts.user),
            mint=short_key(result.destination_mint),
            amount_out=result.amount_out,
            pool_tokens_burned=result.pool_tokens_burned,
            withdraw_fee=result.withdraw_fee,
        )
        return result

    def quote(self, instruction: WithdrawSingleTokenOut) -> WithdrawSingleTokenResult:
        return self._prepare(instruction).result

    def _prepare(self, instruction: WithdrawSingleTokenOut) -> _WithdrawPlan:
        accounts = instruction.accounts
        pool = self._load_pool(
            accounts.pool,
            accounts.pool_authority,
            accounts.pool_mint,
            accounts.token_a,
            accounts.token_b,
        )
        reserve, _ = pool.reserves_for(accounts.destination_mint)
        self._fee_account(pool.pool, accounts.pool_fee_account)
        if pool.is_reserve(accounts.user_destination):
            raise AccountMismatch(f"Destination {accounts.user_destination} is a pool reserve")
        self._user_account(accounts.user_destination, accounts.destination_mint)
        user_pool_tokens = self._user_account(
            accounts.user_pool_token_account, pool.pool.pool_mint, accounts.user
        )

        if instruction.amount_out == 0:
            raise ZeroTradingTokens("Withdrawal amount is zero")
        burned = self.context.curve.pool_tokens_for_withdrawal(
            instruction.amount_out, reserve.amount, pool.supply
        )
        if burned == 0:
            raise ZeroTradingTokens(f"Withdrawal of {instruction.amount_out} burns no pool tokens")
        if burned >= pool.supply:
            raise ReserveExhausted(f"Withdrawal would burn the entire pool supply {pool.supply}")

        if accounts.user_pool_token_account == pool.pool.pool_fee_account:
            withdraw_fee = 0
        else:
            withdraw_fee = pool.pool.fees.owner_withdraw_fee(burned)

        self._require_at_most(
            "Pool tokens spent", burned + withdraw_fee, instruction.maximum_pool_token_amount
        )
        self._require_balance(user_pool_tokens, burned + withdraw_fee)

        return _WithdrawPlan(
            pool=pool,
            reserve=reserve,
            result=WithdrawSingleTokenResult(
                destination_mint=accounts.destination_mint,
                amount_out=instruction.amount_out,
                pool_tokens_burned=burned,
                withdraw_fee=withdraw_fee,
            ),
        )


__all__ = ["WithdrawSingleTokenHandler"]
