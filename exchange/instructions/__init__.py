"""Instruction handlers, one per instruction kind."""

from exchange.instructions.base import BaseHandler, InstructionContext, PoolAccounts
from exchange.instructions.deposit_all import DepositAllTokensHandler
from exchange.instructions.deposit_single import DepositSingleTokenHandler
from exchange.instructions.initialize import InitializeHandler
from exchange.instructions.swap import SwapHandler
from exchange.instructions.types import (
    DepositAllTokensResult,
    DepositSingleTokenResult,
    InitializeResult,
    SwapResult,
    WithdrawSingleTokenResult,
)
from exchange.instructions.withdraw_single import WithdrawSingleTokenHandler

__all__ = [
    "BaseHandler",
    "InstructionContext",
    "PoolAccounts",
    "InitializeHandler",
    "DepositAllTokensHandler",
    "DepositSingleTokenHandler",
    "WithdrawSingleTokenHandler",
    "SwapHandler",
    "InitializeResult",
    "DepositAllTokensResult",
    "DepositSingleTokenResult",
    "WithdrawSingleTokenResult",
    "SwapResult",
]
