"""Account bundles and shared field types.

Instruction payloads live in exchange.models.instructions, which depends on
exchange.fees and is therefore not re-exported here.
"""

from exchange.models.accounts import (
    DepositAllTokensAccounts,
    DepositSingleTokenAccounts,
    InitializeAccounts,
    SwapAccounts,
    WithdrawSingleTokenAccounts,
)
from exchange.models.types import U64, PubkeyField, short_key, validate_pubkey

__all__ = [
    # Accounts
    "InitializeAccounts",
    "DepositAllTokensAccounts",
    "DepositSingleTokenAccounts",
    "WithdrawSingleTokenAccounts",
    "SwapAccounts",
    # Types
    "PubkeyField",
    "U64",
    "short_key",
    "validate_pubkey",
]
