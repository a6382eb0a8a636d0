"""Test helpers module for shared test utilities.

- constants: amounts and fee schedules of the reference scenario
- factories: keys, funded accounts and initialized pools
- reference: Decimal evaluations of the square-root liquidity formulas
"""

from tests.helpers.constants import (
    INITIAL_SUPPLY,
    ONE,
    RESERVE,
    SCENARIO_FEES,
    SCENARIO_FEES_PAYLOAD,
    ZERO_FEES,
)
from tests.helpers.factories import (
    TOKEN_MINT_AUTHORITY,
    PoolSetup,
    UserAccounts,
    create_token_mint,
    fund_account,
    initialize_accounts,
    make_key,
    prepare_reserves,
    setup_pool,
)
from tests.helpers.reference import (
    reference_deposit_pool_tokens,
    reference_withdrawal_pool_tokens,
)

__all__ = [
    # Constants
    "ONE",
    "RESERVE",
    "INITIAL_SUPPLY",
    "SCENARIO_FEES",
    "SCENARIO_FEES_PAYLOAD",
    "ZERO_FEES",
    # Factories
    "TOKEN_MINT_AUTHORITY",
    "PoolSetup",
    "UserAccounts",
    "create_token_mint",
    "fund_account",
    "initialize_accounts",
    "make_key",
    "prepare_reserves",
    "setup_pool",
    # Reference formulas
    "reference_deposit_pool_tokens",
    "reference_withdrawal_pool_tokens",
]
