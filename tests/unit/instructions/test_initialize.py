"""Tests for pool initialization."""

import pytest

from exchange import Exchange
from exchange.authority import PoolAuthority, Signer, derive_pool_address
from exchange.config import ExchangeConfig
from exchange.errors import (
    AccountMismatch,
    InvalidFeeSchedule,
    PoolAlreadyExists,
    SameTokenMints,
    UnauthorizedSigner,
    ZeroReserve,
)
from exchange.ledger import InMemoryTokenLedger
from tests.helpers import (
    INITIAL_SUPPLY,
    ONE,
    RESERVE,
    SCENARIO_FEES,
    SCENARIO_FEES_PAYLOAD,
    fund_account,
    initialize_accounts,
    make_key,
    prepare_reserves,
    setup_pool,
)


def initialize(exchange, addresses, fees=SCENARIO_FEES, signer=None):
    return exchange.initialize(
        fees,
        initialize_accounts(addresses),
        signers=[signer or Signer(addresses["creator"])],
    )


class TestInitialize:
    """Successful initialization."""

    def test_creates_pool(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        result = initialize(exchange, addresses)

        assert result.pool == addresses["pool"]
        assert result.pool_authority == addresses["authority"]
        assert result.pool_mint == addresses["pool_mint"]
        assert result.pool_tokens_minted == INITIAL_SUPPLY
        assert result.pool_mint_created

    def test_mints_fixed_supply_to_receipt(self, exchange, ledger):
        """Initial supply is 1e9 regardless of reserve sizes."""
        addresses = prepare_reserves(ledger, reserve_a=3 * ONE, reserve_b=7_777 * ONE)
        initialize(exchange, addresses)

        assert ledger.supply(addresses["pool_mint"]) == INITIAL_SUPPLY
        assert ledger.balance(addresses["receipt"]) == INITIAL_SUPPLY
        assert ledger.balance(addresses["fee_account"]) == 0

    def test_reserves_untouched(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        initialize(exchange, addresses)
        assert ledger.balance(addresses["token_a"]) == RESERVE
        assert ledger.balance(addresses["token_b"]) == RESERVE

    def test_stores_pool_state(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        initialize(exchange, addresses)

        state = exchange.pool(addresses["pool"])
        assert state.token_a == addresses["token_a"]
        assert state.token_b == addresses["token_b"]
        assert state.token_a_mint == addresses["mint_a"]
        assert state.token_b_mint == addresses["mint_b"]
        assert state.pool_mint == addresses["pool_mint"]
        assert state.pool_fee_account == addresses["fee_account"]
        assert state.creator == addresses["creator"]
        assert state.fees == SCENARIO_FEES
        assert exchange.find_pool(addresses["mint_a"], addresses["mint_b"], addresses["creator"]) == state

    def test_created_accounts(self, exchange, ledger):
        """The pool mint is controlled by the authority; receipt and fee accounts belong to the creator."""
        addresses = prepare_reserves(ledger)
        initialize(exchange, addresses)

        mint = ledger.get_mint(addresses["pool_mint"])
        assert mint.mint_authority == addresses["authority"]
        assert mint.decimals == 9
        for name in ("receipt", "fee_account"):
            account = ledger.get_account(addresses[name])
            assert account.mint == addresses["pool_mint"]
            assert account.owner == addresses["creator"]

    def test_fees_from_mapping(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        initialize(exchange, addresses, fees=SCENARIO_FEES_PAYLOAD)
        assert exchange.pool(addresses["pool"]).fees == SCENARIO_FEES

    def test_receipt_can_be_fee_account(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        addresses["fee_account"] = addresses["receipt"]
        initialize(exchange, addresses)
        assert ledger.balance(addresses["receipt"]) == INITIAL_SUPPLY

    def test_pool_mint_decimals_from_config(self):
        exchange = Exchange(InMemoryTokenLedger(), config=ExchangeConfig(pool_mint_decimals=6))
        pool = setup_pool(exchange)
        assert exchange.ledger.get_mint(pool.pool_mint).decimals == 6

    def test_program_id_from_config(self):
        program_id = make_key("another-program")
        exchange = Exchange(InMemoryTokenLedger(), config=ExchangeConfig(program_id=program_id))
        pool = setup_pool(exchange)

        expected, _ = derive_pool_address(pool.mint_a, pool.mint_b, pool.creator, program_id)
        assert pool.pool == expected
        assert pool.authority == PoolAuthority.derive(expected, program_id)

    def test_zero_reserves_accepted(self, exchange, ledger):
        """Empty reserves can be initialized; trading against them fails."""
        pool = setup_pool(exchange, reserve_a=0, reserve_b=RESERVE)
        trader = pool.open_user("trader", amount_a=ONE)
        with pytest.raises(ZeroReserve):
            exchange.swap(pool.swap_accounts(trader), ONE, signers=[trader.signer])


class TestPoolMintBinding:
    """An existing pool mint is bound instead of created."""

    def test_binds_existing_mint(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        ledger.create_mint(addresses["pool_mint"], mint_authority=addresses["authority"], decimals=2)

        result = initialize(exchange, addresses)

        assert not result.pool_mint_created
        assert ledger.get_mint(addresses["pool_mint"]).decimals == 2
        assert ledger.supply(addresses["pool_mint"]) == INITIAL_SUPPLY

    def test_non_canonical_mint_address(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        addresses["pool_mint"] = make_key("some-mint")
        result = initialize(exchange, addresses)
        assert result.pool_mint == make_key("some-mint")
        assert exchange.pool(result.pool).pool_mint == make_key("some-mint")

    def test_uses_existing_receipt(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        ledger.create_mint(addresses["pool_mint"], mint_authority=addresses["authority"], decimals=9)
        ledger.open_account(addresses["receipt"], mint=addresses["pool_mint"], owner=make_key("holder"))

        initialize(exchange, addresses)

        assert ledger.get_account(addresses["receipt"]).owner == make_key("holder")
        assert ledger.balance(addresses["receipt"]) == INITIAL_SUPPLY

    def test_foreign_mint_authority(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        ledger.create_mint(addresses["pool_mint"], mint_authority=addresses["creator"], decimals=9)
        with pytest.raises(AccountMismatch, match="not controlled by the pool authority"):
            initialize(exchange, addresses)

    def test_mint_with_supply(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        ledger.create_mint(addresses["pool_mint"], mint_authority=addresses["authority"], decimals=9)
        fund_account(ledger, "early", addresses["pool_mint"], addresses["creator"])
        ledger.mint_to(
            addresses["pool_mint"],
            make_key("account:early"),
            1,
            authority=Signer(addresses["authority"]),
        )
        with pytest.raises(AccountMismatch, match="already has supply"):
            initialize(exchange, addresses)

    def test_mint_slot_is_token_account(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        addresses["pool_mint"] = addresses["token_a"]
        with pytest.raises(AccountMismatch, match="is a token account"):
            initialize(exchange, addresses)

    def test_receipt_holds_other_mint(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        addresses["receipt"] = fund_account(ledger, "other", addresses["mint_a"], addresses["creator"])
        with pytest.raises(AccountMismatch, match="does not hold the pool mint"):
            initialize(exchange, addresses)

    def test_receipt_is_a_mint(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        addresses["receipt"] = addresses["mint_b"]
        with pytest.raises(AccountMismatch, match="is a mint"):
            initialize(exchange, addresses)

    def test_fee_account_is_pool_mint(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        addresses["fee_account"] = addresses["pool_mint"]
        with pytest.raises(AccountMismatch, match="collides with the pool mint"):
            initialize(exchange, addresses)


class TestInitializeRejections:
    """Initialization failures leave no pool and no ledger changes behind."""

    def test_requires_creator_signature(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        with pytest.raises(UnauthorizedSigner):
            initialize(exchange, addresses, signer=Signer(make_key("someone")))
        assert addresses["pool"] not in exchange.store
        assert ledger.get_mint(addresses["pool_mint"]) is None

    def test_duplicate_pool(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        initialize(exchange, addresses)
        with pytest.raises(PoolAlreadyExists):
            initialize(exchange, addresses)
        assert ledger.supply(addresses["pool_mint"]) == INITIAL_SUPPLY

    def test_same_mint_reserves(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        addresses["token_b"] = fund_account(
            ledger, "second-a", addresses["mint_a"], addresses["authority"], RESERVE
        )
        with pytest.raises(SameTokenMints):
            initialize(exchange, addresses)

    def test_same_mint_is_account_mismatch(self):
        assert issubclass(SameTokenMints, AccountMismatch)

    def test_reserve_not_owned_by_authority(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        addresses["token_a"] = fund_account(
            ledger, "creator-held", addresses["mint_a"], addresses["creator"], RESERVE
        )
        with pytest.raises(AccountMismatch, match="not the pool authority"):
            initialize(exchange, addresses)

    def test_unknown_reserve(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        addresses["token_b"] = make_key("missing")
        with pytest.raises(AccountMismatch):
            initialize(exchange, addresses)

    def test_invalid_fee_schedule(self, exchange, ledger):
        addresses = prepare_reserves(ledger)
        with pytest.raises(InvalidFeeSchedule):
            initialize(exchange, addresses, fees={**SCENARIO_FEES_PAYLOAD, "trade_fee_denominator": 0})
        assert addresses["pool"] not in exchange.store
