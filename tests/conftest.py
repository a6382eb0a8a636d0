"""Pytest configuration and fixtures."""

import pytest

from exchange import Exchange
from exchange.ledger import InMemoryTokenLedger
from exchange.state import PoolStore
from tests.helpers import ONE, PoolSetup, UserAccounts, setup_pool


@pytest.fixture
def ledger() -> InMemoryTokenLedger:
    """An empty in-memory token ledger."""
    return InMemoryTokenLedger()


@pytest.fixture
def store() -> PoolStore:
    """An empty pool store."""
    return PoolStore()


@pytest.fixture
def exchange(ledger: InMemoryTokenLedger, store: PoolStore) -> Exchange:
    """An exchange over the empty ledger and store."""
    return Exchange(ledger, store)


@pytest.fixture
def pool(exchange: Exchange) -> PoolSetup:
    """The reference pool: 1000 tokens per side, fees 5/100, 2/100, 1/100."""
    return setup_pool(exchange)


@pytest.fixture
def trader(pool: PoolSetup) -> UserAccounts:
    """A user holding 500 of each pool token and an empty pool-token account."""
    return pool.open_user("trader", amount_a=500 * ONE, amount_b=500 * ONE)


@pytest.fixture
def provider(pool: PoolSetup) -> UserAccounts:
    """A liquidity provider holding 200 of each pool token."""
    return pool.open_user("provider", amount_a=200 * ONE, amount_b=200 * ONE)
