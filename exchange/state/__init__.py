"""Pool state records and their store."""

from exchange.state.pool import PoolState
from exchange.state.store import PoolStore

__all__ = ["PoolState", "PoolStore"]
