"""Keyed, append-only store of pool states.

Pools are keyed by their derived address, which is itself a function of
(token A mint, token B mint, creator). A pool is created exactly once and
never removed.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator

import structlog
from pydantic import TypeAdapter
from solders.pubkey import Pubkey

from exchange.authority import derive_pool_address
from exchange.errors import PoolAlreadyExists, PoolNotFound
from exchange.models.types import short_key
from exchange.state.pool import PoolState

logger = structlog.get_logger()

_POOL_LIST = TypeAdapter(list[PoolState])


class PoolStore:
    """Registry of initialized pools.

    Creation is guarded by a lock so two racing initializations of the same
    identity cannot both succeed.
    """

    def __init__(self, pools: list[PoolState] | None = None) -> None:
        self._pools: dict[Pubkey, PoolState] = {}
        self._lock = threading.Lock()
        for pool in pools or []:
            self.create(pool)

    def __len__(self) -> int:
        return len(self._pools)

    def __contains__(self, address: object) -> bool:
        return address in self._pools

    def __iter__(self) -> Iterator[PoolState]:
        return iter(list(self._pools.values()))

    def create(self, pool: PoolState) -> None:
        """Insert a new pool.

        Raises:
            PoolAlreadyExists: If a pool is already stored at pool.address
        """
        with self._lock:
            if pool.address in self._pools:
                raise PoolAlreadyExists(f"Pool {pool.address} already exists")
            self._pools[pool.address] = pool
        logger.debug("pool_stored", pool=short_key(pool.address), count=len(self._pools))

    def get(self, address: Pubkey) -> PoolState:
        """Fetch a pool by address.

        Raises:
            PoolNotFound: If no pool is stored at address
        """
        pool = self._pools.get(address)
        if pool is None:
            raise PoolNotFound(f"No pool at {address}")
        return pool

    def find(
        self,
        token_a_mint: Pubkey,
        token_b_mint: Pubkey,
        creator: Pubkey,
        program_id: Pubkey,
    ) -> PoolState | None:
        """Locate a pool from its identity triple, without a lookup table."""
        address, _ = derive_pool_address(token_a_mint, token_b_mint, creator, program_id)
        return self._pools.get(address)

    def dump(self) -> str:
        """Serialize every pool record as a JSON array."""
        return _POOL_LIST.dump_json(list(self._pools.values())).decode()

    @classmethod
    def load(cls, data: str | bytes) -> PoolStore:
        """Rebuild a store from dump() output."""
        return cls(_POOL_LIST.validate_json(data))


__all__ = ["PoolStore"]
