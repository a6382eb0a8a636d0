"""Configuration and logging setup for the exchange."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

import structlog
from solders.pubkey import Pubkey

from exchange.constants import DEFAULT_PROGRAM_ID, INITIAL_POOL_TOKEN_SUPPLY, POOL_MINT_DECIMALS


@dataclass(frozen=True)
class ExchangeConfig:
    """Centralized configuration for the exchange engine.

    Attributes:
        program_id: Program id all pool, authority and pool-mint addresses
            are derived under
        initial_pool_token_supply: Pool tokens minted at initialization
            (fixed at 1e9)
        pool_mint_decimals: Decimals of a pool-token mint created during
            initialization
        log_level: Level for configure_logging()
    """

    program_id: Pubkey = field(default_factory=lambda: Pubkey.from_string(DEFAULT_PROGRAM_ID))
    initial_pool_token_supply: int = INITIAL_POOL_TOKEN_SUPPLY
    pool_mint_decimals: int = POOL_MINT_DECIMALS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> ExchangeConfig:
        """Build a config from environment variables.

        - EXCHANGE_PROGRAM_ID: base58 program id
        - EXCHANGE_POOL_MINT_DECIMALS: decimals for created pool mints (default: 9)
        - EXCHANGE_LOG_LEVEL: logging level name (default: INFO)
        """
        program_id = os.environ.get("EXCHANGE_PROGRAM_ID", DEFAULT_PROGRAM_ID)
        decimals = int(os.environ.get("EXCHANGE_POOL_MINT_DECIMALS", str(POOL_MINT_DECIMALS)))
        return cls(
            program_id=Pubkey.from_string(program_id),
            pool_mint_decimals=decimals,
            log_level=os.environ.get("EXCHANGE_LOG_LEVEL", "INFO").upper(),
        )


# Default configuration instance
DEFAULT_CONFIG = ExchangeConfig()


def configure_logging(level: str = "INFO") -> None:
    """Install the console structlog pipeline at the given level."""
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )


__all__ = ["ExchangeConfig", "DEFAULT_CONFIG", "configure_logging"]
