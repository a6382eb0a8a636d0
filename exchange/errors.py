"""Exchange error classes.

Every failure of an instruction surfaces as one of these. Each class has a
stable ``code`` so hosts can map errors without matching on messages.
"""


class ExchangeError(Exception):
    """Base error for exchange operations."""

    code = "exchange_error"


class PoolAlreadyExists(ExchangeError):
    """A pool with the same (token A mint, token B mint, creator) exists."""

    code = "pool_already_exists"


class PoolNotFound(ExchangeError):
    """No pool is stored under the requested address."""

    code = "pool_not_found"


class InvalidFeeSchedule(ExchangeError):
    """A fee denominator is zero or a numerator exceeds its denominator."""

    code = "invalid_fee_schedule"


class UnauthorizedSigner(ExchangeError):
    """The required signer did not sign, or signed for the wrong account."""

    code = "unauthorized_signer"


class ZeroReserve(ExchangeError):
    """A reserve (or the pool-token supply) is zero, so the ratio is undefined."""

    code = "zero_reserve"


class SlippageExceeded(ExchangeError):
    """The computed amount is outside the caller's acceptable bound."""

    code = "slippage_exceeded"


class InsufficientBalance(ExchangeError):
    """The caller or a reserve lacks funds for the computed transfer."""

    code = "insufficient_balance"


class ReserveExhausted(ExchangeError):
    """The operation would drain a reserve to zero or below."""

    code = "reserve_exhausted"


class InvalidInstruction(ExchangeError):
    """Instruction data or accounts failed to decode."""

    code = "invalid_instruction"


class ZeroTradingTokens(ExchangeError):
    """The input amount, or the computed output, is zero."""

    code = "zero_trading_tokens"


class ArithmeticOverflow(ExchangeError, ArithmeticError):
    """An intermediate or final amount left its representable range."""

    code = "arithmetic_overflow"


class AccountMismatch(ExchangeError):
    """A supplied account does not match the mint/owner recorded for the pool."""

    code = "account_mismatch"


class SameTokenMints(AccountMismatch):
    """Both reserves of a pool hold the same mint."""

    code = "same_token_mints"


__all__ = [
    "ExchangeError",
    "PoolAlreadyExists",
    "PoolNotFound",
    "InvalidFeeSchedule",
    "UnauthorizedSigner",
    "ZeroReserve",
    "SlippageExceeded",
    "InsufficientBalance",
    "ReserveExhausted",
    "InvalidInstruction",
    "ZeroTradingTokens",
    "ArithmeticOverflow",
    "AccountMismatch",
    "SameTokenMints",
]
