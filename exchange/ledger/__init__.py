"""Token-ledger collaborator.

Provides the TokenLedger protocol and an in-memory reference implementation.
"""

from exchange.ledger.base import Mint, TokenAccount, TokenLedger
from exchange.ledger.memory import InMemoryTokenLedger

__all__ = ["Mint", "TokenAccount", "TokenLedger", "InMemoryTokenLedger"]
