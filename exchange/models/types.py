"""Shared type definitions for exchange models.

Account identities are Solana-style public keys. Inside the engine they are
``solders`` Pubkey objects; in any serialized form they are base58 strings.
"""

from typing import Annotated, Any

from pydantic import Field, PlainSerializer, PlainValidator, WithJsonSchema
from solders.pubkey import Pubkey

from exchange.constants import U64_MAX


def validate_pubkey(value: Any) -> Pubkey:
    """Coerce a base58 string or 32 raw bytes into a Pubkey.

    Args:
        value: Pubkey, base58 string, or 32-byte value

    Returns:
        The parsed Pubkey

    Raises:
        ValueError: If value is not a valid public key
    """
    if isinstance(value, Pubkey):
        return value
    if isinstance(value, str):
        try:
            return Pubkey.from_string(value)
        except ValueError as err:
            raise ValueError(f"Invalid base58 public key: '{value}'") from err
    if isinstance(value, bytes | bytearray):
        if len(value) != 32:
            raise ValueError(f"Public key must be 32 bytes, got {len(value)}")
        return Pubkey.from_bytes(bytes(value))
    raise ValueError(f"Public key must be a string or bytes, got {type(value).__name__}")


# Public key, serialized as base58
PubkeyField = Annotated[
    Pubkey,
    PlainValidator(validate_pubkey),
    PlainSerializer(str, return_type=str),
    WithJsonSchema({"type": "string", "description": "base58 public key"}),
]

# Token ledger amount
U64 = Annotated[int, Field(ge=0, le=U64_MAX, description="64-bit unsigned token amount")]


def short_key(key: Pubkey) -> str:
    """Abbreviate a key for log context."""
    return str(key)[-8:]


__all__ = ["PubkeyField", "U64", "validate_pubkey", "short_key"]
