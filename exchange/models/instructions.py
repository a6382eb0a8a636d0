"""Instruction payloads.

Each instruction carries its arguments and its account bundle. Raw data
(e.g. decoded JSON) is parsed with parse_instruction(), which selects the
instruction type from its ``kind`` tag.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from exchange.errors import InvalidFeeSchedule, InvalidInstruction
from exchange.fees import FeeSchedule
from exchange.models.accounts import (
    DepositAllTokensAccounts,
    DepositSingleTokenAccounts,
    InitializeAccounts,
    SwapAccounts,
    WithdrawSingleTokenAccounts,
)
from exchange.models.types import U64

_INSTRUCTION_CONFIG = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class Initialize(BaseModel):
    """Create a pool and mint its initial pool-token supply."""

    model_config = _INSTRUCTION_CONFIG

    kind: Literal["initialize"] = "initialize"
    fees: FeeSchedule
    accounts: InitializeAccounts


class DepositAllTokensIn(BaseModel):
    """Deposit both tokens in the current reserve ratio."""

    model_config = _INSTRUCTION_CONFIG

    kind: Literal["deposit_all_tokens_in"] = "deposit_all_tokens_in"
    min_pool_tokens_out: U64
    max_token_a: U64
    max_token_b: U64
    accounts: DepositAllTokensAccounts


class DepositSingleTokenIn(BaseModel):
    """Deposit an exact amount of one reserve token."""

    model_config = _INSTRUCTION_CONFIG

    kind: Literal["deposit_single_token_in"] = "deposit_single_token_in"
    amount_in: U64
    minimum_pool_token_amount: U64 = 0
    accounts: DepositSingleTokenAccounts


class WithdrawSingleTokenOut(BaseModel):
    """Withdraw an exact amount of one reserve token."""

    model_config = _INSTRUCTION_CONFIG

    kind: Literal["withdraw_single_token_out"] = "withdraw_single_token_out"
    amount_out: U64
    # Upper bound on burned pool tokens plus the withdraw fee; None disables the check
    maximum_pool_token_amount: U64 | None = None
    accounts: WithdrawSingleTokenAccounts


class Swap(BaseModel):
    """Trade an exact amount of one reserve token for the other."""

    model_config = _INSTRUCTION_CONFIG

    kind: Literal["swap"] = "swap"
    amount_in: U64
    minimum_amount_out: U64 = 0
    accounts: SwapAccounts


Instruction = Annotated[
    Initialize | DepositAllTokensIn | DepositSingleTokenIn | WithdrawSingleTokenOut | Swap,
    Field(discriminator="kind"),
]

_INSTRUCTION_ADAPTER: TypeAdapter[Instruction] = TypeAdapter(Instruction)


def parse_instruction(data: Any) -> Instruction:
    """Validate raw instruction data.

    Args:
        data: Mapping (or JSON string/bytes) with a ``kind`` tag

    Returns:
        The typed instruction

    Raises:
        InvalidFeeSchedule: If an initialize payload carries a bad fee schedule
        InvalidInstruction: If the data does not describe a valid instruction
    """
    try:
        if isinstance(data, str | bytes):
            return _INSTRUCTION_ADAPTER.validate_json(data)
        return _INSTRUCTION_ADAPTER.validate_python(data)
    except ValidationError as err:
        if all("fees" in error["loc"] for error in err.errors()):
            raise InvalidFeeSchedule(
                f"Malformed fee schedule: {err.error_count()} error(s): {err.errors()[0]['msg']}"
            ) from err
        raise InvalidInstruction(
            f"Malformed instruction: {err.error_count()} error(s): {err.errors()[0]['msg']}"
        ) from err


__all__ = [
    "Initialize",
    "DepositAllTokensIn",
    "DepositSingleTokenIn",
    "WithdrawSingleTokenOut",
    "Swap",
    "Instruction",
    "parse_instruction",
]
