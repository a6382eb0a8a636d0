"""Instruction dispatcher.

The Exchange is the single entry point hosts call. It parses instructions,
routes each one to its handler and reports failures. It holds no balances:
every operation re-reads reserves and supply from the token ledger.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from solders.pubkey import Pubkey

from exchange.amm import ConstantProductCurve, constant_product
from exchange.authority import PoolAuthority, Signer
from exchange.config import DEFAULT_CONFIG, ExchangeConfig
from exchange.errors import ExchangeError, InvalidInstruction
from exchange.fees import FeeSchedule
from exchange.instructions import (
    BaseHandler,
    DepositAllTokensHandler,
    DepositAllTokensResult,
    DepositSingleTokenHandler,
    DepositSingleTokenResult,
    InitializeHandler,
    InitializeResult,
    InstructionContext,
    SwapHandler,
    SwapResult,
    WithdrawSingleTokenHandler,
    WithdrawSingleTokenResult,
)
from exchange.ledger import TokenLedger
from exchange.models import (
    DepositAllTokensAccounts,
    DepositSingleTokenAccounts,
    InitializeAccounts,
    SwapAccounts,
    WithdrawSingleTokenAccounts,
)
from exchange.models.instructions import (
    DepositAllTokensIn,
    DepositSingleTokenIn,
    Initialize,
    Instruction,
    Swap,
    WithdrawSingleTokenOut,
    parse_instruction,
)
from exchange.state import PoolState, PoolStore

logger = structlog.get_logger()

AccountsInput = Mapping[str, Any]

_INSTRUCTION_TYPES = (
    Initialize,
    DepositAllTokensIn,
    DepositSingleTokenIn,
    WithdrawSingleTokenOut,
    Swap,
)


class Exchange:
    """Constant-product pool engine over an external token ledger.

    Usage:
        exchange = Exchange(InMemoryTokenLedger())
        result = exchange.swap(accounts, amount_in=20 * 10**9, signers=[Signer(user)])

    Instructions may be passed as typed models, as mappings with a ``kind``
    tag, or as JSON; see exchange.models.instructions.
    """

    def __init__(
        self,
        ledger: TokenLedger,
        store: PoolStore | None = None,
        config: ExchangeConfig = DEFAULT_CONFIG,
        curve: ConstantProductCurve = constant_product,
    ) -> None:
        self.context = InstructionContext(
            ledger=ledger,
            store=store if store is not None else PoolStore(),
            config=config,
            curve=curve,
        )
        self._handlers: dict[type, BaseHandler[Any, Any]] = {
            Initialize: InitializeHandler(self.context),
            DepositAllTokensIn: DepositAllTokensHandler(self.context),
            DepositSingleTokenIn: DepositSingleTokenHandler(self.context),
            WithdrawSingleTokenOut: WithdrawSingleTokenHandler(self.context),
            Swap: SwapHandler(self.context),
        }

    @property
    def ledger(self) -> TokenLedger:
        return self.context.ledger

    @property
    def store(self) -> PoolStore:
        return self.context.store

    @property
    def config(self) -> ExchangeConfig:
        return self.context.config

    # --- Dispatch ---

    def process(self, instruction: Instruction | Any, signers: Iterable[Signer]) -> Any:
        """Validate and execute one instruction.

        Args:
            instruction: Typed instruction, or raw data for parse_instruction()
            signers: Accounts that approved this instruction

        Returns:
            The handler's result dataclass

        Raises:
            ExchangeError: Any failure, after it is logged as instruction_failed
        """
        kind = instruction.get("kind") if isinstance(instruction, Mapping) else None
        try:
            parsed = self._parse(instruction)
            kind = parsed.kind
            return self._handlers[type(parsed)].execute(parsed, tuple(signers))
        except ExchangeError as err:
            logger.warning(
                "instruction_failed",
                instruction=kind,
                code=err.code,
                error=str(err),
            )
            raise

    def quote(self, instruction: Instruction | Any) -> Any:
        """Run an instruction's checks and math without touching the ledger.

        Signatures are not required. Initialization cannot be quoted.
        """
        parsed = self._parse(instruction)
        if isinstance(parsed, Initialize):
            raise InvalidInstruction("Initialization cannot be quoted")
        return self._handlers[type(parsed)].quote(parsed)  # type: ignore[attr-defined]

    @staticmethod
    def _parse(instruction: Instruction | Any) -> Instruction:
        if isinstance(instruction, _INSTRUCTION_TYPES):
            return instruction
        return parse_instruction(instruction)

    # --- Instructions ---

    def initialize(
        self,
        fees: FeeSchedule | Mapping[str, int],
        accounts: InitializeAccounts | AccountsInput,
        *,
        signers: Iterable[Signer],
    ) -> InitializeResult:
        """Create a pool; the creator must sign."""
        return self.process(
            {"kind": "initialize", "fees": fees, "accounts": accounts}, signers
        )

    def deposit_all_tokens_in(
        self,
        accounts: DepositAllTokensAccounts | AccountsInput,
        min_pool_tokens_out: int,
        max_token_a: int,
        max_token_b: int,
        *,
        signers: Iterable[Signer],
    ) -> DepositAllTokensResult:
        return self.process(
            {
                "kind": "deposit_all_tokens_in",
                "min_pool_tokens_out": min_pool_tokens_out,
                "max_token_a": max_token_a,
                "max_token_b": max_token_b,
                "accounts": accounts,
            },
            signers,
        )

    def deposit_single_token_in(
        self,
        accounts: DepositSingleTokenAccounts | AccountsInput,
        amount_in: int,
        minimum_pool_token_amount: int = 0,
        *,
        signers: Iterable[Signer],
    ) -> DepositSingleTokenResult:
        return self.process(
            self._deposit_single(accounts, amount_in, minimum_pool_token_amount), signers
        )

    def withdraw_single_token_out(
        self,
        accounts: WithdrawSingleTokenAccounts | AccountsInput,
        amount_out: int,
        maximum_pool_token_amount: int | None = None,
        *,
        signers: Iterable[Signer],
    ) -> WithdrawSingleTokenResult:
        return self.process(
            self._withdraw_single(accounts, amount_out, maximum_pool_token_amount), signers
        )

    def swap(
        self,
        accounts: SwapAccounts | AccountsInput,
        amount_in: int,
        minimum_amount_out: int = 0,
        *,
        signers: Iterable[Signer],
    ) -> SwapResult:
        return self.process(self._swap(accounts, amount_in, minimum_amount_out), signers)

    # --- Quotes ---

    def quote_swap(
        self,
        accounts: SwapAccounts | AccountsInput,
        amount_in: int,
        minimum_amount_out: int = 0,
    ) -> SwapResult:
        return self.quote(self._swap(accounts, amount_in, minimum_amount_out))

    def quote_deposit_single(
        self,
        accounts: DepositSingleTokenAccounts | AccountsInput,
        amount_in: int,
        minimum_pool_token_amount: int = 0,
    ) -> DepositSingleTokenResult:
        return self.quote(self._deposit_single(accounts, amount_in, minimum_pool_token_amount))

    def quote_withdraw_single(
        self,
        accounts: WithdrawSingleTokenAccounts | AccountsInput,
        amount_out: int,
        maximum_pool_token_amount: int | None = None,
    ) -> WithdrawSingleTokenResult:
        return self.quote(
            self._withdraw_single(accounts, amount_out, maximum_pool_token_amount)
        )

    @staticmethod
    def _deposit_single(accounts: Any, amount_in: int, minimum: int) -> dict[str, Any]:
        return {
            "kind": "deposit_single_token_in",
            "amount_in": amount_in,
            "minimum_pool_token_amount": minimum,
            "accounts": accounts,
        }

    @staticmethod
    def _withdraw_single(accounts: Any, amount_out: int, maximum: int | None) -> dict[str, Any]:
        return {
            "kind": "withdraw_single_token_out",
            "amount_out": amount_out,
            "maximum_pool_token_amount": maximum,
            "accounts": accounts,
        }

    @staticmethod
    def _swap(accounts: Any, amount_in: int, minimum: int) -> dict[str, Any]:
        return {
            "kind": "swap",
            "amount_in": amount_in,
            "minimum_amount_out": minimum,
            "accounts": accounts,
        }

    # --- Lookups ---

    def pool(self, address: Pubkey) -> PoolState:
        """Stored pool record; raises PoolNotFound."""
        return self.store.get(address)

    def find_pool(self, token_a_mint: Pubkey, token_b_mint: Pubkey, creator: Pubkey) -> PoolState | None:
        return self.store.find(token_a_mint, token_b_mint, creator, self.config.program_id)

    def pool_authority(self, pool: Pubkey) -> PoolAuthority:
        return PoolAuthority.derive(pool, self.config.program_id)


__all__ = ["Exchange"]
