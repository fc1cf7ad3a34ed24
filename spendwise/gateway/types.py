"""Core types and DTOs for the AI request gateway."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Provider(str, Enum):
    """Supported text-completion backends."""

    GEMINI = "gemini"
    OPENAI = "openai"


class FailureKind(str, Enum):
    """Why a gateway call did not produce text."""

    MISSING_CREDENTIAL = "missing_credential"  # No network attempted
    RATE_LIMITED = "rate_limited"  # HTTP 429, retried with backoff
    PROVIDER_ERROR = "provider_error"  # Explicit {"error": ...} payload, terminal
    TIMEOUT = "timeout"  # Deadline exceeded
    NETWORK_FAULT = "network_fault"  # Transport-level failure


class OutcomeStatus(str, Enum):
    """Tag of a CallOutcome."""

    TEXT = "text"
    EMPTY = "empty"  # Well-formed response without usable text
    FAILURE = "failure"


class TransactionType(str, Enum):
    EXPENSE = "expense"
    INCOME = "income"


# ---------------------------------------------------------------------------
# Budgeting snapshot: read-only input to the prompt builder
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BudgetItem:
    category: str
    planned_amount: float


@dataclass(frozen=True)
class Transaction:
    date: str
    amount: float
    category: str
    type: TransactionType = TransactionType.EXPENSE
    note: str = ""


@dataclass(frozen=True)
class BudgetingSnapshot:
    """The user's budgeting dataset as handed to the gateway for one call.

    Transactions are expected most-recent first.
    """

    salary: float = 0.0
    budgets: tuple[BudgetItem, ...] = ()
    transactions: tuple[Transaction, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> BudgetingSnapshot:
        """Build a snapshot from the persisted dataset shape (camelCase keys).

        Malformed entries are skipped with a warning; a malformed salary reads as 0.
        """
        if not isinstance(data, dict):
            logger.warning("Ignoring saved dataset: expected an object, got %s", type(data).__name__)
            return cls()

        budgets = []
        for raw in _as_list(data.get("budgets")):
            try:
                budgets.append(
                    BudgetItem(
                        category=str(raw.get("category", "")),
                        planned_amount=float(raw.get("plannedAmount", raw.get("planned_amount", 0)) or 0),
                    )
                )
            except (AttributeError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed budget entry: %s", e)

        transactions = []
        for raw in _as_list(data.get("transactions")):
            try:
                transactions.append(
                    Transaction(
                        date=str(raw.get("date", "")),
                        amount=float(raw.get("amount", 0) or 0),
                        category=str(raw.get("category", "")),
                        type=TransactionType(raw.get("type") or TransactionType.EXPENSE.value),
                        note=str(raw.get("note") or ""),
                    )
                )
            except (AttributeError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed transaction: %s", e)

        try:
            salary = float(data.get("salary", 0) or 0)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed salary %r", data.get("salary"))
            salary = 0.0

        return cls(salary=salary, budgets=tuple(budgets), transactions=tuple(transactions))


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


# ---------------------------------------------------------------------------
# Routing and prompts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProviderRoute:
    """Which backend and model a call goes to."""

    provider: Provider
    model: str


@dataclass(frozen=True)
class PromptEnvelope:
    """System and user message pair sent to a provider."""

    user_message: str
    system_message: str | None = None


# ---------------------------------------------------------------------------
# Call outcome: result type threaded through retry and timeout handling
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CallOutcome:
    """Tagged result of one provider attempt or a whole attempt sequence.

    Exactly one of:
      - Text(text)
      - Empty
      - Failure(kind, message)
    """

    status: OutcomeStatus
    text: str = ""
    kind: FailureKind | None = None
    message: str = ""
    attempts: int = field(default=1, compare=False)

    @classmethod
    def ok(cls, text: str) -> CallOutcome:
        return cls(status=OutcomeStatus.TEXT, text=text)

    @classmethod
    def empty(cls) -> CallOutcome:
        return cls(status=OutcomeStatus.EMPTY)

    @classmethod
    def failure(cls, kind: FailureKind, message: str) -> CallOutcome:
        return cls(status=OutcomeStatus.FAILURE, kind=kind, message=message)

    @property
    def is_text(self) -> bool:
        return self.status == OutcomeStatus.TEXT

    @property
    def is_empty(self) -> bool:
        return self.status == OutcomeStatus.EMPTY

    @property
    def is_failure(self) -> bool:
        return self.status == OutcomeStatus.FAILURE
