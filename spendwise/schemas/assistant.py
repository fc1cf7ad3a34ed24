"""AI assistant request/response schemas."""

from pydantic import BaseModel, Field

from spendwise.gateway.types import BudgetingSnapshot, BudgetItem, Transaction, TransactionType


class BudgetItemIn(BaseModel):
    category: str = Field(..., min_length=1, max_length=100)
    plannedAmount: float = Field(..., ge=0)


class TransactionIn(BaseModel):
    date: str
    amount: float = Field(..., ge=0)
    category: str
    type: TransactionType = TransactionType.EXPENSE
    note: str = ""


class SnapshotIn(BaseModel):
    """Budgeting dataset in the shape the mobile client stores it."""

    salary: float = Field(0, ge=0)
    budgets: list[BudgetItemIn] = []
    transactions: list[TransactionIn] = []  # most recent first

    def to_snapshot(self) -> BudgetingSnapshot:
        return BudgetingSnapshot(
            salary=self.salary,
            budgets=tuple(BudgetItem(category=b.category, planned_amount=b.plannedAmount) for b in self.budgets),
            transactions=tuple(
                Transaction(date=t.date, amount=t.amount, category=t.category, type=t.type, note=t.note)
                for t in self.transactions
            ),
        )


class CompletionRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=4000)
    include_context: bool = False
    snapshot: SnapshotIn | None = None
    api_key: str | None = None  # overrides the stored key for this call only
    model: str | None = None


class InsightRequest(BaseModel):
    snapshot: SnapshotIn | None = None  # stored dataset is used when omitted
    api_key: str | None = None
    model: str | None = None


class AssistantReply(BaseModel):
    text: str
    is_error: bool = False  # True when text is an "AI Error: ..." message
