"""Prompt Builder: renders a budgeting snapshot into prompt text.

Pure and deterministic: the same snapshot always yields the same text.
Amounts are rendered at their stored face value, no currency conversion.
Only the first RECENT_TRANSACTION_LIMIT transactions are listed so prompt
size stays predictable.
"""

from __future__ import annotations

from spendwise.gateway.types import BudgetingSnapshot, TransactionType

ASSISTANT_PERSONA = "You are a concise, friendly financial coach."

RECENT_TRANSACTION_LIMIT = 5

_INSIGHT_INSTRUCTION = "Provide 3 short bullet tips (max 2 sentences each) with actionable advice."


def format_amount(value: float) -> str:
    """Render an amount at face value; whole numbers without a decimal part."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def total_planned(snapshot: BudgetingSnapshot) -> float:
    return sum(b.planned_amount for b in snapshot.budgets)


def total_spent(snapshot: BudgetingSnapshot) -> float:
    return sum(t.amount for t in snapshot.transactions if t.type == TransactionType.EXPENSE)


def build_summary(snapshot: BudgetingSnapshot) -> str:
    """Render salary, totals, budget list and the most recent transactions."""
    budget_lines = [f"- {b.category}: {format_amount(b.planned_amount)}" for b in snapshot.budgets]
    transaction_lines = [
        f"- {t.date}: {format_amount(t.amount)} for {t.note or t.category}"
        for t in snapshot.transactions[:RECENT_TRANSACTION_LIMIT]
    ]

    lines = [
        f"Salary: {format_amount(snapshot.salary)}",
        f"Total Planned Budget: {format_amount(total_planned(snapshot))}",
        f"Total Actually Spent: {format_amount(total_spent(snapshot))}",
        "",
        "Budget Categories:",
        *(budget_lines or ["- (none)"]),
        "",
        "Recent Transactions:",
        *(transaction_lines or ["- (none)"]),
    ]
    return "\n".join(lines)


def build_context_system_message(snapshot: BudgetingSnapshot) -> str:
    """Persona followed by the rendered summary, for contextual chat."""
    return f"{ASSISTANT_PERSONA}\n\n{build_summary(snapshot)}"


def build_insight_prompt(snapshot: BudgetingSnapshot) -> str:
    """Coaching prompt asking for three short tips about the snapshot."""
    return f"{ASSISTANT_PERSONA}\n{build_summary(snapshot)}\n\n{_INSIGHT_INSTRUCTION}"
