from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from planpilot.api.app.services.records import Expense, Task, TaskStatus


@dataclass(frozen=True, slots=True)
class BudgetSummary:
    total_budget: Decimal
    paid_amount: Decimal
    pending_amount: Decimal


def budget_summary(expenses: Iterable[Expense]) -> BudgetSummary:
    total = Decimal(0)
    paid = Decimal(0)
    for expense in expenses:
        total += expense.amount
        if expense.is_paid:
            paid += expense.amount
    return BudgetSummary(total_budget=total, paid_amount=paid, pending_amount=total - paid)


def category_breakdown(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    out: dict[str, Decimal] = {}
    for expense in expenses:
        out[expense.category] = out.get(expense.category, Decimal(0)) + expense.amount
    return out


def event_progress(tasks: Iterable[Task]) -> int:
    """Percentage of tasks completed, rounded half-up. An event without tasks is at 0."""

    total = 0
    completed = 0
    for task in tasks:
        total += 1
        if task.status == TaskStatus.COMPLETED:
            completed += 1

    if total == 0:
        return 0
    return (200 * completed + total) // (2 * total)
