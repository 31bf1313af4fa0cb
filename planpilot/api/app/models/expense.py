from __future__ import annotations

from decimal import Decimal

from planpilot.api.app.models.common import ApiIn, ApiOut
from planpilot.api.app.services.aggregation import BudgetSummary
from planpilot.api.app.services.records import Expense
from pydantic import Field

# Amounts are bounded to what the expenses.amount column (Numeric(14, 2)) stores exactly.


class ExpenseCreateRequest(ApiIn):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0, max_digits=14, decimal_places=2)
    is_paid: bool


class ExpenseUpdateRequest(ApiIn):
    name: str | None = Field(None, min_length=1)
    category: str | None = Field(None, min_length=1)
    amount: Decimal | None = Field(None, ge=0, max_digits=14, decimal_places=2)
    is_paid: bool | None = None


# Amounts are computed as Decimal and sent as JSON numbers.


class ExpenseOut(ApiOut):
    id: str
    name: str
    category: str
    amount: float
    is_paid: bool

    @classmethod
    def from_record(cls, expense: Expense) -> ExpenseOut:
        return cls(
            id=expense.id,
            name=expense.name,
            category=expense.category,
            amount=float(expense.amount),
            is_paid=expense.is_paid,
        )


class BudgetSummaryOut(ApiOut):
    total_budget: float
    paid_amount: float
    pending_amount: float

    @classmethod
    def from_summary(cls, summary: BudgetSummary) -> BudgetSummaryOut:
        return cls(
            total_budget=float(summary.total_budget),
            paid_amount=float(summary.paid_amount),
            pending_amount=float(summary.pending_amount),
        )


class ExpenseListOut(ApiOut):
    expenses: list[ExpenseOut]
    budget_summary: BudgetSummaryOut


class BudgetReportOut(BudgetSummaryOut):
    category_breakdown: dict[str, float] = Field(default_factory=dict)
