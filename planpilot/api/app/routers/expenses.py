from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from planpilot.api.app.deps import scoped_resource
from planpilot.api.app.models.expense import (
    BudgetReportOut,
    BudgetSummaryOut,
    ExpenseCreateRequest,
    ExpenseListOut,
    ExpenseOut,
    ExpenseUpdateRequest,
)
from planpilot.api.app.services.aggregation import budget_summary, category_breakdown
from planpilot.api.app.services.identity import get_caller_id
from planpilot.api.app.services.records import Expense
from planpilot.api.app.services.scoped import EXPENSES, ScopedResource

router = APIRouter(prefix="/events/{event_id}/expenses", tags=["expenses"])

expenses_dep = scoped_resource(EXPENSES)


@router.post("", response_model=ExpenseOut, status_code=201)
def add_expense(
    event_id: str,
    payload: ExpenseCreateRequest,
    caller_id: str = Depends(get_caller_id),
    expenses: ScopedResource[Expense] = Depends(expenses_dep),
) -> ExpenseOut:
    expense = Expense(event_id=event_id, **payload.model_dump())
    return ExpenseOut.from_record(expenses.create(caller_id, event_id, expense))


@router.get("", response_model=ExpenseListOut)
def list_expenses(
    event_id: str,
    caller_id: str = Depends(get_caller_id),
    expenses: ScopedResource[Expense] = Depends(expenses_dep),
) -> ExpenseListOut:
    rows = expenses.list(caller_id, event_id)
    return ExpenseListOut(
        expenses=[ExpenseOut.from_record(e) for e in rows],
        budget_summary=BudgetSummaryOut.from_summary(budget_summary(rows)),
    )


@router.get("/summary/budget", response_model=BudgetReportOut)
def get_budget_summary(
    event_id: str,
    caller_id: str = Depends(get_caller_id),
    expenses: ScopedResource[Expense] = Depends(expenses_dep),
) -> BudgetReportOut:
    rows = expenses.list(caller_id, event_id)
    summary = budget_summary(rows)
    return BudgetReportOut(
        total_budget=float(summary.total_budget),
        paid_amount=float(summary.paid_amount),
        pending_amount=float(summary.pending_amount),
        category_breakdown={k: float(v) for k, v in category_breakdown(rows).items()},
    )


@router.get("/{expense_id}", response_model=ExpenseOut)
def get_expense(
    event_id: str,
    expense_id: str,
    caller_id: str = Depends(get_caller_id),
    expenses: ScopedResource[Expense] = Depends(expenses_dep),
) -> ExpenseOut:
    return ExpenseOut.from_record(expenses.get(caller_id, event_id, expense_id))


@router.put("/{expense_id}", response_model=ExpenseOut)
def update_expense(
    event_id: str,
    expense_id: str,
    payload: ExpenseUpdateRequest,
    caller_id: str = Depends(get_caller_id),
    expenses: ScopedResource[Expense] = Depends(expenses_dep),
) -> ExpenseOut:
    changes = payload.model_dump(exclude_unset=True)
    return ExpenseOut.from_record(expenses.update(caller_id, event_id, expense_id, changes))


@router.delete("/{expense_id}", status_code=204, response_class=Response)
def delete_expense(
    event_id: str,
    expense_id: str,
    caller_id: str = Depends(get_caller_id),
    expenses: ScopedResource[Expense] = Depends(expenses_dep),
) -> Response:
    expenses.delete(caller_id, event_id, expense_id)
    return Response(status_code=204)
