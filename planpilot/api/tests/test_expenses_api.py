from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from planpilot.api.app.main import create_app
from planpilot.api.app.services.store_memory import InMemoryStore
from planpilot.api.app.services.store_sql import SqlStore


def auth(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {user_id}"}


@pytest.fixture()
def client() -> TestClient:
    with TestClient(create_app(InMemoryStore())) as c:
        yield c


@pytest.fixture(params=["memory", "sql"])
def any_client(request: pytest.FixtureRequest, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    if request.param == "memory":
        store = InMemoryStore()
    else:
        monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{tmp_path / 'planpilot.db'}")
        monkeypatch.setenv("PLANPILOT_DB_AUTO_CREATE", "true")

        from planpilot.api.app.db.database import get_sessionmaker
        from planpilot.api.app.db.init_db import init_db

        init_db()
        store = SqlStore(get_sessionmaker())

    with TestClient(create_app(store)) as c:
        yield c


@pytest.fixture()
def event_id(client: TestClient) -> str:
    response = client.post(
        "/events",
        json={"name": "Summer Wedding", "type": "Wedding", "date": "2024-07-15"},
        headers=auth("host-1"),
    )
    return response.json()["id"]


def _add(client: TestClient, event_id: str, name: str, category: str, amount, is_paid: bool) -> dict:
    response = client.post(
        f"/events/{event_id}/expenses",
        json={"name": name, "category": category, "amount": amount, "isPaid": is_paid},
        headers=auth("host-1"),
    )
    assert response.status_code == 201
    return response.json()


def test_add_expense_returns_public_fields(client: TestClient, event_id: str) -> None:
    expense = _add(client, event_id, "Venue Deposit", "Venue", 2500, True)
    assert set(expense) == {"id", "name", "category", "amount", "isPaid"}
    assert expense["amount"] == 2500
    assert expense["isPaid"] is True

    fetched = client.get(f"/events/{event_id}/expenses/{expense['id']}", headers=auth("host-1"))
    assert fetched.json() == expense


def test_expense_validation(client: TestClient, event_id: str) -> None:
    negative = client.post(
        f"/events/{event_id}/expenses",
        json={"name": "Refund", "category": "Misc", "amount": -5, "isPaid": False},
        headers=auth("host-1"),
    )
    assert negative.status_code == 400

    missing_paid = client.post(
        f"/events/{event_id}/expenses",
        json={"name": "Cake", "category": "Catering", "amount": 50},
        headers=auth("host-1"),
    )
    assert missing_paid.status_code == 400


def test_list_expenses_includes_budget_summary(client: TestClient, event_id: str) -> None:
    _add(client, event_id, "Venue Deposit", "Venue", 2500, True)
    _add(client, event_id, "Flowers", "Decor", 300.25, False)

    body = client.get(f"/events/{event_id}/expenses", headers=auth("host-1")).json()
    assert [e["name"] for e in body["expenses"]] == ["Venue Deposit", "Flowers"]
    assert body["budgetSummary"] == {
        "totalBudget": 2800.25,
        "paidAmount": 2500,
        "pendingAmount": 300.25,
    }


def test_budget_summary_with_breakdown(client: TestClient, event_id: str) -> None:
    _add(client, event_id, "Venue Deposit", "Venue", 2500, True)
    _add(client, event_id, "Venue Balance", "Venue", 1500, False)
    _add(client, event_id, "Cake", "Catering", "0.10", False)
    _add(client, event_id, "Canapes", "Catering", "0.20", True)

    response = client.get(f"/events/{event_id}/expenses/summary/budget", headers=auth("host-1"))
    assert response.status_code == 200
    body = response.json()
    assert body["totalBudget"] == 4000.3
    assert body["paidAmount"] == 2500.2
    assert body["pendingAmount"] == 1500.1
    assert body["categoryBreakdown"] == {"Venue": 4000, "Catering": 0.3}


def test_budget_summary_for_event_without_expenses(client: TestClient, event_id: str) -> None:
    body = client.get(f"/events/{event_id}/expenses/summary/budget", headers=auth("host-1")).json()
    assert body == {"totalBudget": 0, "paidAmount": 0, "pendingAmount": 0, "categoryBreakdown": {}}


def test_budget_summary_access(client: TestClient, event_id: str) -> None:
    assert client.get("/events/nope/expenses/summary/budget", headers=auth("host-1")).status_code == 404
    assert client.get(f"/events/{event_id}/expenses/summary/budget", headers=auth("stranger")).status_code == 403


def test_mark_expense_paid_then_delete(client: TestClient, event_id: str) -> None:
    expense = _add(client, event_id, "Band", "Music", 800, False)
    base = f"/events/{event_id}/expenses/{expense['id']}"

    paid = client.put(base, json={"isPaid": True, "amount": 850}, headers=auth("host-1"))
    assert paid.status_code == 200
    assert paid.json()["isPaid"] is True
    assert paid.json()["amount"] == 850

    summary = client.get(f"/events/{event_id}/expenses/summary/budget", headers=auth("host-1")).json()
    assert summary["paidAmount"] == 850
    assert summary["pendingAmount"] == 0

    assert client.delete(base, headers=auth("host-1")).status_code == 204
    assert client.get(base, headers=auth("host-1")).status_code == 404


def test_amounts_round_trip_exactly_on_every_store(any_client: TestClient) -> None:
    event_id = any_client.post(
        "/events",
        json={"name": "Summer Wedding", "type": "Wedding", "date": "2024-07-15"},
        headers=auth("host-1"),
    ).json()["id"]
    base = f"/events/{event_id}/expenses"

    for amount in ("10.005", "1e14"):
        rejected = any_client.post(
            base, json={"name": "Cake", "category": "Catering", "amount": amount, "isPaid": False}, headers=auth("host-1")
        )
        assert rejected.status_code == 400
        assert any(e["loc"] == ["body", "amount"] for e in rejected.json()["errors"])

    created = any_client.post(
        base, json={"name": "Cake", "category": "Catering", "amount": "10.05", "isPaid": False}, headers=auth("host-1")
    )
    assert created.status_code == 201
    expense = created.json()
    assert expense["amount"] == 10.05
    assert any_client.get(f"{base}/{expense['id']}", headers=auth("host-1")).json() == expense

    assert any_client.put(f"{base}/{expense['id']}", json={"amount": "7.125"}, headers=auth("host-1")).status_code == 400

    summary = any_client.get(f"{base}/summary/budget", headers=auth("host-1")).json()
    assert summary["totalBudget"] == 10.05
    assert summary["pendingAmount"] == 10.05
