from __future__ import annotations

import threading
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

import pytest
from planpilot.api.app.services.errors import ConflictError
from planpilot.api.app.services.records import Event, Expense, Guest, Task, TaskStatus, User, Vendor
from planpilot.api.app.services.scoped import GUESTS, ScopedResource
from planpilot.api.app.services.store_base import DuplicateKeyError, Store
from planpilot.api.app.services.store_memory import InMemoryStore
from planpilot.api.app.services.users import register_user


@pytest.fixture(params=["memory", "sql"])
def store(request: pytest.FixtureRequest, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Store:
    if request.param == "memory":
        return InMemoryStore()

    db_path = tmp_path / "planpilot_store.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{db_path}")
    monkeypatch.setenv("PLANPILOT_DB_AUTO_CREATE", "true")
    monkeypatch.setenv("PLANPILOT_STORE", "sql")

    from planpilot.api.app.services.store_factory import get_store

    return get_store()


def _event(host: str = "u-1") -> Event:
    return Event(name="Summer Wedding", type="Wedding", date=date(2024, 7, 15), host_id=host)


def _vendor(company: str, event_id: str) -> Vendor:
    return Vendor(
        company_name=company,
        contact_name="Sarah Johnson",
        email="sarah@example.com",
        service_provided="Catering",
        event_id=event_id,
    )


def test_insert_assigns_id_and_created_at(store: Store) -> None:
    event = _event()
    event_id = store.events.insert(event)

    assert event_id
    assert event.id == event_id
    assert event.created_at is not None

    fetched = store.events.get(event_id)
    assert fetched is not None
    assert fetched.name == "Summer Wedding"
    assert fetched.date == date(2024, 7, 15)
    assert fetched.collaborators == []


def test_insert_ids_are_unique(store: Store) -> None:
    ids = {store.events.insert(_event()) for _ in range(20)}
    assert len(ids) == 20


def test_get_missing_returns_none(store: Store) -> None:
    assert store.tasks.get("does-not-exist") is None


def test_scan_filters_on_every_criterion(store: Store) -> None:
    store.guests.insert(Guest(name="Jane", email="jane@example.com", event_id="ev-1"))
    store.guests.insert(Guest(name="Jane", email="jane@example.com", event_id="ev-2"))
    store.guests.insert(Guest(name="Bob", email="bob@example.com", event_id="ev-1"))

    assert len(list(store.guests.scan(event_id="ev-1"))) == 2
    found = list(store.guests.scan(event_id="ev-1", email="jane@example.com"))
    assert [g.name for g in found] == ["Jane"]
    assert list(store.guests.scan(event_id="ev-3")) == []


def test_scan_sees_latest_state(store: Store) -> None:
    task_id = store.tasks.insert(Task(name="Book Venue", event_id="ev-1"))
    store.tasks.update(task_id, lambda t: setattr(t, "status", TaskStatus.COMPLETED))

    done = list(store.tasks.scan(event_id="ev-1", status=TaskStatus.COMPLETED))
    assert [t.id for t in done] == [task_id]


def test_update_applies_mutator_and_keeps_identity(store: Store) -> None:
    event_id = store.events.insert(_event(host="u-1"))
    created_at = store.events.get(event_id).created_at

    def _mutate(e: Event) -> None:
        e.name = "Autumn Wedding"
        e.collaborators.append("u-2")
        e.host_id = "intruder"
        e.id = "other"

    updated = store.events.update(event_id, _mutate)

    assert updated is not None
    assert updated.id == event_id
    assert updated.host_id == "u-1"
    assert updated.name == "Autumn Wedding"
    assert updated.collaborators == ["u-2"]
    assert store.events.get(event_id).created_at == created_at


def test_update_missing_returns_none(store: Store) -> None:
    assert store.events.update("missing", lambda e: None) is None


def test_returned_records_do_not_alias_storage(store: Store) -> None:
    event_id = store.events.insert(_event())
    fetched = store.events.get(event_id)
    fetched.collaborators.append("u-9")

    assert store.events.get(event_id).collaborators == []


def test_delete_then_get_is_none(store: Store) -> None:
    expense_id = store.expenses.insert(
        Expense(name="Venue Deposit", category="Venue", amount=Decimal("2500"), event_id="ev-1", is_paid=True)
    )
    assert store.expenses.get(expense_id).amount == Decimal("2500")

    assert store.expenses.delete(expense_id) is True
    assert store.expenses.get(expense_id) is None
    assert store.expenses.delete(expense_id) is False


def test_concurrent_updates_do_not_lose_writes(store: Store) -> None:
    event_id = store.events.insert(_event())

    def _add(i: int) -> Event:
        return store.events.update(event_id, lambda e: e.collaborators.append(f"u-{i}"))

    _, errors = _race(25, _add)

    assert errors == []
    assert sorted(store.events.get(event_id).collaborators) == sorted(f"u-{i}" for i in range(25))


def test_created_at_comes_back_in_utc(store: Store) -> None:
    event = _event()
    event_id = store.events.insert(event)

    fetched = store.events.get(event_id)
    assert fetched.created_at.utcoffset() == timedelta(0)
    assert fetched.created_at == event.created_at
    assert next(store.events.scan()).created_at.utcoffset() == timedelta(0)


def test_insert_rejects_duplicate_email_within_event(store: Store) -> None:
    store.vendors.insert(_vendor("Elegant Catering", "ev-1"))
    store.vendors.insert(_vendor("Elegant Catering", "ev-2"))

    with pytest.raises(DuplicateKeyError):
        store.vendors.insert(_vendor("Other Catering", "ev-1"))
    assert len(list(store.vendors.scan(event_id="ev-1"))) == 1

    store.users.insert(User(name="John", email="john@example.com", password_hash="x"))
    with pytest.raises(DuplicateKeyError):
        store.users.insert(User(name="Johnny", email="john@example.com", password_hash="y"))


def test_update_rejects_duplicate_email_within_event(store: Store) -> None:
    store.guests.insert(Guest(name="Jane", email="jane@example.com", event_id="ev-1"))
    bob_id = store.guests.insert(Guest(name="Bob", email="bob@example.com", event_id="ev-1"))

    with pytest.raises(DuplicateKeyError):
        store.guests.update(bob_id, lambda g: setattr(g, "email", "jane@example.com"))
    assert store.guests.get(bob_id).email == "bob@example.com"

    # Rewriting a record's own value is not a clash.
    updated = store.guests.update(bob_id, lambda g: setattr(g, "name", "Robert"))
    assert updated.name == "Robert"


def _race(count: int, fn) -> tuple[list, list[Exception]]:
    barrier = threading.Barrier(count)
    results: list = []
    errors: list[Exception] = []
    lock = threading.Lock()

    def _run(i: int) -> None:
        barrier.wait()
        try:
            out = fn(i)
        except Exception as exc:
            with lock:
                errors.append(exc)
        else:
            with lock:
                results.append(out)

    threads = [threading.Thread(target=_run, args=(i,)) for i in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return results, errors


def test_concurrent_guest_creates_keep_email_unique(store: Store) -> None:
    event_id = store.events.insert(_event(host="u-1"))
    guests = ScopedResource(store, GUESTS)

    def _create(i: int) -> Guest:
        return guests.create("u-1", event_id, Guest(name=f"Jane {i}", email="Jane@Example.com", event_id=""))

    created, errors = _race(8, _create)

    assert len(created) == 1
    assert len(errors) == 7
    assert all(isinstance(e, ConflictError) for e in errors)
    assert [g.email for g in store.guests.scan(event_id=event_id)] == ["jane@example.com"]


def test_concurrent_registrations_keep_user_email_unique(store: Store) -> None:
    def _register(i: int) -> User:
        return register_user(store, name=f"John {i}", email="john@example.com", password="secret123")

    created, errors = _race(6, _register)

    assert len(created) == 1
    assert [str(e) for e in errors] == ["User with this email already exists"] * 5
    assert len(list(store.users.scan(email="john@example.com"))) == 1
