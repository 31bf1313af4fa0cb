from __future__ import annotations

import copy
import threading
from collections.abc import Callable, Iterator
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar
from uuid import uuid4

from planpilot.api.app.services.records import Event, Expense, Guest, Task, User, Vendor
from planpilot.api.app.services.store_base import IMMUTABLE_FIELDS, DuplicateKeyError

R = TypeVar("R")


class InMemoryCollection(Generic[R]):
    """Dict-backed collection. Records are copied in and out so callers never alias stored state."""

    def __init__(self, unique: tuple[str, ...] = ()) -> None:
        self._rows: dict[str, R] = {}
        self._unique = unique
        self._guard = threading.Lock()
        self._key_locks: dict[str, threading.Lock] = {}

    def _lock_for(self, record_id: str) -> threading.Lock:
        with self._guard:
            return self._key_locks.setdefault(record_id, threading.Lock())

    def _check_unique(self, record: R, exclude_id: str | None = None) -> None:
        # Caller holds self._guard.
        if not self._unique:
            return
        key = tuple(getattr(record, f) for f in self._unique)
        for row_id, row in self._rows.items():
            if row_id != exclude_id and tuple(getattr(row, f) for f in self._unique) == key:
                raise DuplicateKeyError(self._unique)

    def insert(self, record: R) -> str:
        stored = copy.deepcopy(record)
        stored.id = uuid4().hex
        stored.created_at = datetime.now(timezone.utc)
        with self._guard:
            self._check_unique(stored)
            self._rows[stored.id] = stored
        record.id = stored.id
        record.created_at = stored.created_at
        return stored.id

    def get(self, record_id: str) -> R | None:
        row = self._rows.get(record_id)
        return copy.deepcopy(row) if row is not None else None

    def scan(self, **criteria: Any) -> Iterator[R]:
        with self._guard:
            ids = list(self._rows)
        for record_id in ids:
            row = self._rows.get(record_id)
            if row is None:
                continue
            if all(getattr(row, k) == v for k, v in criteria.items()):
                yield copy.deepcopy(row)

    def update(self, record_id: str, mutator: Callable[[R], None]) -> R | None:
        with self._lock_for(record_id):
            current = self._rows.get(record_id)
            if current is None:
                return None
            draft = copy.deepcopy(current)
            mutator(draft)
            for name in IMMUTABLE_FIELDS:
                if hasattr(current, name):
                    setattr(draft, name, getattr(current, name))
            with self._guard:
                if record_id not in self._rows:
                    return None
                self._check_unique(draft, exclude_id=record_id)
                self._rows[record_id] = draft
            return copy.deepcopy(draft)

    def delete(self, record_id: str) -> bool:
        with self._guard:
            self._key_locks.pop(record_id, None)
            return self._rows.pop(record_id, None) is not None

    def __len__(self) -> int:
        return len(self._rows)


class InMemoryStore:
    """Process-local store for tests and local dev. Nothing survives a restart."""

    def __init__(self) -> None:
        self.users: InMemoryCollection[User] = InMemoryCollection(unique=("email",))
        self.events: InMemoryCollection[Event] = InMemoryCollection()
        self.tasks: InMemoryCollection[Task] = InMemoryCollection()
        self.guests: InMemoryCollection[Guest] = InMemoryCollection(unique=("event_id", "email"))
        self.vendors: InMemoryCollection[Vendor] = InMemoryCollection(unique=("event_id", "email"))
        self.expenses: InMemoryCollection[Expense] = InMemoryCollection()
