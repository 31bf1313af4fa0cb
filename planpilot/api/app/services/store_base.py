from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, Protocol, TypeVar

from planpilot.api.app.services.records import Event, Expense, Guest, Task, User, Vendor

R = TypeVar("R")

# Fields a mutator is never allowed to change.
IMMUTABLE_FIELDS = ("id", "created_at", "event_id", "host_id")


class DuplicateKeyError(Exception):
    """A write would give two records the same values on a unique field set."""

    def __init__(self, fields: tuple[str, ...]) -> None:
        super().__init__(f"Duplicate value for {', '.join(fields)}")
        self.fields = fields


class Collection(Protocol[R]):
    """Storage for one record type, keyed by id.

    A collection may declare one set of fields whose values must be unique
    together across its records.
    """

    def insert(self, record: R) -> str:
        """Store ``record`` and assign its id and created_at.

        Raises DuplicateKeyError when the collection's unique fields clash with a
        stored record. The check and the write happen as one step.
        """
        ...

    def get(self, record_id: str) -> R | None: ...

    def scan(self, **criteria: Any) -> Iterator[R]:
        """Yield records whose fields equal every given criterion."""
        ...

    def update(self, record_id: str, mutator: Callable[[R], None]) -> R | None:
        """Apply ``mutator`` to the stored record, serialized per id.

        Raises DuplicateKeyError when the change clashes with a unique constraint.
        """
        ...

    def delete(self, record_id: str) -> bool: ...


class Store(Protocol):
    users: Collection[User]
    events: Collection[Event]
    tasks: Collection[Task]
    guests: Collection[Guest]
    vendors: Collection[Vendor]
    expenses: Collection[Expense]
