"""Generic handler for resources that live under an event.

Tasks, guests, vendors and expenses share one lifecycle: load the owning event,
check the caller is its host or a collaborator, then touch a single record.
Each kind only differs in which collection it uses, which fields may be cleared,
and whether one field must be unique within the event.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from planpilot.api.app.services.access import require_member
from planpilot.api.app.services.errors import ConflictError, NotFoundError
from planpilot.api.app.services.records import Event, Expense, Guest, Task, Vendor
from planpilot.api.app.services.store_base import IMMUTABLE_FIELDS, Collection, DuplicateKeyError, Store

logger = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass(frozen=True)
class ScopedKind(Generic[R]):
    entity: str
    collection: Callable[[Store], Collection[R]]
    # Fields an update may set to null; any other null in an update is ignored.
    nullable: frozenset[str] = frozenset()
    unique_field: str | None = None
    # Event list field that mirrors the ids of this kind, kept in step on create and delete.
    event_list: str | None = None


TASKS: ScopedKind[Task] = ScopedKind(
    entity="Task",
    collection=lambda s: s.tasks,
    nullable=frozenset({"assignee_id", "due_date"}),
)
GUESTS: ScopedKind[Guest] = ScopedKind(
    entity="Guest",
    collection=lambda s: s.guests,
    unique_field="email",
)
VENDORS: ScopedKind[Vendor] = ScopedKind(
    entity="Vendor",
    collection=lambda s: s.vendors,
    unique_field="email",
    event_list="vendor_ids",
)
EXPENSES: ScopedKind[Expense] = ScopedKind(
    entity="Expense",
    collection=lambda s: s.expenses,
)


def load_event(store: Store, event_id: str) -> Event:
    event = store.events.get(event_id)
    if event is None:
        raise NotFoundError("Event")
    return event


class ScopedResource(Generic[R]):
    def __init__(self, store: Store, kind: ScopedKind[R]) -> None:
        self._store = store
        self._kind = kind
        self._rows = kind.collection(store)

    def member_event(self, caller_id: str, event_id: str) -> Event:
        event = load_event(self._store, event_id)
        require_member(caller_id, event)
        return event

    def _find(self, event_id: str, record_id: str) -> R:
        record = self._rows.get(record_id)
        if record is None or record.event_id != event_id:
            raise NotFoundError(self._kind.entity)
        return record

    def _conflict(self) -> ConflictError:
        return ConflictError(
            f"{self._kind.entity} with this {self._kind.unique_field} already exists for this event"
        )

    def _link(self, event_id: str, record_id: str, linked: bool) -> None:
        name = self._kind.event_list
        if name is None:
            return

        def _apply(event: Event) -> None:
            ids = getattr(event, name)
            if linked and record_id not in ids:
                ids.append(record_id)
            elif not linked and record_id in ids:
                ids.remove(record_id)

        self._store.events.update(event_id, _apply)

    def create(self, caller_id: str, event_id: str, record: R) -> R:
        self.member_event(caller_id, event_id)
        record.event_id = event_id

        field = self._kind.unique_field
        if field is not None:
            setattr(record, field, getattr(record, field).strip().lower())

        try:
            self._rows.insert(record)
        except DuplicateKeyError:
            raise self._conflict() from None
        self._link(event_id, record.id, linked=True)
        logger.debug("Created %s %s in event %s", self._kind.entity, record.id, event_id)
        return record

    def list(self, caller_id: str, event_id: str) -> list[R]:
        self.member_event(caller_id, event_id)
        return list(self._rows.scan(event_id=event_id))

    def get(self, caller_id: str, event_id: str, record_id: str) -> R:
        self.member_event(caller_id, event_id)
        return self._find(event_id, record_id)

    def update(self, caller_id: str, event_id: str, record_id: str, changes: dict[str, Any]) -> R:
        self.member_event(caller_id, event_id)
        self._find(event_id, record_id)

        changes = {
            k: v
            for k, v in changes.items()
            if k not in IMMUTABLE_FIELDS and (v is not None or k in self._kind.nullable)
        }

        field = self._kind.unique_field
        if field is not None and field in changes:
            changes[field] = changes[field].strip().lower()

        def _apply(record: R) -> None:
            for name, value in changes.items():
                setattr(record, name, value)

        try:
            updated = self._rows.update(record_id, _apply)
        except DuplicateKeyError:
            raise self._conflict() from None
        if updated is None:
            raise NotFoundError(self._kind.entity)
        logger.debug("Updated %s %s fields=%s", self._kind.entity, record_id, sorted(changes))
        return updated

    def delete(self, caller_id: str, event_id: str, record_id: str) -> None:
        self.member_event(caller_id, event_id)
        self._find(event_id, record_id)
        if not self._rows.delete(record_id):
            raise NotFoundError(self._kind.entity)
        self._link(event_id, record_id, linked=False)
        logger.debug("Deleted %s %s from event %s", self._kind.entity, record_id, event_id)
