from __future__ import annotations

import logging
from typing import Any

from planpilot.api.app.services.access import Role, authorize, require_host, require_member
from planpilot.api.app.services.aggregation import event_progress
from planpilot.api.app.services.errors import NotFoundError
from planpilot.api.app.services.records import Event
from planpilot.api.app.services.scoped import EXPENSES, GUESTS, TASKS, VENDORS, load_event
from planpilot.api.app.services.store_base import Store

logger = logging.getLogger(__name__)

EVENT_FIELDS = frozenset({"name", "type", "date", "description"})


class EventService:
    def __init__(self, store: Store) -> None:
        self._store = store

    def create(self, caller_id: str, event: Event) -> Event:
        event.host_id = caller_id
        event.collaborators = []
        event.vendor_ids = []
        self._store.events.insert(event)
        logger.info("Event %s created by %s", event.id, caller_id)
        return event

    def list_for(self, caller_id: str) -> list[tuple[Event, int]]:
        """Events the caller hosts or collaborates on, each with its task progress."""

        out: list[tuple[Event, int]] = []
        for event in self._store.events.scan():
            if authorize(caller_id, event) is Role.DENIED:
                continue
            out.append((event, event_progress(self._store.tasks.scan(event_id=event.id))))
        return out

    def get(self, caller_id: str, event_id: str) -> Event:
        event = load_event(self._store, event_id)
        require_member(caller_id, event)
        return event

    def update(self, caller_id: str, event_id: str, changes: dict[str, Any]) -> Event:
        event = load_event(self._store, event_id)
        require_host(caller_id, event, "update")

        changes = {k: v for k, v in changes.items() if k in EVENT_FIELDS and v is not None}

        def _apply(record: Event) -> None:
            for name, value in changes.items():
                setattr(record, name, value)

        updated = self._store.events.update(event_id, _apply)
        if updated is None:
            raise NotFoundError("Event")
        return updated

    def delete(self, caller_id: str, event_id: str) -> None:
        """Delete the event together with every task, guest, vendor and expense under it."""

        event = load_event(self._store, event_id)
        require_host(caller_id, event, "delete")

        removed = 0
        for kind in (TASKS, GUESTS, VENDORS, EXPENSES):
            rows = kind.collection(self._store)
            for child in list(rows.scan(event_id=event_id)):
                removed += rows.delete(child.id)

        if not self._store.events.delete(event_id):
            raise NotFoundError("Event")
        logger.info("Event %s deleted by %s (%d child records removed)", event_id, caller_id, removed)

    def add_collaborator(self, caller_id: str, event_id: str, user_id: str) -> Event:
        event = load_event(self._store, event_id)
        require_host(caller_id, event, "manage collaborators of")
        if self._store.users.get(user_id) is None:
            raise NotFoundError("User")

        def _apply(record: Event) -> None:
            if user_id != record.host_id and user_id not in record.collaborators:
                record.collaborators.append(user_id)

        updated = self._store.events.update(event_id, _apply)
        if updated is None:
            raise NotFoundError("Event")
        return updated

    def remove_collaborator(self, caller_id: str, event_id: str, user_id: str) -> Event:
        event = load_event(self._store, event_id)
        require_host(caller_id, event, "manage collaborators of")
        if user_id not in event.collaborators:
            raise NotFoundError("Collaborator")

        def _apply(record: Event) -> None:
            if user_id in record.collaborators:
                record.collaborators.remove(user_id)

        updated = self._store.events.update(event_id, _apply)
        if updated is None:
            raise NotFoundError("Event")
        return updated
