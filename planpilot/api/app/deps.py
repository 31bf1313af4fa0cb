from __future__ import annotations

from collections.abc import Callable

from fastapi import Depends, Request
from planpilot.api.app.services.events import EventService
from planpilot.api.app.services.scoped import ScopedKind, ScopedResource
from planpilot.api.app.services.store_base import Store


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_event_service(store: Store = Depends(get_store)) -> EventService:
    return EventService(store)


def scoped_resource(kind: ScopedKind) -> Callable[..., ScopedResource]:
    def _dependency(store: Store = Depends(get_store)) -> ScopedResource:
        return ScopedResource(store, kind)

    return _dependency
