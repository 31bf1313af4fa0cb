from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from planpilot.api.app.deps import get_event_service
from planpilot.api.app.models.event import (
    CollaboratorAddRequest,
    EventCreateRequest,
    EventListItem,
    EventOut,
    EventUpdateRequest,
)
from planpilot.api.app.services.events import EventService
from planpilot.api.app.services.identity import get_caller_id
from planpilot.api.app.services.records import Event

router = APIRouter(prefix="/events", tags=["events"])


@router.post("", response_model=EventOut, status_code=201)
def create_event(
    payload: EventCreateRequest,
    caller_id: str = Depends(get_caller_id),
    events: EventService = Depends(get_event_service),
) -> EventOut:
    event = Event(
        name=payload.name,
        type=payload.type,
        date=payload.date,
        description=payload.description,
        host_id=caller_id,
    )
    return EventOut.model_validate(events.create(caller_id, event))


@router.get("", response_model=list[EventListItem])
def list_events(
    caller_id: str = Depends(get_caller_id),
    events: EventService = Depends(get_event_service),
) -> list[EventListItem]:
    return [
        EventListItem(id=e.id, name=e.name, type=e.type, date=e.date, progress=progress)
        for e, progress in events.list_for(caller_id)
    ]


@router.get("/{event_id}", response_model=EventOut)
def get_event(
    event_id: str,
    caller_id: str = Depends(get_caller_id),
    events: EventService = Depends(get_event_service),
) -> EventOut:
    return EventOut.model_validate(events.get(caller_id, event_id))


@router.put("/{event_id}", response_model=EventOut)
def update_event(
    event_id: str,
    payload: EventUpdateRequest,
    caller_id: str = Depends(get_caller_id),
    events: EventService = Depends(get_event_service),
) -> EventOut:
    changes = payload.model_dump(exclude_unset=True)
    return EventOut.model_validate(events.update(caller_id, event_id, changes))


@router.delete("/{event_id}", status_code=204, response_class=Response)
def delete_event(
    event_id: str,
    caller_id: str = Depends(get_caller_id),
    events: EventService = Depends(get_event_service),
) -> Response:
    events.delete(caller_id, event_id)
    return Response(status_code=204)


@router.post("/{event_id}/collaborators", response_model=EventOut)
def add_collaborator(
    event_id: str,
    payload: CollaboratorAddRequest,
    caller_id: str = Depends(get_caller_id),
    events: EventService = Depends(get_event_service),
) -> EventOut:
    return EventOut.model_validate(events.add_collaborator(caller_id, event_id, payload.user_id))


@router.delete("/{event_id}/collaborators/{user_id}", status_code=204, response_class=Response)
def remove_collaborator(
    event_id: str,
    user_id: str,
    caller_id: str = Depends(get_caller_id),
    events: EventService = Depends(get_event_service),
) -> Response:
    events.remove_collaborator(caller_id, event_id, user_id)
    return Response(status_code=204)
