from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from planpilot.api.app.deps import scoped_resource
from planpilot.api.app.models.guest import (
    GuestCreateRequest,
    GuestListItem,
    GuestOut,
    GuestUpdateRequest,
)
from planpilot.api.app.services.identity import get_caller_id
from planpilot.api.app.services.records import Guest
from planpilot.api.app.services.scoped import GUESTS, ScopedResource

router = APIRouter(prefix="/events/{event_id}/guests", tags=["guests"])

guests_dep = scoped_resource(GUESTS)


@router.post("", response_model=GuestOut, status_code=201)
def add_guest(
    event_id: str,
    payload: GuestCreateRequest,
    caller_id: str = Depends(get_caller_id),
    guests: ScopedResource[Guest] = Depends(guests_dep),
) -> GuestOut:
    guest = Guest(event_id=event_id, **payload.model_dump())
    return GuestOut.model_validate(guests.create(caller_id, event_id, guest))


@router.get("", response_model=list[GuestListItem])
def list_guests(
    event_id: str,
    caller_id: str = Depends(get_caller_id),
    guests: ScopedResource[Guest] = Depends(guests_dep),
) -> list[GuestListItem]:
    return [GuestListItem.model_validate(g) for g in guests.list(caller_id, event_id)]


@router.get("/{guest_id}", response_model=GuestOut)
def get_guest(
    event_id: str,
    guest_id: str,
    caller_id: str = Depends(get_caller_id),
    guests: ScopedResource[Guest] = Depends(guests_dep),
) -> GuestOut:
    return GuestOut.model_validate(guests.get(caller_id, event_id, guest_id))


@router.put("/{guest_id}", response_model=GuestOut)
def update_guest(
    event_id: str,
    guest_id: str,
    payload: GuestUpdateRequest,
    caller_id: str = Depends(get_caller_id),
    guests: ScopedResource[Guest] = Depends(guests_dep),
) -> GuestOut:
    changes = payload.model_dump(exclude_unset=True)
    return GuestOut.model_validate(guests.update(caller_id, event_id, guest_id, changes))


@router.delete("/{guest_id}", status_code=204, response_class=Response)
def delete_guest(
    event_id: str,
    guest_id: str,
    caller_id: str = Depends(get_caller_id),
    guests: ScopedResource[Guest] = Depends(guests_dep),
) -> Response:
    guests.delete(caller_id, event_id, guest_id)
    return Response(status_code=204)
