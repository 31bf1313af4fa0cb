from __future__ import annotations

from planpilot.api.app.models.common import ApiIn, ApiOut
from planpilot.api.app.services.records import RsvpStatus
from pydantic import EmailStr, Field


class GuestCreateRequest(ApiIn):
    name: str = Field(..., min_length=1)
    email: EmailStr
    plus_one: int = Field(0, ge=0)
    notes: str = ""


class GuestUpdateRequest(ApiIn):
    name: str | None = Field(None, min_length=1)
    email: EmailStr | None = None
    plus_one: int | None = Field(None, ge=0)
    notes: str | None = None
    rsvp_status: RsvpStatus | None = None


class GuestOut(ApiOut):
    id: str
    name: str
    email: str
    plus_one: int
    notes: str
    rsvp_status: RsvpStatus


class GuestListItem(ApiOut):
    id: str
    name: str
    email: str
    rsvp_status: RsvpStatus
    plus_one: int
