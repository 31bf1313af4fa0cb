from __future__ import annotations

import datetime as dt

from planpilot.api.app.models.common import ApiIn, ApiOut
from pydantic import Field


class EventCreateRequest(ApiIn):
    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    date: dt.date
    description: str = ""


class EventUpdateRequest(ApiIn):
    name: str | None = Field(None, min_length=1)
    type: str | None = Field(None, min_length=1)
    date: dt.date | None = None
    description: str | None = None


class CollaboratorAddRequest(ApiIn):
    user_id: str = Field(..., min_length=1)


class EventOut(ApiOut):
    id: str
    name: str
    type: str
    date: dt.date
    description: str
    host_id: str
    collaborators: list[str]
    vendor_ids: list[str]
    created_at: dt.datetime


class EventListItem(ApiOut):
    id: str
    name: str
    type: str
    date: dt.date
    progress: int
