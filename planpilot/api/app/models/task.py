from __future__ import annotations

import datetime as dt

from planpilot.api.app.models.common import ApiIn, ApiOut
from planpilot.api.app.services.records import TaskStatus
from pydantic import Field


class TaskCreateRequest(ApiIn):
    name: str = Field(..., min_length=1)
    description: str = ""
    assignee_id: str | None = None
    due_date: dt.date | None = None
    status: TaskStatus = TaskStatus.TODO


class TaskUpdateRequest(ApiIn):
    name: str | None = Field(None, min_length=1)
    description: str | None = None
    assignee_id: str | None = None
    due_date: dt.date | None = None
    status: TaskStatus | None = None


class TaskOut(ApiOut):
    id: str
    name: str
    description: str
    assignee_id: str | None = None
    due_date: dt.date | None = None
    status: TaskStatus
    event_id: str
    created_at: dt.datetime


class TaskListItem(ApiOut):
    id: str
    name: str
    assignee_id: str | None = None
    status: TaskStatus
    due_date: dt.date | None = None
