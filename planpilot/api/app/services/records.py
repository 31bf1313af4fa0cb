from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class TaskStatus(str, Enum):
    TODO = "To-Do"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"


class RsvpStatus(str, Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    DECLINED = "Declined"
    MAYBE = "Maybe"


# id and created_at are assigned by the store on insert.


@dataclass(slots=True)
class User:
    name: str
    email: str
    password_hash: str
    id: str = ""
    created_at: datetime | None = None


@dataclass(slots=True)
class Event:
    name: str
    type: str
    date: date
    host_id: str
    description: str = ""
    collaborators: list[str] = field(default_factory=list)
    vendor_ids: list[str] = field(default_factory=list)
    id: str = ""
    created_at: datetime | None = None


@dataclass(slots=True)
class Task:
    name: str
    event_id: str
    description: str = ""
    assignee_id: str | None = None
    due_date: date | None = None
    status: TaskStatus = TaskStatus.TODO
    id: str = ""
    created_at: datetime | None = None


@dataclass(slots=True)
class Guest:
    name: str
    email: str
    event_id: str
    plus_one: int = 0
    notes: str = ""
    rsvp_status: RsvpStatus = RsvpStatus.PENDING
    id: str = ""
    created_at: datetime | None = None


@dataclass(slots=True)
class Vendor:
    company_name: str
    contact_name: str
    email: str
    service_provided: str
    event_id: str
    id: str = ""
    created_at: datetime | None = None


@dataclass(slots=True)
class Expense:
    name: str
    category: str
    amount: Decimal
    event_id: str
    is_paid: bool = False
    id: str = ""
    created_at: datetime | None = None
