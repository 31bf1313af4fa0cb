from __future__ import annotations

from enum import Enum

from planpilot.api.app.services.errors import ForbiddenError
from planpilot.api.app.services.records import Event


class Role(str, Enum):
    HOST = "HOST"
    COLLABORATOR = "COLLABORATOR"
    DENIED = "DENIED"


def authorize(caller_id: str, event: Event) -> Role:
    """Return the caller's role on ``event``.

    Host wins over collaborator if both somehow hold, so the outcomes never overlap.
    """

    if event.host_id == caller_id:
        return Role.HOST
    if caller_id in event.collaborators:
        return Role.COLLABORATOR
    return Role.DENIED


def require_member(caller_id: str, event: Event) -> Role:
    """Hosts and collaborators may read the event and manage its children."""

    role = authorize(caller_id, event)
    if role is Role.DENIED:
        raise ForbiddenError("Access denied to this event")
    return role


def require_host(caller_id: str, event: Event, action: str) -> None:
    if authorize(caller_id, event) is not Role.HOST:
        raise ForbiddenError(f"Only the event host can {action} this event")
