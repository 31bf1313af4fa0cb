from __future__ import annotations


class PlanPilotError(Exception):
    """Base class for errors surfaced to the caller."""


class NotFoundError(PlanPilotError):
    def __init__(self, entity: str) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity


class ForbiddenError(PlanPilotError):
    pass


class ConflictError(PlanPilotError):
    pass


class UnauthorizedError(PlanPilotError):
    pass
