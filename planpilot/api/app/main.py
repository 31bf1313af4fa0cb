"""PlanPilot API service entrypoint."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from planpilot.api.app.core.logging_config import setup_logging
from planpilot.api.app.routers.events import router as events_router
from planpilot.api.app.routers.expenses import router as expenses_router
from planpilot.api.app.routers.guests import router as guests_router
from planpilot.api.app.routers.tasks import router as tasks_router
from planpilot.api.app.routers.users import router as users_router
from planpilot.api.app.routers.vendors import router as vendors_router
from planpilot.api.app.services.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    PlanPilotError,
    UnauthorizedError,
)
from planpilot.api.app.services.store_base import Store
from planpilot.api.app.services.store_factory import get_store

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[PlanPilotError], int] = {
    NotFoundError: 404,
    ForbiddenError: 403,
    ConflictError: 400,
    UnauthorizedError: 401,
}


def _error_status(e: PlanPilotError) -> int:
    for cls, status_code in _STATUS_BY_ERROR.items():
        if isinstance(e, cls):
            return status_code
    return 500


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(PlanPilotError)
    async def _planpilot_error(request: Request, exc: PlanPilotError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
        return JSONResponse(status_code=_error_status(exc), content={"error": str(exc)}, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"errors": jsonable_encoder(exc.errors())})

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(store: Store | None = None) -> FastAPI:
    """Build the app around ``store``; the backend named by PLANPILOT_STORE when omitted."""

    setup_logging()

    app = FastAPI(title="PlanPilot API")
    app.state.store = store if store is not None else get_store()

    _register_error_handlers(app)

    app.include_router(users_router)
    app.include_router(events_router)
    app.include_router(tasks_router)
    app.include_router(guests_router)
    app.include_router(vendors_router)
    app.include_router(expenses_router)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
