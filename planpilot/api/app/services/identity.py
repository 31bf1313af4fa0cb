"""Resolve the bearer credential on a request into a caller id.

Token issuance lives outside this service. Two modes are supported, selected by
PLANPILOT_IDENTITY_MODE:

- ``trust`` (default): the bearer token is taken as the user id. Meant for local
  dev and tests behind a gateway that already authenticated the caller.
- ``static``: PLANPILOT_API_TOKENS holds ``token:user_id`` pairs separated by commas.
"""

from __future__ import annotations

import os

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from planpilot.api.app.services.errors import UnauthorizedError

security = HTTPBearer(auto_error=False)


def _static_tokens() -> dict[str, str]:
    out: dict[str, str] = {}
    for pair in os.getenv("PLANPILOT_API_TOKENS", "").split(","):
        token, sep, user_id = pair.strip().partition(":")
        if sep and token and user_id:
            out[token] = user_id
    return out


def resolve_caller(token: str) -> str:
    mode = os.getenv("PLANPILOT_IDENTITY_MODE", "trust").strip().lower()

    if mode == "trust":
        return token

    if mode == "static":
        user_id = _static_tokens().get(token)
        if user_id is None:
            raise UnauthorizedError("Invalid token")
        return user_id

    raise ValueError(f"Unknown PLANPILOT_IDENTITY_MODE={mode!r}. Expected trust or static.")


def get_caller_id(credentials: HTTPAuthorizationCredentials | None = Depends(security)) -> str:
    if credentials is None or not credentials.credentials.strip():
        raise UnauthorizedError("Not authenticated")
    return resolve_caller(credentials.credentials.strip())
