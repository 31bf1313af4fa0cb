from __future__ import annotations

import datetime as dt

from planpilot.api.app.models.common import ApiIn, ApiOut
from pydantic import EmailStr, Field


class UserCreateRequest(ApiIn):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)


class UserOut(ApiOut):
    id: str
    name: str
    email: str
    created_at: dt.datetime
