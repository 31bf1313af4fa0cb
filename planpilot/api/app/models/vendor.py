from __future__ import annotations

from planpilot.api.app.models.common import ApiIn, ApiOut
from pydantic import EmailStr, Field


class VendorCreateRequest(ApiIn):
    company_name: str = Field(..., min_length=1)
    contact_name: str = Field(..., min_length=1)
    email: EmailStr
    service_provided: str = Field(..., min_length=1)


class VendorUpdateRequest(ApiIn):
    company_name: str | None = Field(None, min_length=1)
    contact_name: str | None = Field(None, min_length=1)
    email: EmailStr | None = None
    service_provided: str | None = Field(None, min_length=1)


class VendorOut(ApiOut):
    id: str
    company_name: str
    contact_name: str
    email: str
    service_provided: str
