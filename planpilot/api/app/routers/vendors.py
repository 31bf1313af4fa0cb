from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from planpilot.api.app.deps import scoped_resource
from planpilot.api.app.models.vendor import VendorCreateRequest, VendorOut, VendorUpdateRequest
from planpilot.api.app.services.identity import get_caller_id
from planpilot.api.app.services.records import Vendor
from planpilot.api.app.services.scoped import VENDORS, ScopedResource

router = APIRouter(prefix="/events/{event_id}/vendors", tags=["vendors"])

vendors_dep = scoped_resource(VENDORS)


@router.post("", response_model=VendorOut, status_code=201)
def add_vendor(
    event_id: str,
    payload: VendorCreateRequest,
    caller_id: str = Depends(get_caller_id),
    vendors: ScopedResource[Vendor] = Depends(vendors_dep),
) -> VendorOut:
    vendor = Vendor(event_id=event_id, **payload.model_dump())
    return VendorOut.model_validate(vendors.create(caller_id, event_id, vendor))


@router.get("", response_model=list[VendorOut])
def list_vendors(
    event_id: str,
    caller_id: str = Depends(get_caller_id),
    vendors: ScopedResource[Vendor] = Depends(vendors_dep),
) -> list[VendorOut]:
    return [VendorOut.model_validate(v) for v in vendors.list(caller_id, event_id)]


@router.get("/{vendor_id}", response_model=VendorOut)
def get_vendor(
    event_id: str,
    vendor_id: str,
    caller_id: str = Depends(get_caller_id),
    vendors: ScopedResource[Vendor] = Depends(vendors_dep),
) -> VendorOut:
    return VendorOut.model_validate(vendors.get(caller_id, event_id, vendor_id))


@router.put("/{vendor_id}", response_model=VendorOut)
def update_vendor(
    event_id: str,
    vendor_id: str,
    payload: VendorUpdateRequest,
    caller_id: str = Depends(get_caller_id),
    vendors: ScopedResource[Vendor] = Depends(vendors_dep),
) -> VendorOut:
    changes = payload.model_dump(exclude_unset=True)
    return VendorOut.model_validate(vendors.update(caller_id, event_id, vendor_id, changes))


@router.delete("/{vendor_id}", status_code=204, response_class=Response)
def delete_vendor(
    event_id: str,
    vendor_id: str,
    caller_id: str = Depends(get_caller_id),
    vendors: ScopedResource[Vendor] = Depends(vendors_dep),
) -> Response:
    vendors.delete(caller_id, event_id, vendor_id)
    return Response(status_code=204)
