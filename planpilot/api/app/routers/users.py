from __future__ import annotations

from fastapi import APIRouter, Depends
from planpilot.api.app.deps import get_store
from planpilot.api.app.models.user import UserCreateRequest, UserOut
from planpilot.api.app.services.identity import get_caller_id
from planpilot.api.app.services.store_base import Store
from planpilot.api.app.services.users import get_user, register_user

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserOut, status_code=201)
def create_user(payload: UserCreateRequest, store: Store = Depends(get_store)) -> UserOut:
    user = register_user(store, name=payload.name, email=payload.email, password=payload.password)
    return UserOut.model_validate(user)


@router.get("/{user_id}", response_model=UserOut)
def read_user(
    user_id: str,
    caller_id: str = Depends(get_caller_id),
    store: Store = Depends(get_store),
) -> UserOut:
    del caller_id
    return UserOut.model_validate(get_user(store, user_id))
