from __future__ import annotations

import hashlib
import hmac
import os

from planpilot.api.app.services.errors import ConflictError, NotFoundError
from planpilot.api.app.services.records import User
from planpilot.api.app.services.store_base import DuplicateKeyError, Store

_ITERATIONS = 100_000


def hash_password(password: str) -> str:
    """PBKDF2-HMAC-SHA256 with a random 16-byte salt, stored as ``salt$hash`` in hex."""

    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, _ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    salt_hex, _, hash_hex = hashed_password.partition("$")
    if not salt_hex or not hash_hex:
        return False
    dk = hashlib.pbkdf2_hmac(
        "sha256", plain_password.encode("utf-8"), bytes.fromhex(salt_hex), _ITERATIONS
    )
    return hmac.compare_digest(dk, bytes.fromhex(hash_hex))


def register_user(store: Store, *, name: str, email: str, password: str) -> User:
    user = User(name=name, email=email.strip().lower(), password_hash=hash_password(password))
    try:
        store.users.insert(user)
    except DuplicateKeyError:
        raise ConflictError("User with this email already exists") from None
    return user


def get_user(store: Store, user_id: str) -> User:
    user = store.users.get(user_id)
    if user is None:
        raise NotFoundError("User")
    return user
