from __future__ import annotations

import os

from planpilot.api.app.services.store_base import Store
from planpilot.api.app.services.store_memory import InMemoryStore


def get_store() -> Store:
    """Select the storage backend.

    Default is the in-memory store, which loses everything on restart.
    Set PLANPILOT_STORE=sql (and DATABASE_URL) for durable storage.
    """

    provider = os.getenv("PLANPILOT_STORE", "memory").strip().lower()

    if provider in ("memory", "inmemory"):
        return InMemoryStore()

    if provider in ("sql", "sqlalchemy"):
        from planpilot.api.app.db.database import get_sessionmaker
        from planpilot.api.app.db.init_db import init_db
        from planpilot.api.app.services.store_sql import SqlStore

        init_db()
        return SqlStore(get_sessionmaker())

    raise ValueError(f"Unknown PLANPILOT_STORE={provider!r}. Expected memory or sql.")
