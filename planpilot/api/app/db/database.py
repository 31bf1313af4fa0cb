from __future__ import annotations

import os
from functools import lru_cache

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker


def database_url() -> str:
    # Local-only default. Production must provide DATABASE_URL explicitly.
    return os.getenv("DATABASE_URL", "sqlite+pysqlite:///.local/planpilot.db")


@lru_cache(maxsize=None)
def _engine_for(url: str) -> Engine:
    if url.startswith("sqlite") and ":///" in url:
        db_path = url.split(":///", 1)[1]
        if db_path and db_path != ":memory:":
            os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)

    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


@lru_cache(maxsize=None)
def _sessions_for(url: str) -> sessionmaker:
    return sessionmaker(bind=_engine_for(url), class_=Session, autoflush=False)


def get_engine() -> Engine:
    """Engine for the current DATABASE_URL, cached per URL so tests can point at a fresh file."""

    return _engine_for(database_url())


def get_sessionmaker() -> sessionmaker:
    return _sessions_for(database_url())
