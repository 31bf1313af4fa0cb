from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Iterator
from dataclasses import fields
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar
from uuid import uuid4

from planpilot.api.app.db import models
from planpilot.api.app.services import records
from planpilot.api.app.services.store_base import IMMUTABLE_FIELDS, DuplicateKeyError
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.exc import StaleDataError

logger = logging.getLogger(__name__)

R = TypeVar("R")

_UPDATE_ATTEMPTS = 50


def _load(value: Any) -> Any:
    # SQLite hands DateTime(timezone=True) back naive; everything is written in UTC.
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return copy.deepcopy(value)


class SqlCollection(Generic[R]):
    """One table per record type. Column names mirror the record's field names.

    ``unique`` names the fields covered by the table's unique constraint, if any.
    Updates are optimistic: the row's version column must still match at commit,
    otherwise the mutator is re-run on a fresh read.
    """

    def __init__(
        self,
        sessions: sessionmaker,
        model: type[models.Base],
        record_cls: type[R],
        unique: tuple[str, ...] = (),
    ) -> None:
        self._sessions = sessions
        self._model = model
        self._record_cls = record_cls
        self._unique = unique
        self._names = [f.name for f in fields(record_cls)]
        self._mutable = [n for n in self._names if n not in IMMUTABLE_FIELDS]

    def _to_record(self, row: Any) -> R:
        return self._record_cls(**{n: _load(getattr(row, n)) for n in self._names})

    def insert(self, record: R) -> str:
        record.id = uuid4().hex
        record.created_at = datetime.now(timezone.utc)
        with self._sessions() as db:
            db.add(self._model(**{n: copy.deepcopy(getattr(record, n)) for n in self._names}))
            try:
                db.commit()
            except IntegrityError as exc:
                db.rollback()
                if not self._unique:
                    raise
                raise DuplicateKeyError(self._unique) from exc
        return record.id

    def get(self, record_id: str) -> R | None:
        with self._sessions() as db:
            row = db.get(self._model, record_id)
            return self._to_record(row) if row is not None else None

    def scan(self, **criteria: Any) -> Iterator[R]:
        stmt = select(self._model).filter_by(**criteria).order_by(self._model.created_at)
        with self._sessions() as db:
            found = [self._to_record(row) for row in db.scalars(stmt)]
        yield from found

    def update(self, record_id: str, mutator: Callable[[R], None]) -> R | None:
        stmt = select(self._model).where(self._model.id == record_id).with_for_update()
        for attempt in range(1, _UPDATE_ATTEMPTS + 1):
            with self._sessions() as db:
                row = db.scalars(stmt).first()
                if row is None:
                    return None

                record = self._to_record(row)
                mutator(record)
                for name in self._mutable:
                    setattr(row, name, getattr(record, name))
                try:
                    db.commit()
                except StaleDataError:
                    db.rollback()
                    if attempt == _UPDATE_ATTEMPTS:
                        raise
                    logger.debug("%s %s changed underneath us, retrying", self._model.__tablename__, record_id)
                    continue
                except IntegrityError as exc:
                    db.rollback()
                    if not self._unique:
                        raise
                    raise DuplicateKeyError(self._unique) from exc
                return self._to_record(row)
        return None

    def delete(self, record_id: str) -> bool:
        stmt = delete(self._model).where(self._model.id == record_id)
        with self._sessions() as db:
            removed = db.execute(stmt).rowcount
            db.commit()
        return removed > 0


class SqlStore:
    def __init__(self, sessions: sessionmaker) -> None:
        self.users = SqlCollection(sessions, models.User, records.User, unique=("email",))
        self.events = SqlCollection(sessions, models.Event, records.Event)
        self.tasks = SqlCollection(sessions, models.Task, records.Task)
        self.guests = SqlCollection(sessions, models.Guest, records.Guest, unique=("event_id", "email"))
        self.vendors = SqlCollection(sessions, models.Vendor, records.Vendor, unique=("event_id", "email"))
        self.expenses = SqlCollection(sessions, models.Expense, records.Expense)
