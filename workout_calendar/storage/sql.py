"""SQL storage backend (SQLite by default, any SQLAlchemy URL works)."""

from __future__ import annotations

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from workout_calendar.db.models import KeyValueEntry
from workout_calendar.db.session import get_session
from workout_calendar.storage.base import StorageReadError, StorageWriteError


class SqlStorage:
    """KeyValueStorage backed by the ``kv_entries`` table."""

    def __init__(self, database_url: str):
        self.database_url = database_url

    def get(self, key: str) -> str | None:
        try:
            with get_session(self.database_url) as db:
                return db.execute(select(KeyValueEntry.value).where(KeyValueEntry.key == key)).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StorageReadError(key, str(e)) from e

    def set(self, key: str, value: str) -> None:
        try:
            with get_session(self.database_url) as db:
                entry = db.get(KeyValueEntry, key)
                if entry is None:
                    db.add(KeyValueEntry(key=key, value=value))
                else:
                    entry.value = value
        except SQLAlchemyError as e:
            raise StorageWriteError(key, str(e)) from e
        logger.debug(f"[STORAGE] Wrote {key} ({len(value)} chars)")

    def delete(self, key: str) -> None:
        try:
            with get_session(self.database_url) as db:
                db.execute(delete(KeyValueEntry).where(KeyValueEntry.key == key))
        except SQLAlchemyError as e:
            raise StorageWriteError(key, str(e)) from e

    def keys(self) -> list[str]:
        try:
            with get_session(self.database_url) as db:
                return list(db.execute(select(KeyValueEntry.key).order_by(KeyValueEntry.key)).scalars().all())
        except SQLAlchemyError as e:
            raise StorageReadError("*", str(e)) from e
