from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from workout_calendar.db.models import Base

# Engines are created lazily, one per database URL
_engines: dict[str, Engine] = {}
_session_factories: dict[str, sessionmaker[Session]] = {}


def get_engine(database_url: str) -> Engine:
    """Get or create the engine for database_url and ensure the schema exists."""
    engine = _engines.get(database_url)
    if engine is None:
        logger.info(f"Initializing database engine: {database_url}")
        connect_args = {}
        if "sqlite" in database_url.lower():
            connect_args = {"check_same_thread": False}
        engine = create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)
        Base.metadata.create_all(bind=engine)
        _engines[database_url] = engine
        _session_factories[database_url] = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    return engine


@contextmanager
def get_session(database_url: str) -> Generator[Session, None, None]:
    """Session context manager: commits on success, rolls back on error."""
    get_engine(database_url)
    session = _session_factories[database_url]()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def dispose_engines() -> None:
    """Dispose every cached engine (used by tests)."""
    for engine in _engines.values():
        engine.dispose()
    _engines.clear()
    _session_factories.clear()
