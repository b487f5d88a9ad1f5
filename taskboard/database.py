"""Database initialization and session management.

Engines are built lazily from settings so that importing the package never
touches the filesystem. Repositories receive sessions explicitly.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import event, func
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine, select

from .config import get_settings
from .schemas.database import ActivityLog, DateConflict, Task

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """Turn on FK enforcement so ON DELETE CASCADE applies in SQLite."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for ``url``."""
    engine = create_engine(url, echo=echo)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Engine for the configured database URL, created on first use."""
    settings = get_settings()
    return build_engine(settings.database.url, echo=settings.database.echo_sql)


def create_db_and_tables(engine: Engine | None = None) -> None:
    """Create database and all tables.

    Safe to call multiple times - only creates tables that don't exist.
    """
    engine = engine or get_engine()
    SQLModel.metadata.create_all(engine)
    logger.info(f"Database initialized at: {engine.url}")


def get_sync_session(engine: Engine | None = None) -> Session:
    """Get a synchronous database session.

    Returns:
        SQLModel Session for database operations

    """
    return Session(engine or get_engine())


@contextmanager
def get_session_context(engine: Engine | None = None) -> Generator[Session, None, None]:
    """Context manager for database sessions with automatic cleanup.

    Usage:
        with get_session_context() as session:
            # Use session here
            pass

    Raises:
        Exception: If there is an error during session operations

    """
    session = Session(engine or get_engine())
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def verify_database(engine: Engine | None = None) -> dict[str, int]:
    """Count the rows of every table.

    Raises:
        sqlalchemy.exc.SQLAlchemyError: If the schema is missing or unreadable

    Returns:
        Mapping of table name to row count

    """
    with get_session_context(engine) as session:
        return {
            model.__tablename__: session.exec(
                select(func.count()).select_from(model)
            ).one()
            for model in (Task, DateConflict, ActivityLog)
        }


__all__ = [
    "build_engine",
    "create_db_and_tables",
    "get_engine",
    "get_session_context",
    "get_sync_session",
    "verify_database",
]
