"""
Database Session Management
============================

Handles database engines and session lifecycle.
"""

import logging
import os
from contextlib import contextmanager
from functools import lru_cache
from typing import Generator, Optional

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from storefront.config import settings

logger = logging.getLogger(__name__)


def is_memory_database(database_url: str) -> bool:
    """True for SQLite URLs that point at an in-memory database."""
    if not database_url.startswith("sqlite"):
        return False
    path = database_url.split("://", 1)[-1].lstrip("/")
    return path in ("", ":memory:") or path.startswith(":memory:")


def create_db_engine(database_url: Optional[str] = None) -> Engine:
    """Create and configure a database engine for the given URL."""
    database_url = database_url or settings.database_url

    # SQLite-specific configuration
    if database_url.startswith("sqlite"):
        in_memory = is_memory_database(database_url)

        # Ensure data directory exists
        if ":///" in database_url and not in_memory:
            db_path = database_url.split(":///")[1]
            db_dir = os.path.dirname(db_path)
            if db_dir and not os.path.exists(db_dir):
                os.makedirs(db_dir, exist_ok=True)

        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=settings.app_debug
        )

        # Enable foreign keys (and WAL mode for file databases)
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            if not in_memory:
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    else:
        engine = create_engine(database_url, echo=settings.app_debug)

    logger.debug("Created engine for %s", engine.url.render_as_string(hide_password=True))
    return engine


@lru_cache(maxsize=None)
def get_engine(database_url: Optional[str] = None) -> Engine:
    """Return the shared engine for a database URL, creating it on first use."""
    return create_db_engine(database_url)


def make_session_factory(engine: Engine) -> sessionmaker:
    """
    Session factory bound to an engine.

    Objects stay readable after commit and after their session closes, so
    entities returned by a repository remain usable by the caller. A closed
    session refuses further queries instead of silently reopening.
    """
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        close_resets_only=False
    )


@contextmanager
def get_db_context(engine: Optional[Engine] = None) -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Usage:
        with get_db_context() as db:
            db.add(category)
        # committed here, rolled back on error
    """
    db = make_session_factory(engine or get_engine())()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def create_all_tables(engine_instance: Optional[Engine] = None) -> None:
    """Create all tables in the database."""
    from storefront.models.base import Base

    if engine_instance is None:
        engine_instance = get_engine()

    Base.metadata.create_all(bind=engine_instance)


def drop_all_tables(engine_instance: Optional[Engine] = None) -> None:
    """Drop all tables in the database."""
    from storefront.models.base import Base

    if engine_instance is None:
        engine_instance = get_engine()

    Base.metadata.drop_all(bind=engine_instance)
