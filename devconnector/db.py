"""
Engine and session handling for DevConnector.

One process-wide DatabaseManager owns the engine. The API opens one session
per request through get_db(); the session commits when the request handler
returns and rolls back when it raises.

Usage:
    from devconnector.db import db, get_db

    db.initialize()
    db.create_all_tables()
"""

import time
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from .config import get_settings


class Base(DeclarativeBase):
    """Declarative base shared by all DevConnector models."""


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores ON DELETE clauses unless the pragma is set per connection."""

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # A single shared connection keeps in-memory databases alive
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}

    settings = get_settings()
    return {
        "poolclass": QueuePool,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": settings.db_pool_pre_ping,
    }


class DatabaseManager:
    """Owns the engine and the session factory once initialize() has run."""

    def __init__(self):
        self.engine: Engine | None = None
        self.SessionLocal: sessionmaker | None = None

    def initialize(self, database_url: str | None = None) -> None:
        """Create the engine. Later calls are no-ops."""
        if self.engine is not None:
            return

        url = database_url or get_settings().database_url
        self.engine = create_engine(url, **_engine_options(url))
        if url.startswith("sqlite"):
            enable_sqlite_foreign_keys(self.engine)

        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    def _require_engine(self) -> Engine:
        if self.engine is None:
            raise RuntimeError("Database not initialized. Call db.initialize() first.")
        return self.engine

    def create_all_tables(self) -> None:
        """Create every table registered on Base.metadata."""
        from . import models  # noqa: F401

        Base.metadata.create_all(bind=self._require_engine())

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Session that commits on success and rolls back on error."""
        self._require_engine()
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def health_check(self) -> dict:
        """
        Ping the database.

        Returns:
            {"healthy": bool, "latency_ms": float, "error": str | None}
        """
        if self.engine is None:
            return {"healthy": False, "latency_ms": 0, "error": "Database not initialized"}

        start = time.perf_counter()
        error = None
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as e:
            error = str(e)
        latency = round((time.perf_counter() - start) * 1000, 2)
        return {"healthy": error is None, "latency_ms": latency, "error": error}


db = DatabaseManager()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a request-scoped session."""
    with db.session() as session:
        yield session


__all__ = ["Base", "DatabaseManager", "db", "enable_sqlite_foreign_keys", "get_db"]
