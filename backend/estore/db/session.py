"""
SQLAlchemy engine and session factory for SQLite or Postgres.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from estore.core.config import Settings, get_settings

Base = declarative_base()

_engine: Optional[Engine] = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE clauses unless the pragma is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings) -> Engine:
    """Create an engine whose lock waits are bounded by settings.lock_timeout_seconds."""
    if settings.is_sqlite:
        kwargs = {
            "connect_args": {
                "check_same_thread": False,
                "timeout": settings.lock_timeout_seconds,
            },
        }
        if settings.is_in_memory:
            # one shared connection, otherwise every checkout sees an empty database
            kwargs["poolclass"] = StaticPool
        engine = create_engine(settings.database_url, echo=settings.echo_sql, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    lock_timeout_ms = int(settings.lock_timeout_seconds * 1000)
    return create_engine(
        settings.database_url,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_timeout=settings.lock_timeout_seconds,
        pool_pre_ping=True,
        echo=settings.echo_sql,
        connect_args={"options": f"-c lock_timeout={lock_timeout_ms}"},
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = build_engine(get_settings())
    return _engine


def init_schema(engine: Optional[Engine] = None) -> None:
    """Create every table registered on Base (idempotent)."""
    import estore.models  # noqa: F401  registers the mapped classes

    Base.metadata.create_all(bind=engine or get_engine())


@contextmanager
def get_db(factory: sessionmaker) -> Generator[Session, None, None]:
    """Context manager for a single transaction: commit on success, rollback on error."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
