"""Database engine setup.

Any SQLAlchemy URL works. SQLite connections get ``PRAGMA
foreign_keys=ON`` (cascading deletes depend on it) and WAL journaling for
file-backed databases. PostgreSQL is the dialect with native JSONB
containment; SQLite evaluates containment through its JSON1 functions.

SQLAlchemy Core (not ORM) is used: every operation is a short
request-scoped round trip, so there is nothing to gain from sessions or
identity maps.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url

from edgy.infrastructure.database.schema import metadata


def _set_sqlite_pragma(dbapi_conn: Any, _: Any, *, wal: bool) -> None:
    cursor = dbapi_conn.cursor()
    if wal:
        cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine for *url*, enabling foreign keys on SQLite."""
    parsed = make_url(url)
    engine = create_engine(parsed, echo=echo)

    if parsed.get_backend_name() == "sqlite":
        wal = parsed.database not in (None, "", ":memory:")

        @event.listens_for(engine, "connect")
        def _on_connect(dbapi_conn: Any, record: Any) -> None:
            _set_sqlite_pragma(dbapi_conn, record, wal=wal)

    return engine


def init_database(engine: Engine) -> Engine:
    """Create the edgy tables and indexes if they do not exist.

    Idempotent: safe to call on an existing database.
    """
    metadata.create_all(engine)
    return engine
