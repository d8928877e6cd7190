"""Alembic environment for the edgy tables (online mode only)."""

from __future__ import annotations

from alembic import context
from sqlalchemy.engine import Connection

from edgy.infrastructure.database.engine import create_db_engine
from edgy.infrastructure.database.schema import metadata


def run_on(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=metadata,
        # SQLite cannot ALTER most constraints in place
        render_as_batch=connection.dialect.name == "sqlite",
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations() -> None:
    borrowed = context.config.attributes.get("connection")
    if borrowed is not None:
        run_on(borrowed)
        return

    url = context.config.get_main_option("sqlalchemy.url")
    if not url:
        raise RuntimeError("edgy migrations need a connection or sqlalchemy.url")
    engine = create_db_engine(url)
    try:
        with engine.begin() as connection:
            run_on(connection)
    finally:
        engine.dispose()


if context.is_offline_mode():
    raise RuntimeError("edgy migrations do not support offline (--sql) mode")
run_migrations()
