"""Alembic migrations for the edgy tables.

The Alembic config is built in code; there is no alembic.ini. Commands
borrow a connection from the caller's engine and hand it to ``env.py``
through ``Config.attributes``. A config carrying only a URL makes
``env.py`` open (and dispose) an engine of its own.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import Script, ScriptDirectory
from sqlalchemy.engine import Connection, Engine

SCRIPT_LOCATION = Path(__file__).parent


def build_config(url: str | None = None, *, connection: Connection | None = None) -> Config:
    """Alembic config for the edgy scripts, bound to *connection* or *url*."""
    cfg = Config()
    cfg.set_main_option("script_location", str(SCRIPT_LOCATION))
    if url is not None:
        # ConfigParser interpolation eats bare % (common in escaped passwords)
        cfg.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    if connection is not None:
        cfg.attributes["connection"] = connection
    return cfg


def head_revision() -> str | None:
    return ScriptDirectory.from_config(build_config()).get_current_head()


def current_revision(engine: Engine) -> str | None:
    """Revision recorded in ``alembic_version``; None for an unversioned database."""
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def pending_revisions(current: str | None) -> list[Script]:
    """Revisions above *current*, newest first."""
    pending: list[Script] = []
    for script in ScriptDirectory.from_config(build_config()).walk_revisions():
        if script.revision == current:
            break
        pending.append(script)
    return pending


def _run(engine: Engine, action: Callable[[Config, str], None], target: str) -> None:
    with engine.begin() as connection:
        action(build_config(connection=connection), target)


def upgrade_head(engine: Engine) -> None:
    """Apply every pending migration."""
    _run(engine, command.upgrade, "head")


def stamp_head(engine: Engine) -> None:
    """Record head in ``alembic_version`` without running any migration.

    Used for tables created straight from the metadata, which already
    match the latest revision.
    """
    _run(engine, command.stamp, "head")


def downgrade_base(engine: Engine) -> None:
    """Revert every migration, dropping the edgy tables."""
    _run(engine, command.downgrade, "base")
