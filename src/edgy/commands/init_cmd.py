"""Command: database initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from edgy.commands._base import EdgyCommand

if TYPE_CHECKING:
    from edgy.commands._context import AppContext


@click.command(
    "init",
    cls=EdgyCommand,
    examples="""\
  edgy init
  edgy --db sqlite:///graphs.db init
  edgy --db postgresql+psycopg://localhost/app init""",
)
@click.pass_obj
def init_cmd(app: AppContext) -> None:
    """Create the edgy tables and stamp them at the latest migration."""
    from edgy.services.upgrade import UpgradeService

    with app.open_store(create_schema=False) as store:
        result = UpgradeService(store).init()
    app.emit(result)
