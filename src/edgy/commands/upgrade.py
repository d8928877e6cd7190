"""Command: database schema migration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from edgy.commands._base import EdgyCommand

if TYPE_CHECKING:
    from edgy.commands._context import AppContext


@click.command(
    cls=EdgyCommand,
    examples="""\
  edgy upgrade
  edgy upgrade --check
  edgy --json upgrade --check""",
)
@click.option(
    "--check", "check_only", is_flag=True, help="Show pending migrations without applying."
)
@click.pass_obj
def upgrade(app: AppContext, check_only: bool) -> None:
    """Run pending database migrations."""
    from edgy.services.upgrade import UpgradeService

    with app.open_store(create_schema=False) as store:
        svc = UpgradeService(store)
        result = svc.check_pending() if check_only else svc.apply()
    app.emit(result)
