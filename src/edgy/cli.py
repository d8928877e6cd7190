"""Root CLI group for edgy with global flags and command registration."""

from __future__ import annotations

import click

from edgy import __version__
from edgy.commands import register_commands
from edgy.commands._context import AppContext
from edgy.config.settings import EdgySettings
from edgy.errors import InvalidArgument


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="edgy")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--db", "database_url", default=None, help="Database URL (overrides config).")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    database_url: str | None,
) -> None:
    """edgy — use a relational database as a graph store."""
    ctx.ensure_object(dict)
    try:
        settings = EdgySettings.from_cli(
            config_path=config_path,
            database_url=database_url,
            json_output=json_output,
            verbose=verbose,
            log_json=log_json,
        )
    except InvalidArgument as exc:
        raise click.UsageError(str(exc)) from exc
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
