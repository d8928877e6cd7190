"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy store initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from edgy.output.formatters import format_result

if TYPE_CHECKING:
    from edgy.config.settings import EdgySettings
    from edgy.infrastructure.store import GraphStore
    from edgy.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The store is opened on first use so ``--help`` and ``--version``
    never touch the database.
    """

    def __init__(self, settings: EdgySettings) -> None:
        self.settings = settings
        self._store: GraphStore | None = None

        from edgy.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from edgy.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> GraphStore:
        """The graph store (opened lazily, tables created if missing)."""
        if self._store is None:
            self._store = self.open_store(create_schema=True)
        return self._store

    def open_store(self, *, create_schema: bool) -> GraphStore:
        """Open a store without touching the cached one (used by migrations)."""
        from edgy.infrastructure.store import GraphStore

        return GraphStore.from_settings(self.settings, create_schema=create_schema)

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(result, json_output=self.settings.json_output)
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
