"""CLI subcommands.

Each entry below names a module and the click command it defines;
:func:`register_commands` attaches them to the root group in this order.
"""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click

_COMMANDS: tuple[tuple[str, str], ...] = (
    ("graph", "graph"),
    ("node", "node"),
    ("edge", "edge"),
    ("traverse", "traverse"),
    ("init_cmd", "init_cmd"),
    ("upgrade", "upgrade"),
)


def register_commands(cli: click.Group) -> None:
    for module_name, attr in _COMMANDS:
        module = import_module(f"{__name__}.{module_name}")
        cli.add_command(getattr(module, attr))
