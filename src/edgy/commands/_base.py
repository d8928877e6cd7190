"""Custom Click base classes and shared option parsing.

EdgyCommand and EdgyGroup accept an ``examples`` parameter: when
``--examples`` is passed, the command prints usage examples and exits,
keeping ``--help`` concise.
"""

from __future__ import annotations

import json
from typing import Any

import click


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class EdgyCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class EdgyGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Sets ``command_class = EdgyCommand`` so all subcommands automatically
    accept the ``examples`` parameter without explicit ``cls=`` each time.
    """

    command_class = EdgyCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def parse_properties(pairs: tuple[str, ...], raw_json: str | None = None) -> dict[str, Any]:
    """Merge ``--props`` JSON and repeated ``-p key=value`` options.

    Values are decoded as JSON when possible (``-p weight=3`` gives an
    int, ``-p tags='["a"]'`` a list) and kept as strings otherwise.
    """
    properties: dict[str, Any] = {}
    if raw_json:
        try:
            decoded = json.loads(raw_json)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"not valid JSON: {exc}", param_hint="--props") from exc
        if not isinstance(decoded, dict):
            raise click.BadParameter("must be a JSON object", param_hint="--props")
        properties.update(decoded)

    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="-p")
        try:
            properties[key] = json.loads(value)
        except json.JSONDecodeError:
            properties[key] = value
    return properties


def property_options(func: Any) -> Any:
    """Decorate a command with the ``-p/--prop`` and ``--props`` options."""
    func = click.option(
        "--props",
        "props_json",
        default=None,
        help="Properties as a JSON object.",
    )(func)
    return click.option(
        "-p",
        "--prop",
        "props",
        multiple=True,
        metavar="KEY=VALUE",
        help="Property (repeatable); VALUE is parsed as JSON when possible.",
    )(func)
