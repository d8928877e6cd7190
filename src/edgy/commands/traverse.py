"""Command: edge traversal from seed nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from edgy.commands._base import EdgyCommand, parse_properties, property_options

if TYPE_CHECKING:
    from edgy.commands._context import AppContext

_DIRECTIONS = ["outgoing", "incoming", "either", "from", "to"]


@click.command(
    cls=EdgyCommand,
    examples="""\
  edgy traverse 1
  edgy traverse 1 --direction outgoing --recursive
  edgy traverse 1 2 --recursive --limit 2 --type knows
  edgy --json traverse 1 -r -p strength=strong""",
)
@click.argument("node_ids", nargs=-1, required=True, type=int)
@click.option(
    "-d",
    "--direction",
    type=click.Choice(_DIRECTIONS),
    default="either",
    show_default=True,
    help="Which edges to follow from each node.",
)
@click.option("-r", "--recursive", is_flag=True, help="Keep expanding from reached nodes.")
@click.option(
    "--limit",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum hops when recursive (0 = unbounded).",
)
@click.option("--type", "edge_type", default=None, help="Only follow edges of this type.")
@property_options
@click.pass_obj
def traverse(
    app: AppContext,
    node_ids: tuple[int, ...],
    direction: str,
    recursive: bool,
    limit: int | None,
    edge_type: str | None,
    props: tuple[str, ...],
    props_json: str | None,
) -> None:
    """Collect the edges connected to NODE_IDS."""
    from edgy.services.edge import EdgeService

    properties = parse_properties(props, props_json) or None
    app.emit(
        EdgeService(app.store).traverse(
            list(node_ids),
            edge_type=edge_type,
            properties=properties,
            direction=direction,
            recursive=recursive,
            limit=limit,
        )
    )
