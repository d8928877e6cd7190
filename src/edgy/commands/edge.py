"""Command group: edge management."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from edgy.commands._base import EdgyGroup, parse_properties, property_options
from edgy.services.edge import EdgeService

if TYPE_CHECKING:
    from edgy.commands._context import AppContext

_EDGE_EXAMPLES = """\
  edgy edge add social knows 1 2 -p since=2019
  edgy edge list social --type knows
  edgy edge update 4 -p since=2020
  edgy edge delete 4"""


@click.group(cls=EdgyGroup, examples=_EDGE_EXAMPLES)
@click.pass_obj
def edge(app: AppContext) -> None:
    """Add, update, list and delete edges."""


@edge.command(examples="  edgy edge add social knows 1 2 -p strength=strong")
@click.argument("graph_name")
@click.argument("edge_type")
@click.argument("from_id", type=int)
@click.argument("to_id", type=int)
@property_options
@click.pass_obj
def add(
    app: AppContext,
    graph_name: str,
    edge_type: str,
    from_id: int,
    to_id: int,
    props: tuple[str, ...],
    props_json: str | None,
) -> None:
    """Connect FROM_ID to TO_ID with an edge of EDGE_TYPE."""
    properties = parse_properties(props, props_json)
    app.emit(EdgeService(app.store).add(graph_name, edge_type, from_id, to_id, properties))


@edge.command(examples="  edgy edge update 4 --props '{\"strength\": \"weak\"}'")
@click.argument("edge_id", type=int)
@property_options
@click.pass_obj
def update(app: AppContext, edge_id: int, props: tuple[str, ...], props_json: str | None) -> None:
    """Replace the properties of an edge."""
    properties = parse_properties(props, props_json)
    app.emit(EdgeService(app.store).update(edge_id, properties))


@edge.command(examples="  edgy edge delete 4 5")
@click.argument("edge_ids", nargs=-1, required=True, type=int)
@click.pass_obj
def delete(app: AppContext, edge_ids: tuple[int, ...]) -> None:
    """Delete edges."""
    app.emit(EdgeService(app.store).delete(list(edge_ids)))


@edge.command("list", examples="  edgy edge list social --type knows -p strength=strong")
@click.argument("graph_name")
@click.option("--type", "edge_type", default=None, help="Only edges of this type.")
@property_options
@click.pass_obj
def list_cmd(
    app: AppContext,
    graph_name: str,
    edge_type: str | None,
    props: tuple[str, ...],
    props_json: str | None,
) -> None:
    """List edges, filtered by type and contained properties."""
    properties = parse_properties(props, props_json) or None
    app.emit(
        EdgeService(app.store).list_edges(graph_name, edge_type=edge_type, properties=properties)
    )
