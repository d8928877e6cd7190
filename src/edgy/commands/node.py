"""Command group: node management."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from edgy.commands._base import EdgyGroup, parse_properties, property_options
from edgy.services.node import NodeService

if TYPE_CHECKING:
    from edgy.commands._context import AppContext

_NODE_EXAMPLES = """\
  edgy node add social person -p name=ada -p age=36
  edgy node list social --type person
  edgy node list social -p name=ada
  edgy node update 7 --props '{"name": "ada", "tags": ["math"]}'
  edgy node delete 7 8"""


@click.group(cls=EdgyGroup, examples=_NODE_EXAMPLES)
@click.pass_obj
def node(app: AppContext) -> None:
    """Add, update, list and delete nodes."""


@node.command(
    examples="""\
  edgy node add social person -p name=ada
  edgy node add social city --props '{"name": "paris", "pop": 2100000}'"""
)
@click.argument("graph_name")
@click.argument("node_type")
@property_options
@click.pass_obj
def add(
    app: AppContext,
    graph_name: str,
    node_type: str,
    props: tuple[str, ...],
    props_json: str | None,
) -> None:
    """Add a node of NODE_TYPE to GRAPH_NAME."""
    properties = parse_properties(props, props_json)
    app.emit(NodeService(app.store).add(graph_name, node_type, properties))


@node.command(examples="  edgy node update 7 -p name=grace")
@click.argument("node_id", type=int)
@property_options
@click.pass_obj
def update(app: AppContext, node_id: int, props: tuple[str, ...], props_json: str | None) -> None:
    """Replace the properties of a node."""
    properties = parse_properties(props, props_json)
    app.emit(NodeService(app.store).update(node_id, properties))


@node.command(examples="  edgy node delete 7 8 9")
@click.argument("node_ids", nargs=-1, required=True, type=int)
@click.pass_obj
def delete(app: AppContext, node_ids: tuple[int, ...]) -> None:
    """Delete nodes; their edges are removed too."""
    app.emit(NodeService(app.store).delete(list(node_ids)))


@node.command("list", examples="  edgy node list social --type person -p name=ada")
@click.argument("graph_name")
@click.option("--type", "node_type", default=None, help="Only nodes of this type.")
@property_options
@click.pass_obj
def list_cmd(
    app: AppContext,
    graph_name: str,
    node_type: str | None,
    props: tuple[str, ...],
    props_json: str | None,
) -> None:
    """List nodes, filtered by type and contained properties."""
    properties = parse_properties(props, props_json) or None
    app.emit(
        NodeService(app.store).list_nodes(graph_name, node_type=node_type, properties=properties)
    )
