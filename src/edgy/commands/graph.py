"""Command group: graph lifecycle and export."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from edgy.commands._base import EdgyGroup
from edgy.services.graph import GraphService

if TYPE_CHECKING:
    from edgy.commands._context import AppContext

_GRAPH_EXAMPLES = """\
  edgy graph create social
  edgy graph list
  edgy graph show social
  edgy graph rename social people
  edgy --json graph export people
  edgy graph delete people"""


@click.group(cls=EdgyGroup, examples=_GRAPH_EXAMPLES)
@click.pass_obj
def graph(app: AppContext) -> None:
    """Create, inspect and remove named graphs."""


@graph.command(examples="  edgy graph create social")
@click.argument("name")
@click.pass_obj
def create(app: AppContext, name: str) -> None:
    """Create a new, empty graph."""
    app.emit(GraphService(app.store).create(name))


@graph.command(examples="  edgy graph rename social people")
@click.argument("name")
@click.argument("new_name")
@click.pass_obj
def rename(app: AppContext, name: str, new_name: str) -> None:
    """Rename a graph."""
    app.emit(GraphService(app.store).rename(name, new_name))


@graph.command(
    examples="""\
  edgy graph delete social
  edgy graph delete social --yes"""
)
@click.argument("name")
@click.option("-y", "--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
def delete(app: AppContext, name: str, yes: bool) -> None:
    """Delete a graph with all of its nodes and edges."""
    if not yes and not app.settings.json_output:
        click.confirm(f"Delete graph '{name}' and everything in it?", abort=True)
    app.emit(GraphService(app.store).delete(name))


@graph.command("list", examples="  edgy --json graph list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List every graph by name."""
    app.emit(GraphService(app.store).list_graphs())


@graph.command(examples="  edgy graph show social")
@click.argument("name")
@click.pass_obj
def show(app: AppContext, name: str) -> None:
    """Summarize a graph: counts and the types in use."""
    app.emit(GraphService(app.store).show(name))


@graph.command(examples="  edgy --json graph export social > social.json")
@click.argument("name")
@click.pass_obj
def export(app: AppContext, name: str) -> None:
    """Dump every node and edge of a graph."""
    app.emit(GraphService(app.store).export(name))
