"""Read-side repository: graph lookups and filtered node/edge fetches.

Every fetch is a single SELECT built from domain filter clauses. Edge
fetches join the endpoint rows they need (aliased ``edgy_nodes``) in the
same statement so traversal never issues one query per endpoint.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.engine import Engine

from edgy.domain.filters import (
    Clause,
    Direction,
    GraphScope,
    connectivity_clause,
    endpoints_to_load,
    parse_direction,
    property_clauses,
)
from edgy.domain.records import EdgeRecord, GraphRecord, NodeRecord
from edgy.errors import InvalidArgument
from edgy.infrastructure.database.filters import apply_clauses
from edgy.infrastructure.database.schema import edges, graphs, nodes

_NODE_COLUMNS = ("id", "graph_id", "type", "properties", "inserted_at", "updated_at")


@dataclass
class LoadedGraph:
    """A graph together with all of its nodes and edges."""

    graph: GraphRecord
    nodes: list[NodeRecord] = field(default_factory=list)
    edges: list[EdgeRecord] = field(default_factory=list)


def graph_id_of(graph: GraphRecord | int) -> int:
    """Accept a graph record or a bare id."""
    if isinstance(graph, GraphRecord):
        return graph.id
    if isinstance(graph, int) and not isinstance(graph, bool):
        return graph
    raise InvalidArgument(f"Expected a graph or graph id, got {graph!r}")


def as_node_list(value: NodeRecord | Iterable[NodeRecord]) -> list[NodeRecord]:
    """Accept a single node or any iterable of nodes."""
    if isinstance(value, NodeRecord):
        return [value]
    result = list(value)
    for item in result:
        if not isinstance(item, NodeRecord):
            raise InvalidArgument(f"Expected nodes, got {item!r}")
    return result


def _edge_select(load: tuple[str, ...]) -> Select[Any]:
    """SELECT edges joined with the endpoint rows named in *load*."""
    columns: list[Any] = [edges]
    joined: Any = edges
    for side in load:
        endpoint = nodes.alias(f"{side}_node")
        columns.extend(endpoint.c[name].label(f"{side}__{name}") for name in _NODE_COLUMNS)
        joined = joined.join(endpoint, edges.c[f"{side}_id"] == endpoint.c.id)
    return select(*columns).select_from(joined)


def _edge_from_row(row: Mapping[str, Any], load: tuple[str, ...]) -> EdgeRecord:
    data: dict[str, Any] = {name: row[name] for name in edges.c.keys()}
    for side in load:
        data[f"{side}_node"] = NodeRecord.model_validate(
            {name: row[f"{side}__{name}"] for name in _NODE_COLUMNS}
        )
    return EdgeRecord.model_validate(data)


class QueryRepository:
    """Encapsulates SQL for read-side graph operations."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @property
    def dialect(self) -> str:
        return self._engine.dialect.name

    # ------------------------------------------------------------------
    # Graphs
    # ------------------------------------------------------------------

    def get_graph(self, name: str) -> GraphRecord | None:
        """Fetch a graph by its unique name."""
        stmt = select(graphs).where(graphs.c.name == name)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return GraphRecord.model_validate(dict(row)) if row is not None else None

    def list_graphs(self) -> list[GraphRecord]:
        stmt = select(graphs).order_by(graphs.c.name)
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [GraphRecord.model_validate(dict(row)) for row in rows]

    def count_entities(self, graph: GraphRecord | int) -> dict[str, int]:
        """Node and edge counts for one graph."""
        graph_id = graph_id_of(graph)
        with self._engine.connect() as conn:
            node_count = conn.execute(
                select(func.count(nodes.c.id)).where(nodes.c.graph_id == graph_id)
            ).scalar_one()
            edge_count = conn.execute(
                select(func.count(edges.c.id)).where(edges.c.graph_id == graph_id)
            ).scalar_one()
        return {"nodes": int(node_count), "edges": int(edge_count)}

    def load_graph(self, name: str) -> LoadedGraph | None:
        """Load a graph with every node and edge it owns."""
        graph = self.get_graph(name)
        if graph is None:
            return None
        return LoadedGraph(
            graph=graph,
            nodes=self.fetch_nodes(graph),
            edges=self.fetch_edges(graph=graph),
        )

    # ------------------------------------------------------------------
    # Nodes and edges by id
    # ------------------------------------------------------------------

    def get_node(self, node_id: int) -> NodeRecord | None:
        stmt = select(nodes).where(nodes.c.id == node_id)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return NodeRecord.model_validate(dict(row)) if row is not None else None

    def get_edge(self, edge_id: int) -> EdgeRecord | None:
        """Fetch one edge with both endpoints loaded."""
        load = endpoints_to_load(Direction.EITHER)
        stmt = _edge_select(load).where(edges.c.id == edge_id)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return _edge_from_row(row, load) if row is not None else None

    # ------------------------------------------------------------------
    # Filtered fetches
    # ------------------------------------------------------------------

    def fetch_nodes(
        self,
        graph: GraphRecord | int,
        *,
        type: str | None = None,  # noqa: A002
        properties: Mapping[str, Any] | None = None,
    ) -> list[NodeRecord]:
        """Nodes of *graph*, optionally filtered by type and property containment."""
        clauses: list[Clause] = [GraphScope(graph_id_of(graph))]
        clauses.extend(property_clauses(type, properties))
        stmt = apply_clauses(select(nodes), clauses, nodes, self.dialect)

        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [NodeRecord.model_validate(dict(row)) for row in rows]

    def fetch_edges(
        self,
        anchors: NodeRecord | Iterable[NodeRecord] | None = None,
        *,
        type: str | None = None,  # noqa: A002
        properties: Mapping[str, Any] | None = None,
        direction: Direction | str | None = None,
        graph: GraphRecord | int | None = None,
    ) -> list[EdgeRecord]:
        """Edges of one graph, optionally restricted to those touching *anchors*.

        The graph is *graph* when given, otherwise the first anchor's graph.
        With anchors, the endpoint(s) on the far side of *direction* are
        loaded onto each record (``from_node`` for incoming, ``to_node``
        for outgoing, both for either).

        Raises:
            InvalidArgument: bad direction, malformed filter, or neither
                anchors nor graph supplied.
            UnsupportedFilter: the dialect cannot evaluate the property filter.
        """
        parsed = parse_direction(direction)
        anchor_list = as_node_list(anchors) if anchors is not None else None

        if graph is not None:
            graph_id = graph_id_of(graph)
        elif anchor_list:
            graph_id = anchor_list[0].graph_id
        else:
            raise InvalidArgument("fetch_edges needs anchor nodes or an explicit graph")

        clauses: list[Clause] = [GraphScope(graph_id)]
        clauses.extend(property_clauses(type, properties))
        load: tuple[str, ...] = ()
        if anchor_list is not None:
            clauses.append(connectivity_clause(parsed, (node.id for node in anchor_list)))
            load = endpoints_to_load(parsed)

        stmt = apply_clauses(_edge_select(load), clauses, edges, self.dialect)
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [_edge_from_row(row, load) for row in rows]
