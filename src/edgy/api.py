"""Edgy — the programmatic surface for treating a relational database as a graph store.

Usage::

    store = GraphStore.from_url("postgresql+psycopg://localhost/app")
    db = Edgy(store)

    graph = db.create_graph("demo")
    a = db.add_node(graph, "node", {"name": "a"})
    b = db.add_node(graph, "node", {"name": "b"})
    c = db.add_node(graph, "node", {"name": "c"})
    db.add_edge(graph, "link", {"name": "a -> b", "strength": "strong"}, a, b)
    db.add_edge(graph, "link", {"name": "b -> c", "strength": "weak"}, b, c)

    db.edges([a], direction="outgoing", recursive=True)
    db.edges([a], properties={"strength": "strong"})

Every query accepts ``type`` (exact match) and ``properties``
(containment) filters. The store is injected; :meth:`Edgy.from_settings`
resolves one from configuration when the caller has none.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from edgy.domain.filters import Direction, parse_direction
from edgy.domain.records import (
    EdgeRecord,
    EdgeSpec,
    GraphRecord,
    NodeRecord,
    NodeSpec,
    validate_name,
)
from edgy.domain.traversal import expand
from edgy.infrastructure.repositories.query import as_node_list
from edgy.infrastructure.store import GraphStore

if TYPE_CHECKING:
    from edgy.config.settings import EdgySettings
    from edgy.infrastructure.graph.engine import MaterializedGraph
    from edgy.infrastructure.repositories.query import LoadedGraph


class Edgy:
    """Graph operations over one injected :class:`GraphStore`."""

    def __init__(self, store: GraphStore) -> None:
        self._store = store

    @classmethod
    def from_settings(cls, settings: EdgySettings | None = None) -> Edgy:
        """Build an instance on the store named by *settings*."""
        return cls(GraphStore.from_settings(settings))

    @property
    def store(self) -> GraphStore:
        return self._store

    # ------------------------------------------------------------------
    # Graphs
    # ------------------------------------------------------------------

    def create_graph(self, name: str) -> GraphRecord:
        """Create a new graph. Names are unique because graphs are addressed by name."""
        return self._store.mutations.create_graph(name)

    def get_graph(self, name: str) -> GraphRecord | None:
        return self._store.queries.get_graph(validate_name(name))

    def list_graphs(self) -> list[GraphRecord]:
        return self._store.queries.list_graphs()

    def delete_graph(self, name: str) -> int:
        """Delete a graph by name together with all of its nodes and edges."""
        return self._store.mutations.delete_graph(validate_name(name))

    def rename_graph(self, graph: GraphRecord, name: str) -> GraphRecord:
        return self._store.mutations.rename_graph(graph, name)

    def load_graph(self, name: str) -> LoadedGraph | None:
        """Load a full graph (every node and edge) into memory."""
        return self._store.queries.load_graph(validate_name(name))

    def to_digraph(self, graph: GraphRecord) -> MaterializedGraph:
        """Convert a stored graph into a NetworkX MultiDiGraph plus id lookups."""
        return self._store.graph.materialize(graph)

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def add_node(
        self,
        graph: GraphRecord,
        type: str,  # noqa: A002
        properties: Mapping[str, Any] | None = None,
    ) -> NodeRecord:
        return self._store.mutations.add_node(graph, type, properties)

    def add_nodes(
        self,
        graph: GraphRecord,
        nodes: Iterable[NodeSpec | tuple[str, Mapping[str, Any]]],
    ) -> list[NodeRecord]:
        """Add many ``(type, properties)`` nodes in a single transaction."""
        return self._store.mutations.add_nodes(graph, nodes)

    def get_nodes(
        self,
        graph: GraphRecord,
        *,
        type: str | None = None,  # noqa: A002
        properties: Mapping[str, Any] | None = None,
    ) -> list[NodeRecord]:
        """Nodes of *graph*, optionally filtered by type and properties."""
        return self._store.queries.fetch_nodes(graph, type=type, properties=properties)

    def update_node(self, node: NodeRecord, properties: Mapping[str, Any]) -> NodeRecord:
        """Replace the properties of a node."""
        return self._store.mutations.update_node(node, properties)

    def delete_node(self, node: NodeRecord) -> int:
        """Delete a node and every edge connected to it."""
        return self._store.mutations.delete_node(node)

    def delete_nodes(self, nodes: Iterable[NodeRecord]) -> int:
        return self._store.mutations.delete_nodes(nodes)

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def add_edge(
        self,
        graph: GraphRecord,
        type: str,  # noqa: A002
        properties: Mapping[str, Any] | None,
        from_node: NodeRecord,
        to_node: NodeRecord,
    ) -> EdgeRecord:
        """Add an edge connecting two distinct nodes of *graph*."""
        return self._store.mutations.add_edge(graph, type, properties, from_node, to_node)

    def add_edges(
        self,
        graph: GraphRecord,
        edges: Iterable[EdgeSpec | tuple[str, Mapping[str, Any], NodeRecord, NodeRecord]],
    ) -> list[EdgeRecord]:
        """Add ``(type, properties, from_node, to_node)`` edges in a single transaction."""
        return self._store.mutations.add_edges(graph, edges)

    def update_edge(self, edge: EdgeRecord, properties: Mapping[str, Any]) -> EdgeRecord:
        """Replace the properties of an edge."""
        return self._store.mutations.update_edge(edge, properties)

    def delete_edge(self, edge: EdgeRecord) -> int:
        return self._store.mutations.delete_edge(edge)

    def delete_edges(self, edges: Iterable[EdgeRecord]) -> int:
        return self._store.mutations.delete_edges(edges)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def edges(
        self,
        nodes: NodeRecord | Iterable[NodeRecord],
        *,
        type: str | None = None,  # noqa: A002
        properties: Mapping[str, Any] | None = None,
        direction: Direction | str | None = None,
        recursive: bool = False,
        limit: int | None = None,
    ) -> set[EdgeRecord]:
        """Fetch the edges connected to the node or nodes.

        Args:
            nodes: Seed node(s); the first one decides the graph.
            type: Only edges of this type.
            properties: Only edges whose properties contain these pairs.
            direction: ``outgoing``, ``incoming`` or ``either`` (default).
            recursive: Keep following edges until no new node is reached
                or *limit* hops have been expanded.
            limit: Maximum number of hops for a recursive traversal.
                ``None`` falls back to the configured default; 0 or less
                means unbounded.
        """
        parsed = parse_direction(direction)
        seeds = as_node_list(nodes)
        if limit is None and self._store.settings is not None:
            limit = self._store.settings.traversal.default_depth_limit
        queries = self._store.queries

        def fetch_hop(frontier: Iterable[NodeRecord]) -> list[EdgeRecord]:
            return queries.fetch_edges(
                frontier,
                type=type,
                properties=properties,
                direction=parsed,
            )

        return expand(
            seeds,
            fetch_hop,
            direction=parsed,
            depth_limit=limit,
            recursive=recursive,
        )

    def traverse(
        self,
        seeds: NodeRecord | Iterable[NodeRecord],
        *,
        type: str | None = None,  # noqa: A002
        properties: Mapping[str, Any] | None = None,
        direction: Direction | str | None = None,
        depth_limit: int | None = None,
        recursive: bool = False,
    ) -> set[EdgeRecord]:
        """Expand from *seeds* for at most *depth_limit* hops.

        A positive *depth_limit* implies a recursive expansion; without
        one, *recursive* decides between a single hop and an expansion
        that runs until no new node is reached.
        """
        if depth_limit is not None and depth_limit > 0:
            recursive = True
        return self.edges(
            seeds,
            type=type,
            properties=properties,
            direction=direction,
            recursive=recursive,
            limit=depth_limit,
        )

    def incoming_edges(
        self,
        nodes: NodeRecord | Iterable[NodeRecord],
        **opts: Any,
    ) -> set[EdgeRecord]:
        """Edges coming into the node(s). Accepts the options of :meth:`edges`."""
        return self.edges(nodes, direction=Direction.INCOMING, **opts)

    def outgoing_edges(
        self,
        nodes: NodeRecord | Iterable[NodeRecord],
        **opts: Any,
    ) -> set[EdgeRecord]:
        """Edges leaving the node(s). Accepts the options of :meth:`edges`."""
        return self.edges(nodes, direction=Direction.OUTGOING, **opts)
