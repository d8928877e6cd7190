"""GraphEngine — fold a stored graph into a NetworkX MultiDiGraph.

Built per call, no cross-call cache. One SELECT loads the nodes, one
loads the edges. Every node becomes a vertex (so isolated nodes are
visible to algorithms) and every edge becomes one arc keyed by its id,
so parallel edges and cycles survive intact.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import networkx as nx

from edgy.infrastructure.repositories.query import QueryRepository

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from edgy.domain.records import EdgeRecord, GraphRecord, NodeRecord

type _Graph = nx.MultiDiGraph


@dataclass
class MaterializedGraph:
    """In-memory view of one stored graph.

    Attributes:
        digraph: Vertices are node ids, arcs are keyed by edge id.
        nodes: Node records by id.
        edges: Edge records by id.
    """

    digraph: _Graph
    nodes: dict[int, NodeRecord]
    edges: dict[int, EdgeRecord]


class GraphEngine:
    """Materializes stored graphs into NetworkX structures."""

    def __init__(self, db: Engine) -> None:
        self._queries = QueryRepository(db)

    def materialize(self, graph: GraphRecord) -> MaterializedGraph:
        """Load every node and edge of *graph* and build the MultiDiGraph.

        No filtering happens here; callers wanting a subset should query
        through :class:`QueryRepository` instead.
        """
        node_map = {node.id: node for node in self._queries.fetch_nodes(graph)}
        edge_map = {edge.id: edge for edge in self._queries.fetch_edges(graph=graph)}

        g: _Graph = nx.MultiDiGraph(graph_id=graph.id, name=graph.name)
        for node_id, node in node_map.items():
            g.add_node(node_id, record=node, type=node.type, properties=node.properties)

        for edge_id, edge in edge_map.items():
            g.add_edge(
                edge.from_id,
                edge.to_id,
                key=edge_id,
                record=edge,
                type=edge.type,
                properties=edge.properties,
            )
        return MaterializedGraph(digraph=g, nodes=node_map, edges=edge_map)
