"""GraphService — graph lifecycle, summaries, and whole-graph export."""

from __future__ import annotations

from typing import Any

from edgy.errors import EdgyError, NotFound
from edgy.services.base import BaseService, edge_item, graph_item, node_item
from edgy.services.result import ServiceResult
from edgy.services.telemetry import trace_span, traced


class GraphService(BaseService):
    """Handles creating, renaming, deleting and exporting graphs."""

    @traced
    def create(self, name: str) -> ServiceResult:
        """Create a graph; fails with ``DUPLICATE_NAME`` if the name is taken."""
        try:
            graph = self._edgy.create_graph(name)
        except EdgyError as exc:
            return self._failure("create_graph", exc, name=name)
        return ServiceResult(ok=True, op="create_graph", data=graph_item(graph))

    @traced
    def rename(self, name: str, new_name: str) -> ServiceResult:
        try:
            graph = self._edgy.rename_graph(self._require_graph(name), new_name)
        except EdgyError as exc:
            return self._failure("rename_graph", exc, name=name, new_name=new_name)
        return ServiceResult(
            ok=True,
            op="rename_graph",
            data=graph_item(graph, previous_name=name),
        )

    @traced
    def delete(self, name: str) -> ServiceResult:
        """Delete a graph; its nodes and edges go with it."""
        try:
            graph = self._require_graph(name)
            counts = self._store.queries.count_entities(graph)
            deleted = self._edgy.delete_graph(name)
        except EdgyError as exc:
            return self._failure("delete_graph", exc, name=name)
        if deleted == 0:
            # Removed by someone else between the lookup and the delete.
            return self._failure("delete_graph", NotFound("graph", name), name=name)
        return ServiceResult(
            ok=True,
            op="delete_graph",
            data={
                "name": name,
                "deleted_nodes": counts["nodes"],
                "deleted_edges": counts["edges"],
            },
        )

    @traced
    def list_graphs(self) -> ServiceResult:
        items = [graph_item(g) for g in self._edgy.list_graphs()]
        return ServiceResult(
            ok=True,
            op="list_graphs",
            data={"count": len(items), "items": items},
        )

    @traced
    def show(self, name: str) -> ServiceResult:
        """Summarize one graph: counts plus node and edge types in use."""
        try:
            graph = self._require_graph(name)
        except EdgyError as exc:
            return self._failure("show_graph", exc, name=name)

        counts = self._store.queries.count_entities(graph)
        node_types = sorted({n.type for n in self._edgy.get_nodes(graph)})
        edge_types = sorted({e.type for e in self._store.queries.fetch_edges(graph=graph)})
        return ServiceResult(
            ok=True,
            op="show_graph",
            data=graph_item(
                graph,
                node_count=counts["nodes"],
                edge_count=counts["edges"],
                node_types=node_types,
                edge_types=edge_types,
                inserted_at=graph.inserted_at.isoformat() if graph.inserted_at else None,
            ),
        )

    @traced
    def export(self, name: str) -> ServiceResult:
        """Materialize a graph in memory and return every node and edge."""
        try:
            graph = self._require_graph(name)
        except EdgyError as exc:
            return self._failure("export_graph", exc, name=name)

        with trace_span("materialize") as span:
            materialized = self._edgy.to_digraph(graph)
            if span:
                span.annotate("nodes", materialized.digraph.number_of_nodes())
                span.annotate("edges", materialized.digraph.number_of_edges())

        dg = materialized.digraph
        node_items: list[dict[str, Any]] = [
            node_item(materialized.nodes[node_id]) for node_id in sorted(dg.nodes)
        ]
        edge_items: list[dict[str, Any]] = [
            edge_item(materialized.edges[key]) for _, _, key in sorted(dg.edges(keys=True))
        ]
        return ServiceResult(
            ok=True,
            op="export_graph",
            data=graph_item(
                graph,
                node_count=dg.number_of_nodes(),
                edge_count=dg.number_of_edges(),
                nodes=node_items,
                edges=edge_items,
            ),
        )
