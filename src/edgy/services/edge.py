"""EdgeService — edge persistence, filtered listing, and traversal."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from edgy.domain.filters import Direction, parse_direction
from edgy.errors import EdgyError, InvalidArgument, SelfLoopRejected
from edgy.services.base import BaseService, edge_item
from edgy.services.result import ServiceResult
from edgy.services.telemetry import trace_span, traced


class EdgeService(BaseService):
    """Handles edges between nodes and traversal from seed nodes."""

    @traced
    def add(
        self,
        graph_name: str,
        edge_type: str,
        from_id: int,
        to_id: int,
        properties: Mapping[str, Any] | None = None,
    ) -> ServiceResult:
        """Connect two nodes; fails with ``SELF_LOOP`` when they are the same."""
        try:
            if from_id == to_id:
                raise SelfLoopRejected(from_id)
            graph = self._require_graph(graph_name)
            edge = self._edgy.add_edge(
                graph,
                edge_type,
                properties,
                self._require_node(from_id),
                self._require_node(to_id),
            )
        except EdgyError as exc:
            return self._failure("add_edge", exc, graph=graph_name)
        return ServiceResult(ok=True, op="add_edge", data=edge_item(edge))

    @traced
    def update(self, edge_id: int, properties: Mapping[str, Any]) -> ServiceResult:
        """Replace an edge's properties (no merge)."""
        try:
            edge = self._edgy.update_edge(self._require_edge(edge_id), properties)
        except EdgyError as exc:
            return self._failure("update_edge", exc, id=edge_id)
        return ServiceResult(ok=True, op="update_edge", data=edge_item(edge))

    @traced
    def delete(self, edge_ids: list[int]) -> ServiceResult:
        try:
            if len(edge_ids) == 1:
                self._edgy.delete_edge(self._require_edge(edge_ids[0]))
                deleted = 1
            else:
                deleted = self._edgy.delete_edges([self._require_edge(i) for i in edge_ids])
        except EdgyError as exc:
            return self._failure("delete_edge", exc, ids=edge_ids)
        return ServiceResult(
            ok=True,
            op="delete_edge",
            data={"ids": sorted(set(edge_ids)), "deleted": deleted},
        )

    @traced
    def list_edges(
        self,
        graph_name: str,
        *,
        edge_type: str | None = None,
        properties: Mapping[str, Any] | None = None,
    ) -> ServiceResult:
        try:
            graph = self._require_graph(graph_name)
            found = self._store.queries.fetch_edges(
                graph=graph,
                type=edge_type,
                properties=properties,
            )
        except EdgyError as exc:
            return self._failure("list_edges", exc, graph=graph_name)
        items = [edge_item(e) for e in sorted(found, key=lambda e: e.id)]
        return ServiceResult(
            ok=True,
            op="list_edges",
            data={"graph": graph_name, "count": len(items), "items": items},
        )

    @traced
    def traverse(
        self,
        node_ids: list[int],
        *,
        edge_type: str | None = None,
        properties: Mapping[str, Any] | None = None,
        direction: Direction | str | None = None,
        recursive: bool = False,
        limit: int | None = None,
    ) -> ServiceResult:
        """Collect the edges reachable from the seed nodes.

        Args:
            node_ids: Seed node ids; all must belong to the same graph.
            edge_type: Only follow edges of this type.
            properties: Only follow edges whose properties contain these pairs.
            direction: ``outgoing``, ``incoming`` or ``either``.
            recursive: Expand hop after hop instead of a single hop.
            limit: Maximum hops when recursive (0 or None = unbounded).
        """
        op = "traverse"
        try:
            parsed = parse_direction(direction)
            if not node_ids:
                raise InvalidArgument("traverse needs at least one seed node")
            seeds = [self._require_node(i) for i in node_ids]
            if len({n.graph_id for n in seeds}) > 1:
                raise InvalidArgument("Seed nodes must belong to the same graph")

            with trace_span("expand") as span:
                found = self._edgy.edges(
                    seeds,
                    type=edge_type,
                    properties=properties,
                    direction=parsed,
                    recursive=recursive,
                    limit=limit,
                )
                if span:
                    span.annotate("edges", len(found))
        except EdgyError as exc:
            return self._failure(op, exc, seeds=node_ids)

        items = [edge_item(e) for e in sorted(found, key=lambda e: e.id)]
        reached = sorted({e.from_id for e in found} | {e.to_id for e in found})
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "seeds": sorted(set(node_ids)),
                "direction": parsed.value,
                "recursive": recursive,
                "count": len(items),
                "nodes": reached,
                "items": items,
            },
        )
