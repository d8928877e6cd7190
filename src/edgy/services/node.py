"""NodeService — add, update, delete and list nodes of a graph."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from edgy.errors import EdgyError
from edgy.services.base import BaseService, node_item
from edgy.services.result import ServiceResult
from edgy.services.telemetry import traced


class NodeService(BaseService):
    """Handles node persistence and filtered node listing."""

    @traced
    def add(
        self,
        graph_name: str,
        node_type: str,
        properties: Mapping[str, Any] | None = None,
    ) -> ServiceResult:
        try:
            graph = self._require_graph(graph_name)
            node = self._edgy.add_node(graph, node_type, properties)
        except EdgyError as exc:
            return self._failure("add_node", exc, graph=graph_name)
        return ServiceResult(ok=True, op="add_node", data=node_item(node))

    @traced
    def update(self, node_id: int, properties: Mapping[str, Any]) -> ServiceResult:
        """Replace a node's properties (no merge)."""
        try:
            node = self._edgy.update_node(self._require_node(node_id), properties)
        except EdgyError as exc:
            return self._failure("update_node", exc, id=node_id)
        return ServiceResult(ok=True, op="update_node", data=node_item(node))

    @traced
    def delete(self, node_ids: list[int]) -> ServiceResult:
        """Delete nodes by id; connected edges are removed by cascade."""
        try:
            if len(node_ids) == 1:
                self._edgy.delete_node(self._require_node(node_ids[0]))
                deleted = 1
            else:
                deleted = self._edgy.delete_nodes([self._require_node(i) for i in node_ids])
        except EdgyError as exc:
            return self._failure("delete_node", exc, ids=node_ids)
        return ServiceResult(
            ok=True,
            op="delete_node",
            data={"ids": sorted(set(node_ids)), "deleted": deleted},
        )

    @traced
    def list_nodes(
        self,
        graph_name: str,
        *,
        node_type: str | None = None,
        properties: Mapping[str, Any] | None = None,
    ) -> ServiceResult:
        try:
            graph = self._require_graph(graph_name)
            nodes = self._edgy.get_nodes(graph, type=node_type, properties=properties)
        except EdgyError as exc:
            return self._failure("list_nodes", exc, graph=graph_name)
        items = [node_item(n) for n in sorted(nodes, key=lambda n: n.id)]
        return ServiceResult(
            ok=True,
            op="list_nodes",
            data={"graph": graph_name, "count": len(items), "items": items},
        )
