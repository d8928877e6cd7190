"""BaseService — shared foundation for the CLI-facing services.

Every service receives a :class:`GraphStore` at construction time and
talks to it through the :class:`Edgy` facade. Errors raised by edgy
itself become failed :class:`ServiceResult` objects; database errors are
not caught here and reach the caller unchanged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from edgy.api import Edgy
from edgy.errors import EdgyError, NotFound
from edgy.services.result import ServiceResult
from edgy.services.telemetry import watch_engine

if TYPE_CHECKING:
    from edgy.domain.records import EdgeRecord, GraphRecord, NodeRecord
    from edgy.infrastructure.store import GraphStore

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class GraphService(BaseService):
            def create(self, name: str) -> ServiceResult:
                try:
                    graph = self._edgy.create_graph(name)
                except EdgyError as exc:
                    return self._failure("create_graph", exc)
                ...
    """

    def __init__(self, store: GraphStore) -> None:
        self._store = store
        self._edgy = Edgy(store)
        watch_engine(store.engine)

    @staticmethod
    def _failure(op: str, exc: EdgyError, **detail: Any) -> ServiceResult:
        """Convert an edgy exception into a failed result."""
        logger.debug("%s failed: %s", op, exc)
        return ServiceResult.failed(op, exc, **detail)

    # ------------------------------------------------------------------
    # Lookups shared by the services
    # ------------------------------------------------------------------

    def _require_graph(self, name: str) -> GraphRecord:
        graph = self._edgy.get_graph(name)
        if graph is None:
            raise NotFound("graph", name)
        return graph

    def _require_node(self, node_id: int) -> NodeRecord:
        node = self._store.queries.get_node(node_id)
        if node is None:
            raise NotFound("node", node_id)
        return node

    def _require_edge(self, edge_id: int) -> EdgeRecord:
        edge = self._store.queries.get_edge(edge_id)
        if edge is None:
            raise NotFound("edge", edge_id)
        return edge


# ---------------------------------------------------------------------------
# Record → payload helpers
# ---------------------------------------------------------------------------


def graph_item(graph: GraphRecord, **extra: Any) -> dict[str, Any]:
    return {"id": graph.id, "name": graph.name, **extra}


def node_item(node: NodeRecord) -> dict[str, Any]:
    return {
        "id": node.id,
        "graph_id": node.graph_id,
        "type": node.type,
        "properties": node.properties,
    }


def edge_item(edge: EdgeRecord) -> dict[str, Any]:
    return {
        "id": edge.id,
        "graph_id": edge.graph_id,
        "type": edge.type,
        "from_id": edge.from_id,
        "to_id": edge.to_id,
        "properties": edge.properties,
    }
