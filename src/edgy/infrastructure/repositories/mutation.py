"""Write-side repository: create, update and delete graphs, nodes and edges.

Invariants checked here before any statement is issued:

- an edge never connects a node to itself (:class:`SelfLoopRejected`);
- both endpoints of an edge belong to the edge's graph
  (:class:`InvalidArgument`).

Batch inserts run in one transaction: the first failing row aborts the
batch and nothing is persisted. Cascading deletes are left to the
foreign keys. Database errors propagate unchanged, except that a unique
violation on a graph name already held by another graph becomes
:class:`DuplicateName`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import Connection, delete, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from edgy.domain.records import (
    EdgeRecord,
    EdgeSpec,
    GraphRecord,
    NodeRecord,
    NodeSpec,
    edge_spec,
    node_spec,
    validate_name,
    validate_properties,
)
from edgy.errors import DuplicateName, InvalidArgument, NotFound, SelfLoopRejected
from edgy.infrastructure.database.schema import edges, graphs, nodes
from edgy.infrastructure.repositories.query import graph_id_of

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(UTC)


def check_edge_endpoints(graph_id: int, from_node: NodeRecord, to_node: NodeRecord) -> None:
    """Reject self-loops and endpoints from another graph."""
    if from_node.id == to_node.id:
        raise SelfLoopRejected(from_node.id)
    for label, node in (("from", from_node), ("to", to_node)):
        if node.graph_id != graph_id:
            raise InvalidArgument(
                f"Edge {label} node {node.id} belongs to graph {node.graph_id}, not {graph_id}"
            )


def _ids(items: Iterable[Any], record_type: type[NodeRecord | EdgeRecord]) -> list[int]:
    """Distinct ids from records of *record_type* or bare ints."""
    ids: set[int] = set()
    for item in items:
        if isinstance(item, record_type):
            ids.add(item.id)
        elif isinstance(item, int) and not isinstance(item, bool):
            ids.add(item)
        else:
            label = "a node" if record_type is NodeRecord else "an edge"
            raise InvalidArgument(f"Expected {label} record or id, got {item!r}")
    return sorted(ids)


class MutationRepository:
    """Encapsulates SQL for write-side graph operations."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _raise_if_name_taken(
        self, name: str, exc: IntegrityError, *, graph_id: int | None = None
    ) -> None:
        """Turn *exc* into :class:`DuplicateName` when another graph holds *name*."""
        stmt = select(graphs.c.id).where(graphs.c.name == name)
        with self._engine.connect() as conn:
            holder = conn.execute(stmt).scalar_one_or_none()
        if holder is not None and holder != graph_id:
            raise DuplicateName(name) from exc

    # ------------------------------------------------------------------
    # Graphs
    # ------------------------------------------------------------------

    def create_graph(self, name: str) -> GraphRecord:
        """Insert a graph. Raises :class:`DuplicateName` if *name* is taken."""
        validate_name(name)
        now = _now()
        stmt = (
            insert(graphs)
            .values(name=name, inserted_at=now, updated_at=now)
            .returning(*graphs.c)
        )
        try:
            with self._engine.begin() as conn:
                row = conn.execute(stmt).mappings().one()
        except IntegrityError as exc:
            self._raise_if_name_taken(name, exc)
            raise
        logger.debug("created graph %s (id=%s)", name, row["id"])
        return GraphRecord.model_validate(dict(row))

    def rename_graph(self, graph: GraphRecord | int, name: str) -> GraphRecord:
        validate_name(name)
        graph_id = graph_id_of(graph)
        stmt = (
            update(graphs)
            .where(graphs.c.id == graph_id)
            .values(name=name, updated_at=_now())
            .returning(*graphs.c)
        )
        try:
            with self._engine.begin() as conn:
                row = conn.execute(stmt).mappings().first()
        except IntegrityError as exc:
            self._raise_if_name_taken(name, exc, graph_id=graph_id)
            raise
        if row is None:
            raise NotFound("graph", graph_id)
        return GraphRecord.model_validate(dict(row))

    def delete_graph(self, name: str) -> int:
        """Delete the graph called *name* with all its nodes and edges.

        Returns the number of graphs deleted (0 or 1).
        """
        with self._engine.begin() as conn:
            result = conn.execute(delete(graphs).where(graphs.c.name == name))
        logger.debug("deleted graph %s (rows=%d)", name, result.rowcount)
        return result.rowcount

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    @staticmethod
    def _insert_node(conn: Connection, graph_id: int, spec: NodeSpec) -> NodeRecord:
        now = _now()
        stmt = (
            insert(nodes)
            .values(
                graph_id=graph_id,
                type=spec.type,
                properties=spec.properties,
                inserted_at=now,
                updated_at=now,
            )
            .returning(*nodes.c)
        )
        return NodeRecord.model_validate(dict(conn.execute(stmt).mappings().one()))

    def add_node(
        self,
        graph: GraphRecord | int,
        type: str,  # noqa: A002
        properties: Mapping[str, Any] | None = None,
    ) -> NodeRecord:
        spec = node_spec((type, properties or {}))
        graph_id = graph_id_of(graph)
        with self._engine.begin() as conn:
            return self._insert_node(conn, graph_id, spec)

    def add_nodes(
        self,
        graph: GraphRecord | int,
        specs: Iterable[NodeSpec | tuple[Any, ...] | Mapping[str, Any]],
    ) -> list[NodeRecord]:
        """Insert many nodes in one transaction; all or nothing."""
        graph_id = graph_id_of(graph)
        validated = [node_spec(spec) for spec in specs]
        with self._engine.begin() as conn:
            created = [self._insert_node(conn, graph_id, spec) for spec in validated]
        logger.debug("inserted %d nodes into graph %d", len(created), graph_id)
        return created

    def update_node(self, node: NodeRecord | int, properties: Mapping[str, Any]) -> NodeRecord:
        """Replace a node's properties wholesale."""
        node_id = _ids([node], NodeRecord)[0]
        stmt = (
            update(nodes)
            .where(nodes.c.id == node_id)
            .values(properties=validate_properties(properties), updated_at=_now())
            .returning(*nodes.c)
        )
        with self._engine.begin() as conn:
            row = conn.execute(stmt).mappings().first()
        if row is None:
            raise NotFound("node", node_id)
        return NodeRecord.model_validate(dict(row))

    def delete_node(self, node: NodeRecord | int) -> int:
        """Delete one node (and, by cascade, its edges). Returns its id."""
        node_id = _ids([node], NodeRecord)[0]
        with self._engine.begin() as conn:
            result = conn.execute(delete(nodes).where(nodes.c.id == node_id))
        if result.rowcount == 0:
            raise NotFound("node", node_id)
        return node_id

    def delete_nodes(self, items: Iterable[NodeRecord | int]) -> int:
        """Delete many nodes. Returns the number of rows removed."""
        ids = _ids(items, NodeRecord)
        if not ids:
            return 0
        with self._engine.begin() as conn:
            result = conn.execute(delete(nodes).where(nodes.c.id.in_(ids)))
        return result.rowcount

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    @staticmethod
    def _insert_edge(conn: Connection, graph_id: int, spec: EdgeSpec) -> EdgeRecord:
        now = _now()
        stmt = (
            insert(edges)
            .values(
                graph_id=graph_id,
                type=spec.type,
                properties=spec.properties,
                from_id=spec.from_node.id,
                to_id=spec.to_node.id,
                inserted_at=now,
                updated_at=now,
            )
            .returning(*edges.c)
        )
        row = dict(conn.execute(stmt).mappings().one())
        return EdgeRecord.model_validate(
            {**row, "from_node": spec.from_node, "to_node": spec.to_node}
        )

    def add_edge(
        self,
        graph: GraphRecord | int,
        type: str,  # noqa: A002
        properties: Mapping[str, Any] | None,
        from_node: NodeRecord,
        to_node: NodeRecord,
    ) -> EdgeRecord:
        """Insert an edge from *from_node* to *to_node*.

        Raises:
            SelfLoopRejected: both endpoints are the same node.
            InvalidArgument: an endpoint belongs to another graph.
        """
        if isinstance(from_node, NodeRecord) and from_node == to_node:
            raise SelfLoopRejected(from_node.id)
        spec = edge_spec((type, properties or {}, from_node, to_node))
        graph_id = graph_id_of(graph)
        check_edge_endpoints(graph_id, spec.from_node, spec.to_node)
        with self._engine.begin() as conn:
            return self._insert_edge(conn, graph_id, spec)

    def add_edges(
        self,
        graph: GraphRecord | int,
        specs: Iterable[EdgeSpec | tuple[Any, ...] | Mapping[str, Any]],
    ) -> list[EdgeRecord]:
        """Insert many edges in one transaction; all or nothing.

        Every edge is validated before the transaction opens, so an
        invalid edge anywhere in the batch means no statement runs.
        """
        graph_id = graph_id_of(graph)
        validated: list[EdgeSpec] = []
        for raw in specs:
            spec = edge_spec(raw)
            check_edge_endpoints(graph_id, spec.from_node, spec.to_node)
            validated.append(spec)
        with self._engine.begin() as conn:
            created = [self._insert_edge(conn, graph_id, spec) for spec in validated]
        logger.debug("inserted %d edges into graph %d", len(created), graph_id)
        return created

    def update_edge(self, edge: EdgeRecord | int, properties: Mapping[str, Any]) -> EdgeRecord:
        """Replace an edge's properties wholesale."""
        edge_id = _ids([edge], EdgeRecord)[0]
        stmt = (
            update(edges)
            .where(edges.c.id == edge_id)
            .values(properties=validate_properties(properties), updated_at=_now())
            .returning(*edges.c)
        )
        with self._engine.begin() as conn:
            row = conn.execute(stmt).mappings().first()
        if row is None:
            raise NotFound("edge", edge_id)
        return EdgeRecord.model_validate(dict(row))

    def delete_edge(self, edge: EdgeRecord | int) -> int:
        edge_id = _ids([edge], EdgeRecord)[0]
        with self._engine.begin() as conn:
            result = conn.execute(delete(edges).where(edges.c.id == edge_id))
        if result.rowcount == 0:
            raise NotFound("edge", edge_id)
        return edge_id

    def delete_edges(self, items: Iterable[EdgeRecord | int]) -> int:
        """Delete many edges. Returns the number of rows removed."""
        ids = _ids(items, EdgeRecord)
        if not ids:
            return 0
        with self._engine.begin() as conn:
            result = conn.execute(delete(edges).where(edges.c.id.in_(ids)))
        return result.rowcount
