"""Tests for MutationRepository — writes, invariants and cascades."""

from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from edgy.api import Edgy
from edgy.domain.records import GraphRecord, NodeSpec
from edgy.errors import DuplicateName, InvalidArgument, NotFound, SelfLoopRejected
from edgy.infrastructure.store import BackingStoreFailure, GraphStore


class TestGraphs:
    def test_create_sets_timestamps(self, graph: GraphRecord) -> None:
        assert graph.id > 0
        assert graph.inserted_at is not None
        assert graph.updated_at is not None

    def test_duplicate_name(self, db: Edgy, graph: GraphRecord) -> None:
        with pytest.raises(DuplicateName):
            db.create_graph("demo")

    def test_rename(self, db: Edgy, store: GraphStore, graph: GraphRecord) -> None:
        renamed = db.rename_graph(graph, "renamed")
        assert renamed == graph
        assert renamed.name == "renamed"
        assert store.queries.get_graph("demo") is None

    def test_rename_to_taken_name(self, db: Edgy, graph: GraphRecord) -> None:
        db.create_graph("taken")
        with pytest.raises(DuplicateName):
            db.rename_graph(graph, "taken")

    def test_rename_missing(self, store: GraphStore) -> None:
        with pytest.raises(NotFound):
            store.mutations.rename_graph(9999, "x")

    def test_other_integrity_errors_pass_through(
        self, db: Edgy, store: GraphStore, graph: GraphRecord
    ) -> None:
        with store.engine.begin() as conn:
            for event in ("INSERT", "UPDATE"):
                conn.execute(
                    text(
                        f"CREATE TRIGGER block_{event.lower()} BEFORE {event} ON edgy_graphs "
                        "WHEN NEW.name = 'blocked' "
                        "BEGIN SELECT RAISE(ABORT, 'blocked name'); END"
                    )
                )
        with pytest.raises(IntegrityError, match="blocked name"):
            db.create_graph("blocked")
        with pytest.raises(IntegrityError, match="blocked name"):
            db.rename_graph(graph, "blocked")
        assert store.queries.get_graph("demo") == graph

    def test_delete_cascades(self, db: Edgy, store: GraphStore, chain: Any) -> None:
        assert db.delete_graph("demo") == 1
        assert store.queries.get_node(chain["nodes"]["a"].id) is None
        assert store.queries.get_edge(chain["edges"]["a->b"].id) is None

    def test_delete_missing_returns_zero(self, db: Edgy) -> None:
        assert db.delete_graph("missing") == 0


class TestNodes:
    def test_add_defaults_properties(self, db: Edgy, graph: GraphRecord) -> None:
        node = db.add_node(graph, "person")
        assert node.properties == {}
        assert node.graph_id == graph.id

    def test_add_nodes_in_order(self, db: Edgy, graph: GraphRecord) -> None:
        created = db.add_nodes(
            graph, [("a", {"i": 1}), NodeSpec(type="b"), ("c", {"i": 3})]
        )
        assert [n.type for n in created] == ["a", "b", "c"]
        assert created[0].id < created[1].id < created[2].id

    def test_batch_validation_failure_persists_nothing(
        self, db: Edgy, store: GraphStore, graph: GraphRecord
    ) -> None:
        with pytest.raises(InvalidArgument):
            db.add_nodes(graph, [("a", {}), ("", {})])
        assert store.queries.fetch_nodes(graph) == []

    def test_batch_store_failure_rolls_back(self, store: GraphStore, graph: GraphRecord) -> None:
        with pytest.raises(BackingStoreFailure):
            store.mutations.add_nodes(9999, [("a", {}), ("b", {})])
        assert store.queries.count_entities(9999) == {"nodes": 0, "edges": 0}

    def test_update_replaces_properties(self, db: Edgy, graph: GraphRecord) -> None:
        node = db.add_node(graph, "person", {"name": "ada", "age": 36})
        updated = db.update_node(node, {"name": "grace"})
        assert updated.properties == {"name": "grace"}
        assert updated.updated_at is not None

    def test_update_missing(self, store: GraphStore) -> None:
        with pytest.raises(NotFound):
            store.mutations.update_node(9999, {})

    def test_delete_node_removes_its_edges(
        self, db: Edgy, store: GraphStore, chain: Any
    ) -> None:
        b = chain["nodes"]["b"]
        assert db.delete_node(b) == b.id
        assert store.queries.get_edge(chain["edges"]["a->b"].id) is None
        assert store.queries.get_edge(chain["edges"]["b->c"].id) is None
        assert store.queries.get_edge(chain["edges"]["c->d"].id) is not None

    def test_delete_missing_node(self, store: GraphStore) -> None:
        with pytest.raises(NotFound):
            store.mutations.delete_node(9999)

    def test_delete_nodes_counts(self, db: Edgy, chain: Any) -> None:
        nodes = chain["nodes"]
        assert db.delete_nodes([nodes["a"], nodes["b"], nodes["a"]]) == 2
        assert db.delete_nodes([]) == 0

    @pytest.mark.parametrize("item", [{"id": 1}, True, "1", None])
    def test_rejects_non_node_items(self, store: GraphStore, item: object) -> None:
        with pytest.raises(InvalidArgument, match="Expected a node record or id"):
            store.mutations.delete_nodes([item])  # type: ignore[list-item]
        with pytest.raises(InvalidArgument):
            store.mutations.delete_node(item)  # type: ignore[arg-type]

    def test_edge_record_is_not_a_node(self, store: GraphStore, chain: Any) -> None:
        with pytest.raises(InvalidArgument):
            store.mutations.delete_nodes([chain["edges"]["a->b"]])


class TestEdges:
    def test_add_edge_returns_endpoints(self, chain: Any) -> None:
        edge = chain["edges"]["a->b"]
        assert edge.from_id == chain["nodes"]["a"].id
        assert edge.to_node == chain["nodes"]["b"]

    def test_self_loop_rejected(self, db: Edgy, store: GraphStore, graph: GraphRecord) -> None:
        node = db.add_node(graph, "n")
        with pytest.raises(SelfLoopRejected):
            db.add_edge(graph, "link", {}, node, node)
        assert store.queries.fetch_edges(graph=graph) == []

    def test_cross_graph_endpoint_rejected(self, db: Edgy, graph: GraphRecord) -> None:
        other = db.create_graph("other")
        a = db.add_node(graph, "n")
        b = db.add_node(other, "n")
        with pytest.raises(InvalidArgument):
            db.add_edge(graph, "link", {}, a, b)

    def test_parallel_edges_allowed(self, db: Edgy, graph: GraphRecord) -> None:
        a, b = db.add_node(graph, "n"), db.add_node(graph, "n")
        first = db.add_edge(graph, "link", {}, a, b)
        second = db.add_edge(graph, "link", {}, a, b)
        assert first != second

    def test_batch_with_self_loop_persists_nothing(
        self, db: Edgy, store: GraphStore, graph: GraphRecord
    ) -> None:
        a, b = db.add_node(graph, "n"), db.add_node(graph, "n")
        with pytest.raises(SelfLoopRejected):
            db.add_edges(graph, [("link", {}, a, b), ("link", {}, b, b)])
        assert store.queries.fetch_edges(graph=graph) == []

    def test_batch_store_failure_mid_batch_rolls_back(
        self, db: Edgy, store: GraphStore, graph: GraphRecord
    ) -> None:
        a, b, gone = (db.add_node(graph, "n") for _ in range(3))
        db.delete_node(gone)
        with pytest.raises(BackingStoreFailure):
            db.add_edges(graph, [("link", {}, a, b), ("link", {}, b, gone)])
        assert store.queries.count_entities(graph)["edges"] == 0

    def test_add_edges(self, db: Edgy, graph: GraphRecord) -> None:
        a, b, c = (db.add_node(graph, "n") for _ in range(3))
        created = db.add_edges(graph, [("link", {}, a, b), ("link", {"w": 2}, b, c)])
        assert [(e.from_id, e.to_id) for e in created] == [(a.id, b.id), (b.id, c.id)]

    def test_update_edge(self, db: Edgy, chain: Any) -> None:
        updated = db.update_edge(chain["edges"]["a->b"], {"strength": "weak"})
        assert updated.properties == {"strength": "weak"}

    def test_update_edge_rejects_bad_properties(self, db: Edgy, chain: Any) -> None:
        with pytest.raises(InvalidArgument):
            db.update_edge(chain["edges"]["a->b"], {"bad": object()})

    def test_delete_edges(self, db: Edgy, store: GraphStore, chain: Any) -> None:
        edge_map = chain["edges"]
        assert db.delete_edge(edge_map["a->b"]) == edge_map["a->b"].id
        assert db.delete_edges([edge_map["b->c"], edge_map["c->d"]]) == 2
        assert store.queries.count_entities(store.queries.get_graph("demo")) == {
            "nodes": 4,
            "edges": 0,
        }

    def test_rejects_non_edge_items(self, store: GraphStore) -> None:
        with pytest.raises(InvalidArgument, match="Expected an edge record or id"):
            store.mutations.delete_edges([{"id": 1}])  # type: ignore[list-item]
        with pytest.raises(InvalidArgument):
            store.mutations.update_edge(True, {})

    def test_delete_missing_edge(self, store: GraphStore) -> None:
        with pytest.raises(NotFound):
            store.mutations.delete_edge(9999)
