"""Tests for QueryRepository — lookups and filtered fetches."""

from __future__ import annotations

from typing import Any

import pytest

from edgy.api import Edgy
from edgy.domain.records import GraphRecord
from edgy.errors import InvalidArgument, UnsupportedFilter
from edgy.infrastructure.store import GraphStore


class TestGraphLookups:
    def test_get_graph_by_name(self, store: GraphStore, graph: GraphRecord) -> None:
        assert store.queries.get_graph("demo") == graph
        assert store.queries.get_graph("missing") is None

    def test_list_graphs_sorted(self, db: Edgy, store: GraphStore) -> None:
        for name in ("zeta", "alpha", "mid"):
            db.create_graph(name)
        assert [g.name for g in store.queries.list_graphs()] == ["alpha", "mid", "zeta"]

    def test_count_entities(self, store: GraphStore, graph: GraphRecord, chain: Any) -> None:
        assert store.queries.count_entities(graph) == {"nodes": 4, "edges": 3}

    def test_load_graph(self, store: GraphStore, chain: Any) -> None:
        loaded = store.queries.load_graph("demo")
        assert loaded is not None
        assert {n.id for n in loaded.nodes} == {n.id for n in chain["nodes"].values()}
        assert len(loaded.edges) == 3
        assert store.queries.load_graph("missing") is None


class TestFetchNodes:
    def test_type_filter(self, db: Edgy, store: GraphStore, graph: GraphRecord) -> None:
        db.add_node(graph, "person", {"name": "ada"})
        db.add_node(graph, "city", {"name": "paris"})
        found = store.queries.fetch_nodes(graph, type="city")
        assert [n.properties["name"] for n in found] == ["paris"]

    def test_scoped_to_graph(self, db: Edgy, store: GraphStore, graph: GraphRecord) -> None:
        other = db.create_graph("other")
        db.add_node(other, "person")
        assert store.queries.fetch_nodes(graph) == []

    def test_property_containment(self, db: Edgy, store: GraphStore, graph: GraphRecord) -> None:
        match = db.add_node(graph, "person", {"name": "ada", "age": 36, "meta": {"lang": "en"}})
        db.add_node(graph, "person", {"name": "ada", "age": 37})
        db.add_node(graph, "person", {"name": "grace"})

        assert store.queries.fetch_nodes(graph, properties={"age": 36}) == [match]
        assert store.queries.fetch_nodes(graph, properties={"meta": {"lang": "en"}}) == [match]
        assert len(store.queries.fetch_nodes(graph, properties={"name": "ada"})) == 2

    def test_scalar_types_are_distinguished(
        self, db: Edgy, store: GraphStore, graph: GraphRecord
    ) -> None:
        flag = db.add_node(graph, "n", {"v": True})
        one = db.add_node(graph, "n", {"v": 1})
        text = db.add_node(graph, "n", {"v": "1"})
        empty = db.add_node(graph, "n", {"v": None})
        assert store.queries.fetch_nodes(graph, properties={"v": True}) == [flag]
        assert store.queries.fetch_nodes(graph, properties={"v": 1}) == [one]
        assert store.queries.fetch_nodes(graph, properties={"v": "1"}) == [text]
        assert store.queries.fetch_nodes(graph, properties={"v": None}) == [empty]

    def test_missing_key_does_not_match_null(
        self, db: Edgy, store: GraphStore, graph: GraphRecord
    ) -> None:
        db.add_node(graph, "n", {})
        assert store.queries.fetch_nodes(graph, properties={"v": None}) == []

    def test_nested_maps_match_by_containment(
        self, db: Edgy, store: GraphStore, graph: GraphRecord
    ) -> None:
        nested = db.add_node(graph, "n", {"m": {"x": 1, "y": {"z": "q", "w": 2}}})
        db.add_node(graph, "n", {"m": "str"})

        def fetch(filter_: dict[str, Any]) -> list[Any]:
            return store.queries.fetch_nodes(graph, properties=filter_)

        assert fetch({"m": {"y": {"z": "q"}}}) == [nested]
        assert fetch({"m": {}}) == [nested]
        assert fetch({"m": {"y": {"z": "r"}}}) == []
        assert fetch({"m": {"y": {"z": "q", "v": 0}}}) == []

    def test_array_filter_unsupported_on_sqlite(
        self, store: GraphStore, graph: GraphRecord
    ) -> None:
        with pytest.raises(UnsupportedFilter):
            store.queries.fetch_nodes(graph, properties={"tags": ["a"]})


class TestFetchEdges:
    def test_requires_anchor_or_graph(self, store: GraphStore) -> None:
        with pytest.raises(InvalidArgument):
            store.queries.fetch_edges()

    def test_outgoing_loads_to_node(self, store: GraphStore, chain: Any) -> None:
        b = chain["nodes"]["b"]
        (edge,) = store.queries.fetch_edges(b, direction="outgoing")
        assert edge == chain["edges"]["b->c"]
        assert edge.to_node == chain["nodes"]["c"]
        assert edge.from_node is None

    def test_incoming_loads_from_node(self, store: GraphStore, chain: Any) -> None:
        b = chain["nodes"]["b"]
        (edge,) = store.queries.fetch_edges([b], direction="incoming")
        assert edge == chain["edges"]["a->b"]
        assert edge.from_node == chain["nodes"]["a"]
        assert edge.to_node is None

    def test_either_loads_both(self, store: GraphStore, chain: Any) -> None:
        found = store.queries.fetch_edges([chain["nodes"]["b"]])
        assert set(found) == {chain["edges"]["a->b"], chain["edges"]["b->c"]}
        assert all(e.from_node is not None and e.to_node is not None for e in found)

    def test_type_and_property_filters(self, db: Edgy, store: GraphStore, chain: Any) -> None:
        graph = store.queries.get_graph("demo")
        assert graph is not None
        a, c = chain["nodes"]["a"], chain["nodes"]["c"]
        db.add_edge(graph, "other", {"strength": "strong"}, a, c)

        strong = store.queries.fetch_edges(graph=graph, properties={"strength": "strong"})
        assert len(strong) == 3
        links = store.queries.fetch_edges(
            graph=graph, type="link", properties={"strength": "strong"}
        )
        assert set(links) == {chain["edges"]["a->b"], chain["edges"]["c->d"]}

    def test_get_edge_with_endpoints(self, store: GraphStore, chain: Any) -> None:
        edge = store.queries.get_edge(chain["edges"]["a->b"].id)
        assert edge is not None
        assert edge.from_node == chain["nodes"]["a"]
        assert edge.to_node == chain["nodes"]["b"]
        assert store.queries.get_edge(9999) is None

    def test_invalid_direction(self, store: GraphStore, chain: Any) -> None:
        with pytest.raises(InvalidArgument):
            store.queries.fetch_edges(chain["nodes"]["a"], direction="up")
