"""Tests for record identity and input validation."""

from __future__ import annotations

import pytest

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
from edgy.errors import InvalidArgument


def _node(node_id: int, graph_id: int = 1, **props: object) -> NodeRecord:
    return NodeRecord(id=node_id, graph_id=graph_id, type="node", properties=dict(props))


class TestRecordIdentity:
    def test_equal_by_id(self) -> None:
        assert _node(1, name="a") == _node(1, name="changed")
        assert _node(1) != _node(2)

    def test_different_kinds_never_equal(self) -> None:
        graph = GraphRecord(id=1, name="g")
        assert graph != _node(1)

    def test_edges_dedupe_regardless_of_loaded_endpoints(self) -> None:
        bare = EdgeRecord(id=5, graph_id=1, type="link", from_id=1, to_id=2)
        loaded = bare.model_copy(update={"from_node": _node(1), "to_node": _node(2)})
        assert {bare, loaded} == {bare}

    def test_frozen(self) -> None:
        node = _node(1)
        with pytest.raises(Exception):
            node.type = "other"  # type: ignore[misc]


class TestValidateName:
    def test_accepts_text(self) -> None:
        assert validate_name("social") == "social"

    @pytest.mark.parametrize("bad", ["", "   ", None, 42])
    def test_rejects_blank_or_non_string(self, bad: object) -> None:
        with pytest.raises(InvalidArgument):
            validate_name(bad)


class TestValidateProperties:
    def test_none_is_empty(self) -> None:
        assert validate_properties(None) == {}

    def test_nested_json(self) -> None:
        props = {"a": 1, "b": [1, "x", None], "c": {"d": True}}
        assert validate_properties(props) == props

    def test_rejects_non_string_keys(self) -> None:
        with pytest.raises(InvalidArgument):
            validate_properties({1: "x"})

    def test_rejects_non_json_values(self) -> None:
        with pytest.raises(InvalidArgument):
            validate_properties({"when": object()})

    def test_rejects_non_mapping(self) -> None:
        with pytest.raises(InvalidArgument):
            validate_properties(["a", "b"])


class TestNodeSpec:
    def test_from_tuple(self) -> None:
        spec = node_spec(("person", {"name": "ada"}))
        assert spec == NodeSpec(type="person", properties={"name": "ada"})

    def test_from_mapping(self) -> None:
        spec = node_spec({"type": "person"})
        assert spec.type == "person"
        assert spec.properties == {}

    def test_passthrough(self) -> None:
        spec = NodeSpec(type="person")
        assert node_spec(spec) is spec

    def test_empty_type_rejected(self) -> None:
        with pytest.raises(InvalidArgument):
            node_spec(("", {}))

    def test_wrong_arity_rejected(self) -> None:
        with pytest.raises(InvalidArgument):
            node_spec(("person",))


class TestEdgeSpec:
    def test_from_tuple(self) -> None:
        a, b = _node(1), _node(2)
        spec = edge_spec(("link", {"w": 1}, a, b))
        assert isinstance(spec, EdgeSpec)
        assert spec.from_node == a
        assert spec.to_node == b

    def test_missing_endpoint_rejected(self) -> None:
        with pytest.raises(InvalidArgument):
            edge_spec(("link", {}, _node(1)))

    def test_bad_properties_rejected(self) -> None:
        with pytest.raises(InvalidArgument):
            edge_spec(("link", "not a map", _node(1), _node(2)))
