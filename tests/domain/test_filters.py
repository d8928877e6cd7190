"""Tests for direction parsing and filter clause construction."""

from __future__ import annotations

import pytest

from edgy.domain.filters import (
    ConnectedTo,
    Direction,
    PropertiesContain,
    TypeEquals,
    connectivity_clause,
    endpoints_to_load,
    parse_direction,
    property_clauses,
)
from edgy.errors import InvalidArgument


class TestParseDirection:
    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            (None, Direction.EITHER),
            ("either", Direction.EITHER),
            ("outgoing", Direction.OUTGOING),
            ("from", Direction.OUTGOING),
            ("incoming", Direction.INCOMING),
            ("to", Direction.INCOMING),
            (Direction.INCOMING, Direction.INCOMING),
        ],
    )
    def test_accepted_tokens(self, token: object, expected: Direction) -> None:
        assert parse_direction(token) is expected  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "token", ["sideways", "", 3, "in", "out", "both", "OUTGOING", " outgoing"]
    )
    def test_invalid_token(self, token: object) -> None:
        with pytest.raises(InvalidArgument, match="invalid direction"):
            parse_direction(token)  # type: ignore[arg-type]


class TestPropertyClauses:
    def test_nothing_requested(self) -> None:
        assert property_clauses() == []
        assert property_clauses(None, {}) == []

    def test_type_and_properties(self) -> None:
        clauses = property_clauses("link", {"strength": "strong"})
        assert clauses == [TypeEquals("link"), PropertiesContain({"strength": "strong"})]

    def test_non_string_type(self) -> None:
        with pytest.raises(InvalidArgument):
            property_clauses(5)  # type: ignore[arg-type]

    def test_non_mapping_properties(self) -> None:
        with pytest.raises(InvalidArgument):
            property_clauses(None, ["strength"])  # type: ignore[arg-type]

    def test_non_string_keys(self) -> None:
        with pytest.raises(InvalidArgument):
            property_clauses(None, {1: "x"})


class TestConnectivity:
    def test_builds_frozen_ids(self) -> None:
        clause = connectivity_clause("from", [3, 1, 3])
        assert clause == ConnectedTo(Direction.OUTGOING, frozenset({1, 3}))

    def test_empty_anchor_set_rejected(self) -> None:
        with pytest.raises(InvalidArgument):
            connectivity_clause(None, [])

    def test_endpoints_to_load(self) -> None:
        assert endpoints_to_load(Direction.INCOMING) == ("from",)
        assert endpoints_to_load(Direction.OUTGOING) == ("to",)
        assert endpoints_to_load(Direction.EITHER) == ("from", "to")
