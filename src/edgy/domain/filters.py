"""Filter clauses for node and edge queries.

A query is a list of clauses, each one a small frozen value:

- :class:`GraphScope` — rows belonging to one graph.
- :class:`TypeEquals` — exact match on the ``type`` column.
- :class:`PropertiesContain` — stored properties contain every given pair.
- :class:`ConnectedTo` — edges touching a set of anchor nodes in a direction.

The infrastructure layer compiles clauses into SQL predicates; nothing
here knows about SQL.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from edgy.errors import InvalidArgument


class Direction(StrEnum):
    """Which side of an edge the anchor nodes sit on."""

    INCOMING = "incoming"
    OUTGOING = "outgoing"
    EITHER = "either"


# Tokens accepted in addition to the enum values.
_DIRECTION_ALIASES: dict[str, Direction] = {
    "to": Direction.INCOMING,
    "from": Direction.OUTGOING,
}


def parse_direction(value: Direction | str | None) -> Direction:
    """Normalize a direction token. ``None`` means :attr:`Direction.EITHER`.

    Tokens match exactly: the enum values plus ``from`` and ``to``.
    """
    if value is None:
        return Direction.EITHER
    if isinstance(value, Direction):
        return value
    if isinstance(value, str):
        if value in _DIRECTION_ALIASES:
            return _DIRECTION_ALIASES[value]
        try:
            return Direction(value)
        except ValueError:
            pass
    raise InvalidArgument(f"invalid direction `{value}`")


@dataclass(frozen=True)
class GraphScope:
    graph_id: int


@dataclass(frozen=True)
class TypeEquals:
    type: str


@dataclass(frozen=True)
class PropertiesContain:
    properties: Mapping[str, Any]


@dataclass(frozen=True)
class ConnectedTo:
    direction: Direction
    node_ids: frozenset[int]

    def __post_init__(self) -> None:
        if not self.node_ids:
            raise InvalidArgument("Connectivity filter needs at least one anchor node")


type Clause = GraphScope | TypeEquals | PropertiesContain | ConnectedTo


def property_clauses(
    type: str | None = None,  # noqa: A002
    properties: Mapping[str, Any] | None = None,
) -> list[Clause]:
    """Build the type and property-containment clauses for a query.

    No clause is emitted for an absent type or an empty property map.
    """
    clauses: list[Clause] = []
    if type is not None:
        if not isinstance(type, str):
            raise InvalidArgument(f"Type filter must be a string, got {type!r}")
        clauses.append(TypeEquals(type))
    if properties:
        if not isinstance(properties, Mapping):
            raise InvalidArgument("Property filter must be a mapping")
        if not all(isinstance(key, str) for key in properties):
            raise InvalidArgument("Property filter keys must be strings")
        clauses.append(PropertiesContain(dict(properties)))
    return clauses


def connectivity_clause(direction: Direction | str | None, node_ids: Iterable[int]) -> ConnectedTo:
    """Restrict edges to those touching *node_ids* on the *direction* side."""
    return ConnectedTo(parse_direction(direction), frozenset(node_ids))


def endpoints_to_load(direction: Direction) -> tuple[str, ...]:
    """Endpoints worth loading with edges fetched in *direction*.

    Incoming edges lead back to their ``from`` node, outgoing edges lead
    on to their ``to`` node, undirected fetches need both.
    """
    if direction is Direction.INCOMING:
        return ("from",)
    if direction is Direction.OUTGOING:
        return ("to",)
    return ("from", "to")
