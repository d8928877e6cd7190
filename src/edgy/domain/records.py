"""Graph, node and edge records plus the validated input shapes that create them.

Records are frozen snapshots of rows. Two records are equal when they
are the same kind of entity with the same id, so they can be collected
in sets regardless of which endpoints were eager-loaded alongside them.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, JsonValue, TypeAdapter, ValidationError

from edgy.errors import InvalidArgument

type Properties = dict[str, JsonValue]

_properties_adapter: TypeAdapter[Properties] = TypeAdapter(Properties)


class _Record(BaseModel):
    model_config = {"frozen": True}

    id: int
    inserted_at: datetime | None = None
    updated_at: datetime | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _Record):
            return NotImplemented
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))


class GraphRecord(_Record):
    """A named, isolated collection of nodes and edges."""

    name: str


class NodeRecord(_Record):
    """A typed, property-bearing vertex scoped to one graph."""

    graph_id: int
    type: str
    properties: Properties = Field(default_factory=dict)


class EdgeRecord(_Record):
    """A typed, property-bearing directed arc between two nodes.

    ``from_node`` / ``to_node`` are populated only when the query that
    produced the record eager-loaded that endpoint.
    """

    graph_id: int
    type: str
    properties: Properties = Field(default_factory=dict)
    from_id: int
    to_id: int
    from_node: NodeRecord | None = None
    to_node: NodeRecord | None = None


class NodeSpec(BaseModel):
    """Input for a node insert."""

    model_config = {"frozen": True}

    type: str = Field(min_length=1)
    properties: Properties = Field(default_factory=dict)


class EdgeSpec(BaseModel):
    """Input for an edge insert."""

    model_config = {"frozen": True}

    type: str = Field(min_length=1)
    properties: Properties = Field(default_factory=dict)
    from_node: NodeRecord
    to_node: NodeRecord


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _invalid(kind: str, exc: ValidationError) -> InvalidArgument:
    first = exc.errors()[0]
    loc = ".".join(str(part) for part in first["loc"]) or kind
    return InvalidArgument(f"Invalid {kind}: {loc}: {first['msg']}")


def validate_name(name: Any) -> str:
    """Return *name* if it is a usable graph name."""
    if not isinstance(name, str) or not name.strip():
        raise InvalidArgument("Graph name must be a non-empty string")
    return name


def validate_properties(properties: Any) -> Properties:
    """Validate a property map (string keys, JSON-compatible values)."""
    if properties is None:
        return {}
    try:
        return _properties_adapter.validate_python(properties, strict=True)
    except ValidationError as exc:
        raise _invalid("properties", exc) from exc


def node_spec(value: NodeSpec | tuple[Any, ...] | Mapping[str, Any]) -> NodeSpec:
    """Coerce ``(type, properties)`` tuples and mappings into a :class:`NodeSpec`."""
    if isinstance(value, NodeSpec):
        return value
    try:
        if isinstance(value, tuple):
            node_type, properties = value
            return NodeSpec(type=node_type, properties=validate_properties(properties))
        return NodeSpec.model_validate(value)
    except ValidationError as exc:
        raise _invalid("node", exc) from exc
    except InvalidArgument:
        raise
    except ValueError as exc:
        raise InvalidArgument(f"Invalid node: {exc}") from exc


def edge_spec(value: EdgeSpec | tuple[Any, ...] | Mapping[str, Any]) -> EdgeSpec:
    """Coerce ``(type, properties, from_node, to_node)`` tuples into an :class:`EdgeSpec`."""
    if isinstance(value, EdgeSpec):
        return value
    try:
        if isinstance(value, tuple):
            edge_type, properties, from_node, to_node = value
            return EdgeSpec(
                type=edge_type,
                properties=validate_properties(properties),
                from_node=from_node,
                to_node=to_node,
            )
        return EdgeSpec.model_validate(value)
    except ValidationError as exc:
        raise _invalid("edge", exc) from exc
    except InvalidArgument:
        raise
    except ValueError as exc:
        raise InvalidArgument(f"Invalid edge: {exc}") from exc
