"""Compile domain filter clauses into SQLAlchemy predicates.

Each clause becomes one boolean expression over the node or edge table;
:func:`apply_clauses` ANDs them onto a SELECT. Values always travel as
bound parameters.

Property containment depends on the dialect:

- PostgreSQL: ``properties @> :filter`` on JSONB, full containment
  semantics including arrays.
- SQLite: one ``json_type``/``json_extract`` check per leaf path.
  Scalars, ``null`` and nested objects are supported; arrays are not.

Anything a dialect cannot evaluate raises :class:`UnsupportedFilter`
instead of silently matching every row.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import Select, Table, and_, func, or_, type_coerce
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql.elements import ColumnElement

from edgy.domain.filters import (
    Clause,
    ConnectedTo,
    Direction,
    GraphScope,
    PropertiesContain,
    TypeEquals,
)
from edgy.errors import InvalidArgument, UnsupportedFilter


def _sqlite_path(prefix: str, key: str) -> str:
    if '"' in key:
        raise UnsupportedFilter(f"SQLite cannot filter on property keys containing quotes: {key!r}")
    return f'{prefix}."{key}"'


def _sqlite_containment(
    column: ColumnElement[Any],
    properties: Mapping[str, Any],
    prefix: str = "$",
) -> list[ColumnElement[bool]]:
    """Flatten a containment filter into per-path JSON1 predicates."""
    predicates: list[ColumnElement[bool]] = []
    for key, expected in properties.items():
        path = _sqlite_path(prefix, key)
        kind = func.json_type(column, path)
        value = func.json_extract(column, path)

        if isinstance(expected, Mapping):
            if expected:
                predicates.extend(_sqlite_containment(column, expected, path))
            else:
                predicates.append(kind == "object")
        elif expected is None:
            predicates.append(kind == "null")
        elif isinstance(expected, bool):
            # bool before int: json_extract reports true/false as 1/0
            predicates.append(kind == ("true" if expected else "false"))
        elif isinstance(expected, (int, float)):
            predicates.append(kind.in_(("integer", "real")))
            predicates.append(value == expected)
        elif isinstance(expected, str):
            predicates.append(kind == "text")
            predicates.append(value == expected)
        elif isinstance(expected, (list, tuple)):
            raise UnsupportedFilter(f"SQLite cannot evaluate array containment for key {key!r}")
        else:
            raise InvalidArgument(f"Property filter value for {key!r} is not JSON-compatible")
    return predicates


def containment_predicate(
    column: ColumnElement[Any],
    properties: Mapping[str, Any],
    dialect: str,
) -> ColumnElement[bool]:
    """Return a predicate true when *column* contains every pair in *properties*."""
    if dialect == "postgresql":
        return type_coerce(column, JSONB).contains(dict(properties))
    if dialect == "sqlite":
        return and_(*_sqlite_containment(column, properties))
    raise UnsupportedFilter(f"Property containment is not supported on the {dialect} dialect")


def connectivity_predicate(table: Table, clause: ConnectedTo) -> ColumnElement[bool]:
    """Edges whose anchor side is among ``clause.node_ids``."""
    ids = sorted(clause.node_ids)
    if clause.direction is Direction.OUTGOING:
        return table.c.from_id.in_(ids)
    if clause.direction is Direction.INCOMING:
        return table.c.to_id.in_(ids)
    return or_(table.c.from_id.in_(ids), table.c.to_id.in_(ids))


def compile_clause(clause: Clause, table: Table, dialect: str) -> ColumnElement[bool]:
    """Translate one clause into a predicate over *table*."""
    match clause:
        case GraphScope(graph_id=graph_id):
            return table.c.graph_id == graph_id
        case TypeEquals(type=type_):
            return table.c.type == type_
        case PropertiesContain(properties=properties):
            return containment_predicate(table.c.properties, properties, dialect)
        case ConnectedTo():
            if "from_id" not in table.c:
                raise InvalidArgument(f"Connectivity filter applies to edges, not {table.name}")
            return connectivity_predicate(table, clause)
    raise InvalidArgument(f"Unknown filter clause: {clause!r}")


def apply_clauses(
    stmt: Select[Any],
    clauses: Iterable[Clause],
    table: Table,
    dialect: str,
) -> Select[Any]:
    """AND every clause onto *stmt*."""
    for clause in clauses:
        stmt = stmt.where(compile_clause(clause, table, dialect))
    return stmt
