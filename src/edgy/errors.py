"""Exception hierarchy raised by the edgy core.

Invariant violations (:class:`SelfLoopRejected`, :class:`InvalidArgument`)
are raised locally before any I/O. Everything else the backing store
reports passes through unchanged (see
:data:`edgy.infrastructure.store.BackingStoreFailure`).
"""

from __future__ import annotations

from typing import ClassVar


class EdgyError(Exception):
    """Base class for all errors raised by edgy itself."""

    code: ClassVar[str] = "EDGY_ERROR"


class DuplicateName(EdgyError):
    """A graph with the requested name already exists."""

    code = "DUPLICATE_NAME"

    def __init__(self, name: str) -> None:
        super().__init__(f"Graph '{name}' already exists")
        self.name = name


class SelfLoopRejected(EdgyError):
    """An edge was requested whose endpoints are the same node."""

    code = "SELF_LOOP"

    def __init__(self, node_id: int) -> None:
        super().__init__(f"Cannot add an edge connecting node {node_id} to itself")
        self.node_id = node_id


class InvalidArgument(EdgyError, ValueError):
    """Bad direction token, malformed filter or malformed record input."""

    code = "INVALID_ARGUMENT"


class UnsupportedFilter(EdgyError):
    """The backing store cannot evaluate the requested property filter."""

    code = "UNSUPPORTED_FILTER"


class NotFound(EdgyError, LookupError):
    """An operation addressed an entity that does not exist."""

    code = "NOT_FOUND"

    def __init__(self, kind: str, key: object) -> None:
        super().__init__(f"{kind.capitalize()} '{key}' not found")
        self.kind = kind
        self.key = key
