"""edgy — property graphs (typed nodes, typed edges, JSON properties) on a relational store."""

from edgy.api import Edgy
from edgy.domain.filters import Direction
from edgy.domain.records import EdgeRecord, EdgeSpec, GraphRecord, NodeRecord, NodeSpec
from edgy.errors import (
    DuplicateName,
    EdgyError,
    InvalidArgument,
    NotFound,
    SelfLoopRejected,
    UnsupportedFilter,
)
from edgy.infrastructure.store import BackingStoreFailure, GraphStore

__version__ = "1.0.0"

__all__ = [
    "BackingStoreFailure",
    "Direction",
    "DuplicateName",
    "EdgeRecord",
    "EdgeSpec",
    "Edgy",
    "EdgyError",
    "GraphRecord",
    "GraphStore",
    "InvalidArgument",
    "NodeRecord",
    "NodeSpec",
    "NotFound",
    "SelfLoopRejected",
    "UnsupportedFilter",
    "__version__",
]
