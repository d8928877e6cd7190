"""Repository layer for read/write database access patterns."""

from edgy.infrastructure.repositories.mutation import MutationRepository
from edgy.infrastructure.repositories.query import LoadedGraph, QueryRepository

__all__ = ["LoadedGraph", "MutationRepository", "QueryRepository"]
