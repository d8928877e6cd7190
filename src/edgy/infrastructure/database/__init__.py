"""Database engine, schema, and filter compilation via SQLAlchemy Core."""

from edgy.infrastructure.database.engine import create_db_engine, init_database
from edgy.infrastructure.database.schema import edges, graphs, metadata, nodes

__all__ = [
    "create_db_engine",
    "edges",
    "graphs",
    "init_database",
    "metadata",
    "nodes",
]
