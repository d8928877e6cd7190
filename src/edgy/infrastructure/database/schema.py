"""SQLAlchemy Core table definitions for the edgy database.

Three tables: graphs own nodes and edges, edges reference two nodes.
Every foreign key cascades on delete, so removing a graph removes its
nodes and edges and removing a node removes the edges touching it.

``properties`` is plain JSON everywhere and JSONB on PostgreSQL so the
``@>`` containment operator is available.
"""

from __future__ import annotations

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB

metadata = MetaData()

PropertiesType = JSON().with_variant(JSONB(), "postgresql")

graphs = Table(
    "edgy_graphs",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("inserted_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

nodes = Table(
    "edgy_nodes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("type", Text, nullable=False),
    Column("properties", PropertiesType, nullable=False, default=dict),
    Column(
        "graph_id",
        Integer,
        ForeignKey("edgy_graphs.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("inserted_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

edges = Table(
    "edgy_edges",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "graph_id",
        Integer,
        ForeignKey("edgy_graphs.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("type", Text, nullable=False),
    Column("properties", PropertiesType, nullable=False, default=dict),
    Column("to_id", Integer, ForeignKey("edgy_nodes.id", ondelete="CASCADE"), nullable=False),
    Column("from_id", Integer, ForeignKey("edgy_nodes.id", ondelete="CASCADE"), nullable=False),
    Column("inserted_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_edgy_graphs_name", graphs.c.name, unique=True)
Index("ix_edgy_nodes_graph_id", nodes.c.graph_id)
Index("ix_edgy_nodes_type", nodes.c.type)
Index("ix_edgy_edges_graph_id", edges.c.graph_id)
Index("ix_edgy_edges_type", edges.c.type)
Index("ix_edgy_edges_to_id", edges.c.to_id)
Index("ix_edgy_edges_from_id", edges.c.from_id)
