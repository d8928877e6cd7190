"""Baseline schema — graphs, nodes, and edges with cascading foreign keys.

Revision ID: 001_baseline
Revises: None
Create Date: 2026-10-18

Databases created by ``edgy init`` are stamped at this revision without
running it; ``edgy upgrade`` applies it to an empty database.
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_baseline"
down_revision: str | None = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None

_properties = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "edgy_graphs",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("inserted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_edgy_graphs_name", "edgy_graphs", ["name"], unique=True)

    op.create_table(
        "edgy_nodes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("type", sa.Text, nullable=False),
        sa.Column("properties", _properties, nullable=False),
        sa.Column(
            "graph_id",
            sa.Integer,
            sa.ForeignKey("edgy_graphs.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("inserted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_edgy_nodes_graph_id", "edgy_nodes", ["graph_id"])
    op.create_index("ix_edgy_nodes_type", "edgy_nodes", ["type"])

    op.create_table(
        "edgy_edges",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "graph_id",
            sa.Integer,
            sa.ForeignKey("edgy_graphs.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("type", sa.Text, nullable=False),
        sa.Column("properties", _properties, nullable=False),
        sa.Column(
            "to_id",
            sa.Integer,
            sa.ForeignKey("edgy_nodes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "from_id",
            sa.Integer,
            sa.ForeignKey("edgy_nodes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("inserted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_edgy_edges_graph_id", "edgy_edges", ["graph_id"])
    op.create_index("ix_edgy_edges_type", "edgy_edges", ["type"])
    op.create_index("ix_edgy_edges_to_id", "edgy_edges", ["to_id"])
    op.create_index("ix_edgy_edges_from_id", "edgy_edges", ["from_id"])


def downgrade() -> None:
    op.drop_table("edgy_edges")
    op.drop_table("edgy_nodes")
    op.drop_table("edgy_graphs")
