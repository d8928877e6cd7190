"""Infrastructure layer — database, repositories, graph materialization.

This layer depends on stdlib and third-party libs (SQLAlchemy, Alembic, NetworkX).
It must never import from services, commands, or output.
The service layer bridges between domain records and infrastructure.
"""
