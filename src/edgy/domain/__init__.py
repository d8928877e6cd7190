"""Domain layer — records, filter clauses, and the traversal algorithm.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
