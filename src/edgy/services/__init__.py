"""Service layer — graph operations returning ServiceResult.

Services may import from domain, infrastructure, and the api facade.
They must never import from commands or output.
"""
