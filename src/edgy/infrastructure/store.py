"""GraphStore — the backing-store handle every edgy component receives.

The store owns a SQLAlchemy engine and hands out the read repository,
the write repository and the materialization engine built on it. It
holds no other state: no caches, no background work. Callers either
inject an engine they already manage or let :meth:`GraphStore.from_settings`
resolve one from configuration.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import DBAPIError

from edgy.infrastructure.database.engine import create_db_engine, init_database
from edgy.infrastructure.graph.engine import GraphEngine
from edgy.infrastructure.repositories import MutationRepository, QueryRepository

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from edgy.config.settings import EdgySettings

logger = logging.getLogger(__name__)

# Connectivity and transaction failures are SQLAlchemy's own errors,
# surfaced unchanged; this alias lets callers catch them by role.
BackingStoreFailure = DBAPIError


class GraphStore:
    """Repository bundle over one SQLAlchemy engine."""

    def __init__(self, engine: Engine, *, settings: EdgySettings | None = None) -> None:
        self._engine = engine
        self._settings = settings
        self._queries = QueryRepository(engine)
        self._mutations = MutationRepository(engine)
        self._graph = GraphEngine(engine)

    @classmethod
    def from_url(cls, url: str, *, echo: bool = False, create_schema: bool = True) -> GraphStore:
        """Open a store on *url*, creating the tables unless told not to."""
        engine = create_db_engine(url, echo=echo)
        if create_schema:
            init_database(engine)
        return cls(engine)

    @classmethod
    def from_settings(
        cls,
        settings: EdgySettings | None = None,
        *,
        create_schema: bool = True,
    ) -> GraphStore:
        """Open the store named by *settings* (discovered from the environment if None)."""
        if settings is None:
            from edgy.config.settings import EdgySettings

            settings = EdgySettings.from_cli()

        engine = create_db_engine(settings.database_url, echo=settings.database.echo)
        if create_schema:
            init_database(engine)
        logger.debug("opened graph store at %s", engine.url.render_as_string(hide_password=True))
        return cls(engine, settings=settings)

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> EdgySettings | None:
        """The settings this store was opened from, if any."""
        return self._settings

    @property
    def queries(self) -> QueryRepository:
        return self._queries

    @property
    def mutations(self) -> MutationRepository:
        return self._mutations

    @property
    def graph(self) -> GraphEngine:
        """The materialization engine."""
        return self._graph

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self._engine.dispose()

    def __enter__(self) -> GraphStore:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
