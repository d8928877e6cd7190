"""UpgradeService — create the edgy tables and keep them migrated.

``init`` builds the tables from the metadata and stamps them at head.
``apply`` brings an existing database to head: it runs the pending
migrations, or only stamps when the tables were created from the
metadata without version tracking.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from edgy.infrastructure.database.engine import init_database
from edgy.infrastructure.database.migrations import (
    current_revision,
    head_revision,
    pending_revisions,
    stamp_head,
    upgrade_head,
)
from edgy.infrastructure.database.schema import graphs
from edgy.services.base import BaseService
from edgy.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)

UP_TO_DATE = "Database is already up to date"
STAMPED_WARNING = "Existing tables were stamped at head, not migrated"


def _db_failure(op: str, code: str, what: str, exc: SQLAlchemyError) -> ServiceResult:
    logger.warning("%s failed: %s", op, exc)
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=f"{what}: {exc}"),
    )


class UpgradeService(BaseService):
    """Schema setup and Alembic migrations for the store's database."""

    def _unversioned_tables(self, current: str | None) -> bool:
        return current is None and graphs.name in inspect(self._store.engine).get_table_names()

    def _state(self) -> dict[str, Any]:
        current = current_revision(self._store.engine)
        pending = [
            {"revision": script.revision, "description": script.doc or ""}
            for script in pending_revisions(current)
        ]
        return {
            "pending_count": len(pending),
            "pending": pending,
            "current": current,
            "head": head_revision(),
        }

    def init(self) -> ServiceResult:
        """Create the tables from metadata and stamp them at head."""
        engine = self._store.engine
        try:
            init_database(engine)
            stamp_head(engine)
            current = current_revision(engine)
        except SQLAlchemyError as exc:
            return _db_failure("init", "INIT_FAILED", "Failed to initialize", exc)
        return ServiceResult(
            ok=True,
            op="init",
            data={"url": engine.url.render_as_string(hide_password=True), "current": current},
        )

    def check_pending(self) -> ServiceResult:
        """Report the revisions between the database and head without applying them."""
        try:
            state = self._state()
        except SQLAlchemyError as exc:
            return _db_failure("upgrade", "CHECK_FAILED", "Failed to check migrations", exc)
        return ServiceResult(ok=True, op="upgrade", data=state)

    def apply(self) -> ServiceResult:
        checked = self.check_pending()
        if not checked.ok:
            return checked
        state = checked.data
        if state["pending_count"] == 0:
            return ServiceResult(
                ok=True,
                op="upgrade",
                data={"applied_count": 0, "current": state["head"], "message": UP_TO_DATE},
            )

        warnings: list[str] = []
        engine = self._store.engine
        try:
            if self._unversioned_tables(state["current"]):
                stamp_head(engine)
                warnings.append(STAMPED_WARNING)
            else:
                upgrade_head(engine)
        except SQLAlchemyError as exc:
            return _db_failure("upgrade", "MIGRATION_FAILED", "Migration failed", exc)

        logger.info("database moved from %s to %s", state["current"], state["head"])
        return ServiceResult(
            ok=True,
            op="upgrade",
            data={"applied_count": state["pending_count"], "current": state["head"]},
            warnings=warnings,
        )
