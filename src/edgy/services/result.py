"""ServiceResult and ServiceError — what every CLI-facing operation returns.

Library callers use :class:`edgy.api.Edgy` and get exceptions; the
service layer turns those exceptions into data so the CLI can render
them (human or ``--json``) and pick an exit code.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from edgy.errors import EdgyError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult.

    ``code`` is the ``code`` of the :class:`EdgyError` subclass
    (``NOT_FOUND``, ``SELF_LOOP``...) or a service-specific code such as
    ``MIGRATION_FAILED``.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: EdgyError, **detail: Any) -> ServiceError:
        return cls(code=exc.code, message=str(exc), detail=detail)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"create_graph"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Span tree and timings when telemetry is on.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failed(cls, op: str, exc: EdgyError, **detail: Any) -> ServiceResult:
        """A failed result carrying *exc* as its error."""
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc, **detail))
