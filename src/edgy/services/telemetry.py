"""Telemetry for service calls: timed span trees and SQL round-trip counts.

Disabled by default; ``--verbose`` turns it on. When on, every
``@traced`` service method opens a root span, ``trace_span`` opens
children (one per traversal expansion or materialization), and every
statement executed on a watched engine is counted against the innermost
open span. The tree lands in ``ServiceResult.meta["telemetry"]``.

When disabled, the cost is one ContextVar lookup per call.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog
from sqlalchemy import event
from sqlalchemy.engine import Engine

from edgy.services.result import ServiceResult

_enabled: ContextVar[bool] = ContextVar("edgy_telemetry_enabled", default=False)
_active: ContextVar[Span | None] = ContextVar("edgy_active_span", default=None)

_log = structlog.get_logger("edgy.telemetry")


@dataclass
class Span:
    """One timed section of a service call.

    Attributes:
        queries: Statements executed while this span was the innermost one.
    """

    name: str
    parent: Span | None = None
    children: list[Span] = field(default_factory=list)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None
    queries: int = 0
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    @property
    def total_queries(self) -> int:
        """Statements executed in this span and all of its children."""
        return self.queries + sum(child.total_queries for child in self.children)

    def end(self) -> None:
        self.finished = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "name": self.name,
            "duration_ms": round(self.duration_ms, 2),
            "queries": self.total_queries,
        }
        if self.annotations:
            out["annotations"] = dict(self.annotations)
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
        return out


@contextmanager
def _activate(span: Span) -> Generator[Span]:
    token = _active.set(span)
    try:
        yield span
    finally:
        span.end()
        _active.reset(token)


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Open a child of the active span.

    Yields None when telemetry is off or no service call is being traced.
    """
    parent = _active.get() if _enabled.get() else None
    if parent is None:
        yield None
        return

    child = Span(name=name, parent=parent)
    parent.children.append(child)
    with _activate(child):
        yield child


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time a service method and attach its span tree to the returned result."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        ok = False
        try:
            with _activate(root):
                result = func(*args, **kwargs)
            ok = not isinstance(result, ServiceResult) or result.ok
        finally:
            _log.debug(
                "span.complete",
                span_name=root.name,
                duration_ms=round(root.duration_ms, 2),
                queries=root.total_queries,
                ok=ok,
            )

        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": root.to_dict()}
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]
        return result

    return wrapper


# ── SQL round-trip counting ─────────────────────────────────────────


def _count_statement(*_: Any) -> None:
    span = _active.get()
    if span is not None:
        span.queries += 1


def watch_engine(engine: Engine) -> None:
    """Count statements executed on *engine* against the active span."""
    if not event.contains(engine, "before_cursor_execute", _count_statement):
        event.listen(engine, "before_cursor_execute", _count_statement)


def enable_telemetry() -> None:
    """Turn span collection on (called by AppContext when verbose)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
