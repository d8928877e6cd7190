"""structlog setup shared by the CLI and anyone embedding edgy.

edgy modules log through stdlib ``logging.getLogger(__name__)``. A single
stderr handler with a structlog ``ProcessorFormatter`` renders those
records and native structlog events alike, as a colored console line by
default or as one JSON object per line with ``--log-json``.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Chatty dependencies kept at WARNING even when edgy itself is verbose.
_LIBRARY_LEVELS: dict[str, int] = {
    "alembic": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
}


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _final_processors(log_json: bool) -> list[structlog.types.Processor]:
    if log_json:
        # Tracebacks become structured lists instead of a multi-line string
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route all log output to stderr through structlog.

    Args:
        verbose: ``edgy`` loggers emit DEBUG (traversal hops, writes).
            Otherwise only WARNING and above.
        log_json: Render JSON lines instead of console lines.
    """
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_final_processors(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("edgy").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name, level in _LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(level)
