"""
Structured Logging Configuration

Engine events are logged under snake_case names with keyword context, for
example ``cycle_detected`` (node_id, owner) from the renderer walk,
``module_load_timeout`` (timeout, modules) from the renderer and
``document_migrated`` (format and report counts) from the migrator.
``LogContext`` binds ``page_id`` around a handler call so every event in
that pipeline carries it.
"""

import logging
import sys
from typing import Any

import structlog
from pythonjsonlogger import jsonlogger

from .config import Settings


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Route stdlib logging and structlog through one handler on stdout.

    Per-node data problems log at WARNING; completed migrations, renders and
    exports log at INFO; format detection and span starts log at DEBUG.

    Args:
        level: Log level name; unknown names fall back to INFO
        json_logs: Emit one JSON object per event instead of console lines
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if json_logs:
        handler = logging.StreamHandler(sys.stdout)
        formatter = jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        handler.setFormatter(formatter)
        logging.basicConfig(level=log_level, handlers=[handler], force=True)
    else:
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            stream=sys.stdout,
            force=True,
        )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_from_settings(settings: Settings) -> None:
    """Apply ``PAGE_LOG_LEVEL`` / ``PAGE_JSON_LOGS``; called by ``create_container``."""
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Module logger; each engine package calls this once at import with ``__name__``."""
    return structlog.get_logger(name)


class LogContext:
    """Bind keyword context (e.g. ``page_id``) to every event logged in scope."""

    def __init__(self, **kwargs: Any):
        self.context = kwargs
        self.tokens: Any = None

    def __enter__(self) -> "LogContext":
        self.tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.reset_contextvars(**self.tokens)
