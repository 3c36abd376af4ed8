"""
Operation Tracing
Lightweight timing spans for render and export pipelines, logged via structlog.
"""

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator

from .logging_config import get_logger

logger = get_logger(__name__)

SLOW_OPERATION_SECONDS = 1.0


@dataclass
class Span:
    """A single timed operation."""

    name: str
    start_time: float = field(default_factory=time.perf_counter)
    duration: float = 0.0
    tags: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        return self.duration * 1000

    def set_tag(self, key: str, value: Any) -> None:
        """Attach a value that is logged when the span completes."""
        self.tags[key] = value

    def finish(self) -> None:
        self.duration = time.perf_counter() - self.start_time


@contextmanager
def trace_operation(operation: str, **kwargs: Any) -> Iterator[Span]:
    """
    Context manager for tracing operations with structured logging.

    Logs ``operation_start`` on entry and one of ``operation_end``,
    ``operation_slow`` (over one second) or ``operation_error`` on exit.
    Exceptions are re-raised unchanged.

    Args:
        operation: Name of the operation
        **kwargs: Additional context to log
    """
    span = Span(name=operation)
    logger.debug("operation_start", operation=operation, **kwargs)

    try:
        yield span
    except Exception as e:
        span.finish()
        logger.error(
            "operation_error",
            operation=operation,
            error=str(e),
            duration_ms=span.duration_ms,
            **kwargs,
            **span.tags,
        )
        raise
    else:
        span.finish()
        if span.duration > SLOW_OPERATION_SECONDS:
            logger.warning(
                "operation_slow",
                operation=operation,
                duration_ms=span.duration_ms,
                **kwargs,
                **span.tags,
            )
        else:
            logger.info(
                "operation_end",
                operation=operation,
                duration_ms=span.duration_ms,
                **kwargs,
                **span.tags,
            )


__all__ = ["Span", "trace_operation", "SLOW_OPERATION_SECONDS"]
