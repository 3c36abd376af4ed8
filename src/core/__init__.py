"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .validate import (
    ValidationError,
    ValidationResult,
    ModuleRequest,
    PageRenderRequest,
    PageExportRequest,
    DocumentValidator,
    validate_document_structure,
)
from .logging_config import configure_logging, configure_from_settings, get_logger, LogContext
from .json import (
    extract_json,
    safe_json_dumps,
    JSONParseError,
    validate_json_size,
    validate_json_depth,
    validate_json_text_depth,
)
from .hash import hash_string, hash_fields
from .cache import LRUCache, Stats
from .diagnostics import Code, Diagnostic, Diagnostics, Severity
from .tracing import Span, trace_operation


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ModuleRequest",
    "PageRenderRequest",
    "PageExportRequest",
    "DocumentValidator",
    "validate_document_structure",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "LogContext",
    # JSON
    "extract_json",
    "safe_json_dumps",
    "JSONParseError",
    "validate_json_size",
    "validate_json_depth",
    "validate_json_text_depth",
    # Diagnostics
    "Code",
    "Diagnostic",
    "Diagnostics",
    "Severity",
    # Tracing
    "Span",
    "trace_operation",
    # DI
    "create_container",
    # Hashing
    "hash_string",
    "hash_fields",
    # Caching
    "LRUCache",
    "Stats",
]
