"""Non-fatal problems collected while migrating, rendering and exporting pages.

Data-quality issues never raise: they become ``Diagnostic`` entries returned
next to the output so callers can surface or log them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator


class Severity(str, Enum):
    """Diagnostic severity."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Code(str, Enum):
    """Stable diagnostic codes."""

    # Migration
    EMPTY_DOCUMENT = "empty_document"
    PARSE_ERROR = "parse_error"
    DOCUMENT_TOO_LARGE = "document_too_large"
    UNKNOWN_FORMAT = "unknown_format"
    INVALID_DOCUMENT = "invalid_document"
    DANGLING_REFERENCE = "dangling_reference"
    UNMAPPED_TYPE = "unmapped_type"
    STRICT_MIGRATION_FAILED = "strict_migration_failed"

    # Rendering / export
    UNKNOWN_TYPE = "unknown_type"
    CYCLE_DETECTED = "cycle_detected"
    TREE_TOO_DEEP = "tree_too_deep"
    RENDER_ERROR = "render_error"
    REGISTRY_LOOKUP_FAILED = "registry_lookup_failed"
    MODULE_LOAD_TIMEOUT = "module_load_timeout"
    MODULE_LOAD_FAILED = "module_load_failed"


@dataclass(frozen=True)
class Diagnostic:
    """A single recorded problem."""

    code: Code
    message: str
    severity: Severity = Severity.WARNING
    node_id: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "severity": self.severity.value,
            "node_id": self.node_id,
            "context": dict(self.context),
        }


class Diagnostics:
    """Ordered collection of diagnostics for one operation."""

    def __init__(self, items: Iterable[Diagnostic] = ()) -> None:
        self._items: list[Diagnostic] = list(items)

    def add(
        self,
        code: Code,
        message: str,
        severity: Severity = Severity.WARNING,
        node_id: str | None = None,
        **context: Any,
    ) -> Diagnostic:
        diagnostic = Diagnostic(code, message, severity, node_id, context)
        self._items.append(diagnostic)
        return diagnostic

    def info(self, code: Code, message: str, node_id: str | None = None, **context: Any) -> Diagnostic:
        return self.add(code, message, Severity.INFO, node_id, **context)

    def warning(self, code: Code, message: str, node_id: str | None = None, **context: Any) -> Diagnostic:
        return self.add(code, message, Severity.WARNING, node_id, **context)

    def error(self, code: Code, message: str, node_id: str | None = None, **context: Any) -> Diagnostic:
        return self.add(code, message, Severity.ERROR, node_id, **context)

    def extend(self, other: Iterable[Diagnostic]) -> None:
        self._items.extend(other)

    @property
    def items(self) -> list[Diagnostic]:
        return list(self._items)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity == Severity.WARNING]

    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self._items)

    def codes(self) -> list[Code]:
        """Codes in recording order (duplicates kept)."""
        return [d.code for d in self._items]

    def for_node(self, node_id: str) -> list[Diagnostic]:
        return [d for d in self._items if d.node_id == node_id]

    def to_list(self) -> list[dict[str, Any]]:
        return [d.to_dict() for d in self._items]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"Diagnostics({[d.code.value for d in self._items]!r})"


__all__ = ["Severity", "Code", "Diagnostic", "Diagnostics"]
