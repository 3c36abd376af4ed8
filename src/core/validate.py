"""Input validation with strong typing and the Result pattern."""

from dataclasses import dataclass
from typing import Any, Literal
from returns.result import Result, Success, Failure

from pydantic import BaseModel, Field, field_validator, ConfigDict

from .json import (
    JSONParseError,
    safe_json_dumps,
    validate_json_depth,
    validate_json_size,
    validate_json_text_depth,
)


# Validation limits
MAX_DOCUMENT_BYTES = 2 * 1024 * 1024  # 2MB
MAX_DOCUMENT_DEPTH = 64
MAX_PAGE_ID_LENGTH = 128
MAX_MODULES = 32

_TAG_NAME_CHARS = set("abcdefghijklmnopqrstuvwxyz0123456789-")


class ValidationError(Exception):
    """Validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


class RequestValidator(BaseModel):
    """Base validator with strict configuration."""

    model_config = ConfigDict(
        strict=True, validate_assignment=True, extra="forbid", frozen=True  # Immutable by default
    )


class ModuleRequest(RequestValidator):
    """A site module toggled on or off for this page."""

    module_id: str = Field(min_length=1, max_length=64)
    status: Literal["active", "inactive"] = "active"


class PageRenderRequest(RequestValidator):
    """Validated page render request."""

    document: dict[str, Any] | str | None = None
    site_settings: dict[str, Any] = Field(default_factory=dict)
    modules: list[ModuleRequest] = Field(default_factory=list, max_length=MAX_MODULES)
    page_id: str | None = Field(default=None, max_length=MAX_PAGE_ID_LENGTH)
    diagnostic_mode: bool | None = None
    strict: bool | None = None

    @field_validator("page_id")
    @classmethod
    def validate_page_id(cls, v: str | None) -> str | None:
        """Ensure page id is non-empty after stripping."""
        if v is None:
            return v
        stripped = v.strip()
        if not stripped:
            raise ValueError("Page id cannot be blank")
        return stripped


class PageExportRequest(PageRenderRequest):
    """Validated static export request."""

    minify: bool | None = None
    full_document: bool = True
    inline_styles: bool = False
    tag_overrides: dict[str, str] = Field(default_factory=dict)

    @field_validator("tag_overrides")
    @classmethod
    def validate_tag_overrides(cls, v: dict[str, str]) -> dict[str, str]:
        """Reject override tags that could not be emitted safely."""
        for component_type, tag in v.items():
            if not tag or not tag[0].isalpha() or not set(tag.lower()) <= _TAG_NAME_CHARS:
                raise ValueError(f"Invalid tag {tag!r} for {component_type}")
        return {component_type: tag.lower() for component_type, tag in v.items()}


class DocumentValidator:
    """Guards raw documents before migration."""

    @staticmethod
    def validate(
        document: Any,
        max_bytes: int = MAX_DOCUMENT_BYTES,
        max_depth: int = MAX_DOCUMENT_DEPTH,
    ) -> None:
        """
        Validate raw document size and nesting.

        Args:
            document: Raw JSON text/bytes or an already decoded mapping
            max_bytes: Maximum encoded size
            max_depth: Maximum nesting depth

        Raises:
            ValidationError: If a limit is exceeded or the type is unsupported
        """
        if isinstance(document, (str, bytes)):
            try:
                validate_json_size(document, max_bytes, "Document")
            except JSONParseError as e:
                raise ValidationError(str(e), field="size") from e
            try:
                validate_json_text_depth(document, max_depth)
            except JSONParseError as e:
                raise ValidationError(str(e), field="depth") from e
            return

        if not isinstance(document, dict):
            raise ValidationError(
                f"Document must be an object, got {type(document).__name__}", field="type"
            )

        try:
            validate_json_depth(document, max_depth)
        except JSONParseError as e:
            raise ValidationError(str(e), field="depth") from e

        try:
            validate_json_size(safe_json_dumps(document), max_bytes, "Document")
        except JSONParseError as e:
            raise ValidationError(str(e), field="size") from e
        except TypeError as e:
            raise ValidationError(f"Document is not JSON serializable: {e}", field="type") from e


def validate_document_structure(
    document: Any,
    max_bytes: int = MAX_DOCUMENT_BYTES,
    max_depth: int = MAX_DOCUMENT_DEPTH,
) -> Result[Any, ValidationResult]:
    """
    Validate a raw document (Result pattern version).

    Returns:
        Success with the unchanged document, or Failure with the reason
    """
    try:
        DocumentValidator.validate(document, max_bytes, max_depth)
        return Success(document)
    except ValidationError as e:
        return Failure(ValidationResult(str(e), field=e.field))
