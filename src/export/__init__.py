"""
Static HTML export.

Canonical document -> standalone HTML with compiled styles and brand
custom properties.
"""

from .html import (
    DEFAULT_TAGS,
    VOID_ELEMENTS,
    ExportOptions,
    ExportResult,
    StaticHTMLSerializer,
    is_valid_tag,
    safe_url,
    serialize,
)
from .minify import minify_html

__all__ = [
    "DEFAULT_TAGS",
    "VOID_ELEMENTS",
    "ExportOptions",
    "ExportResult",
    "StaticHTMLSerializer",
    "is_valid_tag",
    "minify_html",
    "safe_url",
    "serialize",
]
