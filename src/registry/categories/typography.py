"""
Typography Components
Headings, body text and quotes.
"""

from typing import TYPE_CHECKING, Any, Mapping

from ..types import RenderInput, RenderNode, block, element

if TYPE_CHECKING:
    from ..registry import ComponentRegistry

DEFAULT_HEADING_LEVEL = 2


def heading_level(props: Mapping[str, Any]) -> int:
    """Heading level 1-6 from ``level`` (``2`` or ``"h2"``)."""
    level = props.get("level")
    if isinstance(level, str):
        level = level.lower().removeprefix("h")
        level = int(level) if level.isdigit() else None
    if isinstance(level, int) and not isinstance(level, bool) and 1 <= level <= 6:
        return level
    return DEFAULT_HEADING_LEVEL


def heading_tag(props: Mapping[str, Any]) -> str:
    return f"h{heading_level(props)}"


def render_heading(inp: RenderInput) -> RenderNode:
    return element(inp, heading_tag(inp.props))


def register_typography_components(registry: "ComponentRegistry") -> None:
    """Register text components."""
    registry.register_component("Heading", render_heading, category="typography")
    registry.register_component("Text", block("p"), tag="p", category="typography")
    registry.register_component("RichText", block("div"), category="typography")
    registry.register_component("Quote", block("blockquote"), tag="blockquote", category="typography")
