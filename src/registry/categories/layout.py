"""
Layout Components
Structural containers that nest their children.
"""

from typing import TYPE_CHECKING

from ..types import RenderInput, RenderNode, block, element

if TYPE_CHECKING:
    from ..registry import ComponentRegistry


def render_divider(inp: RenderInput) -> RenderNode:
    return element(inp, "hr", text="")


def register_layout_components(registry: "ComponentRegistry") -> None:
    """Register layout containers and separators."""

    # =============================================================================
    # CONTAINERS - accept children
    # =============================================================================

    registry.register_component("Section", block("section"), accepts_children=True, tag="section", category="layout")
    registry.register_component("Container", accepts_children=True, category="layout")
    registry.register_component("Columns", accepts_children=True, category="layout")
    registry.register_component("Card", accepts_children=True, category="layout")

    # =============================================================================
    # SEPARATORS
    # =============================================================================

    registry.register_component("Spacer", block("div"), category="layout")
    registry.register_component("Divider", render_divider, tag="hr", category="layout")
