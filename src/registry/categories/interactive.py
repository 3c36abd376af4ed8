"""
Interactive Components
Buttons, links, forms and site chrome.
"""

from typing import TYPE_CHECKING

from ..types import RenderInput, RenderNode, block, element

if TYPE_CHECKING:
    from ..registry import ComponentRegistry


def render_button(inp: RenderInput) -> RenderNode:
    """Anchor when the button links somewhere, native button otherwise."""
    href = inp.props.get("href")
    return element(inp, "a" if isinstance(href, str) and href else "button")


def register_interactive_components(registry: "ComponentRegistry") -> None:
    """Register buttons, forms and navigation."""

    # =============================================================================
    # ACTIONS
    # =============================================================================

    registry.register_component("Button", render_button, category="interactive")
    registry.register_component("Link", block("a"), tag="a", category="interactive")

    # =============================================================================
    # FORMS
    # =============================================================================

    registry.register_component("Form", block("form"), accepts_children=True, tag="form", category="forms")
    registry.register_component("FormField", block("label"), tag="label", category="forms")
    registry.register_component("ContactForm", block("form"), tag="form", category="forms")
    registry.register_component("Newsletter", block("form"), tag="form", category="forms")

    # =============================================================================
    # NAVIGATION
    # =============================================================================

    registry.register_component("Navbar", block("nav"), tag="nav", category="navigation")
    registry.register_component("Footer", block("footer"), tag="footer", category="navigation")
    registry.register_component("SocialLinks", block("ul"), tag="ul", category="navigation")
