"""
Section Components
Full-width marketing sections and product listings.
"""

from typing import TYPE_CHECKING

from ..types import block

if TYPE_CHECKING:
    from ..registry import ComponentRegistry

SECTION_TYPES = ("Hero", "Features", "CTA", "Testimonials", "FAQ", "Stats", "Team", "Pricing")


def register_section_components(registry: "ComponentRegistry") -> None:
    """Register page sections; Hero and CTA may nest children."""
    for type_name in SECTION_TYPES:
        registry.register_component(
            type_name,
            block("section"),
            accepts_children=type_name in ("Hero", "CTA"),
            tag="section",
            category="sections",
        )

    registry.register_component("ProductGrid", block("div"), category="sections")
    registry.register_component("ProductCard", block("article"), tag="article", category="sections")
