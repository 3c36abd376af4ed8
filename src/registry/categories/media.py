"""
Media Components
Images, video, maps and galleries.
"""

from typing import TYPE_CHECKING

from ..types import RenderInput, RenderNode, block, element

if TYPE_CHECKING:
    from ..registry import ComponentRegistry


def render_image(inp: RenderInput) -> RenderNode:
    # img is void; alt text travels as a prop, never as content
    return element(inp, "img", text="")


def register_media_components(registry: "ComponentRegistry") -> None:
    """Register media components."""
    registry.register_component("Image", render_image, tag="img", category="media")
    registry.register_component("Video", block("figure"), tag="figure", category="media")
    registry.register_component("Map", block("figure"), tag="figure", category="media")
    registry.register_component("Gallery", block("div"), category="media")
