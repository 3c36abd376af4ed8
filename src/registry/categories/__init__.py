"""
Component Categories
Built-in component definitions grouped by category, plus module-provided sets.
"""

from .layout import register_layout_components
from .typography import register_typography_components, heading_tag, heading_level
from .media import register_media_components
from .interactive import register_interactive_components
from .sections import register_section_components
from .modules import (
    MODULE_COMPONENT_TYPES,
    MODULE_CONTAINER_CLASS,
    MODULE_CONTAINER_STYLE,
    MODULE_REGISTRARS,
    needs_module_container,
    register_booking_components,
    register_ecommerce_components,
)

BUILTIN_REGISTRARS = (
    register_layout_components,
    register_typography_components,
    register_media_components,
    register_interactive_components,
    register_section_components,
)

__all__ = [
    "BUILTIN_REGISTRARS",
    "MODULE_COMPONENT_TYPES",
    "MODULE_REGISTRARS",
    "MODULE_CONTAINER_CLASS",
    "MODULE_CONTAINER_STYLE",
    "needs_module_container",
    "register_layout_components",
    "register_typography_components",
    "register_media_components",
    "register_interactive_components",
    "register_section_components",
    "register_booking_components",
    "register_ecommerce_components",
    "heading_tag",
    "heading_level",
]
