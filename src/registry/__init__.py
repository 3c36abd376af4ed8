"""
Component registry.

Maps component type names to capability records (render function,
container flag, output tag, providing module).
"""

from .types import (
    BUILTIN_SOURCE,
    ComponentDefinition,
    RenderFunction,
    RenderInput,
    RenderNode,
    block,
    element,
    node_text,
)
from .registry import ComponentRegistry, Registrar
from .categories import (
    BUILTIN_REGISTRARS,
    MODULE_COMPONENT_TYPES,
    MODULE_CONTAINER_CLASS,
    MODULE_CONTAINER_STYLE,
    MODULE_REGISTRARS,
    heading_tag,
    needs_module_container,
)

__all__ = [
    "ComponentRegistry",
    "ComponentDefinition",
    "Registrar",
    "RenderFunction",
    "RenderInput",
    "RenderNode",
    "BUILTIN_SOURCE",
    "BUILTIN_REGISTRARS",
    "MODULE_COMPONENT_TYPES",
    "MODULE_REGISTRARS",
    "MODULE_CONTAINER_CLASS",
    "MODULE_CONTAINER_STYLE",
    "needs_module_container",
    "block",
    "element",
    "node_text",
    "heading_tag",
]
