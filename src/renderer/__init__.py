"""
Component tree rendering.

Canonical document + registry + palette -> RenderTree, with diagnostics.
"""

from .types import (
    ModuleDescriptor,
    ModuleLoader,
    RenderPhase,
    RenderResult,
    RenderStats,
    RenderTree,
)
from .modules import RegistryModuleLoader, active_modules
from .tree import TreeRenderer, cycle_placeholder, module_container, placeholder, render

__all__ = [
    "ModuleDescriptor",
    "ModuleLoader",
    "RenderPhase",
    "RenderResult",
    "RenderStats",
    "RenderTree",
    "RegistryModuleLoader",
    "active_modules",
    "TreeRenderer",
    "render",
    "placeholder",
    "cycle_placeholder",
    "module_container",
]
