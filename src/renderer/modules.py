"""
Module Component Loading
Registers module-provided components for active module descriptors.
"""

import asyncio
from typing import Callable, Mapping, Sequence

from core import get_logger
from registry import MODULE_REGISTRARS, ComponentRegistry
from .types import ModuleDescriptor

logger = get_logger(__name__)


def active_modules(modules: Sequence[ModuleDescriptor]) -> list[ModuleDescriptor]:
    return [m for m in modules if m.is_active]


class RegistryModuleLoader:
    """
    ``ModuleLoader`` backed by in-process registration functions.

    Each active module id is looked up in ``registrars``; unknown ids are
    logged and ignored, already-loaded modules are not registered twice.
    """

    def __init__(self, registrars: Mapping[str, Callable[[ComponentRegistry], None]] | None = None) -> None:
        self.registrars = dict(MODULE_REGISTRARS if registrars is None else registrars)

    async def load(self, modules: Sequence[ModuleDescriptor], registry: ComponentRegistry) -> None:
        for module in active_modules(modules):
            if registry.is_module_loaded(module.module_id):
                continue
            registrar = self.registrars.get(module.module_id)
            if registrar is None:
                logger.warning("module_unknown", module_id=module.module_id)
                continue
            registrar(registry)
            logger.info("module_loaded", module_id=module.module_id)
            await asyncio.sleep(0)


__all__ = ["RegistryModuleLoader", "active_modules"]
