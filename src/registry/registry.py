"""Component Registry - type name to capability record."""

from typing import Callable, Iterable

from core import get_logger
from .categories import BUILTIN_REGISTRARS
from .types import BUILTIN_SOURCE, ComponentDefinition, RenderFunction, block

logger = get_logger(__name__)

Registrar = Callable[["ComponentRegistry"], None]


class ComponentRegistry:
    """
    Component lookup by type name.

    Registration is keyed by type name and the last registration wins.
    ``ensure_ready`` registers the built-in categories exactly once and may
    be called any number of times.
    """

    def __init__(self, registrars: Iterable[Registrar] | None = None) -> None:
        self.components: dict[str, ComponentDefinition] = {}
        self._registrars = list(BUILTIN_REGISTRARS if registrars is None else registrars)
        self._initialized = False
        self._loaded_modules: set[str] = set()

    def ensure_ready(self) -> "ComponentRegistry":
        if self._initialized:
            return self
        for registrar in self._registrars:
            registrar(self)
        self._initialized = True
        logger.info(
            "registry_ready", components=len(self.components), categories=len(self.get_categories())
        )
        return self

    def is_initialized(self) -> bool:
        return self._initialized

    def register(self, definition: ComponentDefinition) -> None:
        previous = self.components.get(definition.type)
        self.components[definition.type] = definition
        if previous is not None and previous.source != definition.source:
            logger.debug("component_replaced", type=definition.type, source=definition.source)

    def register_component(
        self,
        type_name: str,
        render: RenderFunction | None = None,
        *,
        accepts_children: bool = False,
        tag: str | None = None,
        category: str = "general",
        source: str = BUILTIN_SOURCE,
    ) -> ComponentDefinition:
        """Register ``type_name``; without a render function it renders as a plain block."""
        definition = ComponentDefinition(
            type=type_name,
            render=render or block(tag or "div"),
            accepts_children=accepts_children,
            tag=tag,
            category=category,
            source=source,
        )
        self.register(definition)
        return definition

    def mark_module_loaded(self, module_id: str) -> None:
        self._loaded_modules.add(module_id)

    def is_module_loaded(self, module_id: str) -> bool:
        return module_id in self._loaded_modules

    def get(self, type_name: str) -> ComponentDefinition | None:
        return self.components.get(type_name)

    def get_categories(self) -> list[str]:
        return sorted({c.category for c in self.components.values()})

    def list_components(self, category: str | None = None) -> list[ComponentDefinition]:
        components = list(self.components.values())
        if category:
            components = [c for c in components if c.category == category]
        return components

    def types(self) -> list[str]:
        return sorted(self.components)

    def __contains__(self, type_name: object) -> bool:
        return type_name in self.components

    def __len__(self) -> int:
        return len(self.components)


__all__ = ["ComponentRegistry", "Registrar"]
