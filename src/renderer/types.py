"""
Renderer Type Definitions
Render phases, module descriptors and render outputs.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Protocol, Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core import Diagnostics
from registry import ComponentRegistry, RenderNode


class RenderPhase(str, Enum):
    """Per-pass render lifecycle; never persisted"""
    UNINITIALIZED = "uninitialized"
    REGISTRY_READY = "registry_ready"
    LOADING_MODULES = "loading_modules"
    MODULES_READY = "modules_ready"
    RENDERED = "rendered"


class ModuleDescriptor(BaseModel):
    """Installed feature module as reported by site configuration"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    module_id: str = Field(..., min_length=1)
    status: Literal["active", "inactive"] = "active"

    @property
    def is_active(self) -> bool:
        return self.status == "active"


class ModuleLoader(Protocol):
    """Registers module-provided components into a registry"""

    async def load(self, modules: Sequence[ModuleDescriptor], registry: ComponentRegistry) -> None:
        ...


class RenderTree(BaseModel):
    """Renderable output: the main tree plus one container per zone"""
    root: RenderNode
    zones: dict[str, RenderNode] = Field(default_factory=dict)

    def component_ids(self) -> list[str]:
        """Emitted component ids in output order (main tree, then zones)."""
        ids = self.root.component_ids()
        for zone in self.zones.values():
            ids.extend(zone.component_ids())
        return ids


@dataclass
class RenderStats:
    """Per-type reference counts collected by the pre-order visit hook."""

    references: dict[str, int] = field(default_factory=dict)
    rendered: int = 0
    hidden: int = 0
    skipped: int = 0

    def visit(self, type_name: str) -> None:
        self.references[type_name] = self.references.get(type_name, 0) + 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "references": dict(self.references),
            "rendered": self.rendered,
            "hidden": self.hidden,
            "skipped": self.skipped,
        }


@dataclass
class RenderResult:
    tree: RenderTree
    diagnostics: Diagnostics
    phase: RenderPhase
    stats: RenderStats
    render_id: str | None = None
