"""
Component Tree Renderer
Walks a canonical document top-down and produces a RenderTree.

One pass runs through the phases in ``RenderPhase``. Only module loading is
asynchronous (and bounded by ``Settings.module_load_timeout``); the walk
itself is synchronous and always runs to completion.
"""

import asyncio
from typing import Sequence

from core import Code, Diagnostics, Settings, get_logger, get_settings, trace_operation
from core.id import new_render_id
from document import ROOT_ID, CanonicalDocument
from palette import BrandColorPalette, inject_defaults, resolve_palette
from registry import (
    MODULE_CONTAINER_CLASS,
    MODULE_CONTAINER_STYLE,
    ComponentDefinition,
    ComponentRegistry,
    RenderInput,
    RenderNode,
    needs_module_container,
)
from styles import compile_inline, generate_class_name, split_props
from .modules import RegistryModuleLoader, active_modules
from .types import ModuleDescriptor, ModuleLoader, RenderPhase, RenderResult, RenderStats, RenderTree

logger = get_logger(__name__)

PLACEHOLDER_CLASS = "component-placeholder"
CYCLE_CLASS = "component-cycle"


def placeholder(node_id: str, type_name: str) -> RenderNode:
    return RenderNode(
        id=node_id,
        type=type_name,
        kind="placeholder",
        class_name=PLACEHOLDER_CLASS,
        text=f"Unknown component: {type_name}",
    )


def cycle_placeholder(node_id: str) -> RenderNode:
    return RenderNode(
        id=node_id,
        type="Cycle",
        kind="cycle",
        class_name=CYCLE_CLASS,
        text=f"Circular reference: {node_id}",
    )


def module_container(inner: RenderNode) -> RenderNode:
    return RenderNode(
        id=f"{inner.id}::module",
        type=inner.type,
        kind="module_container",
        class_name=MODULE_CONTAINER_CLASS,
        style=dict(MODULE_CONTAINER_STYLE),
        children=[inner],
    )


class _TreeWalk:
    """State for one walk: diagnostics, stats and the in-progress id set."""

    def __init__(
        self,
        document: CanonicalDocument,
        registry: ComponentRegistry,
        palette: BrandColorPalette,
        diagnostic_mode: bool,
        class_prefix: str,
        diagnostics: Diagnostics,
        stats: RenderStats,
        max_depth: int,
    ) -> None:
        self.document = document
        self.registry = registry
        self.palette = palette
        self.diagnostic_mode = diagnostic_mode
        self.class_prefix = class_prefix
        self.diagnostics = diagnostics
        self.stats = stats
        self.max_depth = max_depth
        self.in_progress: set[str] = set()

    def render_children(self, ids: Sequence[str], owner: str, depth: int = 0) -> list[RenderNode]:
        rendered = []
        for node_id in ids:
            output = self.render_ref(node_id, owner, depth)
            if output is not None:
                rendered.append(output)
        return rendered

    def _lookup(self, node_id: str, type_name: str) -> tuple[bool, ComponentDefinition | None]:
        try:
            return True, self.registry.get(type_name)
        except Exception as e:
            logger.error("registry_lookup_failed", node_id=node_id, type=type_name, error=str(e), exc_info=True)
            self.diagnostics.error(
                Code.REGISTRY_LOOKUP_FAILED, f"Lookup for {type_name!r} failed: {e}", node_id=node_id
            )
            return False, None

    def render_ref(self, node_id: str, owner: str, depth: int = 0) -> RenderNode | None:
        if depth > self.max_depth:
            logger.warning("tree_too_deep", node_id=node_id, owner=owner, max_depth=self.max_depth)
            self.diagnostics.warning(
                Code.TREE_TOO_DEEP, f"{node_id} is nested deeper than {self.max_depth}", node_id=node_id, owner=owner
            )
            self.stats.skipped += 1
            return None
        if node_id in self.in_progress:
            logger.warning("cycle_detected", node_id=node_id, owner=owner)
            self.diagnostics.warning(Code.CYCLE_DETECTED, f"Cycle at {node_id}", node_id=node_id, owner=owner)
            return cycle_placeholder(node_id)

        node = self.document.get(node_id)
        if node is None:
            logger.warning("dangling_reference", node_id=node_id, owner=owner)
            self.diagnostics.warning(
                Code.DANGLING_REFERENCE, f"Reference to missing component {node_id}", node_id=node_id, owner=owner
            )
            self.stats.skipped += 1
            return None
        if node.hidden:
            self.stats.hidden += 1
            return None

        self.stats.visit(node.type)
        found, definition = self._lookup(node_id, node.type)
        if not found:
            self.stats.skipped += 1
            return None
        if definition is None:
            self.diagnostics.warning(Code.UNKNOWN_TYPE, f"Unknown component type {node.type!r}", node_id=node_id)
            if self.diagnostic_mode:
                return placeholder(node_id, node.type)
            self.stats.skipped += 1
            return None

        self.in_progress.add(node_id)
        try:
            children = (
                self.render_children(node.children or (), node_id, depth + 1) if definition.accepts_children else []
            )
            style_props, _ = split_props(node.props)
            _, content_props = split_props(inject_defaults(node.props, self.palette))
            render_input = RenderInput(
                node_id=node_id,
                type=node.type,
                props=content_props,
                style=compile_inline(style_props),
                palette=self.palette,
                class_name=generate_class_name(node_id, self.class_prefix),
                children=children,
            )
            try:
                output = definition.render(render_input)
            except Exception as e:
                logger.error("render_error", node_id=node_id, type=node.type, error=str(e), exc_info=True)
                self.diagnostics.error(Code.RENDER_ERROR, f"Render failed for {node.type}: {e}", node_id=node_id)
                self.stats.skipped += 1
                return None
        finally:
            self.in_progress.discard(node_id)

        self.stats.rendered += 1
        if needs_module_container(node.type, definition.source):
            return module_container(output)
        return output

    def render_zone(self, zone_id: str, entries: Sequence[str]) -> RenderNode:
        return RenderNode(
            id=f"zone:{zone_id}",
            type="Zone",
            kind="zone",
            props={"zone": zone_id},
            children=self.render_children(entries, f"zone:{zone_id}"),
        )

    def render_document(self) -> RenderTree:
        root = RenderNode(
            id=ROOT_ID,
            type=self.document.root.type,
            kind="root",
            tag="main",
            props=dict(self.document.root.props),
            children=self.render_children(self.document.root.children, ROOT_ID),
        )
        zones = {zone_id: self.render_zone(zone_id, entries) for zone_id, entries in self.document.zones.items()}
        return RenderTree(root=root, zones=zones)


class TreeRenderer:
    """
    Renders canonical documents against a component registry.

    Args:
        registry: Component registry (bootstrapped on first render)
        module_loader: Loader for module-provided components
        settings: Engine settings (timeout, diagnostic mode, class prefix)
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        module_loader: ModuleLoader | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.registry = registry
        self.module_loader = module_loader or RegistryModuleLoader()
        self.settings = settings or get_settings()

    async def load_modules(self, modules: Sequence[ModuleDescriptor], diagnostics: Diagnostics) -> None:
        timeout = self.settings.module_load_timeout
        try:
            await asyncio.wait_for(self.module_loader.load(modules, self.registry), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("module_load_timeout", timeout=timeout, modules=[m.module_id for m in modules])
            diagnostics.warning(
                Code.MODULE_LOAD_TIMEOUT, f"Module loading exceeded {timeout}s; rendering without module components"
            )
        except Exception as e:
            logger.error("module_load_failed", error=str(e), exc_info=True)
            diagnostics.error(Code.MODULE_LOAD_FAILED, f"Module loading failed: {e}")

    async def render(
        self,
        document: CanonicalDocument,
        palette: BrandColorPalette | None = None,
        modules: Sequence[ModuleDescriptor] = (),
        *,
        diagnostic_mode: bool | None = None,
    ) -> RenderResult:
        """
        Render ``document`` to a RenderTree.

        Never raises for data problems; they are returned as diagnostics.
        """
        render_id = new_render_id()
        diagnostics = Diagnostics()
        stats = RenderStats()
        phase = RenderPhase.UNINITIALIZED

        with trace_operation("render", render_id=render_id, components=len(document.components)):
            self.registry.ensure_ready()
            phase = RenderPhase.REGISTRY_READY

            if active_modules(modules):
                phase = RenderPhase.LOADING_MODULES
                await self.load_modules(modules, diagnostics)
            phase = RenderPhase.MODULES_READY

            walk = _TreeWalk(
                document,
                self.registry,
                palette or resolve_palette(),
                self.settings.diagnostic_mode if diagnostic_mode is None else diagnostic_mode,
                self.settings.class_prefix,
                diagnostics,
                stats,
                self.settings.max_tree_depth,
            )
            tree = walk.render_document()
            phase = RenderPhase.RENDERED

        logger.info("document_rendered", render_id=render_id, diagnostics=len(diagnostics), **stats.to_dict())
        return RenderResult(tree=tree, diagnostics=diagnostics, phase=phase, stats=stats, render_id=render_id)

    def render_sync(
        self,
        document: CanonicalDocument,
        palette: BrandColorPalette | None = None,
        modules: Sequence[ModuleDescriptor] = (),
        *,
        diagnostic_mode: bool | None = None,
    ) -> RenderResult:
        """Synchronous wrapper; must not be called from a running event loop."""
        return asyncio.run(self.render(document, palette, modules, diagnostic_mode=diagnostic_mode))


async def render(
    document: CanonicalDocument,
    registry: ComponentRegistry,
    palette: BrandColorPalette | None = None,
    modules: Sequence[ModuleDescriptor] = (),
    *,
    settings: Settings | None = None,
) -> RenderResult:
    return await TreeRenderer(registry, settings=settings).render(document, palette, modules)
