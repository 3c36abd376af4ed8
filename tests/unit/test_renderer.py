"""Tests for the component tree renderer."""

import asyncio

import pytest

from core import Code, Settings
from document import Node
from registry import ComponentRegistry
from renderer import ModuleDescriptor, RenderPhase, TreeRenderer, render

BOOKING = ModuleDescriptor(module_id="booking")


class SlowLoader:
    async def load(self, modules, registry):
        await asyncio.sleep(5)


class BrokenLoader:
    async def load(self, modules, registry):
        raise RuntimeError("module index unavailable")


class FlakyRegistry(ComponentRegistry):
    def get(self, type_name):
        if type_name == "Flaky":
            raise KeyError(type_name)
        return super().get(type_name)


# ============================================================================
# Tree shape
# ============================================================================


@pytest.mark.unit
class TestRender:
    async def test_sample_document(self, renderer, sample_document, palette):
        result = await renderer.render(sample_document, palette)
        tree = result.tree

        assert result.phase is RenderPhase.RENDERED
        assert not result.diagnostics
        assert tree.root.tag == "main"
        assert tree.component_ids() == ["section-1", "heading-1", "button-1", "footer-1"]

        section = tree.root.children[0]
        heading, button = section.children
        assert section.style["padding"] == "24px"
        assert heading.tag == "h1"
        assert heading.text == "Hello"
        assert heading.style["fontSize"] == "24px"
        assert heading.class_name.startswith("dc-")
        assert button.tag == "a"
        assert tree.zones["footer"].id == "zone:footer"
        assert tree.zones["footer"].children[0].tag == "footer"

    async def test_brand_defaults_fill_content_props(self, renderer, document_factory, palette):
        document = document_factory(
            [
                Node(id="a", type="Text", props={"text": "a"}),
                Node(id="b", type="Text", props={"text": "b", "textColor": "#ff0000"}),
            ],
            ["a", "b"],
        )
        a, b = (await renderer.render(document, palette)).tree.root.children
        assert a.props["textColor"] == palette.slot("foreground")
        assert a.props["buttonBackgroundColor"] == palette.slot("buttonBg")
        assert b.props["textColor"] == "#ff0000"

    async def test_brand_defaults_do_not_become_styles(self, renderer, document_factory, palette):
        document = document_factory(
            [
                Node(id="s", type="Section", props={"backgroundColor": "#000000"}, children=["t"]),
                Node(id="t", type="Text", props={"text": "on dark"}),
            ],
            ["s"],
        )
        (section,) = (await renderer.render(document, palette)).tree.root.children
        (text,) = section.children

        assert section.style["backgroundColor"] == "#000000"
        assert "backgroundColor" not in text.style
        assert "borderColor" not in text.style

    async def test_stats(self, renderer, sample_document):
        result = await renderer.render(sample_document)
        assert result.stats.references == {"Section": 1, "Heading": 1, "Button": 1, "Footer": 1}
        assert result.stats.rendered == 4
        assert result.render_id.startswith("render_")

    async def test_children_of_leaf_types_are_ignored(self, renderer, document_factory):
        document = document_factory(
            [
                Node(id="h", type="Heading", props={"text": "t"}, children=["inner"]),
                Node(id="inner", type="Text", props={"text": "never"}),
            ],
            ["h"],
        )
        result = await renderer.render(document)
        assert result.tree.component_ids() == ["h"]

    async def test_hidden_nodes_are_skipped(self, renderer, document_factory):
        document = document_factory(
            [
                Node(id="s", type="Section", children=["t"], hidden=True),
                Node(id="t", type="Text", props={"text": "under hidden"}),
                Node(id="u", type="Text", props={"text": "visible"}),
            ],
            ["s", "u"],
        )
        result = await renderer.render(document)
        assert result.tree.component_ids() == ["u"]
        assert result.stats.hidden == 1
        assert not result.diagnostics

    async def test_empty_zone_is_kept(self, renderer, document_factory):
        result = await renderer.render(document_factory([], [], zones={"sidebar": []}))
        assert result.tree.zones["sidebar"].children == []
        assert result.tree.root.children == []


# ============================================================================
# Degraded input
# ============================================================================


@pytest.mark.unit
class TestDiagnostics:
    async def test_dangling_reference(self, renderer, sample_document):
        sample_document.root.children.append("ghost-1")
        result = await renderer.render(sample_document)

        assert "ghost-1" not in result.tree.component_ids()
        (diagnostic,) = result.diagnostics.for_node("ghost-1")
        assert diagnostic.code is Code.DANGLING_REFERENCE
        assert result.stats.skipped == 1

    async def test_cycle(self, renderer, document_factory):
        document = document_factory(
            [
                Node(id="a", type="Section", children=["b"]),
                Node(id="b", type="Section", children=["a"]),
            ],
            ["a"],
        )
        result = await renderer.render(document)

        a = result.tree.root.children[0]
        cycle = a.children[0].children[0]
        assert cycle.kind == "cycle"
        assert cycle.id == "a"
        assert result.diagnostics.codes() == [Code.CYCLE_DETECTED]

    async def test_self_reference(self, renderer, document_factory):
        document = document_factory([Node(id="a", type="Container", children=["a"])], ["a"])
        result = await renderer.render(document)
        assert result.tree.root.children[0].children[0].kind == "cycle"

    async def test_shared_child_is_not_a_cycle(self, renderer, document_factory):
        document = document_factory(
            [
                Node(id="s1", type="Section", children=["shared"]),
                Node(id="s2", type="Section", children=["shared"]),
                Node(id="shared", type="Text", props={"text": "twice"}),
            ],
            ["s1", "s2"],
        )
        result = await renderer.render(document)
        assert result.tree.component_ids() == ["s1", "shared", "s2", "shared"]
        assert not result.diagnostics

    async def test_unknown_type_placeholder(self, renderer, document_factory):
        document = document_factory([Node(id="m", type="Mystery")], ["m"])

        quiet = await renderer.render(document)
        assert quiet.tree.component_ids() == []
        assert quiet.diagnostics.codes() == [Code.UNKNOWN_TYPE]

        loud = await renderer.render(document, diagnostic_mode=True)
        (placeholder,) = loud.tree.root.children
        assert placeholder.kind == "placeholder"
        assert placeholder.text == "Unknown component: Mystery"

    async def test_render_error_is_contained(self, registry, settings, document_factory):
        def explode(inp):
            raise ValueError("bad props")

        registry.register_component("Exploding", explode)
        document = document_factory(
            [Node(id="x", type="Exploding"), Node(id="ok", type="Text", props={"text": "fine"})], ["x", "ok"]
        )
        result = await TreeRenderer(registry, settings=settings).render(document)

        assert result.tree.component_ids() == ["ok"]
        assert result.diagnostics.for_node("x")[0].code is Code.RENDER_ERROR
        assert result.diagnostics.has_errors()

    async def test_registry_lookup_failure(self, settings, document_factory):
        document = document_factory(
            [Node(id="f", type="Flaky"), Node(id="ok", type="Text", props={"text": "fine"})], ["f", "ok"]
        )
        result = await TreeRenderer(FlakyRegistry(), settings=settings).render(document)

        assert result.tree.component_ids() == ["ok"]
        assert result.diagnostics.codes() == [Code.REGISTRY_LOOKUP_FAILED]


# ============================================================================
# Modules
# ============================================================================


@pytest.mark.unit
class TestModules:
    async def test_module_components_are_wrapped(self, renderer, registry, document_factory):
        document = document_factory([Node(id="w", type="BookingWidget")], ["w"])
        result = await renderer.render(document, modules=[BOOKING])

        (wrapper,) = result.tree.root.children
        assert wrapper.kind == "module_container"
        assert wrapper.id == "w::module"
        assert wrapper.class_name == "module-container"
        assert wrapper.style["maxWidth"] == "1280px"
        assert wrapper.children[0].id == "w"
        assert registry.is_module_loaded("booking")
        assert result.tree.component_ids() == ["w"]

    async def test_inactive_modules_are_not_loaded(self, renderer, registry, document_factory):
        document = document_factory([Node(id="w", type="BookingWidget")], ["w"])
        result = await renderer.render(document, modules=[ModuleDescriptor(module_id="booking", status="inactive")])

        assert not registry.is_module_loaded("booking")
        assert result.tree.component_ids() == []
        assert result.diagnostics.codes() == [Code.UNKNOWN_TYPE]

    async def test_unknown_module_is_ignored(self, renderer, sample_document):
        result = await renderer.render(sample_document, modules=[ModuleDescriptor(module_id="reviews")])
        assert result.phase is RenderPhase.RENDERED
        assert not result.diagnostics

    async def test_timeout_renders_without_modules(self, registry, settings, document_factory):
        document = document_factory(
            [Node(id="w", type="BookingWidget"), Node(id="t", type="Text", props={"text": "still here"})], ["w", "t"]
        )
        renderer = TreeRenderer(registry, module_loader=SlowLoader(), settings=settings)
        result = await renderer.render(document, modules=[BOOKING])

        assert result.phase is RenderPhase.RENDERED
        assert result.tree.component_ids() == ["t"]
        assert Code.MODULE_LOAD_TIMEOUT in result.diagnostics.codes()

    async def test_loader_failure(self, registry, settings, sample_document):
        renderer = TreeRenderer(registry, module_loader=BrokenLoader(), settings=settings)
        result = await renderer.render(sample_document, modules=[BOOKING])

        assert result.diagnostics.codes() == [Code.MODULE_LOAD_FAILED]
        assert len(result.tree.component_ids()) == 4


@pytest.mark.unit
def test_render_sync(registry, sample_document):
    renderer = TreeRenderer(registry, settings=Settings())
    assert renderer.render_sync(sample_document).phase is RenderPhase.RENDERED


@pytest.mark.unit
async def test_module_level_render(registry, sample_document):
    result = await render(sample_document, registry, settings=Settings())
    assert result.tree.component_ids()[0] == "section-1"


# ============================================================================
# Nesting limits
# ============================================================================


def chain(length):
    """Containers nested ``length`` deep around a Text leaf."""
    nodes = [Node(id=f"c{i}", type="Container", children=[f"c{i + 1}"]) for i in range(length)]
    nodes.append(Node(id=f"c{length}", type="Text", props={"text": "leaf"}))
    return nodes


@pytest.mark.unit
class TestNesting:
    async def test_nodes_below_limit_are_skipped(self, registry, document_factory):
        renderer = TreeRenderer(registry, settings=Settings(max_tree_depth=3))
        result = await renderer.render(document_factory(chain(5), ["c0"]))

        assert result.tree.component_ids() == ["c0", "c1", "c2", "c3"]
        (diagnostic,) = result.diagnostics.for_node("c4")
        assert diagnostic.code is Code.TREE_TOO_DEEP
        assert result.stats.skipped == 1

    async def test_very_deep_tree_renders(self, renderer, settings, document_factory):
        result = await renderer.render(document_factory(chain(2000), ["c0"]))

        assert len(result.tree.component_ids()) == settings.max_tree_depth + 1
        assert result.diagnostics.codes() == [Code.TREE_TOO_DEEP]
