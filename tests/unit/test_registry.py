"""Tests for the component registry and built-in categories."""

import pytest

from palette import resolve_palette
from registry import (
    MODULE_REGISTRARS,
    ComponentRegistry,
    RenderInput,
    RenderNode,
    heading_tag,
    needs_module_container,
    node_text,
)


def make_input(type_name="Text", props=None, children=None):
    return RenderInput(
        node_id="node-1",
        type=type_name,
        props=props or {},
        style={"color": "red"},
        palette=resolve_palette(),
        class_name="dc-00000000",
        children=children or [],
    )


@pytest.mark.unit
class TestComponentRegistry:
    def test_ensure_ready_is_idempotent(self):
        calls = []
        registry = ComponentRegistry([lambda r: calls.append(r)])

        assert not registry.is_initialized()
        assert registry.ensure_ready() is registry
        registry.ensure_ready()
        assert calls == [registry]
        assert registry.is_initialized()

    def test_builtin_categories(self, registry):
        assert {"layout", "typography", "media", "interactive", "forms", "navigation", "sections"} <= set(
            registry.get_categories()
        )
        assert "Heading" in registry
        assert registry.get("Nope") is None

    def test_last_registration_wins(self, registry):
        registry.register_component("Heading", tag="h6", category="custom")
        definition = registry.get("Heading")
        assert definition.tag == "h6"
        assert definition.category == "custom"

    def test_list_components_by_category(self, registry):
        layout = {c.type for c in registry.list_components("layout")}
        assert layout == {"Section", "Container", "Columns", "Card", "Spacer", "Divider"}
        assert len(registry.list_components()) == len(registry)

    def test_containers(self, registry):
        assert registry.get("Section").accepts_children
        assert registry.get("Form").accepts_children
        assert not registry.get("Heading").accepts_children
        assert not registry.get("Image").accepts_children

    def test_modules_are_not_builtin(self, registry):
        assert "BookingWidget" not in registry

    def test_module_registration(self, registry):
        MODULE_REGISTRARS["booking"](registry)

        definition = registry.get("BookingWidget")
        assert definition.is_module
        assert definition.source == "booking"
        assert registry.is_module_loaded("booking")
        assert not registry.is_module_loaded("ecommerce")


@pytest.mark.unit
class TestRenderFunctions:
    @pytest.mark.parametrize(
        "props,tag",
        [({"level": "h1"}, "h1"), ({"level": 3}, "h3"), ({"level": "H4"}, "h4"), ({"level": 9}, "h2"), ({}, "h2")],
    )
    def test_heading_tag(self, props, tag):
        assert heading_tag(props) == tag

    def test_heading_renders_level(self, registry):
        output = registry.get("Heading").render(make_input("Heading", {"text": "Hi", "level": "h1"}))
        assert output.tag == "h1"
        assert output.text == "Hi"
        assert output.style == {"color": "red"}
        assert output.class_name == "dc-00000000"

    def test_button_tag_depends_on_href(self, registry):
        render = registry.get("Button").render
        assert render(make_input("Button", {"text": "Go", "href": "/x"})).tag == "a"
        assert render(make_input("Button", {"text": "Go"})).tag == "button"

    def test_divider_has_no_text(self, registry):
        assert registry.get("Divider").render(make_input("Divider", {"text": "ignored"})).text == ""

    def test_children_pass_through(self, registry):
        child = RenderNode(id="child", type="Text")
        output = registry.get("Section").render(make_input("Section", children=[child]))
        assert output.tag == "section"
        assert [c.id for c in output.children] == ["child"]

    def test_node_text(self):
        assert node_text({"content": "body", "title": "t"}) == "body"
        assert node_text({"text": "", "label": 5}) == "5"
        assert node_text({"text": True}) is None


@pytest.mark.unit
def test_needs_module_container():
    assert needs_module_container("BookingWidget")
    assert needs_module_container("CustomWidget", "reviews")
    assert not needs_module_container("Heading", "builtin")
    assert not needs_module_container("Heading")


@pytest.mark.unit
def test_render_node_walk():
    tree = RenderNode(
        id="root",
        type="Root",
        kind="root",
        children=[
            RenderNode(id="a", type="Section", children=[RenderNode(id="b", type="Text")]),
            RenderNode(id="c::module", type="BookingWidget", kind="module_container", children=[RenderNode(id="c", type="BookingWidget")]),
        ],
    )
    assert [n.id for n in tree.walk()] == ["root", "a", "b", "c::module", "c"]
    assert tree.component_ids() == ["a", "b", "c"]
