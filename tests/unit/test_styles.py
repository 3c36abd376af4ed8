"""Tests for the style compiler, responsive values and CSS sheets."""

import re

import pytest
from hypothesis import given, strategies as st

from document import Node
from styles import (
    Breakpoint,
    CompileOptions,
    State,
    SheetOptions,
    compile_inline,
    compile_node,
    compile_transition,
    generate_class_name,
    generate_page_css,
    minify_css,
    parse_css,
    responsive,
    split_props,
    to_css,
)
from styles.properties import format_value

scalars = st.one_of(st.integers(-500, 500), st.sampled_from(["auto", "center", "1rem", "bold"]))


# ============================================================================
# Responsive values
# ============================================================================


@pytest.mark.unit
class TestResponsive:
    @given(scalars, st.sampled_from(list(Breakpoint)))
    def test_base_only_inherits_everywhere(self, value, breakpoint):
        assert responsive.resolve({"mobile": value}, breakpoint) == value

    def test_cascade(self):
        value = {"mobile": 14, "tablet": 16}
        assert responsive.resolve(value, "mobile") == 14
        assert responsive.resolve(value, "tablet") == 16
        assert responsive.resolve(value, "desktop") == 16

    def test_legacy_base_key(self):
        assert responsive.resolve({"base": 10, "desktop": 20}, "tablet") == 10

    def test_plain_values(self):
        assert responsive.resolve("left", "desktop") == "left"
        assert responsive.wrap(12) == {"mobile": 12}
        assert responsive.wrap({"mobile": 1}) == {"mobile": 1}


# ============================================================================
# Values
# ============================================================================


@pytest.mark.unit
class TestFormatValue:
    def test_numbers_get_px(self):
        assert format_value("fontSize", 18) == "18px"

    def test_unitless(self):
        assert format_value("fontWeight", 700) == "700"
        assert format_value("zIndex", 3) == "3"

    def test_opacity_scale(self):
        assert format_value("opacity", 50) == "0.5"
        assert format_value("opacity", 250) == "1"

    def test_spacing_dict(self):
        assert format_value("padding", {"top": 8, "bottom": 16}) == "8px 0px 16px 0px"

    def test_spacing_tokens(self):
        assert format_value("padding", "md") == "16px"
        assert format_value("gap", "none") == "0"

    def test_strings_sanitized(self):
        assert format_value("color", "red;} body{display:none") == "red bodydisplay:none"

    @pytest.mark.parametrize("value", [None, "", True, [1, 2]])
    def test_unset_or_unrepresentable(self, value):
        assert format_value("width", value) is None

    def test_unknown_prop(self):
        assert format_value("text", "hello") is None


@pytest.mark.unit
class TestTransition:
    def test_defaults(self):
        assert compile_transition({}) is None
        assert compile_transition({"property": "all"}) == "all 200ms ease-out"

    def test_colors_shorthand_expands(self):
        assert compile_transition({"property": "colors", "duration": 200, "easing": "ease-out"}) == (
            "background-color 200ms ease-out, color 200ms ease-out, border-color 200ms ease-out"
        )

    def test_delay_and_fallbacks(self):
        assert compile_transition({"property": "bogus", "easing": "wobble", "delay": 50}) == "all 200ms ease-out 50ms"
        assert compile_transition({"property": "none"}) is None


# ============================================================================
# Compilation
# ============================================================================


@pytest.mark.unit
class TestCompileNode:
    def test_base_states_and_breakpoints(self):
        node = Node(
            id="btn",
            type="Button",
            props={"text": "Go", "backgroundColor": "#3b82f6", "fontSize": {"mobile": 14, "desktop": 18}},
            states={"hover": {"backgroundColor": "#2563eb", "text": "ignored"}},
            transition={"property": "colors"},
        )
        compiled = compile_node(node)

        assert compiled.base["background-color"] == "#3b82f6"
        assert compiled.base["font-size"] == "14px"
        assert compiled.base["transition"].startswith("background-color 200ms")
        assert compiled.states == {State.HOVER: {"background-color": "#2563eb"}}
        assert compiled.responsive == {Breakpoint.DESKTOP: {"font-size": "18px"}}

    def test_overrides_are_sparse(self):
        compiled = compile_node({"props": {"padding": {"mobile": 8}, "color": "red"}})
        assert compiled.responsive == {}

    def test_transform_functions_combine(self):
        compiled = compile_node({"props": {"transform": "perspective(100px)", "translateX": 10, "rotate": 45}})
        assert compiled.base["transform"] == "perspective(100px) translateX(10px) rotate(45deg)"

    def test_options(self):
        node = {"props": {"fontSize": {"mobile": 1, "tablet": 2}}, "states": {"focus": {"color": "red"}}}
        compiled = compile_node(node, CompileOptions(include_states=False, include_responsive=False))
        assert not compiled.states and not compiled.responsive

    def test_malformed_values_excluded(self):
        compiled = compile_node({"props": {"opacity": "abc", "width": ["bad"], "unknownProp": 3}})
        assert compiled.is_empty()


@pytest.mark.unit
def test_split_props():
    style, content = split_props({"text": "Hi", "color": "red", "scale": 1.1})
    assert style == {"color": "red", "scale": 1.1}
    assert content == {"text": "Hi"}


@pytest.mark.unit
def test_compile_inline():
    styles = compile_inline({"fontSize": {"mobile": 16, "desktop": 20}, "zIndex": 2, "scale": 1.05, "text": "x"})
    assert styles == {"fontSize": "16px", "zIndex": 2, "transform": "scale(1.05)"}


# ============================================================================
# Sheets
# ============================================================================


@pytest.mark.unit
class TestSheets:
    def test_class_name_stable_and_safe(self):
        name = generate_class_name("heading-1")
        assert name == generate_class_name("heading-1")
        assert re.fullmatch(r"dc-[0-9a-f]{8}", name)
        assert generate_class_name("heading-1", "9bad prefix").startswith("dc-")
        assert generate_class_name("heading-1", "page").startswith("page-")

    def test_to_css_order(self):
        compiled = compile_node(
            {
                "props": {"color": "red", "fontSize": {"mobile": 12, "tablet": 14, "desktop": 16}},
                "states": {"hover": {"color": "blue"}},
            }
        )
        css = to_css(compiled, "dc-test")
        assert css.index(".dc-test {") < css.index(".dc-test:hover") < css.index("min-width: 768px")
        assert css.index("min-width: 768px") < css.index("min-width: 1024px")

    def test_minified_parses_the_same(self):
        compiled = compile_node({"props": {"color": "red", "padding": {"mobile": 4, "desktop": 8}}})
        css = to_css(compiled, "dc-x")
        assert parse_css(minify_css(css)) == parse_css(css)
        assert parse_css(to_css(compiled, "dc-x", minify=True)) == parse_css(css)

    def test_minify_keeps_calc(self):
        assert minify_css(".a { width: calc(100% - 2rem); }") == ".a{width:calc(100% - 2rem)}"

    def test_parse_media(self):
        rules = parse_css("@media (min-width: 768px) { .a { color: red; } } .b { margin: 0 }")
        assert rules[0].media == "@media (min-width:768px)"
        assert rules[0].declarations == (("color", "red"),)
        assert rules[1].selector == ".b" and rules[1].media is None

    def test_page_css(self):
        nodes = [
            Node(id="a", type="Text", props={"color": "red"}),
            Node(id="b", type="Text", props={"text": "no styles"}),
        ]
        css = generate_page_css(nodes, SheetOptions(include_base=False))
        assert f".{generate_class_name('a')}" in css
        assert generate_class_name("b") not in css

    def test_page_css_includes_base(self):
        assert "box-sizing: border-box" in generate_page_css([])
        assert "box-sizing:border-box" in generate_page_css([], SheetOptions(minify=True))
