"""
Style compilation.

Component props -> explicit base, state and breakpoint rule sets, emitted as
CSS rule sheets or inline style maps.
"""

from . import responsive
from .compiler import (
    DEFAULT_TRANSITION,
    TRANSITION_SHORTHANDS,
    CompiledStyles,
    CompileOptions,
    RuleSet,
    compile_inline,
    compile_node,
    compile_transition,
    split_props,
)
from .properties import (
    STATE_EDITABLE_PROPERTIES,
    SPACING_TOKENS,
    STYLE_PROPERTIES,
    TRANSFORM_FUNCTIONS,
    State,
    StyleProperty,
    is_style_prop,
)
from .responsive import BREAKPOINTS, Breakpoint
from .sheet import (
    BASE_STYLES,
    CSSRule,
    SheetOptions,
    generate_class_name,
    generate_page_css,
    minify_css,
    parse_css,
    to_css,
)

__all__ = [
    "responsive",
    # Compiler
    "CompiledStyles",
    "CompileOptions",
    "RuleSet",
    "compile_node",
    "compile_inline",
    "compile_transition",
    "split_props",
    "DEFAULT_TRANSITION",
    "TRANSITION_SHORTHANDS",
    # Tables
    "STYLE_PROPERTIES",
    "STATE_EDITABLE_PROPERTIES",
    "TRANSFORM_FUNCTIONS",
    "SPACING_TOKENS",
    "State",
    "StyleProperty",
    "is_style_prop",
    # Breakpoints
    "Breakpoint",
    "BREAKPOINTS",
    # Sheets
    "BASE_STYLES",
    "CSSRule",
    "SheetOptions",
    "generate_class_name",
    "generate_page_css",
    "minify_css",
    "parse_css",
    "to_css",
]
