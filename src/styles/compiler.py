"""
Style Compiler
Turns a node's props, state overrides and transition into explicit rule sets.

Output is always a base rule set plus sparse overrides; inheritance across
breakpoints and states is left to rule precedence, never duplicated.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from core import get_logger

from .properties import (
    STATE_EDITABLE_PROPERTIES,
    STYLE_PROPERTIES,
    TRANSFORM_FUNCTIONS,
    State,
    format_transform_function,
    format_value,
    is_style_prop,
    to_inline_value,
)
from .responsive import BREAKPOINT_ORDER, Breakpoint, base_value, is_responsive, override

logger = get_logger(__name__)

RuleSet = dict[str, str]

TRANSITION_PROPERTIES = ("all", "transform", "opacity", "colors", "shadow", "none")
TRANSITION_EASINGS = ("ease", "ease-in", "ease-out", "ease-in-out", "linear")

# Named transition shorthands -> concrete CSS properties
TRANSITION_SHORTHANDS: dict[str, tuple[str, ...]] = {
    "colors": ("background-color", "color", "border-color"),
    "shadow": ("box-shadow", "text-shadow"),
}

DEFAULT_TRANSITION: dict[str, Any] = {
    "property": "all",
    "duration": 200,
    "easing": "ease-out",
    "delay": 0,
}


@dataclass
class CompileOptions:
    include_states: bool = True
    include_responsive: bool = True


@dataclass
class CompiledStyles:
    """Explicit base rules plus sparse per-state and per-breakpoint overrides."""

    base: RuleSet = field(default_factory=dict)
    states: dict[State, RuleSet] = field(default_factory=dict)
    responsive: dict[Breakpoint, RuleSet] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not (self.base or self.states or self.responsive)


# ============================================================================
# Node access (models or plain mappings)
# ============================================================================


def _attr(node: Any, name: str, alias: str | None = None) -> Any:
    if isinstance(node, Mapping):
        value = node.get(name)
        if value is None and alias:
            value = node.get(alias)
        return value
    return getattr(node, name, None)


def _as_mapping(value: Any) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return dict(value)
    dump = getattr(value, "model_dump", None)
    if callable(dump):
        return dump(exclude_none=True)
    return {}


# ============================================================================
# Declarations
# ============================================================================


def _declarations(props: Mapping[str, Any], pick: Any) -> RuleSet:
    """
    Compile props to declarations, reading each value through ``pick``.

    ``pick`` maps a raw prop value to the value for the current context
    (base or one breakpoint) or None when the context has nothing to emit.
    """
    rules: RuleSet = {}
    functions: list[str] = []

    for prop, raw in props.items():
        if prop in TRANSFORM_FUNCTIONS:
            fragment = format_transform_function(prop, pick(raw))
            if fragment:
                functions.append(fragment)
            continue

        style_prop = STYLE_PROPERTIES.get(prop)
        if style_prop is None:
            continue
        css_value = format_value(prop, pick(raw))
        if css_value is not None:
            rules[style_prop.css_name] = css_value

    if functions:
        explicit = rules.get("transform")
        rules["transform"] = " ".join(([explicit] if explicit else []) + functions)
    return rules


def compile_transition(transition: Any) -> str | None:
    """
    Single ``transition`` value, or None for ``none``/missing.

    Shorthands expand per property:
    ``colors`` -> ``background-color 200ms ease-out, color 200ms ease-out, ...``.
    """
    settings = _as_mapping(transition)
    if not settings:
        return None
    merged = {**DEFAULT_TRANSITION, **{k: v for k, v in settings.items() if v is not None}}

    prop = str(merged["property"])
    if prop == "none":
        return None
    if prop not in TRANSITION_PROPERTIES:
        logger.debug("unknown_transition_property", property=prop)
        prop = DEFAULT_TRANSITION["property"]

    easing = str(merged["easing"])
    if easing not in TRANSITION_EASINGS and not easing.startswith("cubic-bezier("):
        easing = DEFAULT_TRANSITION["easing"]

    try:
        duration = max(int(merged["duration"]), 0)
        delay = max(int(merged["delay"] or 0), 0)
    except (TypeError, ValueError):
        duration, delay = DEFAULT_TRANSITION["duration"], 0

    timing = f"{duration}ms {easing}" + (f" {delay}ms" if delay else "")
    targets = TRANSITION_SHORTHANDS.get(prop, (prop,))
    return ", ".join(f"{target} {timing}" for target in targets)


# ============================================================================
# Public API
# ============================================================================


def split_props(props: Mapping[str, Any] | None) -> tuple[dict[str, Any], dict[str, Any]]:
    """Separate stylistic props from everything else (content, behaviour)."""
    style_props: dict[str, Any] = {}
    attribute_props: dict[str, Any] = {}
    for name, value in (props or {}).items():
        (style_props if is_style_prop(name) else attribute_props)[name] = value
    return style_props, attribute_props


def compile_node(node: Any, options: CompileOptions | None = None) -> CompiledStyles:
    """
    Compile a node (model or mapping with ``props``/``states``/``transition``).

    Never raises for unknown props or malformed values; they are excluded.
    """
    options = options or CompileOptions()
    props = _as_mapping(_attr(node, "props"))
    compiled = CompiledStyles(base=_declarations(props, base_value))

    transition = compile_transition(_attr(node, "transition"))
    if transition:
        compiled.base["transition"] = transition

    if options.include_states:
        states = _as_mapping(_attr(node, "states"))
        for state in State:
            overrides = states.get(state.value)
            if not isinstance(overrides, Mapping):
                continue
            allowed = {k: v for k, v in overrides.items() if k in STATE_EDITABLE_PROPERTIES}
            rules = _declarations(allowed, base_value)
            if rules:
                compiled.states[state] = rules

    if options.include_responsive:
        responsive_props = {k: v for k, v in props.items() if is_responsive(v)}
        for breakpoint in BREAKPOINT_ORDER[1:]:
            rules = _declarations(responsive_props, lambda raw, bp=breakpoint: override(raw, bp))
            if rules:
                compiled.responsive[breakpoint] = rules

    return compiled


def compile_inline(props: Mapping[str, Any] | None) -> dict[str, str | int | float]:
    """
    Inline style map (camelCase keys) from base values, for direct application.
    """
    styles: dict[str, str | int | float] = {}
    functions: list[str] = []

    for prop, raw in (props or {}).items():
        value = base_value(raw)
        if prop in TRANSFORM_FUNCTIONS:
            fragment = format_transform_function(prop, value)
            if fragment:
                functions.append(fragment)
            continue
        style_prop = STYLE_PROPERTIES.get(prop)
        if style_prop is None:
            continue
        inline = to_inline_value(prop, value)
        if inline is not None:
            styles[style_prop.inline_name] = inline

    if functions:
        explicit = styles.get("transform")
        styles["transform"] = " ".join(([str(explicit)] if explicit else []) + functions)
    return styles
