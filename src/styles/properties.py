"""
Style Property Tables
Which component props are stylistic and how their values become CSS.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

# ============================================================================
# States
# ============================================================================


class State(str, Enum):
    """Interaction states with their own rule sets."""

    HOVER = "hover"
    ACTIVE = "active"
    FOCUS = "focus"

    @property
    def pseudo_class(self) -> str:
        return f":{self.value}"


# Props a state override may change; anything else in an override is ignored
STATE_EDITABLE_PROPERTIES: frozenset[str] = frozenset(
    {
        # Colours
        "backgroundColor",
        "color",
        "borderColor",
        "outlineColor",
        # Transform
        "scale",
        "scaleX",
        "scaleY",
        "rotate",
        "translateX",
        "translateY",
        "skewX",
        "skewY",
        # Effects
        "opacity",
        "boxShadow",
        "textShadow",
        # Border / outline
        "borderWidth",
        "borderStyle",
        "outlineWidth",
        "outlineStyle",
        "outlineOffset",
    }
)

# ============================================================================
# Property table
# ============================================================================


def _opacity(value: Any) -> str:
    # Stored on a 0-100 scale
    number = min(max(float(value) / 100, 0.0), 1.0)
    return _number(number)


def _number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class StyleProperty:
    """How one prop compiles to a CSS declaration."""

    css_name: str
    transform: Callable[[Any], str] | None = None
    unitless: bool = False

    @property
    def inline_name(self) -> str:
        """camelCase name used for inline style maps."""
        head, *rest = self.css_name.split("-")
        return head + "".join(part.capitalize() for part in rest)


_P = StyleProperty

STYLE_PROPERTIES: dict[str, StyleProperty] = {
    # Layout
    "width": _P("width"),
    "height": _P("height"),
    "minWidth": _P("min-width"),
    "maxWidth": _P("max-width"),
    "minHeight": _P("min-height"),
    "maxHeight": _P("max-height"),
    # Spacing
    "padding": _P("padding"),
    "paddingTop": _P("padding-top"),
    "paddingRight": _P("padding-right"),
    "paddingBottom": _P("padding-bottom"),
    "paddingLeft": _P("padding-left"),
    "margin": _P("margin"),
    "marginTop": _P("margin-top"),
    "marginRight": _P("margin-right"),
    "marginBottom": _P("margin-bottom"),
    "marginLeft": _P("margin-left"),
    "gap": _P("gap"),
    # Colours
    "backgroundColor": _P("background-color"),
    "color": _P("color"),
    "borderColor": _P("border-color"),
    "outlineColor": _P("outline-color"),
    # Typography
    "fontSize": _P("font-size"),
    "fontWeight": _P("font-weight", unitless=True),
    "lineHeight": _P("line-height", unitless=True),
    "letterSpacing": _P("letter-spacing"),
    "textAlign": _P("text-align"),
    "textDecoration": _P("text-decoration"),
    "textTransform": _P("text-transform"),
    # Border / outline
    "borderWidth": _P("border-width"),
    "borderStyle": _P("border-style"),
    "borderRadius": _P("border-radius"),
    "outlineWidth": _P("outline-width"),
    "outlineStyle": _P("outline-style"),
    "outlineOffset": _P("outline-offset"),
    # Effects
    "opacity": _P("opacity", transform=_opacity, unitless=True),
    "boxShadow": _P("box-shadow"),
    "textShadow": _P("text-shadow"),
    "transform": _P("transform"),
    "cursor": _P("cursor"),
    # Display / flex
    "display": _P("display"),
    "flexDirection": _P("flex-direction"),
    "alignItems": _P("align-items"),
    "justifyContent": _P("justify-content"),
    "flexWrap": _P("flex-wrap"),
    "flexGrow": _P("flex-grow", unitless=True),
    "flexShrink": _P("flex-shrink", unitless=True),
    "order": _P("order", unitless=True),
    "zIndex": _P("z-index", unitless=True),
}

# Transform-function props -> (css function, unit for bare numbers)
TRANSFORM_FUNCTIONS: dict[str, tuple[str, str]] = {
    "translateX": ("translateX", "px"),
    "translateY": ("translateY", "px"),
    "rotate": ("rotate", "deg"),
    "scale": ("scale", ""),
    "scaleX": ("scaleX", ""),
    "scaleY": ("scaleY", ""),
    "skewX": ("skewX", "deg"),
    "skewY": ("skewY", "deg"),
}

SPACING_SIDES = ("top", "right", "bottom", "left")

# Named spacing scale used by migrated layout props
SPACING_TOKENS: dict[str, str] = {
    "none": "0",
    "xs": "4px",
    "sm": "8px",
    "md": "16px",
    "lg": "24px",
    "xl": "32px",
    "2xl": "48px",
}
SPACING_TOKEN_PROPS = frozenset({"padding", "margin", "gap", "rowGap", "columnGap"})


def is_style_prop(name: str) -> bool:
    return name in STYLE_PROPERTIES or name in TRANSFORM_FUNCTIONS


_UNSAFE_VALUE_CHARS = str.maketrans("", "", ";{}<>\\")


def _with_unit(value: Any, unit: str) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return f"{_number(value)}{unit}"
    # Values land inside style blocks and attributes
    return str(value).translate(_UNSAFE_VALUE_CHARS).strip()


def _spacing(value: dict[str, Any], unitless: bool) -> str | None:
    unit = "" if unitless else "px"
    sides = []
    for side in SPACING_SIDES:
        side_value = value.get(side)
        if side_value in (None, ""):
            side_value = 0
        sides.append(_with_unit(side_value, unit))
    return " ".join(sides)


def format_value(prop: str, value: Any) -> str | None:
    """
    CSS value for a single (non-responsive) prop value.

    Returns None when the prop is not stylistic or the value is unset or
    not representable.
    """
    style_prop = STYLE_PROPERTIES.get(prop)
    if style_prop is None or value is None or value == "" or isinstance(value, (list, tuple)):
        return None

    if isinstance(value, dict):
        if any(side in value for side in SPACING_SIDES):
            return _spacing(value, style_prop.unitless)
        return None

    if style_prop.transform is not None:
        try:
            return style_prop.transform(value)
        except (TypeError, ValueError):
            return None

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _with_unit(value, "" if style_prop.unitless else "px")
    if prop in SPACING_TOKEN_PROPS and value in SPACING_TOKENS:
        return SPACING_TOKENS[value]
    return _with_unit(value, "") or None


def format_transform_function(prop: str, value: Any) -> str | None:
    """``translateX(10px)``-style fragment, or None for unset/unknown values."""
    entry = TRANSFORM_FUNCTIONS.get(prop)
    if entry is None or value is None or value == "" or isinstance(value, (dict, list, bool)):
        return None
    function, unit = entry
    return f"{function}({_with_unit(value, unit)})"


def to_inline_value(prop: str, value: Any) -> str | int | float | None:
    """Inline style value: unitless numbers stay numeric, the rest become CSS strings."""
    style_prop = STYLE_PROPERTIES.get(prop)
    if style_prop is None:
        return None
    if style_prop.unitless and style_prop.transform is None and isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return format_value(prop, value)
