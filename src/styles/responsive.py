"""
Responsive Values
Per-breakpoint prop values with a required ``mobile`` base.

Larger breakpoints inherit from smaller ones: a desktop lookup falls back to
the tablet override, then to the base, mirroring ``min-width`` cascading.
"""

from enum import Enum
from typing import Any


class Breakpoint(str, Enum):
    MOBILE = "mobile"
    TABLET = "tablet"
    DESKTOP = "desktop"

    @property
    def min_width(self) -> int:
        return BREAKPOINTS.get(self, 0)


# Media query thresholds (min-width, px); mobile is the base and has none
BREAKPOINTS: dict[Breakpoint, int] = {
    Breakpoint.TABLET: 768,
    Breakpoint.DESKTOP: 1024,
}

BREAKPOINT_ORDER: tuple[Breakpoint, ...] = (Breakpoint.MOBILE, Breakpoint.TABLET, Breakpoint.DESKTOP)

# Older editors stored the base under "base"
_BASE_KEYS = ("mobile", "base")


def is_responsive(value: Any) -> bool:
    """True for a mapping keyed by breakpoint names."""
    if not isinstance(value, dict) or not value:
        return False
    return any(key in value for key in (*_BASE_KEYS, "tablet", "desktop"))


def base_value(value: Any) -> Any:
    """Base (mobile) value; non-responsive values are their own base."""
    if not is_responsive(value):
        return value
    for key in _BASE_KEYS:
        if key in value:
            return value[key]
    return None


def override(value: Any, breakpoint: Breakpoint | str) -> Any:
    """Explicit override for one breakpoint, or None when it inherits."""
    bp = Breakpoint(breakpoint)
    if bp is Breakpoint.MOBILE or not is_responsive(value):
        return None
    return value.get(bp.value)


def resolve(value: Any, breakpoint: Breakpoint | str = Breakpoint.MOBILE) -> Any:
    """
    Effective value at a breakpoint.

    Examples:
        >>> resolve({"mobile": 16}, "desktop")
        16
        >>> resolve({"mobile": 16, "tablet": 18}, "desktop")
        18
        >>> resolve(12, "tablet")
        12
    """
    if not is_responsive(value):
        return value
    bp = Breakpoint(breakpoint)
    for candidate in reversed(BREAKPOINT_ORDER[: BREAKPOINT_ORDER.index(bp) + 1]):
        if candidate is Breakpoint.MOBILE:
            return base_value(value)
        if value.get(candidate.value) is not None:
            return value[candidate.value]
    return base_value(value)


def wrap(value: Any) -> Any:
    """Coerce a bare scalar into responsive shape (``{"mobile": value}``)."""
    if is_responsive(value):
        return value
    return {"mobile": value}
