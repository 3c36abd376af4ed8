"""ID Generation System.

ULID-based ids for page components and for render/export passes.

Features:
- ULIDs: Lexicographically sortable, timestamp-based
- Type-safe: NewType wrappers for different ID categories
- Prefixed: Type-specific prefixes for debugging (comp_*, render_*, ...)
- Scoped: Zone-scoped component ids carry the zone slug in their prefix

Format:
    comp_01HV7X...          top-level component
    sidebar-comp_01HV7X...  component migrated into the "sidebar" zone
"""

import re
from typing import NewType
from ulid import ULID

# ============================================================================
# Type-Safe ID Wrappers
# ============================================================================

ComponentID = NewType("ComponentID", str)
"""Page component (node) identifier"""

RenderID = NewType("RenderID", str)
"""Single render pass identifier"""

ExportID = NewType("ExportID", str)
"""Static export identifier"""

# ============================================================================
# ID Prefixes (for debugging and type identification)
# ============================================================================


class Prefix:
    """ID prefix constants."""

    COMPONENT = "comp"
    RENDER = "render"
    EXPORT = "export"


_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")


def _prefixed(prefix: str) -> str:
    return f"{prefix}_{ULID()}"


def slugify(value: str) -> str:
    """Lowercase, dash-separated slug safe for use inside an id prefix."""
    slug = _SLUG_PATTERN.sub("-", value.lower()).strip("-")
    return slug or "zone"


# ============================================================================
# Typed ID Generators
# ============================================================================


def new_component_id(zone: str | None = None) -> ComponentID:
    """Generate new component ID, optionally scoped to a zone."""
    if zone:
        return ComponentID(_prefixed(f"{slugify(zone)}-{Prefix.COMPONENT}"))
    return ComponentID(_prefixed(Prefix.COMPONENT))


def new_render_id() -> RenderID:
    """Generate new render pass ID."""
    return RenderID(_prefixed(Prefix.RENDER))


def new_export_id() -> ExportID:
    """Generate new export ID."""
    return ExportID(_prefixed(Prefix.EXPORT))
