"""
Brand Palette Resolution
Derives a complete, coherent palette from a handful of brand colours.

Priority per core colour: theme override -> flat site setting -> fallback.
Every derived slot is computed from the resolved core colours of the same
call, so one edited input propagates consistently through the palette.
"""

from typing import Any

from core import LRUCache, get_logger, hash_fields

from .colors import contrasting_foreground, darken, lighten, normalize_color, tint
from .types import BrandColorPalette, BrandColorSource, ThemeOverrides

logger = get_logger(__name__)

# ============================================================================
# Fixed inputs
# ============================================================================

DEFAULT_PRIMARY = "#3b82f6"
DEFAULT_ACCENT = "#f59e0b"
DEFAULT_BACKGROUND = "#ffffff"
DEFAULT_FOREGROUND = "#0f172a"

SECONDARY_DARKEN = 0.15
BUTTON_HOVER_DARKEN = 0.10
SELECTED_TINT = 0.88

# Surface lightening amounts, applied to the resolved foreground
MUTED = 0.93
MUTED_FOREGROUND = 0.40
BORDER = 0.82
DIVIDER = 0.87
CARD_BORDER = 0.85
INPUT_BORDER = 0.78

# Semantic colours never follow the brand
SUCCESS = "#22c55e"
ERROR = "#ef4444"
WARNING = "#f59e0b"
RATING = "#f59e0b"
TRANSPARENT = "transparent"

_CORE_FIELDS = ("primary_color", "secondary_color", "accent_color", "background_color", "text_color")


def _pick(field: str, source: BrandColorSource) -> str | None:
    """First valid colour for field: theme override, then flat setting."""
    candidates = (getattr(source.theme, field, None), getattr(source, field))
    for candidate in candidates:
        if candidate in (None, ""):
            continue
        normalized = normalize_color(candidate)
        if normalized is not None:
            return normalized
        logger.debug("invalid_brand_color", field=field, value=str(candidate)[:32])
    return None


def resolve_palette(source: BrandColorSource | dict[str, Any] | None = None) -> BrandColorPalette:
    """
    Resolve a complete brand palette.

    Pure and total: any input, including None or malformed colours, yields
    a fully populated palette.

    Args:
        source: Brand inputs (model or mapping with camelCase/snake_case keys)

    Returns:
        Frozen palette with every slot set
    """
    if source is None:
        source = BrandColorSource()
    elif isinstance(source, dict):
        source = BrandColorSource.model_validate(source)

    primary = _pick("primary_color", source) or DEFAULT_PRIMARY
    secondary = _pick("secondary_color", source) or darken(primary, SECONDARY_DARKEN)
    accent = _pick("accent_color", source) or DEFAULT_ACCENT
    background = _pick("background_color", source) or DEFAULT_BACKGROUND
    foreground = _pick("text_color", source) or DEFAULT_FOREGROUND

    primary_fg = contrasting_foreground(primary)
    selected_bg = tint(primary, SELECTED_TINT)

    return BrandColorPalette(
        primary=primary,
        secondary=secondary,
        accent=accent,
        background=background,
        foreground=foreground,
        primary_foreground=primary_fg,
        secondary_foreground=contrasting_foreground(secondary),
        accent_foreground=contrasting_foreground(accent),
        muted=lighten(foreground, MUTED),
        muted_foreground=lighten(foreground, MUTED_FOREGROUND),
        border=lighten(foreground, BORDER),
        divider=lighten(foreground, DIVIDER),
        card=background,
        card_border=lighten(foreground, CARD_BORDER),
        input=background,
        input_border=lighten(foreground, INPUT_BORDER),
        input_focus=primary,
        success=SUCCESS,
        error=ERROR,
        warning=WARNING,
        button_bg=primary,
        button_text=primary_fg,
        button_hover=darken(primary, BUTTON_HOVER_DARKEN),
        secondary_button_bg=TRANSPARENT,
        secondary_button_text=primary,
        selected_bg=selected_bg,
        selected_border=primary,
        selected_text=contrasting_foreground(selected_bg),
        price_badge=primary,
        rating_color=RATING,
    )


def extract_brand_source(site_settings: dict[str, Any] | None) -> BrandColorSource:
    """
    Build a brand source from stored site settings.

    Reads flat snake_case keys (``primary_color``...) and a nested ``theme``
    mapping (camelCase or snake_case keys).
    """
    settings = site_settings or {}
    theme = settings.get("theme")
    return BrandColorSource(
        primary_color=settings.get("primary_color"),
        secondary_color=settings.get("secondary_color"),
        accent_color=settings.get("accent_color"),
        background_color=settings.get("background_color"),
        text_color=settings.get("text_color"),
        theme=ThemeOverrides.model_validate(theme) if isinstance(theme, dict) else None,
    )


class PaletteResolver:
    """Memoizes ``resolve_palette`` keyed by a hash of every source field."""

    def __init__(self, max_size: int = 128) -> None:
        self._cache: LRUCache[BrandColorPalette] = LRUCache(max_size=max_size)

    @staticmethod
    def cache_key(source: BrandColorSource) -> str:
        theme = source.theme or ThemeOverrides()
        return hash_fields(
            *(getattr(source, name) for name in _CORE_FIELDS),
            *(getattr(theme, name) for name in _CORE_FIELDS),
        )

    def resolve(self, source: BrandColorSource | dict[str, Any] | None = None) -> BrandColorPalette:
        if source is None:
            source = BrandColorSource()
        elif isinstance(source, dict):
            source = BrandColorSource.model_validate(source)
        return self._cache.get_or_compute(self.cache_key(source), lambda: resolve_palette(source))

    def resolve_site(self, site_settings: dict[str, Any] | None) -> BrandColorPalette:
        return self.resolve(extract_brand_source(site_settings))

    @property
    def stats(self):
        return self._cache.stats
