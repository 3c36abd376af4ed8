"""
Brand colour resolution.

Resolves a complete palette from partial brand inputs and injects
brand-consistent defaults into component colour props.
"""

from .colors import (
    DARK_FOREGROUND,
    LIGHT_FOREGROUND,
    contrasting_foreground,
    darken,
    is_light,
    lighten,
    luminance,
    normalize_color,
    parse_color,
    tint,
    to_hsl_string,
)
from .css_vars import css_variables_block, generate_css_variables
from .inject import BRAND_COLOR_MAP, inject_defaults
from .resolver import PaletteResolver, extract_brand_source, resolve_palette
from .types import PALETTE_SLOTS, BrandColorPalette, BrandColorSource, ThemeOverrides

__all__ = [
    # Models
    "BrandColorPalette",
    "BrandColorSource",
    "ThemeOverrides",
    "PALETTE_SLOTS",
    # Resolution
    "resolve_palette",
    "extract_brand_source",
    "PaletteResolver",
    # Injection
    "BRAND_COLOR_MAP",
    "inject_defaults",
    # CSS
    "generate_css_variables",
    "css_variables_block",
    # Colour math
    "DARK_FOREGROUND",
    "LIGHT_FOREGROUND",
    "contrasting_foreground",
    "darken",
    "lighten",
    "tint",
    "luminance",
    "is_light",
    "parse_color",
    "normalize_color",
    "to_hsl_string",
]
