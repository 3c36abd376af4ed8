"""
Colour Math
Hex parsing, WCAG luminance and lighten/darken helpers.
"""

import math
import re

# Foregrounds picked by contrast
DARK_FOREGROUND = "#0f172a"
LIGHT_FOREGROUND = "#ffffff"

# Returned when lighten/darken receive something that is not a colour
LIGHTEN_FALLBACK = "#f8fafc"
DARKEN_FALLBACK = "#1e293b"

LIGHT_THRESHOLD = 0.45
DEFAULT_TINT = 0.92

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_PATTERN = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*[\d.]+\s*)?\)$"
)

RGB = tuple[int, int, int]


def _round(value: float) -> int:
    # Half-up, so .5 channels land where browsers put them
    return math.floor(value + 0.5)


def parse_color(value: object) -> RGB | None:
    """
    Parse ``#rgb``, ``#rrggbb`` (hash optional) or ``rgb()/rgba()`` into channels.

    Returns None for anything else, including out-of-range rgb() channels.
    """
    if not isinstance(value, str):
        return None
    text = value.strip()

    match = _HEX_PATTERN.match(text)
    if match:
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)

    match = _RGB_PATTERN.match(text.lower())
    if match:
        channels = tuple(int(c) for c in match.groups())
        if all(0 <= c <= 255 for c in channels):
            return channels  # type: ignore[return-value]
    return None


def is_valid_color(value: object) -> bool:
    return parse_color(value) is not None


def to_hex(r: float, g: float, b: float) -> str:
    """Clamp, round and format channels as lowercase ``#rrggbb``."""

    def clamp(v: float) -> int:
        return max(0, min(255, _round(v)))

    return f"#{clamp(r):02x}{clamp(g):02x}{clamp(b):02x}"


def normalize_color(value: object) -> str | None:
    """Canonical lowercase ``#rrggbb`` form, or None if unparseable."""
    rgb = parse_color(value)
    return to_hex(*rgb) if rgb else None


def luminance(color: str) -> float:
    """Relative luminance (WCAG 2.1). Unparseable input counts as mid-grey (0.5)."""
    rgb = parse_color(color)
    if rgb is None:
        return 0.5

    def linear(channel: int) -> float:
        s = channel / 255
        return s / 12.92 if s <= 0.03928 else ((s + 0.055) / 1.055) ** 2.4

    r, g, b = rgb
    return 0.2126 * linear(r) + 0.7152 * linear(g) + 0.0722 * linear(b)


def is_light(color: str) -> bool:
    return luminance(color) > LIGHT_THRESHOLD


def contrasting_foreground(background: str) -> str:
    """Dark text on light backgrounds, white text otherwise."""
    return DARK_FOREGROUND if is_light(background) else LIGHT_FOREGROUND


def lighten(color: str, amount: float) -> str:
    """Move each channel towards white (0 = unchanged, 1 = white)."""
    rgb = parse_color(color)
    if rgb is None:
        return LIGHTEN_FALLBACK
    return to_hex(*(c + (255 - c) * amount for c in rgb))


def darken(color: str, amount: float) -> str:
    """Move each channel towards black (0 = unchanged, 1 = black)."""
    rgb = parse_color(color)
    if rgb is None:
        return DARKEN_FALLBACK
    return to_hex(*(c * (1 - amount) for c in rgb))


def tint(color: str, amount: float = DEFAULT_TINT) -> str:
    """Very light tint of a colour for card and selection backgrounds."""
    return lighten(color, amount)


def to_hsl(color: str) -> tuple[int, int, int] | None:
    """Hue in degrees, saturation and lightness in percent, all rounded."""
    rgb = parse_color(color)
    if rgb is None:
        return None
    r, g, b = (c / 255 for c in rgb)
    high, low = max(r, g, b), min(r, g, b)
    lightness = (high + low) / 2
    hue = saturation = 0.0

    if high != low:
        d = high - low
        saturation = d / (2 - high - low) if lightness > 0.5 else d / (high + low)
        if high == r:
            hue = ((g - b) / d + (6 if g < b else 0)) / 6
        elif high == g:
            hue = ((b - r) / d + 2) / 6
        else:
            hue = ((r - g) / d + 4) / 6

    return _round(hue * 360), _round(saturation * 100), _round(lightness * 100)


def to_hsl_string(color: str) -> str:
    """Space-separated HSL components (``"217 91% 60%"``) for CSS custom properties."""
    hsl = to_hsl(color)
    if hsl is None:
        return "0 0% 100%"
    h, s, l = hsl
    return f"{h} {s}% {l}%"
