"""CSS custom properties for a resolved palette."""

from .colors import to_hsl_string
from .types import BrandColorPalette

# --color-* variable -> palette attribute; values are bare HSL components
_HSL_VARS: tuple[tuple[str, str], ...] = (
    ("--color-background", "background"),
    ("--color-foreground", "foreground"),
    ("--color-card", "card"),
    ("--color-card-foreground", "foreground"),
    ("--color-popover", "card"),
    ("--color-popover-foreground", "foreground"),
    ("--color-muted", "muted"),
    ("--color-muted-foreground", "muted_foreground"),
    ("--color-border", "border"),
    ("--color-input", "input_border"),
    ("--color-ring", "primary"),
    ("--color-primary", "primary"),
    ("--color-primary-foreground", "primary_foreground"),
    ("--color-secondary", "secondary"),
    ("--color-secondary-foreground", "secondary_foreground"),
    ("--color-accent", "accent"),
    ("--color-accent-foreground", "accent_foreground"),
    ("--color-success", "success"),
    ("--color-warning", "warning"),
    ("--color-danger", "error"),
)

# Direct hex variables
_HEX_VARS: tuple[tuple[str, str], ...] = (
    ("--background", "background"),
    ("--foreground", "foreground"),
    ("--card", "card"),
    ("--card-foreground", "foreground"),
    ("--popover", "card"),
    ("--popover-foreground", "foreground"),
    ("--muted", "muted"),
    ("--muted-foreground", "muted_foreground"),
    ("--primary", "primary"),
    ("--primary-foreground", "primary_foreground"),
    ("--secondary", "secondary"),
    ("--secondary-foreground", "secondary_foreground"),
    ("--accent", "accent"),
    ("--accent-foreground", "accent_foreground"),
    ("--destructive", "error"),
    ("--border", "border"),
    ("--input", "input_border"),
    ("--ring", "primary"),
)


def generate_css_variables(
    palette: BrandColorPalette,
    font_heading: str | None = None,
    font_body: str | None = None,
) -> dict[str, str]:
    """
    Custom properties that re-theme a rendered page.

    Args:
        palette: Resolved brand palette
        font_heading: Optional heading font family name
        font_body: Optional body font family name

    Returns:
        Ordered mapping of ``--name`` -> value
    """
    variables: dict[str, str] = {}
    for name, attr in _HSL_VARS:
        variables[name] = to_hsl_string(getattr(palette, attr))
    for name, attr in _HEX_VARS:
        variables[name] = getattr(palette, attr)

    if font_body:
        variables["--font-sans"] = f"'{_font_name(font_body)}', ui-sans-serif, system-ui, -apple-system, sans-serif"
    if font_heading:
        variables["--font-display"] = f"'{_font_name(font_heading)}', ui-sans-serif, system-ui, sans-serif"
    return variables


def _font_name(name: str) -> str:
    # Quotes and declaration breakers would escape the value
    return "".join(c for c in name if c not in "'\";{}<>\\").strip()


def css_variables_block(variables: dict[str, str], selector: str = ":root") -> str:
    """Render custom properties as a single CSS rule."""
    body = "\n".join(f"  {name}: {value};" for name, value in variables.items())
    return f"{selector} {{\n{body}\n}}"
