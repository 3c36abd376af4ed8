"""Brand colour data models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ThemeOverrides(_CamelModel):
    """Per-colour overrides set by a theme editor; beat flat brand settings."""

    primary_color: str | None = None
    secondary_color: str | None = None
    accent_color: str | None = None
    background_color: str | None = None
    text_color: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def drop_non_strings(cls, v: Any) -> Any:
        """Non-string colour values are treated as absent."""
        return v if isinstance(v, str) else None


class BrandColorSource(ThemeOverrides):
    """Flat site branding plus optional theme overrides."""

    theme: ThemeOverrides | None = None

    @field_validator("*", mode="before")
    @classmethod
    def drop_non_strings(cls, v: Any, info: ValidationInfo) -> Any:
        if info.field_name == "theme":
            return v if isinstance(v, (dict, ThemeOverrides)) else None
        return v if isinstance(v, str) else None


class BrandColorPalette(_CamelModel):
    """Complete derived palette. Every slot is always populated."""

    # Core
    primary: str
    secondary: str
    accent: str
    background: str
    foreground: str

    # Derived foregrounds
    primary_foreground: str
    secondary_foreground: str
    accent_foreground: str

    # Surfaces
    muted: str
    muted_foreground: str
    border: str
    divider: str
    card: str
    card_border: str
    input: str
    input_border: str
    input_focus: str

    # State colours
    success: str
    error: str
    warning: str

    # Buttons
    button_bg: str
    button_text: str
    button_hover: str
    secondary_button_bg: str
    secondary_button_text: str

    # Selection / module extras
    selected_bg: str
    selected_border: str
    selected_text: str
    price_badge: str
    rating_color: str = Field(description="Star rating colour")

    def slot(self, name: str) -> str:
        """Look up a slot by its wire (camelCase) or attribute name."""
        field_name = _SLOT_FIELDS.get(name, name)
        if field_name not in type(self).model_fields:
            raise KeyError(name)
        return getattr(self, field_name)

    def to_dict(self) -> dict[str, str]:
        """Wire form, keyed by camelCase slot name."""
        return self.model_dump(by_alias=True)


_SLOT_FIELDS: dict[str, str] = {to_camel(name): name for name in BrandColorPalette.model_fields}

PALETTE_SLOTS: tuple[str, ...] = tuple(_SLOT_FIELDS)
