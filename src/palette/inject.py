"""Brand default injection for component props."""

from typing import Any, Mapping

from .types import BrandColorPalette

# Component prop name -> palette slot (camelCase wire name)
BRAND_COLOR_MAP: dict[str, str] = {
    # Primary / accent
    "primaryColor": "primary",
    "secondaryColor": "secondary",
    "accentColor": "accent",
    # Background & text
    "backgroundColor": "background",
    "textColor": "foreground",
    # Header area
    "headerBackgroundColor": "background",
    "headerTextColor": "foreground",
    # Cards
    "cardBackgroundColor": "card",
    "cardBorderColor": "cardBorder",
    "cardHoverBgColor": "muted",
    "cardSelectedBgColor": "selectedBg",
    "cardSelectedBorderColor": "selectedBorder",
    # Buttons
    "buttonBackgroundColor": "buttonBg",
    "buttonTextColor": "buttonText",
    "buttonHoverColor": "buttonHover",
    "secondaryButtonBgColor": "secondaryButtonBg",
    "secondaryButtonTextColor": "secondaryButtonText",
    # Slots / selection (booking)
    "slotBgColor": "muted",
    "slotSelectedBgColor": "primary",
    "slotSelectedTextColor": "primaryForeground",
    "selectedDayBgColor": "primary",
    "selectedDayTextColor": "primaryForeground",
    "todayBgColor": "selectedBg",
    # Inputs
    "inputBorderColor": "inputBorder",
    "inputFocusBorderColor": "inputFocus",
    "inputBackgroundColor": "input",
    # Border & divider
    "borderColor": "border",
    "dividerColor": "divider",
    # State colours
    "successColor": "success",
    "errorColor": "error",
    "warningColor": "warning",
    # Content
    "priceColor": "primary",
    "priceBadgeColor": "priceBadge",
    "ratingColor": "ratingColor",
    "starColor": "ratingColor",
    # Status
    "availableDotColor": "success",
    "unavailableDotColor": "error",
    "copySuccessColor": "success",
    # Summary / progress
    "summaryBgColor": "muted",
    "progressBarBgColor": "primary",
    # Step indicator
    "stepActiveColor": "primary",
    "stepCompletedColor": "primary",
    "stepInactiveColor": "border",
    # Tabs / toolbar
    "tabActiveColor": "primary",
    "tabActiveBgColor": "selectedBg",
    "tabInactiveColor": "mutedForeground",
    "toolbarBackgroundColor": "background",
    "toolbarTextColor": "foreground",
    # Code blocks / embeds
    "codeBackgroundColor": "muted",
    "codeTextColor": "foreground",
    "embedBorderColor": "border",
    "embedBackgroundColor": "background",
    "noSiteIconColor": "mutedForeground",
    # Typography
    "titleColor": "foreground",
    "subtitleColor": "mutedForeground",
    "descriptionColor": "mutedForeground",
    "categoryColor": "mutedForeground",
    "categoryBgColor": "muted",
    "durationColor": "mutedForeground",
    # Badges
    "featuredBadgeBgColor": "primary",
    "featuredBadgeTextColor": "primaryForeground",
    # Search
    "searchBgColor": "input",
    "searchBorderColor": "inputBorder",
    # Specialty tags (staff)
    "specialtyBgColor": "muted",
    "specialtyTextColor": "foreground",
}


def is_unset(value: Any) -> bool:
    """Absent, null and empty-string props are unset; 0 and False are concrete."""
    return value is None or (isinstance(value, str) and value == "")


def inject_defaults(props: Mapping[str, Any], palette: BrandColorPalette) -> dict[str, Any]:
    """
    Fill unset colour props from the palette.

    Never overwrites a concrete value and never mutates ``props``.

    Args:
        props: Component props
        palette: Resolved brand palette

    Returns:
        New props dict with brand defaults filled in
    """
    result = dict(props)
    for prop_name, slot in BRAND_COLOR_MAP.items():
        if is_unset(result.get(prop_name)):
            result[prop_name] = palette.slot(slot)
    return result
