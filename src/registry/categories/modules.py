"""
Module Components
Components contributed by installable feature modules (booking, storefront).

These are not part of the built-in set; a module loader registers them once
the page's module descriptors say the module is active.
"""

from typing import TYPE_CHECKING, Callable

from ..types import BUILTIN_SOURCE, block

if TYPE_CHECKING:
    from ..registry import ComponentRegistry

BOOKING_MODULE = "booking"
ECOMMERCE_MODULE = "ecommerce"

BOOKING_COMPONENTS = (
    "BookingServiceSelector",
    "BookingWidget",
    "BookingCalendar",
    "BookingForm",
    "BookingEmbed",
    "BookingStaffGrid",
)

ECOMMERCE_COMPONENTS = (
    "EcommerceProductGrid",
    "EcommerceFeaturedProducts",
    "EcommerceProductCard",
    "EcommerceProductCatalog",
    "EcommerceCartPage",
    "EcommerceMiniCart",
    "EcommerceCheckoutPage",
    "ProductDetailBlock",
    "CategoryHeroBlock",
)

# Types always wrapped in a module container, loaded or not
MODULE_COMPONENT_TYPES: frozenset[str] = frozenset(BOOKING_COMPONENTS + ECOMMERCE_COMPONENTS)


def register_booking_components(registry: "ComponentRegistry") -> None:
    """Register booking module widgets."""
    for type_name in BOOKING_COMPONENTS:
        registry.register_component(type_name, block("div"), category="booking", source=BOOKING_MODULE)
    registry.mark_module_loaded(BOOKING_MODULE)


def register_ecommerce_components(registry: "ComponentRegistry") -> None:
    """Register storefront module widgets."""
    for type_name in ECOMMERCE_COMPONENTS:
        tag = "article" if type_name == "EcommerceProductCard" else "div"
        registry.register_component(type_name, block(tag), tag=tag, category="ecommerce", source=ECOMMERCE_MODULE)
    registry.mark_module_loaded(ECOMMERCE_MODULE)


MODULE_REGISTRARS: dict[str, Callable[["ComponentRegistry"], None]] = {
    BOOKING_MODULE: register_booking_components,
    ECOMMERCE_MODULE: register_ecommerce_components,
}

MODULE_CONTAINER_CLASS = "module-container"
MODULE_CONTAINER_STYLE: dict[str, str] = {
    "maxWidth": "1280px",
    "marginLeft": "auto",
    "marginRight": "auto",
    "paddingLeft": "1rem",
    "paddingRight": "1rem",
}


def needs_module_container(type_name: str, source: str | None = None) -> bool:
    """Module-provided types are wrapped by the renderer, never by the module itself."""
    return type_name in MODULE_COMPONENT_TYPES or (source is not None and source != BUILTIN_SOURCE)
