"""
Legacy Format Tables
Type-name renames, responsive prop names and the keyed-graph component mappings.

Prop transforms follow the old editors' "first truthy value" defaulting:
``0``, ``""``, ``False`` and ``None`` fall through to the next candidate,
while empty lists and mappings do not.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from styles.responsive import is_responsive, wrap

PropsTransform = Callable[[dict[str, Any]], dict[str, Any]]

# ============================================================================
# Flat-list type names (old -> canonical; unlisted names pass through)
# ============================================================================

LEGACY_TYPE_NAMES: dict[str, str] = {
    # Block-suffixed section names
    "HeroBlock": "Hero",
    "HeroSection": "Hero",
    "FeaturesGridBlock": "Features",
    "FeaturesBlock": "Features",
    "FeatureGrid": "Features",
    "ServicesGridBlock": "Features",
    "ServicesBlock": "Features",
    "AboutBlock": "Features",
    "AboutSection": "Features",
    "About": "Features",
    "CTABlock": "CTA",
    "CTASection": "CTA",
    "ContentBlock": "RichText",
    "TextBlock": "Text",
    "TeamGridBlock": "Team",
    "TeamBlock": "Team",
    "ContactFormBlock": "ContactForm",
    "TestimonialsBlock": "Testimonials",
    "TestimonialBlock": "Testimonials",
    "PricingBlock": "Pricing",
    "PricingSection": "Pricing",
    "FAQBlock": "FAQ",
    "GalleryBlock": "Gallery",
    "StatsBlock": "Stats",
    "NavbarBlock": "Navbar",
    "FooterBlock": "Footer",
    "SectionBlock": "Section",
    "QuoteBlock": "Quote",
    "NewsletterBlock": "Newsletter",
    # Module components
    "ServiceSelector": "BookingServiceSelector",
    "ProductGrid": "EcommerceProductGrid",
    "FeaturedProducts": "EcommerceFeaturedProducts",
    "ProductCard": "EcommerceProductCard",
    "ProductCatalog": "EcommerceProductCatalog",
    "CartItems": "EcommerceCartPage",
    "CartPage": "EcommerceCartPage",
    "CartSummary": "EcommerceMiniCart",
    "MiniCart": "EcommerceMiniCart",
    "CheckoutForm": "EcommerceCheckoutPage",
    "CheckoutPage": "EcommerceCheckoutPage",
    "ProductDetail": "ProductDetailBlock",
    "CategoryHero": "CategoryHeroBlock",
}


def canonical_type_name(legacy_name: str) -> str:
    return LEGACY_TYPE_NAMES.get(legacy_name, legacy_name)


# ============================================================================
# Responsive coercion
# ============================================================================

RESPONSIVE_PROPS: frozenset[str] = frozenset(
    {
        # Size
        "fontSize",
        "size",
        "width",
        "height",
        "minWidth",
        "maxWidth",
        "minHeight",
        "maxHeight",
        # Spacing
        "padding",
        "paddingTop",
        "paddingRight",
        "paddingBottom",
        "paddingLeft",
        "margin",
        "marginTop",
        "marginRight",
        "marginBottom",
        "marginLeft",
        "gap",
        # Alignment
        "textAlign",
        "align",
        "alignment",
        "alignItems",
        "justifyContent",
        # Layout
        "flexDirection",
        "direction",
        "display",
        "columns",
    }
)


def coerce_responsive(props: Mapping[str, Any]) -> dict[str, Any]:
    """Wrap bare values of responsive props as ``{"mobile": value}``; returns a new dict."""
    result = dict(props)
    for name in RESPONSIVE_PROPS.intersection(result):
        value = result[name]
        if value is not None and not is_responsive(value):
            result[name] = wrap(value)
    return result


# ============================================================================
# Value helpers
# ============================================================================


def _truthy(value: Any) -> bool:
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0 and value == value  # NaN is falsy
    if isinstance(value, str):
        return value != ""
    return True


def first(*values: Any) -> Any:
    """First truthy value, else the last candidate (the default)."""
    for value in values:
        if _truthy(value):
            return value
    return values[-1] if values else None


def _not_false(value: Any) -> bool:
    return value is not False


def _items(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _clean(props: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None (absent in the stored form)."""
    return {key: value for key, value in props.items() if value is not None}


BUTTON_VARIANTS = {
    "primary": "default",
    "default": "default",
    "secondary": "secondary",
    "outline": "outline",
    "ghost": "ghost",
    "link": "link",
    "destructive": "destructive",
}


def map_button_variant(variant: Any) -> str:
    return BUTTON_VARIANTS.get(variant if isinstance(variant, str) else "default", "default")


def detect_video_type(url: Any) -> str:
    if not isinstance(url, str) or not url:
        return "file"
    if "youtube.com" in url or "youtu.be" in url:
        return "youtube"
    if "vimeo.com" in url:
        return "vimeo"
    return "file"


def transform_button(button: Any) -> dict[str, str] | None:
    button = _mapping(button)
    if not _truthy(button.get("text")) and not _truthy(button.get("label")):
        return None
    return {
        "text": first(button.get("text"), button.get("label"), "Button"),
        "href": first(button.get("href"), button.get("link"), button.get("url"), "#"),
    }


def transform_features(features: Any) -> list[dict[str, Any]]:
    return [
        {
            "icon": first(f.get("icon"), "Star"),
            "title": first(f.get("title"), f.get("heading"), ""),
            "description": first(f.get("description"), f.get("text"), ""),
        }
        for f in map(_mapping, _items(features))
    ]


def transform_testimonials(testimonials: Any) -> list[dict[str, Any]]:
    return [
        {
            "quote": first(t.get("quote"), t.get("text"), t.get("content"), ""),
            "author": first(t.get("author"), t.get("name"), ""),
            "role": first(t.get("role"), t.get("title"), t.get("position"), ""),
            "avatar": first(t.get("avatar"), t.get("image"), ""),
        }
        for t in map(_mapping, _items(testimonials))
    ]


def transform_faq_items(items: Any) -> list[dict[str, Any]]:
    return [
        {
            "question": first(q.get("question"), q.get("q"), q.get("title"), ""),
            "answer": first(q.get("answer"), q.get("a"), q.get("content"), ""),
        }
        for q in map(_mapping, _items(items))
    ]


def transform_stats(stats: Any) -> list[dict[str, Any]]:
    return [
        _clean(
            {
                "value": str(first(s.get("value"), s.get("number"), "0")),
                "label": first(s.get("label"), s.get("title"), ""),
                "prefix": s.get("prefix"),
                "suffix": s.get("suffix"),
            }
        )
        for s in map(_mapping, _items(stats))
    ]


def transform_team_members(members: Any) -> list[dict[str, Any]]:
    return [
        _clean(
            {
                "name": first(m.get("name"), ""),
                "role": first(m.get("role"), m.get("title"), m.get("position"), ""),
                "image": first(m.get("image"), m.get("photo"), m.get("avatar"), ""),
                "bio": m.get("bio"),
            }
        )
        for m in map(_mapping, _items(members))
    ]


def transform_gallery_images(images: Any) -> list[dict[str, Any]]:
    result = []
    for image in _items(images):
        if isinstance(image, str):
            result.append({"src": image, "alt": ""})
            continue
        image = _mapping(image)
        result.append(
            _clean(
                {
                    "src": first(image.get("src"), image.get("url"), ""),
                    "alt": first(image.get("alt"), ""),
                    "caption": image.get("caption"),
                }
            )
        )
    return result


def transform_nav_links(links: Any) -> list[dict[str, Any]]:
    return [
        {
            "text": first(link.get("text"), link.get("label"), link.get("title"), ""),
            "href": first(link.get("href"), link.get("url"), link.get("link"), "#"),
        }
        for link in map(_mapping, _items(links))
    ]


def transform_footer_columns(columns: Any) -> list[dict[str, Any]]:
    return [
        {
            "title": first(column.get("title"), column.get("heading"), ""),
            "links": transform_nav_links(first(column.get("links"), column.get("items"))),
        }
        for column in map(_mapping, _items(columns))
    ]


def transform_social_links(links: Any) -> list[dict[str, Any]]:
    return [
        {
            "platform": str(first(link.get("platform"), link.get("type"), link.get("name"), "")).lower(),
            "url": first(link.get("url"), link.get("href"), link.get("link"), "#"),
        }
        for link in map(_mapping, _items(links))
    ]


def transform_select_options(options: Any) -> list[dict[str, Any]]:
    result = []
    for option in _items(options):
        if isinstance(option, str):
            result.append({"value": option, "label": option})
            continue
        option = _mapping(option)
        result.append(
            {
                "value": first(option.get("value"), option.get("id"), ""),
                "label": first(option.get("label"), option.get("text"), option.get("name"), ""),
            }
        )
    return result


def _number(value: Any) -> float | int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if number != number:
        return 0
    return int(number) if number.is_integer() else number


def transform_products(products: Any) -> list[dict[str, Any]]:
    return [
        _clean(
            {
                "name": first(p.get("name"), p.get("title"), ""),
                "image": p.get("image"),
                "price": _number(p.get("price")),
                "salePrice": _number(p["salePrice"]) if _truthy(p.get("salePrice")) else None,
                "description": p.get("description"),
                "rating": _number(p["rating"]) if _truthy(p.get("rating")) else None,
                "href": first(p.get("href"), p.get("link"), None),
            }
        )
        for p in map(_mapping, _items(products))
    ]


# ============================================================================
# Keyed-graph component mappings
# ============================================================================


@dataclass(frozen=True)
class ComponentMapping:
    """How one keyed-graph component type becomes a canonical node."""

    legacy_type: str
    canonical_type: str
    props_transform: PropsTransform | None = None

    def transform(self, props: Mapping[str, Any]) -> dict[str, Any]:
        source = dict(props)
        if self.props_transform is None:
            return source
        return _clean(self.props_transform(source))


def _m(legacy_type: str, canonical_type: str, transform: PropsTransform | None = None) -> ComponentMapping:
    return ComponentMapping(legacy_type, canonical_type, transform)


DEFAULT_COMPONENT_MAPPINGS: tuple[ComponentMapping, ...] = (
    # Layout
    _m("Section", "Section", lambda p: {
        "backgroundColor": p.get("backgroundColor"),
        "backgroundImage": p.get("backgroundImage"),
        "padding": first(p.get("padding"), "md"),
        "fullWidth": first(p.get("fullWidth"), False),
    }),
    _m("Container", "Container", lambda p: {
        "maxWidth": first(p.get("maxWidth"), "lg"),
        "padding": first(p.get("padding"), "md"),
        "centered": _not_false(p.get("centered")),
    }),
    _m("Columns", "Columns", lambda p: {
        "columns": first(p.get("columns"), 2),
        "gap": first(p.get("gap"), "md"),
        "alignment": first(p.get("alignment"), "stretch"),
        "stackOnMobile": _not_false(p.get("stackOnMobile")),
    }),
    _m("Card", "Card", lambda p: {
        "padding": first(p.get("padding"), "md"),
        "shadow": first(p.get("shadow"), "md"),
        "borderRadius": first(p.get("borderRadius"), "md"),
        "backgroundColor": p.get("backgroundColor"),
    }),
    _m("Spacer", "Spacer", lambda p: {"size": first(p.get("size"), "md")}),
    _m("Divider", "Divider", lambda p: {
        "style": first(p.get("style"), "solid"),
        "color": p.get("color"),
        "thickness": first(p.get("thickness"), "1"),
    }),
    # Typography
    _m("Heading", "Heading", lambda p: {
        "text": first(p.get("text"), p.get("children"), ""),
        "level": first(p.get("level"), "h2"),
        "align": first(p.get("align"), "left"),
        "color": p.get("color"),
    }),
    _m("Text", "Text", lambda p: {
        "content": first(p.get("text"), p.get("content"), p.get("children"), ""),
        "size": first(p.get("size"), "base"),
        "align": first(p.get("align"), "left"),
        "color": p.get("color"),
    }),
    _m("RichText", "Text", lambda p: {
        "content": first(p.get("html"), p.get("content"), ""),
        "size": first(p.get("size"), "base"),
        "align": first(p.get("align"), "left"),
    }),
    # Buttons
    _m("Button", "Button", lambda p: {
        "text": first(p.get("text"), p.get("children"), "Button"),
        "href": first(p.get("href"), p.get("link"), "#"),
        "variant": map_button_variant(p.get("variant")),
        "size": first(p.get("size"), "md"),
        "fullWidth": first(p.get("fullWidth"), False),
        "openInNewTab": first(p.get("openInNewTab"), p.get("newTab"), False),
    }),
    _m("LinkButton", "Button", lambda p: {
        "text": first(p.get("text"), p.get("label"), "Link"),
        "href": first(p.get("href"), p.get("url"), "#"),
        "variant": "link",
        "size": first(p.get("size"), "md"),
    }),
    # Media
    _m("Image", "Image", lambda p: {
        "src": first(p.get("src"), p.get("url"), ""),
        "alt": first(p.get("alt"), ""),
        "width": p.get("width"),
        "height": p.get("height"),
        "objectFit": first(p.get("objectFit"), "cover"),
        "borderRadius": first(p.get("borderRadius"), "none"),
    }),
    _m("Video", "Video", lambda p: {
        "url": first(p.get("url"), p.get("src"), ""),
        "type": detect_video_type(first(p.get("url"), p.get("src"), "")),
        "autoplay": first(p.get("autoplay"), False),
        "muted": first(p.get("muted"), False),
        "loop": first(p.get("loop"), False),
        "controls": _not_false(p.get("controls")),
    }),
    _m("Map", "Map", lambda p: {
        "address": first(p.get("address"), p.get("location"), ""),
        "zoom": first(p.get("zoom"), 14),
        "height": first(p.get("height"), "400"),
    }),
    # Sections
    _m("Hero", "Hero", lambda p: {
        "title": first(p.get("title"), p.get("heading"), ""),
        "subtitle": first(p.get("subtitle"), p.get("description"), ""),
        "backgroundImage": first(p.get("backgroundImage"), p.get("bgImage"), ""),
        "backgroundColor": p.get("backgroundColor"),
        "alignment": first(p.get("alignment"), p.get("align"), "center"),
        "height": first(p.get("height"), "lg"),
        "overlayOpacity": first(p.get("overlayOpacity"), 50),
        "primaryButton": transform_button(first(p.get("primaryButton"), p.get("cta"), None)),
        "secondaryButton": transform_button(p.get("secondaryButton")),
    }),
    _m("Features", "Features", lambda p: {
        "title": first(p.get("title"), ""),
        "subtitle": first(p.get("subtitle"), ""),
        "columns": first(p.get("columns"), 3),
        "features": transform_features(first(p.get("features"), p.get("items"), None)),
    }),
    _m("CTA", "CTA", lambda p: {
        "title": first(p.get("title"), p.get("heading"), ""),
        "description": first(p.get("description"), p.get("text"), ""),
        "primaryButton": transform_button(first(p.get("primaryButton"), p.get("button"), None)),
        "secondaryButton": transform_button(p.get("secondaryButton")),
        "backgroundColor": p.get("backgroundColor"),
        "alignment": first(p.get("alignment"), "center"),
    }),
    _m("Testimonials", "Testimonials", lambda p: {
        "title": first(p.get("title"), ""),
        "testimonials": transform_testimonials(first(p.get("testimonials"), p.get("items"), None)),
        "layout": first(p.get("layout"), "grid"),
    }),
    _m("FAQ", "FAQ", lambda p: {
        "title": first(p.get("title"), ""),
        "items": transform_faq_items(first(p.get("items"), p.get("faqs"), None)),
    }),
    _m("Stats", "Stats", lambda p: {
        "title": first(p.get("title"), ""),
        "stats": transform_stats(first(p.get("stats"), p.get("items"), None)),
        "columns": first(p.get("columns"), 4),
        "backgroundColor": p.get("backgroundColor"),
    }),
    _m("Team", "Team", lambda p: {
        "title": first(p.get("title"), ""),
        "subtitle": first(p.get("subtitle"), ""),
        "members": transform_team_members(first(p.get("members"), p.get("team"), None)),
        "columns": first(p.get("columns"), 4),
    }),
    _m("Gallery", "Gallery", lambda p: {
        "images": transform_gallery_images(first(p.get("images"), p.get("items"), None)),
        "columns": first(p.get("columns"), 4),
        "gap": first(p.get("gap"), "md"),
        "lightbox": _not_false(p.get("lightbox")),
    }),
    # Navigation
    _m("Navbar", "Navbar", lambda p: {
        "logo": first(p.get("logo"), p.get("logoUrl"), ""),
        "logoText": first(p.get("logoText"), p.get("brandName"), "LOGO"),
        "links": transform_nav_links(first(p.get("links"), p.get("menuItems"), None)),
        "sticky": first(p.get("sticky"), False),
        "backgroundColor": p.get("backgroundColor"),
        "textColor": p.get("textColor"),
        "ctaButton": transform_button(first(p.get("ctaButton"), p.get("cta"), None)),
    }),
    _m("Footer", "Footer", lambda p: {
        "logo": first(p.get("logo"), ""),
        "description": first(p.get("description"), p.get("tagline"), ""),
        "columns": transform_footer_columns(first(p.get("columns"), p.get("linkColumns"), None)),
        "socialLinks": transform_social_links(first(p.get("socialLinks"), p.get("social"), None)),
        "copyright": first(p.get("copyright"), ""),
        "backgroundColor": p.get("backgroundColor"),
        "textColor": p.get("textColor"),
    }),
    _m("SocialLinks", "SocialLinks", lambda p: {
        "links": transform_social_links(first(p.get("links"), p.get("items"), None)),
        "size": first(p.get("size"), "md"),
        "color": p.get("color"),
        "style": first(p.get("style"), "filled"),
    }),
    # Forms
    _m("Form", "Form", lambda p: {
        "submitText": first(p.get("submitText"), p.get("buttonText"), "Submit"),
        "successMessage": first(p.get("successMessage"), "Form submitted successfully!"),
        "buttonVariant": first(p.get("buttonVariant"), "default"),
        "buttonFullWidth": first(p.get("buttonFullWidth"), False),
    }),
    _m("FormField", "FormField", lambda p: {
        "label": first(p.get("label"), ""),
        "name": first(p.get("name"), p.get("fieldName"), ""),
        "type": first(p.get("type"), p.get("fieldType"), "text"),
        "placeholder": first(p.get("placeholder"), ""),
        "required": first(p.get("required"), False),
        "options": transform_select_options(p.get("options")),
        "helpText": first(p.get("helpText"), p.get("hint"), ""),
        "width": first(p.get("width"), "full"),
    }),
    _m("ContactForm", "ContactForm", lambda p: {
        "title": first(p.get("title"), "Get in Touch"),
        "description": first(p.get("description"), ""),
        "fields": first(p.get("fields"), ["name", "email", "message"]),
        "submitText": first(p.get("submitText"), "Send Message"),
        "backgroundColor": p.get("backgroundColor"),
        "showIcons": _not_false(p.get("showIcons")),
    }),
    _m("Newsletter", "Newsletter", lambda p: {
        "title": first(p.get("title"), "Subscribe to our newsletter"),
        "description": first(p.get("description"), ""),
        "placeholder": first(p.get("placeholder"), "Enter your email"),
        "buttonText": first(p.get("buttonText"), p.get("submitText"), "Subscribe"),
        "layout": first(p.get("layout"), "inline"),
        "backgroundColor": p.get("backgroundColor"),
    }),
    # E-commerce
    _m("ProductGrid", "ProductGrid", lambda p: {
        "columns": first(p.get("columns"), 4),
        "gap": first(p.get("gap"), "md"),
        "products": transform_products(first(p.get("products"), p.get("items"), None)),
        "showPrices": _not_false(p.get("showPrices")),
        "showRatings": _not_false(p.get("showRatings")),
        "showAddToCart": _not_false(p.get("showAddToCart")),
    }),
    _m("ProductCard", "ProductCard", lambda p: {
        "name": first(p.get("name"), p.get("title"), "Product Name"),
        "image": first(p.get("image"), p.get("imageUrl"), ""),
        "price": first(p.get("price"), 0),
        "salePrice": p.get("salePrice"),
        "description": first(p.get("description"), ""),
        "rating": p.get("rating"),
        "href": first(p.get("href"), p.get("link"), "#"),
        "showQuickView": _not_false(p.get("showQuickView")),
        "showWishlist": _not_false(p.get("showWishlist")),
    }),
)

_DEFAULT_MAPPINGS_BY_TYPE: dict[str, ComponentMapping] = {m.legacy_type: m for m in DEFAULT_COMPONENT_MAPPINGS}


def get_mapping_for_type(
    legacy_type: str, custom_mappings: Iterable[ComponentMapping] | None = None
) -> ComponentMapping | None:
    """Custom mappings first, then the defaults."""
    for mapping in custom_mappings or ():
        if mapping.legacy_type == legacy_type:
            return mapping
    return _DEFAULT_MAPPINGS_BY_TYPE.get(legacy_type)


def supported_legacy_types() -> list[str]:
    return [m.legacy_type for m in DEFAULT_COMPONENT_MAPPINGS]
