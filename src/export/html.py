"""
Static HTML Serializer
Produces self-contained markup from a canonical document.

Shares the canonical tree, the registry and the style compiler with the
live renderer, but keeps its own walk state: the two never share mutable
sets. Emission decisions (hidden, dangling, unknown, cycle, containment)
mirror the renderer so both outputs carry the same components in the same
order.
"""

import html
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from core import Code, Diagnostics, Settings, get_logger, get_settings, trace_operation
from core.id import new_export_id
from document import DEFAULT_TITLE, CanonicalDocument, Node
from palette import BrandColorPalette, css_variables_block, generate_css_variables, inject_defaults, resolve_palette
from registry import (
    MODULE_CONTAINER_CLASS,
    MODULE_CONTAINER_STYLE,
    ComponentDefinition,
    ComponentRegistry,
    heading_tag,
    needs_module_container,
    node_text,
)
from styles import CompileOptions, SheetOptions, compile_node, generate_class_name, generate_page_css, split_props
from .minify import minify_html

logger = get_logger(__name__)

DEFAULT_TAGS: dict[str, str] = {
    # Layout
    "Section": "section",
    "Container": "div",
    "Columns": "div",
    "Card": "div",
    "Spacer": "div",
    "Divider": "hr",
    # Typography (Heading resolves to h1-h6 from its level)
    "Text": "p",
    "RichText": "div",
    "Quote": "blockquote",
    # Media
    "Image": "img",
    "Video": "figure",
    "Map": "figure",
    "Gallery": "div",
    # Interactive
    "Link": "a",
    "Form": "form",
    "FormField": "label",
    "ContactForm": "form",
    "Newsletter": "form",
    "Navbar": "nav",
    "Footer": "footer",
    "SocialLinks": "ul",
    # Sections
    "Hero": "section",
    "Features": "section",
    "CTA": "section",
    "Testimonials": "section",
    "FAQ": "section",
    "Stats": "section",
    "Team": "section",
    "Pricing": "section",
    "ProductCard": "article",
}

VOID_ELEMENTS: frozenset[str] = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
)

# Never accepted from a per-node tag prop
BLOCKED_TAGS: frozenset[str] = frozenset({"script", "style", "iframe", "object", "embed", "base", "meta", "link"})

# Prop name -> HTML attribute
ATTRIBUTE_PROPS: dict[str, str] = {
    "href": "href",
    "src": "src",
    "alt": "alt",
    "ariaLabel": "aria-label",
    "anchor": "id",
}
URL_ATTRIBUTES = frozenset({"href", "src"})

_TAG_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")
_UNSAFE_SCHEME = re.compile(r"^\s*(javascript|vbscript|data):", re.IGNORECASE)
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

PLACEHOLDER_CLASS = "component-placeholder"
CYCLE_CLASS = "component-cycle"


@dataclass
class ExportOptions:
    """Serializer options; ``None`` fields fall back to settings."""

    palette: BrandColorPalette | None = None
    tag_overrides: dict[str, str] = field(default_factory=dict)
    minify: bool | None = None
    full_document: bool = True
    inline_styles: bool = False
    diagnostic_mode: bool | None = None
    class_prefix: str | None = None
    lang: str = "en"


@dataclass
class ExportResult:
    html: str
    diagnostics: Diagnostics
    export_id: str
    emitted: int = 0


def is_valid_tag(tag: Any) -> bool:
    return isinstance(tag, str) and bool(_TAG_PATTERN.match(tag))


def safe_url(value: str) -> str:
    """Neutralize script-capable URL schemes."""
    if _UNSAFE_SCHEME.match(_CONTROL_CHARS.sub("", value)):
        return "#"
    return value


def _attributes(attrs: Mapping[str, str | None]) -> str:
    return "".join(
        f' {name}="{html.escape(value, quote=True)}"' for name, value in attrs.items() if value is not None
    )


def _inline_style(node: Mapping[str, Any]) -> str | None:
    base = compile_node(node, CompileOptions(include_states=False, include_responsive=False)).base
    if not base:
        return None
    return ";".join(f"{prop}:{value}" for prop, value in base.items())


_MODULE_CONTAINER_RULES = {re.sub(r"([A-Z])", r"-\1", k).lower(): v for k, v in MODULE_CONTAINER_STYLE.items()}


def _module_container_css(minify: bool) -> str:
    rules = _MODULE_CONTAINER_RULES
    if minify:
        return f".{MODULE_CONTAINER_CLASS}{{{';'.join(f'{k}:{v}' for k, v in rules.items())}}}"
    body = "\n".join(f"  {k}: {v};" for k, v in rules.items())
    return f".{MODULE_CONTAINER_CLASS} {{\n{body}\n}}"


class _SerializeWalk:
    """One serialization pass; ``in_progress`` guards against cycles."""

    def __init__(
        self,
        document: CanonicalDocument,
        registry: ComponentRegistry,
        palette: BrandColorPalette,
        options: ExportOptions,
        diagnostic_mode: bool,
        class_prefix: str,
        diagnostics: Diagnostics,
        max_depth: int,
    ) -> None:
        self.document = document
        self.registry = registry
        self.palette = palette
        self.options = options
        self.diagnostic_mode = diagnostic_mode
        self.class_prefix = class_prefix
        self.diagnostics = diagnostics
        self.max_depth = max_depth
        self.in_progress: set[str] = set()
        self.styled_nodes: list[dict[str, Any]] = []
        self.emitted = 0
        self.wrapped = 0

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    def resolve_tag(self, node: Node, definition: ComponentDefinition) -> str:
        """Per-node prop, then overrides, then the registry, then defaults."""
        explicit = node.props.get("tag")
        if is_valid_tag(explicit) and explicit not in BLOCKED_TAGS:
            return explicit
        override = self.options.tag_overrides.get(node.type)
        if is_valid_tag(override):
            return override
        if is_valid_tag(definition.tag):
            return definition.tag
        if node.type == "Heading":
            return heading_tag(node.props)
        if node.type == "Button":
            return "a" if node.props.get("href") else "button"
        return DEFAULT_TAGS.get(node.type, "div")

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def serialize_children(self, ids: list[str], owner: str, depth: int = 0) -> str:
        parts = []
        for node_id in ids:
            parts.append(self.serialize_ref(node_id, owner, depth))
        return "".join(parts)

    def _marker(self, node_id: str, css_class: str, text: str) -> str:
        attrs = _attributes({"class": css_class, "data-node-id": node_id})
        return f"<div{attrs}>{html.escape(text)}</div>"

    def serialize_ref(self, node_id: str, owner: str, depth: int = 0) -> str:
        if depth > self.max_depth:
            self.diagnostics.warning(
                Code.TREE_TOO_DEEP, f"{node_id} is nested deeper than {self.max_depth}", node_id=node_id, owner=owner
            )
            return ""
        if node_id in self.in_progress:
            self.diagnostics.warning(Code.CYCLE_DETECTED, f"Cycle at {node_id}", node_id=node_id, owner=owner)
            return self._marker(node_id, CYCLE_CLASS, f"Circular reference: {node_id}")

        node = self.document.get(node_id)
        if node is None:
            self.diagnostics.warning(
                Code.DANGLING_REFERENCE, f"Reference to missing component {node_id}", node_id=node_id, owner=owner
            )
            return ""
        if node.hidden:
            return ""

        definition = self.registry.get(node.type)
        if definition is None:
            self.diagnostics.warning(Code.UNKNOWN_TYPE, f"Unknown component type {node.type!r}", node_id=node_id)
            if self.diagnostic_mode:
                return self._marker(node_id, PLACEHOLDER_CLASS, f"Unknown component: {node.type}")
            return ""

        self.in_progress.add(node_id)
        try:
            markup = self._element(node, definition, depth)
        finally:
            self.in_progress.discard(node_id)

        if needs_module_container(node.type, definition.source):
            self.wrapped += 1
            style = None
            if self.options.inline_styles:
                style = ";".join(f"{k}:{v}" for k, v in _MODULE_CONTAINER_RULES.items())
            return f"<div{_attributes({'class': MODULE_CONTAINER_CLASS, 'style': style})}>{markup}</div>"
        return markup

    def _element(self, node: Node, definition: ComponentDefinition, depth: int) -> str:
        _, content_props = split_props(inject_defaults(node.props, self.palette))
        styled = {
            "id": node.id,
            "props": node.props,
            "states": node.states.model_dump(exclude_none=True) if node.states else None,
            "transition": node.transition.model_dump() if node.transition else None,
        }

        tag = self.resolve_tag(node, definition)
        class_name = generate_class_name(node.id, self.class_prefix)
        attrs: dict[str, str | None] = {"class": class_name, "data-node-id": node.id}
        for prop, attribute in ATTRIBUTE_PROPS.items():
            value = content_props.get(prop)
            if isinstance(value, str) and value:
                attrs[attribute] = safe_url(value) if attribute in URL_ATTRIBUTES else value
        if tag == "a" and content_props.get("openInNewTab") is True:
            attrs["target"] = "_blank"
            attrs["rel"] = "noopener noreferrer"

        if self.options.inline_styles:
            attrs["style"] = _inline_style(styled)
        else:
            self.styled_nodes.append(styled)

        self.emitted += 1
        opening = f"<{tag}{_attributes(attrs)}>"
        if tag in VOID_ELEMENTS:
            return opening

        text = node_text(content_props)
        inner = html.escape(text) if text is not None else ""
        if definition.accepts_children and node.children:
            inner += self.serialize_children(node.children, node.id, depth + 1)
        return f"{opening}{inner}</{tag}>"

    # ------------------------------------------------------------------
    # Document
    # ------------------------------------------------------------------

    def serialize_body(self) -> str:
        parts = [f"<main data-page-root>{self.serialize_children(self.document.root.children, 'root')}</main>"]
        for zone_id, entries in self.document.zones.items():
            content = self.serialize_children(entries, f"zone:{zone_id}")
            parts.append(f"<div{_attributes({'class': 'page-zone', 'data-zone': zone_id})}>{content}</div>")
        return "\n".join(parts)

    def stylesheet(self, minify: bool) -> str:
        blocks = [css_variables_block(generate_css_variables(self.palette))]
        if minify:
            blocks[0] = blocks[0].replace("\n", "").replace("  ", "")
        if not self.options.inline_styles:
            blocks.append(
                generate_page_css(self.styled_nodes, SheetOptions(minify=minify, class_prefix=self.class_prefix))
            )
            if self.wrapped:
                blocks.append(_module_container_css(minify))
        return ("" if minify else "\n").join(blocks)


class StaticHTMLSerializer:
    """
    Serializes canonical documents to standalone HTML.

    Args:
        registry: Component registry; a bootstrapped default when omitted
        settings: Engine settings (diagnostic mode, class prefix, minify)
    """

    def __init__(self, registry: ComponentRegistry | None = None, settings: Settings | None = None) -> None:
        self.registry = registry or ComponentRegistry()
        self.settings = settings or get_settings()

    def export(self, document: CanonicalDocument, options: ExportOptions | None = None) -> ExportResult:
        """Serialize and return markup together with diagnostics."""
        options = options or ExportOptions()
        export_id = new_export_id()
        diagnostics = Diagnostics()
        minify = self.settings.minify_output if options.minify is None else options.minify

        with trace_operation("export", export_id=export_id, components=len(document.components)):
            self.registry.ensure_ready()
            palette = options.palette or resolve_palette()
            walk = _SerializeWalk(
                document,
                self.registry,
                palette,
                options,
                self.settings.diagnostic_mode if options.diagnostic_mode is None else options.diagnostic_mode,
                options.class_prefix or self.settings.class_prefix,
                diagnostics,
                self.settings.max_tree_depth,
            )
            body = walk.serialize_body()
            style = f"<style>\n{walk.stylesheet(minify)}\n</style>"

            if options.full_document:
                markup = self._document(document, body, style, options.lang)
            else:
                markup = f"{style}\n{body}"
            if minify:
                markup = minify_html(markup)

        logger.info("document_exported", export_id=export_id, emitted=walk.emitted, bytes=len(markup))
        return ExportResult(html=markup, diagnostics=diagnostics, export_id=export_id, emitted=walk.emitted)

    def serialize(self, document: CanonicalDocument, options: ExportOptions | None = None) -> str:
        return self.export(document, options).html

    @staticmethod
    def _document(document: CanonicalDocument, body: str, style: str, lang: str) -> str:
        title = document.root.props.get("title") or DEFAULT_TITLE
        description = document.root.props.get("description")
        head = [
            '<meta charset="utf-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1">',
            f"<title>{html.escape(str(title))}</title>",
        ]
        if isinstance(description, str) and description:
            head.append(f'<meta name="description" content="{html.escape(description, quote=True)}">')
        head.append(style)
        lang_attr = html.escape(lang if is_valid_tag(lang) else "en", quote=True)
        return "\n".join(
            ["<!DOCTYPE html>", f'<html lang="{lang_attr}">', "<head>", *head, "</head>", "<body>", body,
             "</body>", "</html>"]
        )


def serialize(
    document: CanonicalDocument,
    registry: ComponentRegistry | None = None,
    options: ExportOptions | None = None,
) -> str:
    return StaticHTMLSerializer(registry).serialize(document, options)
