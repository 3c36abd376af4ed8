"""
Style Sheet Emission
Compiled rule sets -> CSS text, plus a minifier and a small parser used to
compare emissions at the rule/value level.
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable

from core import hash_string

from .compiler import CompiledStyles, CompileOptions, RuleSet, compile_node
from .responsive import BREAKPOINT_ORDER

DEFAULT_CLASS_PREFIX = "dc"

BASE_STYLES = """
/* Page base styles */
*,
*::before,
*::after {
  box-sizing: border-box;
}

body {
  margin: 0;
  font-family: system-ui, -apple-system, sans-serif;
  line-height: 1.5;
}

img,
video {
  max-width: 100%;
  height: auto;
}

a {
  color: inherit;
  text-decoration: none;
}

button {
  font: inherit;
  cursor: pointer;
}
""".strip()

_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_WHITESPACE = re.compile(r"\s+")
_PUNCTUATION = re.compile(r"\s*([{};:,])\s*")
_CLASS_PREFIX = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*$")


@dataclass
class SheetOptions:
    minify: bool = False
    class_prefix: str = DEFAULT_CLASS_PREFIX
    include_base: bool = True
    include_states: bool = True
    include_responsive: bool = True


@dataclass(frozen=True)
class CSSRule:
    """One parsed rule; ``media`` is the normalized at-rule prelude or None."""

    selector: str
    declarations: tuple[tuple[str, str], ...]
    media: str | None = None


def generate_class_name(node_id: str, prefix: str = DEFAULT_CLASS_PREFIX) -> str:
    """Stable, CSS-safe class name for a node id."""
    if not _CLASS_PREFIX.match(prefix or ""):
        prefix = DEFAULT_CLASS_PREFIX
    return f"{prefix}-{hash_string(node_id, truncate=8)}"


def minify_css(css: str) -> str:
    """Strip comments and collapse whitespace deterministically."""
    text = _COMMENT.sub("", css)
    text = _WHITESPACE.sub(" ", text)
    text = _PUNCTUATION.sub(r"\1", text)
    return text.replace(";}", "}").strip()


# ============================================================================
# Emission
# ============================================================================


def _block(selector: str, rules: RuleSet, minify: bool, indent: str = "") -> str:
    if minify:
        body = ";".join(f"{prop}:{value}" for prop, value in rules.items())
        return f"{selector}{{{body}}}"
    inner = indent + "  "
    body = "\n".join(f"{inner}{prop}: {value};" for prop, value in rules.items())
    return f"{indent}{selector} {{\n{body}\n{indent}}}"


def to_css(compiled: CompiledStyles, class_name: str, minify: bool = False) -> str:
    """
    Render one node's compiled styles under ``.class_name``.

    Order: base, states (hover/active/focus), then media queries by
    ascending breakpoint so larger breakpoints win.
    """
    selector = f".{class_name}"
    blocks: list[str] = []

    if compiled.base:
        blocks.append(_block(selector, compiled.base, minify))

    for state, rules in compiled.states.items():
        blocks.append(_block(f"{selector}{state.pseudo_class}", rules, minify))

    for breakpoint in BREAKPOINT_ORDER:
        rules = compiled.responsive.get(breakpoint)
        if not rules:
            continue
        media = f"@media (min-width: {breakpoint.min_width}px)"
        if minify:
            blocks.append(f"@media (min-width:{breakpoint.min_width}px){{{_block(selector, rules, True)}}}")
        else:
            blocks.append(f"{media} {{\n{_block(selector, rules, False, '  ')}\n}}")

    return ("" if minify else "\n").join(blocks)


def generate_page_css(nodes: Iterable[Any], options: SheetOptions | None = None) -> str:
    """
    Page stylesheet: base reset followed by each node's rules.

    Args:
        nodes: Nodes with ``id``/``props`` (models or mappings)
        options: Emission options

    Returns:
        CSS text
    """
    options = options or SheetOptions()
    compile_options = CompileOptions(
        include_states=options.include_states,
        include_responsive=options.include_responsive,
    )
    blocks: list[str] = []

    if options.include_base:
        blocks.append(minify_css(BASE_STYLES) if options.minify else BASE_STYLES)

    for node in nodes:
        node_id = node.get("id") if isinstance(node, dict) else getattr(node, "id", None)
        if not node_id:
            continue
        compiled = compile_node(node, compile_options)
        if compiled.is_empty():
            continue
        blocks.append(to_css(compiled, generate_class_name(str(node_id), options.class_prefix), options.minify))

    return ("" if options.minify else "\n\n").join(blocks)


# ============================================================================
# Parsing
# ============================================================================


def _normalize(text: str) -> str:
    return _PUNCTUATION.sub(r"\1", _WHITESPACE.sub(" ", text)).strip()


def _declarations(body: str) -> tuple[tuple[str, str], ...]:
    declarations = []
    for chunk in body.split(";"):
        if ":" not in chunk:
            continue
        prop, value = chunk.split(":", 1)
        prop, value = prop.strip().lower(), _normalize(value)
        if prop and value:
            declarations.append((prop, value))
    return tuple(declarations)


def _matching_brace(text: str, open_index: int) -> int:
    depth = 0
    for index in range(open_index, len(text)):
        if text[index] == "{":
            depth += 1
        elif text[index] == "}":
            depth -= 1
            if depth == 0:
                return index
    return len(text)


def _parse_block(text: str, media: str | None, rules: list[CSSRule]) -> None:
    position = 0
    while True:
        open_index = text.find("{", position)
        if open_index == -1:
            return
        prelude = _normalize(text[position:open_index])
        close_index = _matching_brace(text, open_index)
        body = text[open_index + 1 : close_index]

        if prelude.startswith("@"):
            _parse_block(body, prelude, rules)
        elif prelude:
            rules.append(CSSRule(selector=prelude, declarations=_declarations(body), media=media))
        position = close_index + 1


def parse_css(css: str) -> list[CSSRule]:
    """
    Parse CSS into normalized rules.

    Whitespace and comments are not significant, so
    ``parse_css(minify_css(css)) == parse_css(css)``.
    """
    rules: list[CSSRule] = []
    _parse_block(_COMMENT.sub("", css), None, rules)
    return rules
