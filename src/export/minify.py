"""HTML minification."""

import re

# Bodies left byte-for-byte intact
_PRESERVED = re.compile(
    r"<!--\[if.*?<!\[endif\]-->|<(pre|textarea|script|style)\b[^>]*>.*?</\1\s*>",
    re.DOTALL | re.IGNORECASE,
)
_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
_BETWEEN_TAGS = re.compile(r">\s+<")
_WHITESPACE = re.compile(r"\s{2,}")


def _collapse(segment: str) -> str:
    segment = _COMMENT.sub("", segment)
    segment = _BETWEEN_TAGS.sub("><", segment)
    return _WHITESPACE.sub(" ", segment)


def minify_html(html: str) -> str:
    """
    Strip ordinary comments and collapse whitespace.

    Conditional comments and ``pre``/``textarea``/``script``/``style``
    elements are kept verbatim; only the markup between them is rewritten.

    Examples:
        >>> minify_html("<div>\\n  <!-- note -->\\n  <p>Hi</p>\\n</div>")
        '<div><p>Hi</p></div>'
    """
    parts: list[str] = []
    position = 0
    for match in _PRESERVED.finditer(html):
        parts.append(_collapse(html[position:match.start()]))
        parts.append(match.group(0))
        position = match.end()
    parts.append(_collapse(html[position:]))
    return "".join(parts).strip()


__all__ = ["minify_html"]
