"""Fast, type-safe JSON parsing for stored page documents."""

from typing import Any
import json
import re

import msgspec
import orjson
from json_repair import repair_json

_BOM = "\ufeff"
_STRING_LITERAL = re.compile(r'"(?:[^"\\]|\\.)*"', re.DOTALL)
_BRACKETS = re.compile(r"[\[\]{}]")


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def _as_text(data: str | bytes) -> str:
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise JSONParseError(f"Document is not valid UTF-8: {e}", e)
    return data.lstrip(_BOM).strip()


def _expect_object(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        raise JSONParseError(f"Expected object, got {type(result).__name__}")
    return result


def extract_json(data: str | bytes, repair: bool = True) -> dict[str, Any]:
    """
    Parse a JSON document object with multiple fallbacks.

    msgspec is tried first, then the standard library, then json_repair
    (stored documents are sometimes truncated or hand-edited).

    Args:
        data: JSON text or UTF-8 bytes
        repair: Attempt to repair invalid JSON with json_repair

    Returns:
        Parsed JSON object

    Raises:
        JSONParseError: If parsing fails or the top level is not an object
    """
    text = _as_text(data)
    if not text:
        raise JSONParseError("Empty JSON document")

    # Try msgspec first (fastest)
    try:
        return _expect_object(msgspec.json.decode(text.encode("utf-8")))
    except RecursionError as e:
        raise JSONParseError("JSON nesting is too deep to decode", e)
    except msgspec.DecodeError as e:
        if not repair:
            raise JSONParseError(f"Invalid JSON: {e}", e)

    # Standard library reports positions more helpfully
    try:
        return _expect_object(json.loads(text))
    except RecursionError as e:
        raise JSONParseError("JSON nesting is too deep to decode", e)
    except json.JSONDecodeError:
        pass

    # Last resort: json_repair, only for object-shaped text
    start = text.find("{")
    if start == -1:
        raise JSONParseError("No JSON object found in text")
    try:
        repaired = repair_json(text[start:])
        return _expect_object(json.loads(repaired))
    except Exception as repair_error:
        raise JSONParseError(f"JSON repair failed: {repair_error}", repair_error)


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Args:
        obj: Object to encode
        **kwargs: indent (0 for compact), sort_keys

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)
    sort_keys = kwargs.get("sort_keys", False)

    if indent == 0:
        option = orjson.OPT_SORT_KEYS if sort_keys else 0
        try:
            return orjson.dumps(obj, option=option).decode("utf-8")
        except (TypeError, ValueError, orjson.JSONEncodeError):
            # Integers outside 64-bit range and similar edge cases
            pass

        if not sort_keys:
            try:
                return msgspec.json.encode(obj).decode("utf-8")
            except (TypeError, ValueError):
                pass

    return json.dumps(obj, indent=indent if indent > 0 else None, sort_keys=sort_keys)


def validate_json_size(data: str | bytes, max_size: int, name: str = "JSON") -> None:
    """
    Validate encoded document size.

    Raises:
        JSONParseError: If size exceeds limit
    """
    size = len(data) if isinstance(data, bytes) else len(data.encode("utf-8"))
    if size > max_size:
        raise JSONParseError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_json_text_depth(data: str | bytes, max_depth: int = 64) -> None:
    """
    Validate bracket nesting of undecoded JSON text.

    Brackets inside string literals are ignored.

    Raises:
        JSONParseError: If depth exceeds limit
    """
    text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
    depth = 0
    for match in _BRACKETS.finditer(_STRING_LITERAL.sub('""', text)):
        if match.group() in "[{":
            depth += 1
            if depth > max_depth:
                raise JSONParseError(f"JSON nesting depth {depth} exceeds maximum {max_depth}")
        elif depth:
            depth -= 1


def validate_json_depth(obj: Any, max_depth: int = 64, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth to prevent runaway recursion.

    Args:
        obj: Object to validate
        max_depth: Maximum allowed nesting depth
        current_depth: Current depth (internal)

    Raises:
        JSONParseError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise JSONParseError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)


__all__ = [
    "JSONParseError",
    "extract_json",
    "safe_json_dumps",
    "validate_json_size",
    "validate_json_depth",
    "validate_json_text_depth",
]
