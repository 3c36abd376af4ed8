"""Tests for JSON parsing helpers."""

import pytest

from core.json import (
    JSONParseError,
    extract_json,
    safe_json_dumps,
    validate_json_depth,
    validate_json_size,
    validate_json_text_depth,
)

DEEP_OBJECT = '{"a":' * 3000 + "1" + "}" * 3000


@pytest.mark.unit
class TestExtractJson:
    def test_valid_object(self):
        assert extract_json('{"root": {"props": {}}}') == {"root": {"props": {}}}

    def test_bytes_with_bom(self):
        assert extract_json("\ufeff{\"a\": 1}".encode("utf-8")) == {"a": 1}

    def test_repairs_truncated_object(self):
        result = extract_json('{"content": [], "root": {"props": {"title": "x"}}')
        assert result["root"]["props"]["title"] == "x"

    def test_no_repair_raises(self):
        with pytest.raises(JSONParseError):
            extract_json('{"a": 1', repair=False)

    def test_top_level_array_rejected(self):
        with pytest.raises(JSONParseError):
            extract_json("[1, 2, 3]")

    @pytest.mark.parametrize("text", ["", "   ", "\ufeff"])
    def test_empty_rejected(self, text):
        with pytest.raises(JSONParseError):
            extract_json(text)

    def test_invalid_utf8(self):
        with pytest.raises(JSONParseError):
            extract_json(b"\xff\xfe{")

    @pytest.mark.parametrize("repair", [True, False])
    def test_deep_nesting_raises_parse_error(self, repair):
        with pytest.raises(JSONParseError):
            extract_json(DEEP_OBJECT, repair=repair)


@pytest.mark.unit
class TestDumps:
    def test_compact(self):
        assert safe_json_dumps({"b": 1, "a": 2}) == '{"b":1,"a":2}'

    def test_sorted(self):
        assert safe_json_dumps({"b": 1, "a": 2}, sort_keys=True) == '{"a":2,"b":1}'

    def test_indent(self):
        assert "\n" in safe_json_dumps({"a": 1}, indent=2)


@pytest.mark.unit
def test_validate_json_size():
    validate_json_size('{"test": "data"}', 1000)
    with pytest.raises(JSONParseError):
        validate_json_size("x" * 100, 10)


@pytest.mark.unit
def test_validate_json_size_counts_utf8_bytes():
    with pytest.raises(JSONParseError):
        validate_json_size("é" * 6, 10)


@pytest.mark.unit
def test_validate_json_depth():
    validate_json_depth({"a": {"b": {"c": 1}}}, max_depth=5)
    nested: dict = {}
    current = nested
    for _ in range(10):
        current["x"] = {}
        current = current["x"]
    with pytest.raises(JSONParseError):
        validate_json_depth(nested, max_depth=5)


@pytest.mark.unit
class TestTextDepth:
    def test_within_limit(self):
        validate_json_text_depth('{"a": [{"b": 1}]}', max_depth=3)

    def test_exceeds_limit(self):
        with pytest.raises(JSONParseError):
            validate_json_text_depth('{"a": [{"b": 1}]}', max_depth=2)

    def test_brackets_in_strings_are_ignored(self):
        validate_json_text_depth('{"a": "[[[[{{{{\\"]]]"}', max_depth=1)

    def test_deep_text_rejected_without_decoding(self):
        with pytest.raises(JSONParseError):
            validate_json_text_depth(DEEP_OBJECT.encode("utf-8"), max_depth=64)
