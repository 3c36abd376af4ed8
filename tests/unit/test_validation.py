"""Validation tests."""

import pytest
from hypothesis import given, strategies as st
from returns.result import Failure, Success

from core import (
    DocumentValidator,
    ModuleRequest,
    PageExportRequest,
    PageRenderRequest,
    ValidationError,
    validate_document_structure,
)


def test_page_render_request_valid():
    req = PageRenderRequest(
        document={"content": []},
        page_id="  home  ",
        modules=[ModuleRequest(module_id="booking")],
    )
    assert req.page_id == "home"
    assert req.modules[0].status == "active"


def test_page_render_request_blank_page_id():
    with pytest.raises(Exception):
        PageRenderRequest(page_id="   ")


def test_page_render_request_rejects_extra_fields():
    with pytest.raises(Exception):
        PageRenderRequest(unknown_field=True)


def test_page_render_request_is_frozen():
    req = PageRenderRequest()
    with pytest.raises(Exception):
        req.page_id = "other"


def test_module_status_literal():
    with pytest.raises(Exception):
        ModuleRequest(module_id="booking", status="paused")


def test_too_many_modules():
    with pytest.raises(Exception):
        PageRenderRequest(modules=[ModuleRequest(module_id=f"m{i}") for i in range(40)])


def test_export_request_tag_overrides_lowercased():
    req = PageExportRequest(tag_overrides={"Hero": "HEADER"})
    assert req.tag_overrides == {"Hero": "header"}


@pytest.mark.parametrize("tag", ["", "1div", "di v", "<script>"])
def test_export_request_invalid_tag(tag):
    with pytest.raises(Exception):
        PageExportRequest(tag_overrides={"Hero": tag})


class TestDocumentValidator:
    def test_accepts_small_documents(self):
        DocumentValidator.validate({"root": {}})
        DocumentValidator.validate('{"root": {}}')

    def test_size_limit(self):
        with pytest.raises(ValidationError) as exc:
            DocumentValidator.validate("x" * 100, max_bytes=10)
        assert exc.value.field == "size"

    def test_depth_limit(self):
        deep: dict = {"a": {"b": {"c": {"d": {}}}}}
        with pytest.raises(ValidationError) as exc:
            DocumentValidator.validate(deep, max_depth=2)
        assert exc.value.field == "depth"

    def test_text_depth_limit(self):
        with pytest.raises(ValidationError) as exc:
            DocumentValidator.validate('{"a": {"b": {"c": {"d": {}}}}}', max_depth=2)
        assert exc.value.field == "depth"

    def test_type(self):
        with pytest.raises(ValidationError) as exc:
            DocumentValidator.validate(42)
        assert exc.value.field == "type"


def test_validate_document_structure_result():
    result = validate_document_structure({"root": {}})
    assert isinstance(result, Success)
    assert result.unwrap() == {"root": {}}

    failure = validate_document_structure("x" * 100, max_bytes=10)
    assert isinstance(failure, Failure)
    assert failure.failure().field == "size"


@given(st.text(max_size=50))
def test_string_documents_under_limit_pass(text):
    assert isinstance(validate_document_structure(text, max_bytes=1000), Success)
