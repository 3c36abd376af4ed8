"""Tests for diagnostics collection and tracing."""

import pytest

from core import Code, Diagnostic, Diagnostics, Severity, trace_operation


@pytest.mark.unit
def test_empty_collection_is_falsy():
    diagnostics = Diagnostics()
    assert not diagnostics
    assert len(diagnostics) == 0
    assert diagnostics.has_errors() is False


@pytest.mark.unit
def test_severity_helpers():
    diagnostics = Diagnostics()
    diagnostics.info(Code.EMPTY_DOCUMENT, "empty")
    diagnostics.warning(Code.UNKNOWN_TYPE, "unknown", node_id="n1", type="Widget")
    diagnostics.error(Code.RENDER_ERROR, "boom", node_id="n2")

    assert diagnostics.codes() == [Code.EMPTY_DOCUMENT, Code.UNKNOWN_TYPE, Code.RENDER_ERROR]
    assert [d.code for d in diagnostics.errors] == [Code.RENDER_ERROR]
    assert [d.code for d in diagnostics.warnings] == [Code.UNKNOWN_TYPE]
    assert diagnostics.has_errors()
    assert diagnostics.for_node("n1")[0].context == {"type": "Widget"}


@pytest.mark.unit
def test_to_list_serializes_enums():
    diagnostics = Diagnostics()
    diagnostics.warning(Code.DANGLING_REFERENCE, "missing", node_id="ghost-1", owner="root")

    assert diagnostics.to_list() == [
        {
            "code": "dangling_reference",
            "message": "missing",
            "severity": "warning",
            "node_id": "ghost-1",
            "context": {"owner": "root"},
        }
    ]


@pytest.mark.unit
def test_extend_keeps_order():
    first = Diagnostics([Diagnostic(Code.PARSE_ERROR, "a", Severity.ERROR)])
    second = Diagnostics()
    second.warning(Code.CYCLE_DETECTED, "b")
    first.extend(second)
    assert first.codes() == [Code.PARSE_ERROR, Code.CYCLE_DETECTED]


@pytest.mark.unit
def test_trace_operation_records_duration():
    with trace_operation("unit_test", page_id="p1") as span:
        span.set_tag("nodes", 3)
    assert span.duration >= 0
    assert span.tags == {"nodes": 3}


@pytest.mark.unit
def test_trace_operation_reraises():
    with pytest.raises(RuntimeError):
        with trace_operation("failing"):
            raise RuntimeError("boom")
