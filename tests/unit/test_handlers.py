"""Tests for the page handler."""

import pytest

from core import ModuleRequest, PageExportRequest, PageRenderRequest, ValidationError
from document import Node
from export import StaticHTMLSerializer
from handlers import PageExportResponse, PageHandler, PageRenderResponse
from registry import ComponentRegistry
from renderer import TreeRenderer


@pytest.fixture
def handler(di_container):
    return di_container.get(PageHandler)


# ============================================================================
# Container wiring
# ============================================================================


@pytest.mark.unit
def test_container_shares_registry(di_container, handler):
    assert di_container.get(PageHandler) is handler
    registry = di_container.get(ComponentRegistry)
    assert di_container.get(TreeRenderer).registry is registry
    assert di_container.get(StaticHTMLSerializer).registry is registry
    assert registry.is_initialized()


# ============================================================================
# Render
# ============================================================================


@pytest.mark.unit
class TestRender:
    async def test_flat_list(self, handler, flat_list_document):
        response = await handler.render({"document": flat_list_document, "page_id": " home "})

        assert isinstance(response, PageRenderResponse)
        assert response.page_id == "home"
        assert response.phase == "rendered"
        assert response.report["format"] == "flat_list"
        assert response.stats["references"] == {"Heading": 1}
        (heading,) = response.tree.root.children
        assert heading.text == "Hello"
        assert heading.style["fontSize"] == "18px"

    async def test_site_palette(self, handler, sample_document):
        response = await handler.render(
            {"document": sample_document.to_dict(), "site_settings": {"background_color": "#111111"}}
        )
        heading = response.tree.root.children[0].children[0]
        assert heading.props["headerBackgroundColor"] == "#111111"
        assert "backgroundColor" not in heading.style

    async def test_json_text_document(self, handler, sample_document):
        response = await handler.render({"document": sample_document.to_json()})
        assert response.tree.component_ids() == ["section-1", "heading-1", "button-1", "footer-1"]

    async def test_diagnostics_are_merged(self, handler, document_factory):
        document = document_factory([], ["ghost-1"]).to_dict()
        response = await handler.render({"document": document, "diagnostic_mode": True})

        codes = [d["code"] for d in response.diagnostics]
        assert codes == ["dangling_reference", "dangling_reference"]
        assert response.diagnostics[0]["node_id"] == "ghost-1"

    async def test_strict_request(self, handler, keyed_graph_document):
        keyed_graph_document["node-c"]["type"] = {"resolvedName": "Mystery"}
        response = await handler.render({"document": keyed_graph_document, "strict": True})

        assert response.tree.component_ids() == []
        assert [d["code"] for d in response.diagnostics] == ["strict_migration_failed"]

    async def test_lenient_by_default(self, handler, keyed_graph_document):
        keyed_graph_document["node-c"]["type"] = {"resolvedName": "Mystery"}
        response = await handler.render({"document": keyed_graph_document})

        assert response.report["unmapped_types"] == ["Mystery"]
        assert len(response.tree.component_ids()) == 2

    async def test_modules(self, handler, di_container, document_factory):
        document = document_factory([Node(id="cart", type="EcommerceMiniCart")], ["cart"])
        request = PageRenderRequest(document=document.to_dict(), modules=[ModuleRequest(module_id="ecommerce")])
        response = await handler.render(request)

        assert response.tree.root.children[0].kind == "module_container"
        assert di_container.get(ComponentRegistry).is_module_loaded("ecommerce")

    async def test_empty_document(self, handler):
        response = await handler.render({})
        assert response.report["format"] == "empty"
        assert response.tree.root.children == []

    async def test_blank_page_id(self, handler):
        with pytest.raises(ValidationError) as exc_info:
            await handler.render({"document": {}, "page_id": "   "})
        assert exc_info.value.field == "page_id"

    async def test_unknown_field(self, handler):
        with pytest.raises(ValidationError):
            await handler.render({"document": {}, "unexpected": 1})


# ============================================================================
# Export
# ============================================================================


@pytest.mark.unit
class TestExport:
    async def test_export(self, handler, sample_document):
        response = await handler.export({"document": sample_document.to_dict(), "page_id": "home"})

        assert isinstance(response, PageExportResponse)
        assert response.export_id.startswith("export_")
        assert response.html.startswith("<!DOCTYPE html>")
        assert 'data-node-id="heading-1"' in response.html
        assert response.report["format"] == "canonical"

    async def test_fragment_options(self, handler, sample_document):
        request = PageExportRequest(
            document=sample_document.to_dict(),
            full_document=False,
            inline_styles=True,
            tag_overrides={"Footer": "DIV"},
        )
        response = await handler.export(request)

        assert response.html.startswith("<style>")
        assert '<div class="' in response.html
        assert "<footer" not in response.html

    async def test_export_loads_modules(self, handler, di_container, document_factory):
        document = document_factory([Node(id="book", type="BookingWidget")], ["book"])
        request = PageExportRequest(document=document.to_dict(), modules=[ModuleRequest(module_id="booking")])
        response = await handler.export(request)

        assert '<div class="module-container"' in response.html
        assert 'data-node-id="book"' in response.html
        assert di_container.get(ComponentRegistry).is_module_loaded("booking")

    async def test_invalid_tag_override(self, handler):
        with pytest.raises(ValidationError) as exc_info:
            await handler.export({"document": {}, "tag_overrides": {"Text": "1bad"}})
        assert exc_info.value.field == "tag_overrides"
