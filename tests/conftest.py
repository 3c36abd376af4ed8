"""Pytest configuration and fixtures."""

import os

import pytest

from core import Settings, create_container
from document import CanonicalDocument, Node, RootNode
from palette import resolve_palette
from registry import ComponentRegistry
from renderer import TreeRenderer
from export import StaticHTMLSerializer


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["PAGE_LOG_LEVEL"] = "DEBUG"
    os.environ["PAGE_DIAGNOSTIC_MODE"] = "false"


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings, isolated from the cached instance."""
    return Settings(module_load_timeout=0.2, diagnostic_mode=False)


@pytest.fixture
def di_container(settings):
    """Dependency injection container for testing."""
    return create_container(settings)


@pytest.fixture
def registry():
    """Bootstrapped component registry."""
    return ComponentRegistry().ensure_ready()


@pytest.fixture
def palette():
    """Default brand palette."""
    return resolve_palette()


@pytest.fixture
def renderer(registry, settings):
    return TreeRenderer(registry, settings=settings)


@pytest.fixture
def serializer(registry, settings):
    return StaticHTMLSerializer(registry, settings)


# ============================================================================
# Data Fixtures
# ============================================================================

def make_document(components: list[Node], root_children: list[str], zones=None) -> CanonicalDocument:
    return CanonicalDocument(
        root=RootNode(props={"title": "Test Page", "description": "A test page"}, children=root_children),
        components={node.id: node for node in components},
        zones=zones or {},
    )


@pytest.fixture
def document_factory():
    """Build canonical documents from node lists."""
    return make_document


@pytest.fixture
def sample_document():
    """Section holding a heading and a button, plus a footer zone."""
    return make_document(
        [
            Node(id="section-1", type="Section", props={"padding": "lg"}, children=["heading-1", "button-1"]),
            Node(id="heading-1", type="Heading", props={"text": "Hello", "level": "h1", "fontSize": {"mobile": 24, "desktop": 40}}),
            Node(id="button-1", type="Button", props={"text": "Go", "href": "/start"}),
            Node(id="footer-1", type="Footer", props={"text": "Footer text"}),
        ],
        ["section-1"],
        zones={"footer": ["footer-1"]},
    )


@pytest.fixture
def flat_list_document():
    """Legacy flat-list document with one heading."""
    return {
        "root": {"props": {"title": "Legacy Page"}},
        "content": [
            {"type": "Heading", "props": {"id": "Heading-1", "text": "Hello", "fontSize": 18}},
        ],
        "zones": {},
    }


@pytest.fixture
def keyed_graph_document():
    """Legacy keyed-graph document: container with a heading and a button."""
    return {
        "ROOT": {
            "type": {"resolvedName": "Container"},
            "props": {"title": "Graph Page"},
            "nodes": ["node-a"],
            "linkedNodes": {},
        },
        "node-a": {
            "type": {"resolvedName": "Container"},
            "props": {"padding": "lg"},
            "nodes": ["node-b", "node-c"],
            "parent": "ROOT",
        },
        "node-b": {
            "type": {"resolvedName": "Heading"},
            "props": {"text": "Welcome", "level": "h1"},
            "parent": "node-a",
        },
        "node-c": {
            "type": {"resolvedName": "Button"},
            "props": {"text": "Click", "href": "/go"},
            "parent": "node-a",
        },
    }
