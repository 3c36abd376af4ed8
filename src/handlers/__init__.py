"""Handlers for page render and export requests."""

from .page import PageExportResponse, PageHandler, PageRenderResponse

__all__ = ["PageHandler", "PageRenderResponse", "PageExportResponse"]
