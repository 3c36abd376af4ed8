"""Logging configuration tests."""

import logging

import pytest
import structlog

from core import LogContext, Settings, configure_from_settings, configure_logging


@pytest.mark.unit
class TestConfigureLogging:
    def test_level(self):
        configure_logging(level="debug")
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(level="chatty")
        assert logging.getLogger().level == logging.INFO

    def test_from_settings(self):
        configure_from_settings(Settings(_env_file=None, log_level="WARNING"))
        assert logging.getLogger().level == logging.WARNING


@pytest.mark.unit
def test_log_context_binds_page_id():
    with LogContext(page_id="home"):
        assert structlog.contextvars.get_contextvars()["page_id"] == "home"
    assert "page_id" not in structlog.contextvars.get_contextvars()


@pytest.mark.unit
def test_log_context_nests():
    with LogContext(page_id="home"):
        with LogContext(page_id="about", render_id="r1"):
            assert structlog.contextvars.get_contextvars() == {"page_id": "about", "render_id": "r1"}
        assert structlog.contextvars.get_contextvars() == {"page_id": "home"}
