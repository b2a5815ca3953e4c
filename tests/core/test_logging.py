"""Tests for sessionspine.core.logging context helpers."""

import structlog

from sessionspine.core import logging as ss_logging
from sessionspine.core.logging import bind_context, clear_context, configure_logging, get_logger


class TestContext:
    def test_bind_then_clear(self):
        bind_context(request_id="req-1", site_id=3)
        assert structlog.contextvars.get_contextvars() == {"request_id": "req-1", "site_id": 3}
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_public_surface(self):
        assert sorted(ss_logging.__all__) == [
            "bind_context",
            "clear_context",
            "configure_logging",
            "get_logger",
        ]


class TestConfigure:
    def test_console_and_json_modes(self):
        configure_logging(level="DEBUG", json_format=False)
        configure_logging(level="WARNING", json_format=True)
        get_logger(__name__).debug("filtered.out")
