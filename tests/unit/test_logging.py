"""Unit tests for the structlog setup and the Store debug switch."""

from __future__ import annotations

import io
import logging
from collections.abc import Iterator

import pytest
import structlog
from conftest import FakeTransport

from hotzenplotz.models.config import StoreConfig
from hotzenplotz.store import Store
from hotzenplotz.utils.logging import configure_logging, enable_debug_logging


@pytest.fixture()
def json_stream() -> Iterator[io.StringIO]:
    """Application-style logging: JSON at INFO into a buffer, restored afterwards."""
    stream = io.StringIO()
    configure_logging(log_level="INFO", json_output=True, stream=stream)
    yield stream
    configure_logging(log_level="WARNING")


class TestConfigureLogging:
    def test_debug_filtered_at_info(self, json_stream: io.StringIO) -> None:
        logger = structlog.get_logger()
        logger.debug("hidden_event")
        logger.info("visible_event", collection="venues")

        output = json_stream.getvalue()
        assert "hidden_event" not in output
        assert '"event": "visible_event"' in output
        assert '"collection": "venues"' in output


class TestEnableDebugLogging:
    def test_keeps_handlers_and_renderer(self, json_stream: io.StringIO) -> None:
        handlers_before = list(logging.getLogger().handlers)
        factory_before = structlog.get_config()["logger_factory"]

        enable_debug_logging()
        structlog.get_logger().debug("now_visible")

        assert logging.getLogger().handlers == handlers_before
        assert structlog.get_config()["logger_factory"] is factory_before
        assert '"event": "now_visible"' in json_stream.getvalue()

    def test_store_debug_flag_keeps_embedder_setup(
        self, json_stream: io.StringIO, transport: FakeTransport
    ) -> None:
        handlers_before = list(logging.getLogger().handlers)

        Store(StoreConfig(debug=True), transport=transport)

        assert logging.getLogger().handlers == handlers_before
        assert '"event": "store_initialized"' in json_stream.getvalue()
