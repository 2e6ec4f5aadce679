"""Tests for logging configuration."""

import json
import logging

import pytest
import structlog
from wasmsloth.logging import bind_context, configure_logging


@pytest.fixture
def restore_structlog():
    saved = structlog.get_config()
    yield
    structlog.configure(**saved)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_output(self, restore_structlog, caplog):
        configure_logging(json_output=True)

        with caplog.at_level(logging.INFO):
            bind_context(slo_service="myservice").info("slo_spec_compiled", slos=1)

        event = json.loads(caplog.records[-1].getMessage())
        assert event["event"] == "slo_spec_compiled"
        assert event["slo_service"] == "myservice"
        assert event["slos"] == 1
        assert event["level"] == "info"
        assert "timestamp" in event

    def test_console_output(self, restore_structlog, caplog):
        configure_logging(json_output=False)

        with caplog.at_level(logging.INFO):
            bind_context(slo_service="myservice").info("slo_spec_compiled")

        message = caplog.records[-1].getMessage()
        assert "slo_spec_compiled" in message
        assert "slo_service=myservice" in message

    def test_level_filtering(self, restore_structlog, caplog):
        configure_logging(json_output=True)

        with caplog.at_level(logging.WARNING):
            bind_context().debug("sli_plugin_loaded")

        assert not [r for r in caplog.records if "sli_plugin_loaded" in r.getMessage()]
