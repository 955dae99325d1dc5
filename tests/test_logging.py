"""Tests for structlog configuration."""

import structlog

from seed_map.utils.logging import configure_logging


class TestConfigureLogging:
    """Test renderer selection."""

    def teardown_method(self):
        structlog.reset_defaults()

    def test_json_renderer(self):
        """json format ends the chain with JSONRenderer."""
        configure_logging("DEBUG", "json")
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer(self):
        """plain format uses ConsoleRenderer after the level filter."""
        configure_logging("INFO", "plain")
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        assert processors[0] is structlog.stdlib.filter_by_level
