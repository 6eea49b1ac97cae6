"""Unit tests for logging configuration."""

import logging

import structlog

from src.shared.config.logging import configure_logging, get_logger, redact_api_keys
from src.shared.config.settings import Settings


class TestLogging:
    """Test suite for logging configuration."""

    def test_configure_logging_sets_up_structlog(self) -> None:
        """Test that configure_logging sets up structlog correctly."""
        configure_logging(Settings(_env_file=None))

        logger = structlog.get_logger("test")
        assert hasattr(logger, "bind")
        assert hasattr(logger, "info")
        assert hasattr(logger, "error")

    def test_json_format_uses_json_renderer(self) -> None:
        """Test json log format installs the JSON renderer."""
        configure_logging(Settings(_env_file=None, log_format="json"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_format_uses_console_renderer(self) -> None:
        """Test console log format installs the console renderer."""
        configure_logging(Settings(_env_file=None, log_format="console"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_logger_can_log_messages(self) -> None:
        """Test that logger can log messages without errors."""
        configure_logging(Settings(_env_file=None))
        logger = get_logger("test_module")

        logger.debug("debug_message", key="value")
        logger.info("info_message", count=42)
        logger.warning("warning_message")
        logger.error("error_message", error_code=500)

    def test_logging_level_is_set(self) -> None:
        """Test that logging level is configured."""
        configure_logging(Settings(_env_file=None))

        root_logger = logging.getLogger()
        assert root_logger.level >= logging.INFO

    def test_http_client_loggers_quieted(self) -> None:
        """Test request-level loggers do not log URLs at INFO."""
        configure_logging(Settings(_env_file=None))

        assert logging.getLogger("httpx").level >= logging.WARNING
        assert logging.getLogger("httpcore").level >= logging.WARNING


class TestRedactApiKeys:
    """Test suite for the API key redaction processor."""

    def test_appid_masked(self) -> None:
        """Test appid values are masked in string fields."""
        event = {
            "event": "openweather_request_error",
            "error": "Client error for url 'https://api.example.com/weather?lat=1&appid=secret123'",
        }

        redacted = redact_api_keys(None, "error", event)

        assert "secret123" not in redacted["error"]
        assert "appid=***" in redacted["error"]

    def test_other_values_untouched(self) -> None:
        """Test values without appid are left alone."""
        event = {"event": "weather_refreshed", "days": 5, "location": "London, GB"}

        assert redact_api_keys(None, "info", dict(event)) == event
