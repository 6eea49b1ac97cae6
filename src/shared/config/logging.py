"""Structured logging configuration using structlog.

Provides JSON-formatted logs for headless deployments and human-readable
console logs for local development. Provider API keys passed as the
``appid`` query parameter are masked in every log event.
"""

import logging
import re
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from src.shared.config.settings import Settings, get_settings

_APPID_PATTERN = re.compile(r"(appid=)[^&\s'\"]+")

# Third-party loggers that log full request URLs at INFO
_NOISY_LOGGERS = ("httpx", "httpcore")


def redact_api_keys(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask appid query parameters in string values of a log event."""
    for key, value in event_dict.items():
        if isinstance(value, str) and "appid=" in value:
            event_dict[key] = _APPID_PATTERN.sub(r"\1***", value)
    return event_dict


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structured logging for the application.

    Sets up structlog with processors based on the configured format:
    - json: JSON output with timestamps
    - console: Console output with colors

    Args:
        settings: Settings to read level and format from (global if None)
    """
    settings = settings or get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        redact_api_keys,
    ]

    if settings.log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=shared_processors + [structlog.processors.format_exc_info, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, logging.getLogger().level))


def get_logger(name: str) -> Any:
    """Get a configured logger instance.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
