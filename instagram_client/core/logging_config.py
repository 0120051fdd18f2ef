"""Logging configuration for applications embedding the Instagram client."""

from __future__ import annotations

import contextvars
import logging
from logging.config import dictConfig
from typing import Optional

from instagram_client.core.config import Settings, get_settings

# Set by the API service for the duration of each request
request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Most specific prefix first
CHANNEL_PREFIXES = (
    ("instagram_client.core.services", "instagram.api"),
    ("instagram_client.core.models", "instagram.models"),
    ("instagram_client", "instagram"),
    ("httpx", "http"),
    ("httpcore", "http"),
)


def channel_for(logger_name: str) -> str:
    """Short channel name for a logger, matched on dotted-name prefixes."""
    for prefix, alias in CHANNEL_PREFIXES:
        if logger_name == prefix or logger_name.startswith(prefix + "."):
            return alias
    return logger_name


class ChannelAliasFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.channel = channel_for(record.name)
        return True


class RequestIdFilter(logging.Filter):
    """Inject the current API request id into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get() or "-"
        return True


def _resolve_log_level(
    level: Optional[str] = None, settings: Optional[Settings] = None
) -> str:
    """An explicit level wins; otherwise the configured ``LOG_LEVEL`` applies."""
    if level is not None:
        normalized = level.strip().upper()
        if normalized not in VALID_LEVELS:
            raise ValueError(f"Unknown log level {level!r}")
        return normalized
    return (settings or get_settings()).log_level


def build_logging_config(level: str) -> dict:
    """dictConfig for a console handler tagged with channel and request id.

    HTTP library loggers stay at WARNING unless ``level`` is DEBUG, where
    httpx request lines are shown as well.
    """
    http_level = "INFO" if level == "DEBUG" else "WARNING"
    logger_levels = {
        "instagram_client": level,
        "httpx": http_level,
        "httpcore": "WARNING",
    }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "channel": {"()": ChannelAliasFilter},
            "request_id": {"()": RequestIdFilter},
        },
        "formatters": {
            "console": {
                "format": (
                    "%(asctime)s | %(levelname)-8s | %(channel)-16s "
                    "| [%(request_id)s] | %(message)s"
                ),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "console",
                "level": level,
                "stream": "ext://sys.stdout",
                "filters": ["channel", "request_id"],
            },
        },
        "root": {"handlers": ["console"], "level": level},
        "loggers": {
            name: {"handlers": ["console"], "level": logger_level, "propagate": False}
            for name, logger_level in logger_levels.items()
        },
    }


def configure_logging(
    level: Optional[str] = None, settings: Optional[Settings] = None
) -> None:
    """Configure process-wide logging for an application using the client."""
    level = _resolve_log_level(level, settings)
    dictConfig(build_logging_config(level))
    logging.getLogger(__name__).debug("Logging configured with level %s", level)
