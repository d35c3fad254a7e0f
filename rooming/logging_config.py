"""
Logging setup shared by the rooming core and its HTTP layer.

Every line is rendered as:
    2026-01-06T14:05:52Z [source] LEVEL message

The level comes from the ``level`` argument, or from the LOG_LEVEL
environment variable ("TRACE", "DEBUG", "INFO", "WARNING"), defaulting to INFO.
TRACE (5) is used for per-pair dumps during constraint analysis.

Usage:
    from rooming.logging_config import configure_logging, get_logger

    configure_logging(source="api")
    logger = get_logger(__name__)
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_LEVELS_BY_NAME = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def _trace(self: logging.Logger, message: object, *args: object, **kw: object) -> None:
    """Log a message at TRACE level (5)."""
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kw)  # type: ignore[arg-type]


logging.Logger.trace = _trace  # type: ignore[attr-defined]


class ISO8601Formatter(logging.Formatter):
    """Formats records as ``<UTC timestamp> [source] LEVEL message``."""

    def __init__(self, source: str = "rooming"):
        self.source = source
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
        message = record.getMessage()

        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        return f"{timestamp} [{self.source}] {record.levelname} {message}"


class HealthCheckFilter(logging.Filter):
    """Drops access-log lines for health probes unless running at DEBUG."""

    HEALTH_PATHS = {"/health", "/api/health"}

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno <= logging.DEBUG:
            return True

        message = record.getMessage()
        return all(not (path in message and ("GET" in message or "200" in message)) for path in self.HEALTH_PATHS)


def resolve_level(level: int | str | None = None, debug: bool | None = None) -> int:
    """Turn an explicit level, the debug flag or LOG_LEVEL into a numeric level."""
    if isinstance(level, int):
        return level
    if debug:
        return logging.DEBUG

    name = (level or os.getenv("LOG_LEVEL", "")).upper()
    return _LEVELS_BY_NAME.get(name, logging.INFO)


def configure_logging(
    source: str = "rooming",
    level: int | str | None = None,
    debug: bool | None = None,
) -> logging.Logger:
    """Install the stdout handler on the root logger.

    Args:
        source: Tag shown in brackets (e.g. "api", "analysis")
        level: Numeric level or level name; falls back to LOG_LEVEL
        debug: Force DEBUG regardless of LOG_LEVEL

    Returns:
        The configured root logger
    """
    resolved = resolve_level(level, debug)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(resolved)
    handler.setFormatter(ISO8601Formatter(source=source))
    handler.addFilter(HealthCheckFilter())
    root_logger.addHandler(handler)

    # Uvicorn installs its own handlers, which would bypass the health filter
    for uvicorn_logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(uvicorn_logger_name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.addHandler(handler)
        uvicorn_logger.setLevel(resolved)
        uvicorn_logger.propagate = False

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(name)
