"""
Logging setup shared by the sandwich API and its import tooling.

Every line looks like:
    2026-01-06T14:05:52Z [api] INFO Cleaned 3 of 3 duplicate candidates

LOG_LEVEL selects verbosity: INFO (default), DEBUG, or TRACE. TRACE also
logs the payloads sent to PocketBase.

Usage:
    from sandwich.logging_config import configure_logging, get_logger

    configure_logging(source="api")
    logger = get_logger(__name__)
"""

from __future__ import annotations

import logging
import os
import re
import sys
from datetime import UTC, datetime

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_LEVELS_BY_NAME = {"TRACE": TRACE, "DEBUG": logging.DEBUG}

# Loggers that install their own handlers and must be rerouted
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# Chatty HTTP client libraries used by the PocketBase SDK
QUIET_LOGGERS = ("httpx", "httpcore")


class ISO8601Formatter(logging.Formatter):
    """One line per record: UTC timestamp, [source], level name, message.

    Tracebacks, when present, follow on the next lines.
    """

    def __init__(self, source: str = "app"):
        super().__init__()
        self.source = source

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
        line = f"{stamp} [{self.source}] {record.levelname} {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class HealthCheckFilter(logging.Filter):
    """Drop access-log lines for health probes unless running at DEBUG."""

    _health_request = re.compile(r'"GET (/api)?/health[ ?"]')

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno <= logging.DEBUG:
            return True
        return self._health_request.search(record.getMessage()) is None


def resolve_level(debug: bool | None = None) -> int:
    """Level from LOG_LEVEL, falling back to DEBUG when debug is set."""
    env_level = _LEVELS_BY_NAME.get(os.getenv("LOG_LEVEL", "").strip().upper())
    if env_level is not None:
        return env_level
    return logging.DEBUG if debug else logging.INFO


def _stdout_handler(source: str, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ISO8601Formatter(source=source))
    handler.addFilter(HealthCheckFilter())
    return handler


def configure_logging(
    source: str = "app",
    level: int | None = None,
    debug: bool | None = None,
) -> logging.Logger:
    """Route all logging (uvicorn included) through one stdout handler.

    Safe to call more than once; previous handlers are replaced.

    Args:
        source: Tag shown in brackets on every line (e.g. "api", "import")
        level: Explicit level; when omitted it comes from LOG_LEVEL / debug
        debug: Use DEBUG when LOG_LEVEL does not say otherwise

    Returns:
        The root logger
    """
    if level is None:
        level = resolve_level(debug)

    handler = _stdout_handler(source, level)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.addHandler(handler)
        server_logger.setLevel(level)
        server_logger.propagate = False

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
