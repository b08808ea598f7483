"""
HAL Navigator Logging
=====================

Attaches a handler to the package logger ("hal_navigator") so navigation
traces can be switched on without touching the host application's root
logger. JSON lines for services, plain text for development.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Optional

PACKAGE_LOGGER = "hal_navigator"

# Fields Navigator passes through `extra=`
NAVIGATION_FIELDS = ("relation", "method", "location", "status")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, navigation fields included when present."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update({
            key: getattr(record, key) for key in NAVIGATION_FIELDS if hasattr(record, key)
        })

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def configure_logging(
    level: str = "INFO",
    fmt: str = "text",
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Route hal_navigator logs to a stream.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR); unknown names fall back to INFO
        fmt: "json" for structured lines, anything else for plain text
        stream: Destination (defaults to stdout)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Calling twice replaces the handler instead of duplicating output
    for handler in list(logger.handlers):
        if getattr(handler, "_hal_navigator", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler._hal_navigator = True
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
    logger.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    return logger
