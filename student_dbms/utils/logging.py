"""
Logging utilities for the Student DBMS.

Centralizes logging configuration so the table, the snapshot codec and the
interactive shell log consistently. Log output goes to stderr, leaving stdout
to the menu. A human-readable formatter is the default; a JSON formatter is
available for scripted runs.

Usage:
    from student_dbms.utils.logging import configure_logging, get_logger

    configure_logging(level="INFO", json_logs=False)
    log = get_logger(__name__)
    log.info("Snapshot saved", extra={"records": 12})
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict, Optional

# Attributes every LogRecord carries; anything else was passed via `extra=`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "extra"}


def _json_formatter(record: logging.LogRecord) -> str:
    """Render a log record as JSON string."""
    payload: Dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    for key, value in vars(record).items():
        if key not in _RESERVED_ATTRS and not key.startswith("_"):
            payload[key] = value
    nested = getattr(record, "extra", None)
    if isinstance(nested, dict):
        payload.update(nested)
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        payload["stack_info"] = record.stack_info
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    """Minimal JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def configure_logging(
    level: str = "WARNING",
    json_logs: bool = False,
    force: bool = True,
) -> None:
    """
    Configure root logging.

    Parameters
    ----------
    level : str
        Logging level name (e.g., "DEBUG", "INFO", "WARNING").
    json_logs : bool
        Whether to emit logs as JSON. If False, uses a concise human formatter.
    force : bool
        Whether to replace handlers configured earlier (e.g. by a previous CLI
        invocation in the same process).
    """
    if not force and logging.getLogger().handlers:
        return

    formatter_name = "json" if json_logs else "console"
    level = level.upper()

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
                "json": {
                    "()": JsonFormatter,
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": formatter_name,
                    "level": level,
                }
            },
            "root": {
                "handlers": ["default"],
                "level": level,
            },
        }
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with the given name. If name is None, returns the root logger.
    """
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "JsonFormatter"]
