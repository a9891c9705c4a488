# src/logging/logger.py — v3
"""Logger factory, JSON and text formatters, and one-call setup.

Every handler installed by setup_logging() carries a ContextFilter, so the
formatters read request_id / operation / profile_id from the record. A
record that never passed the filter falls back to the live context.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from donormatch.logging.context import get_context
from donormatch.logging.handlers import ContextFilter, create_rotating_handler

ROOT_LOGGER = "donormatch"

_CONTEXT_FIELDS = ("request_id", "operation", "profile_id")
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName", *_CONTEXT_FIELDS}


def _record_context(record: logging.LogRecord) -> dict[str, str]:
    if not hasattr(record, "request_id"):
        return get_context().as_dict()
    values = {name: getattr(record, name, "-") for name in _CONTEXT_FIELDS}
    return {name: value for name, value in values.items() if value and value != "-"}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Attributes added through ``logger.info(..., extra={...})``."""
    return {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}


class JsonFormatter(logging.Formatter):
    """One JSON object per line; context keys sit at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(_record_context(record))

        extra = _extra_fields(record)
        if extra:
            entry["extra"] = extra
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable single line for terminals.

    ``2026-01-05 10:00:00 INFO     donormatch.matching.engine [find_top_matches 1a2b3c p-1] message``
    """

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        ctx = _record_context(record)
        tag = " ".join(ctx[name] for name in ("operation", "request_id", "profile_id") if name in ctx)
        line = f"{self.formatTime(record, self.datefmt)} {record.levelname:<8} {record.name}"
        if tag:
            line += f" [{tag}]"
        line += f" {record.getMessage()}"
        if record.exc_info and record.exc_info[1] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


_FORMATTERS: dict[str, type[logging.Formatter]] = {
    "json": JsonFormatter,
    "text": TextFormatter,
}


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Configuration is applied by setup_logging()."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    log_file: str | None = None,
    rotation: str = "10MB",
    retention: int = 30,
    quiet: tuple[str, ...] = ("httpx", "httpcore"),
) -> None:
    """Configure the donormatch logger; safe to call more than once.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_format: "json" or "text".
        log_file: Optional path of a size-rotated log file, in addition to stderr.
        rotation: Max file size before rotation (e.g. "10MB").
        retention: Number of rotated files to keep.
        quiet: Third-party loggers capped at WARNING.
    """
    if log_format not in _FORMATTERS:
        raise ValueError(f"Unknown log format: {log_format!r}")
    formatter = _FORMATTERS[log_format]()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(create_rotating_handler(log_file, rotation=rotation, retention=retention))

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for old in root.handlers:
        old.close()
    root.handlers.clear()

    for handler in handlers:
        handler.setFormatter(formatter)
        if not any(isinstance(f, ContextFilter) for f in handler.filters):
            handler.addFilter(ContextFilter())
        root.addHandler(handler)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
