# src/logging/handlers.py — v2
"""Log handlers: size-rotated file output and a context-injecting filter."""

from __future__ import annotations

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

from donormatch.logging.context import get_context

_SIZE_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*(B|KB|MB|GB)?$", re.IGNORECASE)
_MULTIPLIERS = {"B": 1, "KB": 1024, "MB": 1024**2, "GB": 1024**3}


def parse_size(size_str: str) -> int:
    """Parse '10MB', '512KB', '1.5GB' or a plain byte count into bytes."""
    match = _SIZE_RE.match(size_str.strip())
    if not match:
        raise ValueError(f"Invalid size format: {size_str!r}. Use e.g. '10MB'.")
    unit = (match.group(2) or "B").upper()
    size = int(float(match.group(1)) * _MULTIPLIERS[unit])
    if size <= 0:
        raise ValueError(f"Log rotation size must be positive: {size_str!r}")
    return size


class ContextFilter(logging.Filter):
    """Copy request_id, operation and profile_id onto every record.

    Lets plain ``%(request_id)s`` format strings work alongside the JSON and
    text formatters. Missing values render as "-".
    """

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = get_context()
        record.request_id = ctx.request_id or "-"
        record.operation = ctx.operation or "-"
        record.profile_id = ctx.profile_id or "-"
        return True


def create_rotating_handler(
    log_file: str,
    rotation: str = "10MB",
    retention: int = 30,
) -> RotatingFileHandler:
    """Create a size-rotated file handler, creating parent directories.

    Args:
        log_file: Path to log file (``~`` is expanded).
        rotation: Max file size before rotation (e.g. "10MB").
        retention: Number of backup files to keep.
    """
    if retention < 0:
        raise ValueError("Log retention must be >= 0")

    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=parse_size(rotation),
        backupCount=retention,
        encoding="utf-8",
        delay=True,
    )
    handler.addFilter(ContextFilter())
    return handler
