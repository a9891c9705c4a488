# src/logging/context.py — v2
"""Contextual logging support — attach request_id, operation, profile_id to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set once per service operation by MatchingService.
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)
_profile_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "profile_id", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    request_id: str | None = None
    operation: str | None = None
    profile_id: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        request_id=_request_id.get(),
        operation=_operation.get(),
        profile_id=_profile_id.get(),
    )


def set_request_context(request_id: str, operation: str) -> None:
    """Set request-level context (called once per service operation)."""
    _request_id.set(request_id)
    _operation.set(operation)
    _profile_id.set(None)


def set_profile_context(profile_id: str | None) -> None:
    """Attach the profile an operation is working on."""
    _profile_id.set(profile_id)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _operation.set(None)
    _profile_id.set(None)
