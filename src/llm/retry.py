# src/llm/retry.py — v3
"""Provider-boundary retry policy with exponential backoff.

Used only by provider adapters (embedding and generation clients); the
matching core never retries and sees ProviderRetryExhausted as an ordinary
ProviderFailureError.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from donormatch.core.errors import ProviderFailureError

logger = logging.getLogger(__name__)


class ProviderRetryExhausted(ProviderFailureError):
    """A transient provider error outlived its retry budget."""

    def __init__(self, provider: str, error_type: str, attempts: int, last_error: Exception):
        self.error_type = error_type
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            provider,
            f"failed after {attempts} attempts ({error_type}): {last_error}",
        )


@dataclass(frozen=True)
class RetryConfig:
    """Backoff settings for one error type."""

    max_retries: int
    base_delay_s: float
    backoff_factor: float = 2.0
    jitter: bool = True

    def delay(self, retry_index: int) -> float:
        """Seconds to wait before retry number ``retry_index`` (0-based)."""
        seconds = self.base_delay_s * (self.backoff_factor ** retry_index)
        if self.jitter:
            seconds *= 0.5 + random.random()  # noqa: S311
        return seconds


DEFAULT_RETRY_CONFIGS: dict[str, RetryConfig] = {
    "rate_limit": RetryConfig(max_retries=3, base_delay_s=2.0),
    "timeout": RetryConfig(max_retries=2, base_delay_s=1.0, backoff_factor=1.0),
    "server_error": RetryConfig(max_retries=3, base_delay_s=5.0),
}

# Checked in order; the first error type with a matching marker wins.
# Type-name markers catch SDK exceptions (openai.RateLimitError,
# openai.APITimeoutError, TimeoutError) whose message says little.
_MARKERS: tuple[tuple[str, tuple[str, ...], tuple[str, ...]], ...] = (
    ("rate_limit", ("ratelimit", "resourceexhausted"),
     ("429", "quota", "rate limit", "rate_limit")),
    ("timeout", ("timeout", "deadlineexceeded"),
     ("timed out", "timeout", "deadline exceeded")),
    ("server_error", ("internalservererror", "serviceunavailable"),
     ("500", "502", "503", "504", "unavailable")),
)


def build_retry_configs(max_retries: int, base_delay_s: float = 1.0) -> dict[str, RetryConfig]:
    """Same retry budget for every transient error type."""
    return {
        error_type: RetryConfig(max_retries=max_retries, base_delay_s=base_delay_s)
        for error_type in DEFAULT_RETRY_CONFIGS
    }


def classify_error(error: Exception) -> str:
    """Map an exception to a transient error type, or "unknown"."""
    msg = str(error).lower()
    name = type(error).__name__.lower()
    for error_type, name_markers, msg_markers in _MARKERS:
        if any(m in name for m in name_markers) or any(m in msg for m in msg_markers):
            return error_type
    return "unknown"


async def with_retry(
    fn: Callable[..., Awaitable[Any]],
    *args: Any,
    provider: str = "unknown",
    retry_configs: dict[str, RetryConfig] | None = None,
    **kwargs: Any,
) -> Any:
    """Await ``fn(*args, **kwargs)``, retrying transient failures.

    Errors classified "unknown" (or with no config) are re-raised unchanged
    on the first failure.

    Raises:
        ProviderRetryExhausted: If a transient error outlives its retry budget.
    """
    configs = retry_configs or DEFAULT_RETRY_CONFIGS
    failures = 0

    while True:
        try:
            return await fn(*args, **kwargs)
        except Exception as e:
            error_type = classify_error(e)
            config = configs.get(error_type)
            if config is None:
                raise
            failures += 1
            if failures > config.max_retries:
                raise ProviderRetryExhausted(provider, error_type, failures, e) from e

            wait = config.delay(failures - 1)
            logger.warning(
                "%s: %s on attempt %d, retry %d/%d in %.1fs",
                provider, error_type, failures, failures, config.max_retries, wait,
            )
            await asyncio.sleep(wait)
