# tests/unit/llm/test_unit_retry.py — v2
"""Tests for llm/retry.py — error classification and backoff loop."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from donormatch.core.errors import ProviderFailureError
from donormatch.llm.retry import (
    ProviderRetryExhausted,
    RetryConfig,
    build_retry_configs,
    classify_error,
    with_retry,
)


class TestClassifyError:
    @pytest.mark.parametrize("error,expected", [
        (RuntimeError("HTTP 429 Too Many Requests"), "rate_limit"),
        (RuntimeError("Rate limit exceeded"), "rate_limit"),
        (RuntimeError("quota exhausted"), "rate_limit"),
        (TimeoutError("read"), "timeout"),
        (RuntimeError("request timed out"), "timeout"),
        (RuntimeError("503 Service Unavailable"), "server_error"),
        (ValueError("bad input"), "unknown"),
    ])
    def test_classification(self, error, expected):
        assert classify_error(error) == expected

    def test_wrapped_generation_error_is_not_rate_limited(self):
        err = ProviderFailureError("google", "Failed to generate embedding: invalid api key")
        assert classify_error(err) == "unknown"


class TestRetryConfigDelay:
    def test_exponential_without_jitter(self):
        config = RetryConfig(max_retries=3, base_delay_s=1.0, backoff_factor=2.0, jitter=False)
        assert [config.delay(i) for i in range(3)] == [1.0, 2.0, 4.0]

    def test_jitter_bounds(self):
        config = RetryConfig(max_retries=1, base_delay_s=2.0)
        for _ in range(20):
            assert 1.0 <= config.delay(0) <= 3.0


class TestBuildRetryConfigs:
    def test_uniform_budget(self):
        configs = build_retry_configs(4, base_delay_s=0.5)
        assert set(configs) == {"rate_limit", "timeout", "server_error"}
        assert all(c.max_retries == 4 and c.base_delay_s == 0.5 for c in configs.values())


class TestWithRetry:
    @pytest.fixture(autouse=True)
    def _no_sleep(self):
        with patch("donormatch.llm.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            self.sleep = sleep
            yield

    @pytest.mark.asyncio
    async def test_success_first_try(self):
        fn = AsyncMock(return_value="ok")
        assert await with_retry(fn, 1, key="v", provider="p") == "ok"
        fn.assert_awaited_once_with(1, key="v")

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self):
        fn = AsyncMock(side_effect=[RuntimeError("503"), RuntimeError("timed out"), "ok"])
        assert await with_retry(fn, provider="p") == "ok"
        assert fn.await_count == 3
        assert self.sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_unknown_error_raised_unchanged(self):
        fn = AsyncMock(side_effect=ValueError("bad input"))
        with pytest.raises(ValueError, match="bad input"):
            await with_retry(fn, provider="p")
        assert fn.await_count == 1

    @pytest.mark.asyncio
    async def test_exhausted(self):
        fn = AsyncMock(side_effect=RuntimeError("429"))
        configs = {"rate_limit": RetryConfig(max_retries=2, base_delay_s=0.0)}
        with pytest.raises(ProviderRetryExhausted) as exc_info:
            await with_retry(fn, provider="google", retry_configs=configs)
        err = exc_info.value
        assert err.provider == "google"
        assert err.error_type == "rate_limit"
        assert err.attempts == 3
        assert isinstance(err.last_error, RuntimeError)
        assert fn.await_count == 3
