# src/llm/base_client.py — v3
"""Abstract text generator.

Subclasses only translate a GenerationRequest into one SDK call
(``_call``). Timing, optional retries and error wrapping live here so every
provider fails the same way: a ProviderFailureError naming the provider.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod

from donormatch.core.errors import ProviderFailureError
from donormatch.llm.models import GenerationRequest, GenerationResult, TokenUsage
from donormatch.llm.retry import RetryConfig, with_retry

logger = logging.getLogger(__name__)


class BaseTextGenerator(ABC):
    """Unified interface for all generation providers."""

    def __init__(
        self,
        model: str,
        api_key: str = "",
        retry_configs: dict[str, RetryConfig] | None = None,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._retry_configs = retry_configs

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Run one generation call.

        Raises:
            ProviderFailureError: On any provider error, after retries when
                retry_configs were given.
        """
        t0 = time.monotonic()
        try:
            if self._retry_configs:
                text, usage = await with_retry(
                    self._call, request,
                    provider=self.provider_name, retry_configs=self._retry_configs,
                )
            else:
                text, usage = await self._call(request)
        except ProviderFailureError:
            raise
        except Exception as e:
            logger.error(
                "%s generation failed after %dms: %s",
                self.provider_name, _elapsed_ms(t0), e,
            )
            raise ProviderFailureError(self.provider_name, f"Generation failed: {e}") from e

        latency = _elapsed_ms(t0)
        logger.info(
            "%s generation in %dms (%d tokens)", self.provider_name, latency, usage.total,
        )
        return GenerationResult(
            text=text,
            model=self._model,
            provider=self.provider_name,
            latency_ms=latency,
            usage=usage,
        )

    @abstractmethod
    async def _call(self, request: GenerationRequest) -> tuple[str, TokenUsage]:
        """Provider SDK call returning the answer text and token usage."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (google, openai)."""

    @property
    def model_name(self) -> str:
        return self._model


def _elapsed_ms(t0: float) -> int:
    return int((time.monotonic() - t0) * 1000)
