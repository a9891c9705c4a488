# src/embeddings/retrying_embedder.py — v1
"""Embedder decorator that retries transient provider failures."""

from __future__ import annotations

from donormatch.embeddings.base_embedder import BaseEmbedder
from donormatch.llm.retry import RetryConfig, build_retry_configs, with_retry


class RetryingEmbedder(BaseEmbedder):
    """Wrap another embedder with with_retry around each call."""

    def __init__(
        self,
        inner: BaseEmbedder,
        max_retries: int = 2,
        retry_configs: dict[str, RetryConfig] | None = None,
    ) -> None:
        self._inner = inner
        self._configs = retry_configs or build_retry_configs(max_retries)

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        return await with_retry(
            self._inner.embed_texts, texts,
            provider=self.provider_name, retry_configs=self._configs,
        )

    async def embed_query(self, query: str) -> list[float]:
        return await with_retry(
            self._inner.embed_query, query,
            provider=self.provider_name, retry_configs=self._configs,
        )

    @property
    def inner(self) -> BaseEmbedder:
        return self._inner

    @property
    def dimensions(self) -> int:
        return self._inner.dimensions

    @property
    def provider_name(self) -> str:
        return self._inner.provider_name

    @property
    def model_name(self) -> str:
        return self._inner.model_name
