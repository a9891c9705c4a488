# src/embeddings/openai_embedder.py — v2
"""OpenAI embedding adapter.

Uses the openai SDK for embedding generation.
Models: text-embedding-3-small, text-embedding-3-large.
"""

from __future__ import annotations

import logging
from typing import Any

from donormatch.core.errors import ProviderFailureError
from donormatch.embeddings.base_embedder import (
    BaseEmbedder,
    validate_embedding,
    validate_embeddings,
)

logger = logging.getLogger(__name__)


class OpenAIEmbedder(BaseEmbedder):
    """Embeddings via OpenAI API."""

    def __init__(
        self,
        model: str = "text-embedding-3-small",
        api_key: str | None = None,
        dimensions: int = 1536,
        timeout_s: float = 30.0,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._dimensions = dimensions
        self._timeout_s = timeout_s
        self.__client = None

    @property
    def _client(self):
        if self.__client is None:
            try:
                import openai
            except ImportError as e:
                raise ImportError(
                    "openai package required: pip install openai"
                ) from e
            self.__client = openai.AsyncOpenAI(
                api_key=self._api_key or "", timeout=self._timeout_s
            )
        return self.__client

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed document texts via OpenAI API."""
        response = await self._create(texts)
        vectors = [item.embedding for item in response.data or []]
        return validate_embeddings(self.provider_name, vectors, expected=len(texts))

    async def embed_query(self, query: str) -> list[float]:
        """Embed a single text."""
        response = await self._create([query])
        if not response.data:
            raise ProviderFailureError(self.provider_name, "No embeddings returned from API")
        return validate_embedding(self.provider_name, response.data[0].embedding)

    async def _create(self, texts: list[str]) -> Any:
        client = self._client
        try:
            return await client.embeddings.create(input=texts, model=self._model)
        except Exception as e:
            logger.error("OpenAI embedding call failed: %s", e)
            raise ProviderFailureError(
                self.provider_name, f"Failed to generate embedding: {e}"
            ) from e

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def model_name(self) -> str:
        return self._model
