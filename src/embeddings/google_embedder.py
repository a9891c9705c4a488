# src/embeddings/google_embedder.py — v1
"""Google Gemini embedding adapter.

Uses the google-generativeai SDK for embedding generation.
Models: gemini-embedding-001, text-embedding-004.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from donormatch.core.errors import ProviderFailureError
from donormatch.embeddings.base_embedder import (
    BaseEmbedder,
    validate_embedding,
    validate_embeddings,
)

logger = logging.getLogger(__name__)


class GoogleEmbedder(BaseEmbedder):
    """Embeddings via the Gemini API."""

    def __init__(
        self,
        model: str = "gemini-embedding-001",
        api_key: str | None = None,
        dimensions: int = 3072,
        timeout_s: float = 30.0,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._dimensions = dimensions
        self._timeout_s = timeout_s
        self.__genai = None

    @property
    def _genai(self):
        if self.__genai is None:
            try:
                import google.generativeai as genai
            except ImportError as e:
                raise ImportError(
                    "google-generativeai package required: pip install google-generativeai"
                ) from e
            genai.configure(api_key=self._api_key or "")
            self.__genai = genai
        return self.__genai

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch in a single API call."""
        response = await self._embed(texts)
        vectors = response.get("embedding") if isinstance(response, dict) else None
        result = validate_embeddings(self.provider_name, vectors, expected=len(texts))
        logger.debug("Embedded %d texts (dim=%d)", len(result), len(result[0]))
        return result

    async def embed_query(self, query: str) -> list[float]:
        """Embed a single text."""
        response = await self._embed(query)
        values = response.get("embedding") if isinstance(response, dict) else None
        return validate_embedding(self.provider_name, values)

    async def _embed(self, content: str | list[str]) -> dict[str, Any]:
        genai = self._genai
        try:
            return await asyncio.wait_for(
                genai.embed_content_async(model=self._qualified_model, content=content),
                timeout=self._timeout_s,
            )
        except asyncio.TimeoutError as e:
            raise ProviderFailureError(
                self.provider_name, f"Embedding request timed out after {self._timeout_s}s"
            ) from e
        except Exception as e:
            logger.error("Gemini embedding call failed: %s", e)
            raise ProviderFailureError(
                self.provider_name, f"Failed to generate embedding: {e}"
            ) from e

    @property
    def _qualified_model(self) -> str:
        return self._model if self._model.startswith("models/") else f"models/{self._model}"

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def provider_name(self) -> str:
        return "google"

    @property
    def model_name(self) -> str:
        return self._model
