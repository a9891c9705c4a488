# src/embeddings/ollama_embedder.py — v2
"""Ollama embedding adapter (local inference).

Uses the Ollama REST API for local embedding generation.
Models: nomic-embed-text, mxbai-embed-large, etc.
"""

from __future__ import annotations

import asyncio
import json
import logging
import urllib.error
import urllib.request
from typing import Any

from donormatch.core.errors import ProviderFailureError
from donormatch.embeddings.base_embedder import (
    BaseEmbedder,
    validate_embedding,
    validate_embeddings,
)

logger = logging.getLogger(__name__)


class OllamaEmbedder(BaseEmbedder):
    """Local embeddings via Ollama API."""

    def __init__(
        self,
        model: str = "nomic-embed-text",
        base_url: str = "http://localhost:11434",
        dimensions: int = 768,
        timeout_s: float = 30.0,
    ) -> None:
        self._model_name = model
        self._base_url = base_url.rstrip("/")
        self._dimensions = dimensions
        self._timeout_s = timeout_s

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch via one /api/embed call."""
        data = await asyncio.to_thread(self._post_embed, texts)
        return validate_embeddings(
            self.provider_name, data.get("embeddings"), expected=len(texts)
        )

    async def embed_query(self, query: str) -> list[float]:
        """Embed a single query via Ollama API."""
        data = await asyncio.to_thread(self._post_embed, query)
        embeddings = data.get("embeddings") or []
        if not embeddings:
            raise ProviderFailureError(
                self.provider_name, f"Ollama returned no embeddings for model {self._model_name}"
            )
        return validate_embedding(self.provider_name, embeddings[0])

    def _post_embed(self, content: str | list[str]) -> dict[str, Any]:
        """Call the Ollama embed endpoint (blocking)."""
        url = f"{self._base_url}/api/embed"
        payload = json.dumps({"model": self._model_name, "input": content}).encode("utf-8")
        req = urllib.request.Request(
            url, data=payload, headers={"Content-Type": "application/json"}
        )
        try:
            with urllib.request.urlopen(req, timeout=self._timeout_s) as resp:
                return json.loads(resp.read().decode("utf-8"))
        except (urllib.error.URLError, TimeoutError, json.JSONDecodeError) as e:
            logger.error("Ollama embedding call failed: %s", e)
            raise ProviderFailureError(
                self.provider_name, f"Failed to generate embedding: {e}"
            ) from e

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def provider_name(self) -> str:
        return "ollama"

    @property
    def model_name(self) -> str:
        return self._model_name
