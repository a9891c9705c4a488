# src/embeddings/base_embedder.py — v2
"""Abstract embeddings interface plus shared response validation.

Adapters raise ProviderFailureError for every failure mode (network,
timeout, malformed or empty result) so callers see a single error type.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from donormatch.core.errors import ProviderFailureError


class BaseEmbedder(ABC):
    """Unified interface for all embedding providers."""

    @abstractmethod
    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch of texts into vectors, index-aligned with the input."""

    @abstractmethod
    async def embed_query(self, query: str) -> list[float]:
        """Embed a single text."""

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Output vector dimensions."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model identifier."""


def validate_embedding(provider: str, values: Sequence[float] | None) -> list[float]:
    """Reject a missing or empty vector."""
    if values is None:
        raise ProviderFailureError(provider, "Embedding object is undefined")
    if len(values) == 0:
        raise ProviderFailureError(provider, "Empty embedding values returned")
    return [float(v) for v in values]


def validate_embeddings(
    provider: str,
    vectors: Sequence[Sequence[float] | None] | None,
    expected: int,
) -> list[list[float]]:
    """Reject a batch with missing, empty or surplus slots."""
    if not vectors:
        raise ProviderFailureError(provider, "No embeddings returned from API")

    result: list[list[float]] = []
    for index in range(expected):
        vec: Any = vectors[index] if index < len(vectors) else None
        if vec is None:
            raise ProviderFailureError(provider, f"Embedding at index {index} is undefined")
        if len(vec) == 0:
            raise ProviderFailureError(provider, f"Empty embedding values at index {index}")
        result.append([float(v) for v in vec])

    if len(vectors) != expected:
        raise ProviderFailureError(
            provider, f"Expected {expected} embeddings, got {len(vectors)}"
        )
    return result
