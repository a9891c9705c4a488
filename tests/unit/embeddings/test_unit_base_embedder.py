# tests/unit/embeddings/test_unit_base_embedder.py — v1
"""Tests for embeddings/base_embedder.py — response validation helpers."""

from __future__ import annotations

import pytest

from donormatch.core.errors import ProviderFailureError
from donormatch.embeddings.base_embedder import (
    BaseEmbedder,
    validate_embedding,
    validate_embeddings,
)


class TestValidateEmbedding:
    def test_valid(self):
        assert validate_embedding("p", [1, 2.5]) == [1.0, 2.5]

    def test_undefined(self):
        with pytest.raises(ProviderFailureError, match="Embedding object is undefined"):
            validate_embedding("p", None)

    def test_empty(self):
        with pytest.raises(ProviderFailureError, match="Empty embedding values returned"):
            validate_embedding("p", [])

    def test_error_carries_provider(self):
        with pytest.raises(ProviderFailureError) as exc_info:
            validate_embedding("google", None)
        assert exc_info.value.provider == "google"
        assert str(exc_info.value).startswith("[google]")


class TestValidateEmbeddings:
    def test_valid(self):
        assert validate_embeddings("p", [[1.0], [2.0]], expected=2) == [[1.0], [2.0]]

    @pytest.mark.parametrize("vectors", [None, []])
    def test_no_vectors(self, vectors):
        with pytest.raises(ProviderFailureError, match="No embeddings returned"):
            validate_embeddings("p", vectors, expected=1)

    def test_missing_slot(self):
        with pytest.raises(ProviderFailureError, match="index 1 is undefined"):
            validate_embeddings("p", [[1.0], None], expected=2)

    def test_empty_slot(self):
        with pytest.raises(ProviderFailureError, match="index 0"):
            validate_embeddings("p", [[], [1.0]], expected=2)

    def test_too_few(self):
        with pytest.raises(ProviderFailureError, match="index 2 is undefined"):
            validate_embeddings("p", [[1.0], [1.0]], expected=3)

    def test_too_many(self):
        with pytest.raises(ProviderFailureError, match="Expected 1 embeddings, got 2"):
            validate_embeddings("p", [[1.0], [1.0]], expected=1)


class TestBaseEmbedder:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            BaseEmbedder()  # type: ignore[abstract]
