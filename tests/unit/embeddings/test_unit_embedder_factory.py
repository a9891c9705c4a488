# tests/unit/embeddings/test_unit_embedder_factory.py — v2
"""Tests for embeddings/embedder_factory.py."""

from __future__ import annotations

import pytest

from donormatch.config.settings import Settings
from donormatch.embeddings.embedder_factory import (
    UnsupportedEmbeddingProviderError,
    create_embedder,
    register_embedding_provider,
)
from donormatch.embeddings.google_embedder import GoogleEmbedder
from donormatch.embeddings.ollama_embedder import OllamaEmbedder
from donormatch.embeddings.openai_embedder import OpenAIEmbedder
from donormatch.embeddings.retrying_embedder import RetryingEmbedder


class TestCreateEmbedder:
    def test_default_google(self):
        e = create_embedder()
        assert isinstance(e, GoogleEmbedder)
        assert e.model_name == "gemini-embedding-001"

    def test_google_from_settings(self):
        s = Settings(_env_file=None, embedding_model="text-embedding-004", embedding_dimensions=768)
        e = create_embedder(s)
        assert isinstance(e, GoogleEmbedder)
        assert e.model_name == "text-embedding-004"
        assert e.dimensions == 768

    def test_openai(self):
        s = Settings(_env_file=None, embedding_provider="openai", embedding_dimensions=1536)
        e = create_embedder(s)
        assert isinstance(e, OpenAIEmbedder)
        assert e.model_name == "text-embedding-3-small"

    def test_ollama(self):
        s = Settings(_env_file=None, embedding_provider="ollama", embedding_dimensions=768)
        e = create_embedder(s)
        assert isinstance(e, OllamaEmbedder)
        assert e.model_name == "nomic-embed-text"

    def test_unsupported(self):
        s = Settings(_env_file=None, embedding_provider="voyage")
        with pytest.raises(UnsupportedEmbeddingProviderError, match="voyage"):
            create_embedder(s)

    def test_wrapped_when_retries_enabled(self):
        s = Settings(_env_file=None, embedding_max_retries=2)
        e = create_embedder(s)
        assert isinstance(e, RetryingEmbedder)
        assert isinstance(e.inner, GoogleEmbedder)
        assert e.provider_name == "google"

    def test_not_wrapped_by_default(self):
        e = create_embedder(Settings(_env_file=None))
        assert not isinstance(e, RetryingEmbedder)

    def test_ollama_base_url_from_settings(self):
        s = Settings(_env_file=None, embedding_provider="ollama", ollama_base_url="http://gpu-box:11434/")
        assert create_embedder(s)._base_url == "http://gpu-box:11434"


class TestRegisterEmbeddingProvider:
    def test_custom_provider(self, monkeypatch):
        from donormatch.embeddings import embedder_factory

        monkeypatch.setattr(embedder_factory, "_PROVIDERS", dict(embedder_factory._PROVIDERS))
        register_embedding_provider(
            "ollama-gpu",
            "donormatch.embeddings.ollama_embedder.OllamaEmbedder",
            {"base_url": "ollama_base_url"},
        )
        s = Settings(_env_file=None, embedding_provider="ollama-gpu", embedding_dimensions=1024)
        e = create_embedder(s)
        assert isinstance(e, OllamaEmbedder)
        assert e.dimensions == 1024
        assert e.model_name == "nomic-embed-text"
