# src/embeddings/embedder_factory.py — v3
"""Factory: build the configured embedding provider from Settings."""

from __future__ import annotations

import importlib
import logging

from donormatch.config.settings import Settings
from donormatch.embeddings.base_embedder import BaseEmbedder

logger = logging.getLogger(__name__)

# provider → (class path, {constructor kwarg: Settings attribute})
_PROVIDERS: dict[str, tuple[str, dict[str, str]]] = {
    "google": (
        "donormatch.embeddings.google_embedder.GoogleEmbedder",
        {"model": "embedding_model", "api_key": "google_api_key"},
    ),
    "openai": (
        "donormatch.embeddings.openai_embedder.OpenAIEmbedder",
        {"model": "embedding_openai_model", "api_key": "openai_api_key"},
    ),
    "ollama": (
        "donormatch.embeddings.ollama_embedder.OllamaEmbedder",
        {"model": "embedding_ollama_model", "base_url": "ollama_base_url"},
    ),
}


class UnsupportedEmbeddingProviderError(ValueError):
    """Raised when an embedding provider is not registered."""


def create_embedder(settings: Settings | None = None) -> BaseEmbedder:
    """Instantiate the configured embedding provider.

    Without settings, returns a Gemini embedder with its defaults.
    EMBEDDING_MAX_RETRIES > 0 wraps the provider in a RetryingEmbedder.

    Raises:
        UnsupportedEmbeddingProviderError: If EMBEDDING_PROVIDER is unknown.
    """
    if settings is None:
        return _import_class(_PROVIDERS["google"][0])()

    provider = settings.embedding_provider
    if provider not in _PROVIDERS:
        raise UnsupportedEmbeddingProviderError(
            f"Unsupported embedding provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDERS))}"
        )
    class_path, setting_names = _PROVIDERS[provider]

    kwargs = {arg: getattr(settings, attr) for arg, attr in setting_names.items()}
    kwargs["dimensions"] = settings.embedding_dimensions
    kwargs["timeout_s"] = settings.embedding_timeout_s

    logger.debug("Creating embedder: provider=%s, model=%s", provider, kwargs.get("model"))
    embedder: BaseEmbedder = _import_class(class_path)(**kwargs)

    if settings.embedding_max_retries > 0:
        from donormatch.embeddings.retrying_embedder import RetryingEmbedder
        embedder = RetryingEmbedder(embedder, max_retries=settings.embedding_max_retries)
    return embedder


def register_embedding_provider(
    name: str,
    class_path: str,
    setting_names: dict[str, str] | None = None,
) -> None:
    """Register a custom BaseEmbedder subclass.

    ``setting_names`` maps constructor arguments to Settings attributes;
    dimensions and timeout_s are always passed.
    """
    _PROVIDERS[name] = (class_path, dict(setting_names or {}))


def _import_class(class_path: str) -> type:
    module_path, class_name = class_path.rsplit(".", 1)
    return getattr(importlib.import_module(module_path), class_name)
