# src/llm/client_factory.py — v4
"""Factory: build the text generator used for profile suggestion."""

from __future__ import annotations

import importlib
import logging

from donormatch.config.settings import Settings
from donormatch.llm.base_client import BaseTextGenerator
from donormatch.llm.retry import build_retry_configs

logger = logging.getLogger(__name__)

# provider → (generator class path, Settings attribute holding its API key)
_GENERATORS: dict[str, tuple[str, str]] = {
    "google": ("donormatch.llm.adapters.google_adapter.GeminiGenerator", "google_api_key"),
    "openai": ("donormatch.llm.adapters.openai_adapter.OpenAIGenerator", "openai_api_key"),
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def create_text_generator(
    provider: str,
    model: str,
    settings: Settings | None = None,
) -> BaseTextGenerator:
    """Instantiate the generator for ``provider``.

    With settings, the provider's API key is read from them and
    LLM_MAX_RETRIES > 0 enables provider-boundary retries.

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    if provider not in _GENERATORS:
        raise UnsupportedProviderError(
            f"Unsupported LLM provider: {provider!r}. "
            f"Available: {', '.join(sorted(_GENERATORS))}"
        )
    class_path, key_attr = _GENERATORS[provider]

    api_key = ""
    retry_configs = None
    if settings is not None:
        api_key = getattr(settings, key_attr, "")
        if settings.llm_max_retries > 0:
            retry_configs = build_retry_configs(settings.llm_max_retries)

    logger.debug("Creating text generator: provider=%s, model=%s", provider, model)
    return _import_class(class_path)(model=model, api_key=api_key, retry_configs=retry_configs)


def create_text_generator_from_settings(settings: Settings) -> BaseTextGenerator:
    """Generator for the configured LLM_PROVIDER / LLM_MODEL."""
    return create_text_generator(settings.llm_provider, settings.llm_model, settings)


def register_provider(name: str, class_path: str, key_attr: str = "") -> None:
    """Register a custom BaseTextGenerator subclass under ``name``."""
    _GENERATORS[name] = (class_path, key_attr)
    logger.info("Registered LLM provider: %s → %s", name, class_path)


def _import_class(class_path: str) -> type:
    module_path, class_name = class_path.rsplit(".", 1)
    return getattr(importlib.import_module(module_path), class_name)
