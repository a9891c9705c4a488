# src/store/store_factory.py — v1
"""Factory for profile store instantiation."""

from __future__ import annotations

from donormatch.config.settings import Settings
from donormatch.store.base_profile_store import BaseProfileStore


def create_profile_store(settings: Settings | None = None) -> BaseProfileStore:
    """Instantiate the configured profile store backend.

    Args:
        settings: Application settings. Defaults to the in-memory backend.

    Returns:
        Configured BaseProfileStore implementation.
    """
    backend = "memory" if settings is None else settings.profile_store_backend

    if backend == "memory":
        from donormatch.store.memory_store import InMemoryProfileStore
        return InMemoryProfileStore()

    if backend == "json":
        from donormatch.store.json_store import JsonProfileStore
        return JsonProfileStore(root=settings.profile_store_root)

    raise ValueError(f"Unsupported profile store backend: {backend!r}")
