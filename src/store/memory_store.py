# src/store/memory_store.py — v1
"""Process-local profile store (default PROFILE_STORE_BACKEND=memory).

Two insertion-ordered dicts, one for profiles and one for embeddings. No
locking: stores and clears are infrequent administrative operations.
"""

from __future__ import annotations

import logging

from donormatch.core.errors import InvalidInputError
from donormatch.core.models import Profile, ProfileEmbedding
from donormatch.store.base_profile_store import BaseProfileStore

logger = logging.getLogger(__name__)


class InMemoryProfileStore(BaseProfileStore):
    """Profile store backed by plain dicts."""

    def __init__(self) -> None:
        self._profiles: dict[str, Profile] = {}
        self._embeddings: dict[str, ProfileEmbedding] = {}

    def put(self, profile: Profile, embedding: list[float]) -> None:
        record = _make_record(profile, embedding)
        self._profiles[profile.id] = profile
        self._embeddings[profile.id] = record

    def get(self, profile_id: str) -> Profile | None:
        return self._profiles.get(profile_id)

    def get_embedding(self, profile_id: str) -> ProfileEmbedding | None:
        return self._embeddings.get(profile_id)

    def all(self) -> list[Profile]:
        return list(self._profiles.values())

    def embeddings(self) -> list[ProfileEmbedding]:
        return list(self._embeddings.values())

    def delete(self, profile_id: str) -> bool:
        existed = profile_id in self._profiles or profile_id in self._embeddings
        self._profiles.pop(profile_id, None)
        self._embeddings.pop(profile_id, None)
        return existed

    def clear(self) -> None:
        self._profiles.clear()
        self._embeddings.clear()
        logger.info("Cleared all profiles and embeddings")


def _make_record(profile: Profile, embedding: list[float]) -> ProfileEmbedding:
    """Validate and wrap an embedding for storage."""
    if not embedding:
        raise InvalidInputError(
            f"Cannot store profile {profile.id} without an embedding"
        )
    return ProfileEmbedding(profile_id=profile.id, embedding=list(embedding))
