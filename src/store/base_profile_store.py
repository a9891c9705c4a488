# src/store/base_profile_store.py — v1
"""Abstract profile store interface.

Keeps profiles and their embeddings 1:1 keyed by profile id. Operations are
synchronous: matching reads the store inside its candidate loop without any
suspension point.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from donormatch.core.models import Profile, ProfileEmbedding, StoreStats


class BaseProfileStore(ABC):
    """Unified interface for profile storage backends."""

    @abstractmethod
    def put(self, profile: Profile, embedding: list[float]) -> None:
        """Store a profile with its embedding (last write wins)."""

    @abstractmethod
    def get(self, profile_id: str) -> Profile | None:
        """Retrieve a profile by id."""

    @abstractmethod
    def get_embedding(self, profile_id: str) -> ProfileEmbedding | None:
        """Retrieve the embedding record of a profile."""

    @abstractmethod
    def all(self) -> list[Profile]:
        """Snapshot of all stored profiles, in insertion order."""

    @abstractmethod
    def embeddings(self) -> list[ProfileEmbedding]:
        """Snapshot of all embedding records, in insertion order."""

    @abstractmethod
    def delete(self, profile_id: str) -> bool:
        """Remove a profile and its embedding. Returns True if it existed."""

    @abstractmethod
    def clear(self) -> None:
        """Drop all profiles and embeddings."""

    def stats(self) -> StoreStats:
        """Counters for monitoring and debugging."""
        records = self.embeddings()
        return StoreStats(
            profile_count=len(self.all()),
            embedding_count=len(records),
            dimensions=records[0].dimensions if records else None,
        )
