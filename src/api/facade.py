# src/api/facade.py — v3
"""Public API facade — single entry point for profile storage and matching.

Usage:
    from donormatch.api.facade import create_matching_service
    service = create_matching_service()
    await service.store_profiles_batch(profiles)
    matches = await service.find_top_matches(MatchRequest(profile_id="p-1"))

The request-handling collaborator (HTTP layer, CLI) maps the raised
DonorMatchError subclasses to its own status codes via ``status_code``.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from donormatch.config.settings import Settings
from donormatch.core.errors import InvalidRequestError
from donormatch.core.models import (
    MatchRequest,
    MatchResult,
    Profile,
    ProfileSuggestion,
    StoreStats,
)
from donormatch.embeddings.base_embedder import validate_embedding, validate_embeddings
from donormatch.logging.context import set_profile_context, set_request_context
from donormatch.matching.compatibility import ScoringWeights
from donormatch.matching.engine import MatchingEngine
from donormatch.matching.text_hints import build_profile_text
from donormatch.profiles.suggestion import suggest_profile

if TYPE_CHECKING:
    from donormatch.embeddings.base_embedder import BaseEmbedder
    from donormatch.llm.base_client import BaseTextGenerator
    from donormatch.store.base_profile_store import BaseProfileStore

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("id", "name", "type", "description")


class MatchingService:
    """Store profiles with their embeddings and answer match queries."""

    def __init__(
        self,
        store: BaseProfileStore,
        embedder: BaseEmbedder,
        generator: BaseTextGenerator | None = None,
        weights: ScoringWeights | None = None,
        llm_temperature: float = 0.2,
        llm_max_tokens: int = 2048,
    ) -> None:
        self._store = store
        self._embedder = embedder
        self._generator = generator
        self._engine = MatchingEngine(store, embedder, weights)
        self._llm_temperature = llm_temperature
        self._llm_max_tokens = llm_max_tokens

    @property
    def store(self) -> BaseProfileStore:
        return self._store

    # --- Writes ---

    async def store_profile(self, profile: Profile) -> None:
        """Embed a profile's rebuilt text and store both.

        Raises:
            InvalidRequestError: If id, name, type or description is empty.
            ProviderFailureError: If embedding fails; nothing is stored.
        """
        _begin("store_profile")
        _check_required(profile)
        set_profile_context(profile.id)

        embedding = await self._embedder.embed_query(build_profile_text(profile))
        embedding = validate_embedding(self._embedder.provider_name, embedding)
        self._store.put(profile, embedding)
        logger.info("Stored profile %s (%d dimensions)", profile.id, len(embedding))

    async def store_profiles_batch(self, profiles: list[Profile]) -> int:
        """Embed and store several profiles with a single provider call.

        All embeddings are validated before the first write, so a failing
        batch leaves the store untouched.

        Returns:
            Number of profiles stored.
        """
        _begin("store_profiles_batch")
        if not profiles:
            return 0
        for profile in profiles:
            _check_required(profile)

        texts = [build_profile_text(p) for p in profiles]
        vectors = await self._embedder.embed_texts(texts)
        vectors = validate_embeddings(self._embedder.provider_name, vectors, len(profiles))

        for profile, embedding in zip(profiles, vectors):
            self._store.put(profile, embedding)
        logger.info("Stored %d profiles in batch", len(profiles))
        return len(profiles)

    def delete_profile(self, profile_id: str) -> bool:
        _begin("delete_profile")
        set_profile_context(profile_id)
        return self._store.delete(profile_id)

    def clear_all(self) -> None:
        _begin("clear_all")
        self._store.clear()

    # --- Reads ---

    async def find_top_matches(self, request: MatchRequest) -> list[MatchResult]:
        """Rank stored profiles against the request (see MatchingEngine)."""
        _begin("find_top_matches")
        set_profile_context(request.profile_id)
        return await self._engine.find_top_matches(request)

    def get_profile(self, profile_id: str) -> Profile | None:
        return self._store.get(profile_id)

    def get_all_profiles(self) -> list[Profile]:
        return self._store.all()

    def get_stats(self) -> StoreStats:
        return self._store.stats()

    # --- Generation ---

    async def suggest_profile(self, text: str) -> ProfileSuggestion:
        """Draft a structured profile from a free-text description.

        Raises:
            InvalidRequestError: If no generation client is configured or the
                text is too short.
            ProviderFailureError: If generation fails.
        """
        _begin("suggest_profile")
        if self._generator is None:
            raise InvalidRequestError("Profile suggestion requires a text-generation client")
        return await suggest_profile(
            text,
            self._generator,
            temperature=self._llm_temperature,
            max_tokens=self._llm_max_tokens,
        )


def create_matching_service(
    settings: Settings | None = None,
    with_generator: bool = True,
) -> MatchingService:
    """Wire a MatchingService from settings (store, embedder, weights, generator)."""
    from donormatch.embeddings.embedder_factory import create_embedder
    from donormatch.llm.client_factory import create_text_generator_from_settings
    from donormatch.store.store_factory import create_profile_store

    settings = settings or Settings()
    generator = create_text_generator_from_settings(settings) if with_generator else None

    return MatchingService(
        store=create_profile_store(settings),
        embedder=create_embedder(settings),
        generator=generator,
        weights=ScoringWeights.from_settings(settings),
        llm_temperature=settings.llm_temperature,
        llm_max_tokens=settings.llm_max_tokens,
    )


def _begin(operation: str) -> None:
    """Start a fresh logging context for a service operation."""
    set_request_context(uuid.uuid4().hex[:12], operation)


def _check_required(profile: Profile) -> None:
    missing = [name for name in _REQUIRED_FIELDS if not getattr(profile, name)]
    if missing:
        raise InvalidRequestError(
            f"Profile is missing required fields: {', '.join(missing)}"
        )
