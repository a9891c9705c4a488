# tests/unit/api/test_unit_facade.py — v2
"""Tests for api/facade.py — MatchingService operations and wiring."""

from __future__ import annotations

import pytest

from donormatch.api.facade import MatchingService, create_matching_service
from donormatch.config.settings import Settings
from donormatch.core.errors import InvalidRequestError, ProviderFailureError
from donormatch.core.models import MatchRequest, Profile, Role
from donormatch.embeddings.google_embedder import GoogleEmbedder
from donormatch.llm.adapters.openai_adapter import OpenAIGenerator
from donormatch.logging.context import get_context
from donormatch.matching.text_hints import build_profile_text
from donormatch.store.memory_store import InMemoryProfileStore


@pytest.fixture
def service(store, mock_embedder, mock_generator) -> MatchingService:
    return MatchingService(store, mock_embedder, generator=mock_generator)


class TestStoreProfile:
    @pytest.mark.asyncio
    async def test_embeds_rebuilt_text(self, service, store, mock_embedder, patient_profile):
        await service.store_profile(patient_profile)
        mock_embedder.embed_query.assert_awaited_once_with(build_profile_text(patient_profile))
        assert store.get("patient-1") == patient_profile
        assert store.get_embedding("patient-1").embedding == [1.0, 0.0, 0.0]

    @pytest.mark.asyncio
    async def test_missing_required_field(self, service, store):
        profile = Profile(id="x", name="", type=Role.DONOR, description="")
        with pytest.raises(InvalidRequestError, match="name, description"):
            await service.store_profile(profile)
        assert store.all() == []

    @pytest.mark.asyncio
    async def test_provider_failure_stores_nothing(self, service, store, mock_embedder, patient_profile):
        mock_embedder.embed_query.side_effect = ProviderFailureError("mock", "down")
        with pytest.raises(ProviderFailureError):
            await service.store_profile(patient_profile)
        assert store.all() == []

    @pytest.mark.asyncio
    async def test_empty_embedding_rejected(self, service, store, mock_embedder, patient_profile):
        mock_embedder.embed_query.return_value = []
        with pytest.raises(ProviderFailureError, match="Empty embedding"):
            await service.store_profile(patient_profile)
        assert store.get("patient-1") is None

    @pytest.mark.asyncio
    async def test_sets_log_context(self, service, patient_profile):
        await service.store_profile(patient_profile)
        ctx = get_context()
        assert ctx.operation == "store_profile"
        assert ctx.profile_id == "patient-1"
        assert ctx.request_id


class TestStoreProfilesBatch:
    @pytest.mark.asyncio
    async def test_single_provider_call(self, service, store, mock_embedder, patient_profile, donor_profile):
        stored = await service.store_profiles_batch([patient_profile, donor_profile])
        assert stored == 2
        assert mock_embedder.embed_texts.await_count == 1
        assert store.get_embedding("donor-1").embedding == [1.0, 1.0, 0.0]

    @pytest.mark.asyncio
    async def test_all_or_nothing(self, service, store, mock_embedder, patient_profile, donor_profile):
        mock_embedder.embed_texts.side_effect = None
        mock_embedder.embed_texts.return_value = [[1.0, 0.0], []]
        with pytest.raises(ProviderFailureError, match="index 1"):
            await service.store_profiles_batch([patient_profile, donor_profile])
        assert store.all() == []

    @pytest.mark.asyncio
    async def test_empty_batch(self, service, mock_embedder):
        assert await service.store_profiles_batch([]) == 0
        mock_embedder.embed_texts.assert_not_awaited()


class TestQueries:
    @pytest.mark.asyncio
    async def test_find_top_matches(self, service, patient_profile, donor_profile):
        await service.store_profiles_batch([patient_profile, donor_profile])
        matches = await service.find_top_matches(MatchRequest(profile_id="patient-1"))
        assert [m.profile_id for m in matches] == ["donor-1"]
        assert get_context().operation == "find_top_matches"

    @pytest.mark.asyncio
    async def test_reads_and_clear(self, service, patient_profile, donor_profile):
        await service.store_profiles_batch([patient_profile, donor_profile])
        assert [p.id for p in service.get_all_profiles()] == ["patient-1", "donor-1"]
        assert service.get_profile("donor-1") == donor_profile
        assert service.get_stats().embedding_count == 2

        assert service.delete_profile("donor-1") is True
        assert service.get_profile("donor-1") is None

        service.clear_all()
        assert service.get_all_profiles() == []
        assert service.get_stats().dimensions is None


class TestSuggestProfile:
    @pytest.mark.asyncio
    async def test_delegates_to_generator(self, service, mock_generator):
        s = await service.suggest_profile("I am John, 45, O+, and I need a kidney")
        assert s.age == 45
        assert mock_generator.generate.await_count == 1

    @pytest.mark.asyncio
    async def test_requires_generator(self, store, mock_embedder):
        service = MatchingService(store, mock_embedder)
        with pytest.raises(InvalidRequestError, match="text-generation client"):
            await service.suggest_profile("I am John, 45, O+, and I need a kidney")


class TestCreateMatchingService:
    def test_from_settings(self):
        s = Settings(_env_file=None, llm_provider="openai")
        service = create_matching_service(s)
        assert isinstance(service.store, InMemoryProfileStore)
        assert isinstance(service._embedder, GoogleEmbedder)
        assert isinstance(service._generator, OpenAIGenerator)

    def test_without_generator(self):
        service = create_matching_service(Settings(_env_file=None), with_generator=False)
        assert service._generator is None
