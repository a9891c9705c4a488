# tests/conftest.py — v3
"""Shared test fixtures for all unit tests.

Provides sample patient/donor profiles, a mock embedding provider, a mock
text generator and an empty in-memory store. No external
dependencies — all provider I/O is mocked.
"""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from donormatch.core.models import Profile, Role
from donormatch.embeddings.base_embedder import BaseEmbedder
from donormatch.llm.models import GenerationResult, TokenUsage
from donormatch.logging.context import clear_context
from donormatch.store.memory_store import InMemoryProfileStore


# === FIXTURES: Sample profiles ===


@pytest.fixture
def patient_profile() -> Profile:
    """Kidney patient, O+, 45, Boston."""
    return Profile(
        id="patient-1",
        name="John Doe",
        type=Role.PATIENT,
        description="Patient seeking kidney transplant",
        medical_info="Kidney disease stage 4, non-smoker",
        preferences="Looking for living donor",
        blood_type="O+",
        age=45,
        country="USA",
        state="Massachusetts",
        city="Boston",
        organ_type="Kidney",
    )


@pytest.fixture
def donor_profile() -> Profile:
    """Kidney donor, O+, 40, Boston."""
    return Profile(
        id="donor-1",
        name="Jane Smith",
        type=Role.DONOR,
        description="Healthy kidney donor",
        medical_info="Excellent health, non-smoker, can travel",
        preferences="Willing to donate to compatible patient",
        blood_type="O+",
        age=40,
        country="USA",
        state="Massachusetts",
        city="Boston",
        organ_type="Kidney",
    )


@pytest.fixture
def liver_donor_profile() -> Profile:
    """Liver donor, O+, 40, Boston — same everything but the organ."""
    return Profile(
        id="donor-liver",
        name="Liver Donor",
        type=Role.DONOR,
        description="Living liver donor volunteer",
        medical_info="Perfect health",
        blood_type="O+",
        age=40,
        country="USA",
        state="Massachusetts",
        city="Boston",
        organ_type="Liver",
    )


# === FIXTURES: Providers and store ===


@pytest.fixture
def mock_embedder() -> MagicMock:
    """Embedding provider returning fixed 3-dimensional vectors."""
    embedder = MagicMock(spec=BaseEmbedder)
    embedder.provider_name = "mock"
    embedder.model_name = "mock-embedding"
    embedder.dimensions = 3
    embedder.embed_query = AsyncMock(return_value=[1.0, 0.0, 0.0])
    embedder.embed_texts = AsyncMock(
        side_effect=lambda texts: [[1.0, float(i), 0.0] for i in range(len(texts))]
    )
    return embedder


@pytest.fixture
def mock_generation_result() -> GenerationResult:
    """Profile suggestion answer as a generation provider returns it."""
    return GenerationResult(
        text=(
            '{"summary": "John, 45, O+, needs a kidney", "organ_type": "kidney", '
            '"age": 45, "blood_type": "O+", "location": "Boston, MA, USA", '
            '"personal_story": "John has kidney disease and hopes to find a living donor.", '
            '"safety_flags": ["removed prognosis"]}'
        ),
        model="gemini-2.5-flash",
        provider="google",
        latency_ms=350,
        usage=TokenUsage(prompt_tokens=120, completion_tokens=60),
    )


@pytest.fixture
def mock_generator(mock_generation_result: GenerationResult) -> AsyncMock:
    """Mock text generator that returns mock_generation_result."""
    generator = AsyncMock()
    generator.generate = AsyncMock(return_value=mock_generation_result)
    generator.provider_name = "google"
    return generator


@pytest.fixture
def store() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo handlers installed by setup_logging() during a test."""
    root = logging.getLogger("donormatch")
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
