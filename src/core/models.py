# src/core/models.py — v1
"""Shared Pydantic domain models used across modules.

No module redefines these types — all imports come from core.models.
JSON field names are camelCase (``profileId``, ``medicalInfo``...) while
Python attributes stay snake_case; both are accepted on input.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# === ROLES ===


class Role(str, Enum):
    """Which side of a transplant a party stands on."""

    PATIENT = "patient"
    DONOR = "donor"

    @property
    def opposite(self) -> Role:
        return Role.DONOR if self is Role.PATIENT else Role.PATIENT


# A profile's type and a searcher's role share the same two cases.
ProfileType = Role


# === PROFILES ===


class Profile(_CamelModel):
    """Patient or donor profile. Immutable once created."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: str
    name: str
    type: Role
    description: str
    medical_info: str = ""
    preferences: str | None = None

    # --- Structured fields used by the compatibility scorer ---
    blood_type: str | None = None
    age: int | None = None
    country: str | None = None
    state: str | None = None
    city: str | None = None
    organ_type: str | None = None

    @property
    def is_complete(self) -> bool:
        """A profile is complete once organ type, age and blood type are known."""
        return bool(self.organ_type and self.age and self.blood_type)


class ProfileEmbedding(_CamelModel):
    """Embedding vector kept 1:1 with its profile."""

    profile_id: str
    embedding: list[float]
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def dimensions(self) -> int:
        return len(self.embedding)


class MatchParty(BaseModel):
    """Structured fields of one side of a match, after role orientation."""

    model_config = ConfigDict(frozen=True)

    blood_type: str | None = None
    age: int | None = None
    country: str | None = None
    state: str | None = None
    city: str | None = None
    organ_type: str | None = None

    @classmethod
    def from_profile(cls, profile: Profile) -> MatchParty:
        return cls(
            blood_type=profile.blood_type,
            age=profile.age,
            country=profile.country,
            state=profile.state,
            city=profile.city,
            organ_type=profile.organ_type,
        )


# === TEXT HINTS ===


class KeyInfo(BaseModel):
    """Best-effort structured hints pulled out of free text."""

    blood_type: str | None = None
    organ_type: str | None = None
    age: int | None = None


# === MATCHING ===


class MatchRequest(_CamelModel):
    """Query for ranked matches: a stored profile id or raw free text."""

    profile_id: str | None = None
    profile_text: str | None = None
    top_n: int = Field(default=5, ge=1)
    min_similarity: float = Field(default=0.5, ge=0.0, le=1.0)
    searcher_type: Role | None = None


class ScoreBreakdown(_CamelModel):
    """The four component scores behind a hybrid score."""

    ai_similarity: float
    blood_type_score: float
    location_score: float
    age_score: float


class HybridScore(_CamelModel):
    """Weighted blend plus its breakdown."""

    hybrid_score: float
    breakdown: ScoreBreakdown


class MatchResult(_CamelModel):
    """One ranked candidate. ``similarity`` and ``hybrid_score`` hold the same value."""

    profile_id: str
    profile: Profile
    similarity: float
    hybrid_score: float
    rank: int = 0
    reason: str = ""
    score_breakdown: ScoreBreakdown


class StoreStats(_CamelModel):
    """Profile store counters."""

    profile_count: int
    embedding_count: int
    dimensions: int | None = None


# === PROFILE SUGGESTION ===


class ProfileSuggestion(_CamelModel):
    """Structured profile draft generated from a free-text description."""

    summary: str = ""
    organ_type: str | None = None
    age: int | None = None
    blood_type: str | None = None
    location: str | None = None
    personal_story: str
    safety_flags: list[str] = Field(default_factory=list)
