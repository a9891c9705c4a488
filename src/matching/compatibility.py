# src/matching/compatibility.py — v1
"""Rule-based medical/geographic compatibility scoring and the hybrid blend.

Three independent scores, each in [0, 1]:
- blood type (donor → recipient direction, not symmetric)
- location proximity (city > state > country)
- age difference

``hybrid_score`` blends them with the AI similarity using fixed weights
(0.2 AI, 0.5 blood type, 0.1 location, 0.2 age by default).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from donormatch.core.models import HybridScore, MatchParty, ScoreBreakdown

if TYPE_CHECKING:
    from donormatch.config.settings import Settings

# Donor type → recipient types it can supply.
BLOOD_COMPATIBILITY: dict[str, frozenset[str]] = {
    "O-": frozenset({"O-", "O+", "A-", "A+", "B-", "B+", "AB-", "AB+"}),
    "O+": frozenset({"O+", "A+", "B+", "AB+"}),
    "A-": frozenset({"A-", "A+", "AB-", "AB+"}),
    "A+": frozenset({"A+", "AB+"}),
    "B-": frozenset({"B-", "B+", "AB-", "AB+"}),
    "B+": frozenset({"B+", "AB+"}),
    "AB-": frozenset({"AB-", "AB+"}),
    "AB+": frozenset({"AB+"}),
}

UNIVERSAL_DONOR = "O-"
UNIVERSAL_RECIPIENT = "AB+"

NEUTRAL_SCORE = 0.5
_WEIGHT_TOLERANCE = 1e-6


@dataclass(frozen=True)
class ScoringWeights:
    """Blend weights. Must be non-negative and sum to 1.0."""

    ai_similarity: float = 0.2
    blood_type: float = 0.5
    location: float = 0.1
    age: float = 0.2

    def __post_init__(self) -> None:
        values = (self.ai_similarity, self.blood_type, self.location, self.age)
        if any(v < 0 for v in values):
            raise ValueError("Scoring weights must be >= 0")
        if abs(sum(values) - 1.0) > _WEIGHT_TOLERANCE:
            raise ValueError(f"Scoring weights must sum to 1.0, got {sum(values):.4f}")

    @classmethod
    def from_settings(cls, settings: Settings) -> ScoringWeights:
        return cls(
            ai_similarity=settings.scoring_w_ai_similarity,
            blood_type=settings.scoring_w_blood_type,
            location=settings.scoring_w_location,
            age=settings.scoring_w_age,
        )


DEFAULT_WEIGHTS = ScoringWeights()


def blood_type_score(donor_blood: str | None, recipient_blood: str | None) -> float:
    """Score donor → recipient blood compatibility.

    Returns:
        0.5 if either side is unknown, 1.0 for identical types, 0.99 for a
        universal donor or recipient, 0.8 when the table allows the donation,
        0.2 otherwise.
    """
    if not donor_blood or not recipient_blood:
        return NEUTRAL_SCORE

    donor = donor_blood.strip().upper()
    recipient = recipient_blood.strip().upper()

    if donor == recipient:
        return 1.0
    if donor == UNIVERSAL_DONOR or recipient == UNIVERSAL_RECIPIENT:
        return 0.99
    if recipient in BLOOD_COMPATIBILITY.get(donor, frozenset()):
        return 0.8
    return 0.2


def location_score(party1: MatchParty, party2: MatchParty) -> float:
    """Score geographic proximity; the first satisfied rule wins."""
    if not party1.country or not party2.country:
        return NEUTRAL_SCORE
    if party1.city and party2.city and _same(party1.city, party2.city):
        return 1.0
    if party1.state and party2.state and _same(party1.state, party2.state):
        return 0.8
    if _same(party1.country, party2.country):
        return 0.4
    return 0.1


def age_score(age1: int | None, age2: int | None) -> float:
    """Score age closeness. An age of 0 counts as missing."""
    if not age1 or not age2:
        return NEUTRAL_SCORE

    diff = abs(age1 - age2)
    if diff <= 5:
        return 1.0
    if diff <= 10:
        return 0.9
    if diff <= 20:
        return 0.7
    if diff <= 30:
        return 0.5
    return 0.3


def hybrid_score(
    ai_similarity: float,
    donor: MatchParty,
    patient: MatchParty,
    weights: ScoringWeights | None = None,
) -> HybridScore:
    """Blend AI similarity with the three rule-based scores.

    Args:
        ai_similarity: Cosine similarity between query and candidate embeddings.
            Clamped to [0, 1]; a negative cosine scores as 0.
        donor: Donor-role party.
        patient: Patient-role party.
        weights: Blend weights (defaults to 0.2/0.5/0.1/0.2).

    Returns:
        HybridScore with the scalar and its four-component breakdown.
    """
    w = weights or DEFAULT_WEIGHTS

    breakdown = ScoreBreakdown(
        ai_similarity=min(max(ai_similarity, 0.0), 1.0),
        blood_type_score=blood_type_score(donor.blood_type, patient.blood_type),
        location_score=location_score(donor, patient),
        age_score=age_score(donor.age, patient.age),
    )
    total = (
        w.ai_similarity * breakdown.ai_similarity
        + w.blood_type * breakdown.blood_type_score
        + w.location * breakdown.location_score
        + w.age * breakdown.age_score
    )
    return HybridScore(hybrid_score=total, breakdown=breakdown)


def _same(a: str, b: str) -> bool:
    return a.strip().lower() == b.strip().lower()
