# tests/unit/matching/test_unit_reasons.py — v1
"""Tests for matching/reasons.py — match explanations."""

from __future__ import annotations

from donormatch.core.models import Profile, Role
from donormatch.matching.reasons import FALLBACK_REASON, generate_match_reason


def _donor(medical_info: str, description: str = "Donor") -> Profile:
    return Profile(
        id="d1", name="D", type=Role.DONOR, description=description, medical_info=medical_info,
    )


class TestGenerateMatchReason:
    def test_organ_blood_and_age(self):
        donor = _donor("Blood type O+, age 40, kidney donor")
        reason = generate_match_reason(donor, "need kidney, blood type O+, age 45")
        assert reason == "Kidney match • Blood type O+ match • Age compatible (40)"

    def test_age_too_far_apart(self):
        donor = _donor("age 20")
        assert "Age compatible" not in generate_match_reason(donor, "age 60")

    def test_lifestyle_notes(self):
        donor = _donor("non-smoker, healthy, willing to travel")
        assert generate_match_reason(donor, None) == (
            "Non-smoker • Healthy lifestyle • Willing to travel"
        )

    def test_capped_at_four(self):
        donor = _donor("Blood type O+, age 40, kidney, non smoker, excellent health, can travel")
        reason = generate_match_reason(donor, "kidney blood type O+ age 42")
        parts = reason.split(" • ")
        assert len(parts) == 4
        assert parts[-1] == "Non-smoker"

    def test_fallback(self):
        assert generate_match_reason(_donor("nothing notable"), "hello") == FALLBACK_REASON

    def test_blood_type_mismatch_not_mentioned(self):
        donor = _donor("Blood type A+")
        assert generate_match_reason(donor, "blood type O+") == FALLBACK_REASON
