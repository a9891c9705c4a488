# src/matching/reasons.py — v1
"""Human-readable explanation attached to each match."""

from __future__ import annotations

from donormatch.core.models import Profile
from donormatch.matching.text_hints import candidate_text, extract_key_info

MAX_REASONS = 4
REASON_SEPARATOR = " • "
FALLBACK_REASON = "Medical profile matches criteria"

_AGE_COMPATIBLE_MAX_DIFF = 20


def generate_match_reason(candidate: Profile, query_text: str | None) -> str:
    """Explain why a candidate matches a query.

    Hints are extracted independently from the candidate's own text and from
    the query text. Notes are appended in a fixed order and capped at four.
    """
    text = candidate_text(candidate)
    lowered = text.lower()
    candidate_info = extract_key_info(text)
    query_info = extract_key_info(query_text)

    reasons: list[str] = []

    if (
        candidate_info.organ_type
        and query_info.organ_type
        and candidate_info.organ_type == query_info.organ_type
    ):
        reasons.append(f"{candidate_info.organ_type} match")

    if (
        candidate_info.blood_type
        and query_info.blood_type
        and candidate_info.blood_type == query_info.blood_type
    ):
        reasons.append(f"Blood type {candidate_info.blood_type} match")

    if candidate_info.age and query_info.age:
        if abs(candidate_info.age - query_info.age) <= _AGE_COMPATIBLE_MAX_DIFF:
            reasons.append(f"Age compatible ({candidate_info.age})")

    if "non-smoker" in lowered or "non smoker" in lowered:
        reasons.append("Non-smoker")

    if "healthy" in lowered or "excellent health" in lowered:
        reasons.append("Healthy lifestyle")

    if "willing to travel" in lowered or "can travel" in lowered:
        reasons.append("Willing to travel")

    if not reasons:
        return FALLBACK_REASON
    return REASON_SEPARATOR.join(reasons[:MAX_REASONS])
