# src/matching/engine.py — v2
"""Hybrid profile-matching engine.

Pipeline per request:
  1. Resolve the query embedding (free text → provider, profile id → store)
  2. Resolve the query text and the searcher role (explicit or inferred)
  3. Extract organ / blood type / age hints, falling back to stored fields
  4. For each stored candidate: directional and organ hard filters, cosine
     similarity, role-oriented hybrid score, inclusive threshold
  5. Stable descending sort, 1-based ranks, truncation to top_n

The only suspension point is the embedding call in step 1; the candidate
loop is synchronous work over data already in memory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from donormatch.core.errors import InvalidRequestError, ProfileNotFoundError
from donormatch.core.models import (
    MatchParty,
    MatchRequest,
    MatchResult,
    Profile,
    Role,
)
from donormatch.core.similarity import cosine_similarity
from donormatch.embeddings.base_embedder import BaseEmbedder
from donormatch.matching.compatibility import ScoringWeights, hybrid_score
from donormatch.matching.reasons import generate_match_reason
from donormatch.matching.text_hints import (
    build_profile_text,
    candidate_text,
    extract_key_info,
    extract_organ,
    infer_searcher_type,
)
from donormatch.store.base_profile_store import BaseProfileStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Query:
    """Resolved query: embedding, text for hints, and the stored profile if any."""

    embedding: list[float]
    text: str | None
    profile: Profile | None


class MatchingEngine:
    """Rank stored profiles against a query profile or free text."""

    def __init__(
        self,
        store: BaseProfileStore,
        embedder: BaseEmbedder,
        weights: ScoringWeights | None = None,
    ) -> None:
        self._store = store
        self._embedder = embedder
        self._weights = weights

    async def find_top_matches(self, request: MatchRequest) -> list[MatchResult]:
        """Return up to ``top_n`` candidates scoring at least ``min_similarity``.

        Raises:
            InvalidRequestError: If neither profile_id nor profile_text is given.
            ProfileNotFoundError: If profile_id has no stored embedding.
            ProviderFailureError: If the embedding provider fails.
        """
        query = await self._resolve_query(request)
        searcher = request.searcher_type or infer_searcher_type(query.text)
        query_party = _query_party(query)

        logger.debug(
            "Matching: searcher=%s organ=%s blood=%s age=%s",
            searcher.value if searcher else None,
            query_party.organ_type, query_party.blood_type, query_party.age,
        )

        matches: list[MatchResult] = []
        for record in self._store.embeddings():
            if request.profile_id and record.profile_id == request.profile_id:
                continue

            candidate = self._store.get(record.profile_id)
            if candidate is None:
                logger.warning("Skipping embedding without profile: %s", record.profile_id)
                continue

            if searcher is not None and candidate.type is not searcher.opposite:
                continue

            candidate_party = party_for_candidate(candidate)
            if _organ_mismatch(query_party.organ_type, candidate_party.organ_type):
                continue

            ai_similarity = cosine_similarity(query.embedding, record.embedding)
            donor, patient = resolve_roles(
                searcher, query_party, candidate.type, candidate_party
            )
            scored = hybrid_score(ai_similarity, donor, patient, self._weights)

            if scored.hybrid_score >= request.min_similarity:
                matches.append(
                    MatchResult(
                        profile_id=candidate.id,
                        profile=candidate,
                        similarity=scored.hybrid_score,
                        hybrid_score=scored.hybrid_score,
                        reason=generate_match_reason(candidate, query.text),
                        score_breakdown=scored.breakdown,
                    )
                )

        ranked = rank_matches(matches, request.top_n)
        logger.info(
            "Found %d matches above %.2f, returning %d",
            len(matches), request.min_similarity, len(ranked),
        )
        return ranked

    async def _resolve_query(self, request: MatchRequest) -> _Query:
        """Resolve embedding, hint text and stored profile for a request."""
        if request.profile_text:
            embedding = await self._embedder.embed_query(request.profile_text)
            profile = self._store.get(request.profile_id) if request.profile_id else None
            return _Query(embedding=embedding, text=request.profile_text, profile=profile)

        if request.profile_id:
            record = self._store.get_embedding(request.profile_id)
            if record is None:
                raise ProfileNotFoundError(request.profile_id)
            profile = self._store.get(request.profile_id)
            text = build_profile_text(profile) if profile else None
            return _Query(embedding=record.embedding, text=text, profile=profile)

        raise InvalidRequestError("Either profileId or profileText must be provided")


def rank_matches(matches: list[MatchResult], top_n: int) -> list[MatchResult]:
    """Sort by score descending (stable for ties), assign 1-based ranks, truncate."""
    ordered = sorted(matches, key=lambda m: m.hybrid_score, reverse=True)
    for index, match in enumerate(ordered):
        match.rank = index + 1
    return ordered[:top_n]


def resolve_roles(
    searcher: Role | None,
    query_party: MatchParty,
    candidate_type: Role,
    candidate_party: MatchParty,
) -> tuple[MatchParty, MatchParty]:
    """Orient query and candidate into (donor, patient).

    With a known searcher the query takes the searcher's role. Without one
    the candidate's own type decides and the query stands in for the other
    role.
    """
    query_role = searcher if searcher is not None else candidate_type.opposite
    if query_role is Role.DONOR:
        return query_party, candidate_party
    return candidate_party, query_party


def party_for_candidate(candidate: Profile) -> MatchParty:
    """Structured fields of a candidate, falling back to hints in its text."""
    party = MatchParty.from_profile(candidate)
    if party.blood_type and party.age and party.organ_type:
        return party

    hints = extract_key_info(candidate_text(candidate))
    return party.model_copy(
        update={
            "blood_type": party.blood_type or hints.blood_type,
            "age": party.age or hints.age,
            "organ_type": party.organ_type or hints.organ_type,
        }
    )


def _query_party(query: _Query) -> MatchParty:
    """Hints from the query text, falling back to the stored query profile."""
    hints = extract_key_info(query.text)
    stored = query.profile
    if stored is None:
        return MatchParty(
            blood_type=hints.blood_type, age=hints.age, organ_type=hints.organ_type
        )
    return MatchParty(
        blood_type=hints.blood_type or stored.blood_type,
        age=hints.age or stored.age,
        organ_type=hints.organ_type or stored.organ_type,
        country=stored.country,
        state=stored.state,
        city=stored.city,
    )


def _organ_mismatch(query_organ: str | None, candidate_organ: str | None) -> bool:
    if not query_organ or not candidate_organ:
        return False
    return _normalize_organ(query_organ) != _normalize_organ(candidate_organ)


def _normalize_organ(organ: str) -> str:
    # "Marrow" and "Bone Marrow" name the same organ.
    return (extract_organ(organ) or organ).strip().lower()
