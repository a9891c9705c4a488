# src/matching/text_hints.py — v3
"""Lightweight pattern matching over free-text profiles and queries.

Extracts blood type, organ and age hints, infers which side of a transplant
the author stands on, and rebuilds the text fed to the embedding provider.
Best-effort: an absent pattern yields None, never an error.
"""

from __future__ import annotations

import re

from donormatch.core.models import KeyInfo, Profile, Role

_BLOOD_TYPE_RE = re.compile(r"blood\s+type\s+(AB|A|B|O)([+-])?(?![a-z])", re.IGNORECASE)
_AGE_RE = re.compile(r"\bage\s+(\d+)", re.IGNORECASE)
_TYPE_MARKER_RE = re.compile(r"^\s*type:\s*(patient|donor)\b", re.IGNORECASE | re.MULTILINE)

# Order is precedence: the first organ found wins.
ORGAN_VOCABULARY: tuple[tuple[str, str], ...] = (
    ("kidney", "Kidney"),
    ("pancreas", "Pancreas"),
    ("liver", "Liver"),
    ("heart", "Heart"),
    ("lung", "Lung"),
    ("intestine", "Intestine"),
    ("marrow", "Bone Marrow"),
)

PATIENT_CUES: tuple[str, ...] = ("need", "seeking", "looking for", "require", "patient")
DONOR_CUES: tuple[str, ...] = ("donate", "donor", "willing to give")

_SEEK = r"(?:need|needs|seeking|looking\s+for|searching\s+for|require|requires|find(?:ing)?|wait(?:ing)?\s+for)"
_DET = r"(?:(?:a|an|the|my)\s+)?(?:[\w-]+\s+){0,2}?"
# Who the author wants: "looking for a living donor" is a patient speaking,
# "seeking compatible patient" / "to a patient in need" a donor.
_WANTS_DONOR_RE = re.compile(rf"\b{_SEEK}\s+{_DET}donors?\b", re.IGNORECASE)
_WANTS_RECIPIENT_RE = re.compile(
    rf"\b(?:{_SEEK}|to|help)\s+{_DET}(?:patients?|recipients?|someone)\b", re.IGNORECASE
)
_DONOR_ACT_RE = re.compile(r"\b(?:donat(?:e|ing)|willing\s+to\s+give)\b", re.IGNORECASE)

_TARGET_WEIGHT = 3
_ACT_WEIGHT = 2


def extract_key_info(text: str | None) -> KeyInfo:
    """Pull blood type, organ type and age out of free text.

    An unsuffixed blood type (``blood type O``) defaults to ``+``.
    """
    if not text:
        return KeyInfo()

    blood_type = None
    match = _BLOOD_TYPE_RE.search(text)
    if match:
        blood_type = match.group(1).upper() + (match.group(2) or "+")

    age = None
    match = _AGE_RE.search(text)
    if match:
        age = int(match.group(1))

    return KeyInfo(blood_type=blood_type, organ_type=extract_organ(text), age=age)


def extract_organ(text: str | None) -> str | None:
    """Return the first organ of the vocabulary mentioned in text."""
    if not text:
        return None
    lowered = text.lower()
    for needle, organ in ORGAN_VOCABULARY:
        if needle in lowered:
            return organ
    return None


def infer_searcher_type(text: str | None) -> Role | None:
    """Infer the author's role from keyword cues.

    A ``Type: patient|donor`` line (present in rebuilt profile text) is
    authoritative. Otherwise both sides are scored: naming whom the author
    wants ("seeking a donor", "to a patient") weighs most, then first-person
    donation ("donate", "willing to give"), then single cue words. Cues
    already consumed by a wanted-party phrase are not counted again. A tie,
    including no cue at all, → None.
    """
    if not text:
        return None

    marker = _TYPE_MARKER_RE.search(text)
    if marker:
        return Role(marker.group(1).lower())

    rest, wants_donor = _WANTS_DONOR_RE.subn(" ", text)
    rest, wants_recipient = _WANTS_RECIPIENT_RE.subn(" ", rest)
    rest, donations = _DONOR_ACT_RE.subn(" ", rest)
    lowered = rest.lower()

    patient = wants_donor * _TARGET_WEIGHT + sum(cue in lowered for cue in PATIENT_CUES)
    donor = (
        wants_recipient * _TARGET_WEIGHT
        + donations * _ACT_WEIGHT
        + sum(cue in lowered for cue in DONOR_CUES)
    )

    if patient > donor:
        return Role.PATIENT
    if donor > patient:
        return Role.DONOR
    return None


def build_profile_text(profile: Profile) -> str:
    """Build the searchable text embedded for a profile."""
    lines = [
        f"Type: {profile.type.value}",
        f"Name: {profile.name}",
        f"Description: {profile.description}",
        f"Medical Info: {profile.medical_info}",
    ]
    if profile.preferences:
        lines.append(f"Preferences: {profile.preferences}")
    return "\n".join(lines)


def candidate_text(profile: Profile) -> str:
    """Text used for per-candidate hints: medical info then description."""
    return f"{profile.medical_info} {profile.description}".strip()
