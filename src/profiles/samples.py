# src/profiles/samples.py — v1
"""Bundled sample profiles for seeding a fresh store (demos and reseeding)."""

from __future__ import annotations

import json
from pathlib import Path

from donormatch.core.models import Profile

_SAMPLE_DATA: list[dict] = [
    {
        "id": "test-patient-001",
        "name": "John Doe",
        "type": "patient",
        "bloodType": "O+",
        "age": 45,
        "country": "USA",
        "state": "Massachusetts",
        "city": "Boston",
        "organType": "Kidney",
        "description": "Patient seeking kidney transplant",
        "medicalInfo": "Blood type O+, age 45, kidney disease stage 4, non-smoker, Boston, MA",
        "preferences": "Looking for living donor, willing to travel within New England",
    },
    {
        "id": "test-patient-002",
        "name": "Maria Garcia",
        "type": "patient",
        "bloodType": "A-",
        "age": 38,
        "country": "USA",
        "state": "New York",
        "city": "New York",
        "organType": "Liver",
        "description": "Liver transplant needed urgently",
        "medicalInfo": "Blood type A-, age 38, end-stage liver disease, non-smoker, New York NY",
        "preferences": "Seeking compatible donor, family available for support",
    },
    {
        "id": "test-patient-003",
        "name": "Robert Chen",
        "type": "patient",
        "bloodType": "B+",
        "age": 52,
        "country": "USA",
        "state": "Illinois",
        "city": "Chicago",
        "organType": "Heart",
        "description": "Heart transplant candidate",
        "medicalInfo": "Blood type B+, age 52, congestive heart failure, healthy lifestyle, Chicago IL",
        "preferences": "Need urgent transplant, willing to relocate temporarily",
    },
    {
        "id": "uk-patient-001",
        "name": "Emily Thompson",
        "type": "patient",
        "bloodType": "A+",
        "age": 42,
        "country": "UK",
        "state": "England",
        "city": "London",
        "organType": "Kidney",
        "description": "Seeking kidney donor, blood type A+",
        "medicalInfo": "Age 42, blood type A+, kidney failure, non-smoker, excellent health otherwise, London UK England",
        "preferences": "Prefer UK donor, willing to travel within Europe",
    },
    {
        "id": "test-donor-001",
        "name": "Jane Smith",
        "type": "donor",
        "bloodType": "O+",
        "age": 32,
        "country": "USA",
        "state": "Massachusetts",
        "city": "Cambridge",
        "organType": "Kidney",
        "description": "Healthy kidney donor",
        "medicalInfo": "Blood type O+, age 32, excellent health, non-smoker, Cambridge MA",
        "preferences": "Willing to donate to compatible patient, can travel",
    },
    {
        "id": "test-donor-002",
        "name": "Michael Brown",
        "type": "donor",
        "bloodType": "A-",
        "age": 29,
        "country": "USA",
        "state": "New York",
        "city": "New York",
        "organType": "Liver",
        "description": "Living liver donor volunteer",
        "medicalInfo": "Blood type A-, age 29, perfect health, athletic lifestyle, New York NY",
        "preferences": "Altruistic donor, willing to help those in need",
    },
    {
        "id": "test-donor-003",
        "name": "Lisa Anderson",
        "type": "donor",
        "bloodType": "B+",
        "age": 40,
        "country": "USA",
        "state": "Illinois",
        "city": "Chicago",
        "organType": "Kidney",
        "description": "Kidney donor seeking recipient",
        "medicalInfo": "Blood type B+, age 40, excellent physical condition, non-smoker, Chicago IL",
        "preferences": "Prefer to help patient in Midwest region",
    },
    {
        "id": "test-donor-006",
        "name": "Christopher Davis",
        "type": "donor",
        "bloodType": "A+",
        "age": 42,
        "country": "USA",
        "state": "Massachusetts",
        "city": "Boston",
        "organType": "Kidney",
        "description": "Altruistic kidney donor",
        "medicalInfo": "Blood type A+, age 42, healthy lifestyle, non-drinker non-smoker, Boston MA",
        "preferences": "Looking to help local patient, family history of kidney disease awareness",
    },
    {
        "id": "canada-donor-001",
        "name": "Michael Chen",
        "type": "donor",
        "bloodType": "O-",
        "age": 35,
        "country": "Canada",
        "state": "Ontario",
        "city": "Toronto",
        "organType": "Kidney",
        "description": "Willing to donate kidney, blood type O-",
        "medicalInfo": "Age 35, blood type O-, healthy, non-smoker, willing to donate kidney, Toronto, Ontario in Canada",
        "preferences": "Can travel to USA or Europe if needed",
    },
    {
        "id": "germany-donor-001",
        "name": "Hans Mueller",
        "type": "donor",
        "bloodType": "AB+",
        "age": 45,
        "country": "Germany",
        "state": "Bavaria",
        "city": "Munich",
        "organType": "Liver",
        "description": "Willing to donate liver segment, blood type AB+",
        "medicalInfo": "Age 45, blood type AB+, excellent health, non-smoker, regular exercise, Munich, Bavaria, Germany",
        "preferences": "Willing to help patients in EU countries",
    },
]

SAMPLE_PROFILES: list[Profile] = [Profile.model_validate(d) for d in _SAMPLE_DATA]


def load_profiles_file(path: Path) -> list[Profile]:
    """Load a JSON list of profiles (camelCase or snake_case keys)."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON list of profiles in {path}")
    return [Profile.model_validate(item) for item in data]
