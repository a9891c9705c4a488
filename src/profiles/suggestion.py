# src/profiles/suggestion.py — v2
"""Generate a structured profile draft from a free-text description.

The generation provider is asked for a single JSON object; the parser
tolerates a fenced code block around it but nothing else.
"""

from __future__ import annotations

import json
import logging
import re

from donormatch.core.errors import InvalidRequestError, ProviderFailureError
from donormatch.core.models import ProfileSuggestion
from donormatch.llm.base_client import BaseTextGenerator
from donormatch.llm.models import GenerationRequest

logger = logging.getLogger(__name__)

MIN_INPUT_CHARS = 20

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)

SYSTEM_INSTRUCTION = """You are a medical profile assistant for an organ donation matching platform.
You help rewrite a transplant patient or donor profile.

Rules:
- Do NOT include medical advice or prognosis
- Remove specific timelines like "for 20 years"
- Return ONLY the JSON object, no other text
- Do NOT mention payment or compensation
- Be concise, clear, and respectful
- Keep factual tone; do not invent details"""


def build_profile_prompt(raw_text: str) -> str:
    """User prompt asking for a structured transplant profile."""
    return f"""User Input: "{raw_text}"

Extract and return ONLY a valid JSON object with these fields:
{{
  "summary": "One-sentence summary (name, age, blood type, organ)",
  "organ_type": "kidney|liver|heart|lung|pancreas|marrow|etc (null if not mentioned)",
  "age": number (null if not mentioned),
  "blood_type": "A+|A-|B+|B-|AB+|AB-|O+|O- (null if not mentioned)",
  "location": "City, State, Country format (null if not mentioned)",
  "personal_story": "2-3 sentences about their situation and preferences",
  "safety_flags": ["array of removed medical advice or timeline predictions"]
}}
"""


def parse_profile_suggestion(text: str, provider: str = "llm") -> ProfileSuggestion:
    """Parse the provider's JSON answer.

    Raises:
        ProviderFailureError: If the output is not JSON or lacks personal_story.
    """
    body = text.strip()
    fenced = _FENCE_RE.match(body)
    if fenced:
        body = fenced.group(1)

    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise ProviderFailureError(provider, "Output is not valid JSON") from e

    if not isinstance(data, dict):
        raise ProviderFailureError(provider, "Output is not a JSON object")

    story = data.get("personal_story")
    if not story or not isinstance(story, str):
        raise ProviderFailureError(provider, "Missing personal_story in response")

    flags = data.get("safety_flags")
    age = data.get("age")
    return ProfileSuggestion(
        summary=data.get("summary") or "",
        organ_type=data.get("organ_type"),
        age=age if isinstance(age, int) else None,
        blood_type=data.get("blood_type"),
        location=data.get("location"),
        personal_story=story.strip(),
        safety_flags=[str(f) for f in flags] if isinstance(flags, list) else [],
    )


async def suggest_profile(
    text: str,
    generator: BaseTextGenerator,
    temperature: float = 0.2,
    max_tokens: int = 2048,
) -> ProfileSuggestion:
    """Generate a profile suggestion for a free-text description.

    Raises:
        InvalidRequestError: If the text is shorter than 20 characters.
        ProviderFailureError: If generation fails or returns unusable output.
    """
    if not text or len(text.strip()) < MIN_INPUT_CHARS:
        raise InvalidRequestError(
            f"Please provide at least {MIN_INPUT_CHARS} characters of text"
        )

    result = await generator.generate(GenerationRequest(
        prompt=build_profile_prompt(text.strip()),
        system=SYSTEM_INSTRUCTION,
        max_tokens=max_tokens,
        temperature=temperature,
        json_mode=True,
    ))
    suggestion = parse_profile_suggestion(result.text, provider=result.provider)
    if suggestion.safety_flags:
        logger.info("Suggestion removed %d unsafe statements", len(suggestion.safety_flags))
    return suggestion
