# tests/unit/profiles/test_unit_suggestion.py — v2
"""Tests for profiles/suggestion.py — prompt, parsing and generation call."""

from __future__ import annotations

import pytest

from donormatch.core.errors import InvalidRequestError, ProviderFailureError
from donormatch.profiles.suggestion import (
    SYSTEM_INSTRUCTION,
    build_profile_prompt,
    parse_profile_suggestion,
    suggest_profile,
)

VALID = '{"summary": "s", "organ_type": "kidney", "age": 45, "personal_story": " story ", "safety_flags": ["x"]}'


class TestParseProfileSuggestion:
    def test_plain_json(self):
        s = parse_profile_suggestion(VALID)
        assert s.organ_type == "kidney"
        assert s.age == 45
        assert s.personal_story == "story"
        assert s.safety_flags == ["x"]
        assert s.blood_type is None

    def test_fenced_json(self):
        s = parse_profile_suggestion(f"```json\n{VALID}\n```")
        assert s.summary == "s"

    def test_non_integer_age_dropped(self):
        s = parse_profile_suggestion('{"age": "forty", "personal_story": "p"}')
        assert s.age is None
        assert s.safety_flags == []

    def test_not_json(self):
        with pytest.raises(ProviderFailureError, match="not valid JSON"):
            parse_profile_suggestion("Sure! Here is the profile.")

    def test_not_object(self):
        with pytest.raises(ProviderFailureError, match="not a JSON object"):
            parse_profile_suggestion("[1, 2]")

    def test_missing_story(self):
        with pytest.raises(ProviderFailureError, match="personal_story"):
            parse_profile_suggestion('{"summary": "s"}')

    def test_provider_in_error(self):
        with pytest.raises(ProviderFailureError) as exc_info:
            parse_profile_suggestion("nope", provider="google")
        assert exc_info.value.provider == "google"


class TestBuildProfilePrompt:
    def test_contains_input_and_fields(self):
        prompt = build_profile_prompt("I am 45 and need a kidney")
        assert '"I am 45 and need a kidney"' in prompt
        assert "personal_story" in prompt
        assert "safety_flags" in prompt


class TestSuggestProfile:
    @pytest.mark.asyncio
    async def test_generates_suggestion(self, mock_generator):
        s = await suggest_profile("  I am John, 45, O+, and I need a kidney transplant  ", mock_generator)
        assert s.blood_type == "O+"
        assert s.location == "Boston, MA, USA"
        request = mock_generator.generate.call_args.args[0]
        assert request.json_mode is True
        assert request.system == SYSTEM_INSTRUCTION
        assert '"I am John, 45, O+, and I need a kidney transplant"' in request.prompt

    @pytest.mark.asyncio
    async def test_sampling_options_forwarded(self, mock_generator):
        await suggest_profile("I need a kidney, blood type O+, age 45", mock_generator,
                              temperature=0.7, max_tokens=512)
        request = mock_generator.generate.call_args.args[0]
        assert request.temperature == 0.7
        assert request.max_tokens == 512

    @pytest.mark.asyncio
    async def test_short_text_rejected(self, mock_generator):
        with pytest.raises(InvalidRequestError, match="20 characters"):
            await suggest_profile("   need kidney   ", mock_generator)
        mock_generator.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unusable_answer_names_provider(self, mock_generator, mock_generation_result):
        mock_generator.generate.return_value = mock_generation_result.model_copy(
            update={"text": "Sorry, I cannot help with that."}
        )
        with pytest.raises(ProviderFailureError) as exc_info:
            await suggest_profile("I need a kidney, blood type O+, age 45", mock_generator)
        assert exc_info.value.provider == "google"

    @pytest.mark.asyncio
    async def test_provider_failure_propagates(self, mock_generator):
        mock_generator.generate.side_effect = ProviderFailureError("google", "Generation failed")
        with pytest.raises(ProviderFailureError):
            await suggest_profile("I need a kidney, blood type O+, age 45", mock_generator)
