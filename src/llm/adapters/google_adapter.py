# src/llm/adapters/google_adapter.py — v3
"""Gemini text generation via google-generativeai."""

from __future__ import annotations

from typing import Any

from donormatch.llm.base_client import BaseTextGenerator
from donormatch.llm.models import GenerationRequest, TokenUsage


class GeminiGenerator(BaseTextGenerator):

    async def _call(self, request: GenerationRequest) -> tuple[str, TokenUsage]:
        import google.generativeai as genai

        genai.configure(api_key=self._api_key)
        model = genai.GenerativeModel(self._model, system_instruction=request.system)

        config: dict[str, Any] = {
            "max_output_tokens": request.max_tokens,
            "temperature": request.temperature,
        }
        if request.json_mode:
            config["response_mime_type"] = "application/json"

        resp = await model.generate_content_async(request.prompt, generation_config=config)

        meta = getattr(resp, "usage_metadata", None)
        usage = TokenUsage(
            prompt_tokens=getattr(meta, "prompt_token_count", 0) or 0,
            completion_tokens=getattr(meta, "candidates_token_count", 0) or 0,
        )
        return resp.text or "", usage

    @property
    def provider_name(self) -> str:
        return "google"
