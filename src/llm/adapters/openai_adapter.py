# src/llm/adapters/openai_adapter.py — v3
"""OpenAI chat-completions text generation."""

from __future__ import annotations

from typing import Any

from donormatch.llm.base_client import BaseTextGenerator
from donormatch.llm.models import GenerationRequest, TokenUsage


class OpenAIGenerator(BaseTextGenerator):

    async def _call(self, request: GenerationRequest) -> tuple[str, TokenUsage]:
        import openai

        client = openai.AsyncOpenAI(api_key=self._api_key)
        messages = [{"role": "user", "content": request.prompt}]
        if request.system:
            messages.insert(0, {"role": "system", "content": request.system})

        kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": messages,
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
        }
        if request.json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        resp = await client.chat.completions.create(**kwargs)

        usage = TokenUsage()
        if resp.usage:
            usage = TokenUsage(
                prompt_tokens=resp.usage.prompt_tokens,
                completion_tokens=resp.usage.completion_tokens,
            )
        return resp.choices[0].message.content or "", usage

    @property
    def provider_name(self) -> str:
        return "openai"
