# src/llm/models.py — v3
"""Text-generation types: one prompt in, one text answer out.

Profile suggestion is the only caller, so there is no multi-turn history.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class GenerationRequest(BaseModel):
    """Single-prompt generation call."""

    prompt: str
    system: str | None = None
    max_tokens: int = 2048
    temperature: float = 0.2
    json_mode: bool = False


class TokenUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total(self) -> int:
        return self.prompt_tokens + self.completion_tokens


class GenerationResult(BaseModel):
    """Normalized answer from any generation provider."""

    text: str
    model: str
    provider: str
    latency_ms: int
    usage: TokenUsage = Field(default_factory=TokenUsage)
