"""Google Gemini wrapper used for daily handover summaries."""

from __future__ import annotations

import logging
from typing import Protocol

from google import genai
from google.genai import types

from boarding.core.config import Settings
from boarding.core.errors import SummaryGenerationFailed

logger = logging.getLogger(__name__)


class SummaryClient(Protocol):
    """Anything able to turn a prompt into handover text."""

    async def generate(self, prompt: str) -> str: ...


class GeminiSummaryClient:
    """Thin async facade over ``google-genai``."""

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.5,
        top_p: float = 0.95,
    ) -> None:
        self._model = model
        self._config = types.GenerateContentConfig(temperature=temperature, top_p=top_p)
        self._client = genai.Client(api_key=api_key) if api_key else None

    @property
    def configured(self) -> bool:
        return self._client is not None

    async def generate(self, prompt: str) -> str:
        if self._client is None:
            raise SummaryGenerationFailed(
                "Gemini API key is not configured. Set API_KEY or GEMINI_API_KEY."
            )
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=self._config,
            )
        except Exception as exc:  # pragma: no cover - network dependent
            logger.exception("Error calling Gemini API")
            raise SummaryGenerationFailed(
                "Failed to communicate with the AI service."
            ) from exc
        text = response.text
        if not text:
            raise SummaryGenerationFailed("The AI service returned an empty summary.")
        return text


def build_summary_client(settings: Settings) -> GeminiSummaryClient:
    """Factory that honours application settings."""
    return GeminiSummaryClient(
        settings.gemini_api_key,
        model=settings.gemini_model,
        temperature=settings.summary_temperature,
        top_p=settings.summary_top_p,
    )
