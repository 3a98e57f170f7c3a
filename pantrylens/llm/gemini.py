"""Gemini API backend for recipe generation."""

from __future__ import annotations

from ..errors import GenerationError
from . import LLMBackend


class GeminiLLMBackend(LLMBackend):
    """Generate recipes with Google Gemini."""

    def __init__(
        self,
        api_key: str = "",
        model: str = "gemini-2.0-flash",
        max_tokens: int = 800,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._max_tokens = max_tokens

    async def generate_text(self, prompt: str) -> str:
        if not self._api_key:
            raise ValueError(
                "Gemini API key is not set. "
                "Check the config file or the GEMINI_API_KEY environment variable."
            )

        try:
            import google.generativeai as genai
        except ImportError:
            raise ImportError(
                "google-generativeai SDK is required: pip install google-generativeai"
            ) from None

        try:
            genai.configure(api_key=self._api_key)
            model = genai.GenerativeModel(self._model)
            response = await model.generate_content_async(
                prompt,
                generation_config={"max_output_tokens": self._max_tokens},
            )
        except Exception as e:
            raise GenerationError(f"AI recipe generation failed: {e}") from e

        return response.text
