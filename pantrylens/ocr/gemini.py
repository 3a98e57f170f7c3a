"""Gemini API OCR backend."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path

from . import TRANSCRIPTION_PROMPT, OCRBackend, RecognitionResult, parse_transcription

logger = logging.getLogger(__name__)


class GeminiOCRBackend(OCRBackend):
    """Transcribe grocery lists using Google Gemini's vision capability."""

    def __init__(self, api_key: str = "", model: str = "gemini-2.0-flash") -> None:
        self._api_key = api_key
        self._model = model

    async def recognize(self, image_path: str) -> RecognitionResult:
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
            data = Path(image_path).read_bytes()
        except OSError as e:
            logger.exception("Could not read image %s", image_path)
            return RecognitionResult.failed(str(e))

        mime_type = mimetypes.guess_type(image_path)[0] or "image/jpeg"

        try:
            genai.configure(api_key=self._api_key)
            model = genai.GenerativeModel(self._model)
            response = await model.generate_content_async(
                [{"mime_type": mime_type, "data": data}, TRANSCRIPTION_PROMPT]
            )
            text = response.text
        except Exception as e:
            logger.exception("Gemini OCR request failed")
            return RecognitionResult.failed(str(e))

        return parse_transcription(text)
