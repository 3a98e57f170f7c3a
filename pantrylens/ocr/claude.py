"""Claude API OCR backend."""

from __future__ import annotations

import base64
import logging
import mimetypes
from pathlib import Path

from . import TRANSCRIPTION_PROMPT, OCRBackend, RecognitionResult, parse_transcription

logger = logging.getLogger(__name__)


class ClaudeOCRBackend(OCRBackend):
    """Transcribe grocery lists using Claude's vision capability."""

    def __init__(self, api_key: str = "", model: str = "claude-sonnet-4-5-20250929") -> None:
        self._api_key = api_key
        self._model = model

    async def recognize(self, image_path: str) -> RecognitionResult:
        if not self._api_key:
            raise ValueError(
                "Anthropic API key is not set. "
                "Check the config file or the ANTHROPIC_API_KEY environment variable."
            )

        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "anthropic SDK is required: pip install anthropic"
            ) from None

        try:
            data = Path(image_path).read_bytes()
        except OSError as e:
            logger.exception("Could not read image %s", image_path)
            return RecognitionResult.failed(str(e))

        media_type = mimetypes.guess_type(image_path)[0] or "image/jpeg"
        content = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": media_type,
                    "data": base64.standard_b64encode(data).decode(),
                },
            },
            {"type": "text", "text": TRANSCRIPTION_PROMPT},
        ]

        try:
            client = anthropic.AsyncAnthropic(api_key=self._api_key)
            response = await client.messages.create(
                model=self._model,
                max_tokens=4096,
                messages=[{"role": "user", "content": content}],
            )
            text = response.content[0].text
        except Exception as e:
            logger.exception("Claude OCR request failed")
            return RecognitionResult.failed(str(e))

        return parse_transcription(text)
