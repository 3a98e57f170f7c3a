"""OCR backend base class, recognition result types, and factory."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import PantryLensConfig


@dataclass
class TextLine:
    text: str


@dataclass
class TextBlock:
    text: str
    lines: list[TextLine] = field(default_factory=list)


@dataclass
class RecognitionResult:
    text: str  # full flat transcription
    blocks: list[TextBlock] = field(default_factory=list)
    success: bool = True
    error: str | None = None

    @classmethod
    def failed(cls, error: str) -> RecognitionResult:
        return cls(text="", blocks=[], success=False, error=error)

    @classmethod
    def from_lines(cls, blocks: list[list[str]]) -> RecognitionResult:
        """Build a successful result from lines grouped per block."""
        text_blocks = [
            TextBlock(text="\n".join(lines), lines=[TextLine(t) for t in lines])
            for lines in blocks
        ]
        return cls(
            text="\n".join(b.text for b in text_blocks),
            blocks=text_blocks,
            success=True,
        )


TRANSCRIPTION_PROMPT = """\
This image is a photo or scan of a grocery or ingredient list.
Transcribe every line of text exactly as written. Do not correct spelling,
do not translate, and do not add items that are not visible.

Return JSON only, in this format:
{"blocks": [{"lines": ["first line", "second line"]}]}

Group lines that belong together (a column, a paragraph) into one block,
in reading order.
"""


def parse_transcription(text: str) -> RecognitionResult:
    """Parse a model's JSON transcription into a RecognitionResult.

    A reply that is not the expected JSON is kept as flat text with no
    blocks, so the ingredient parser can still split it line by line.
    """
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [l for l in lines[1:] if not l.strip().startswith("```")]
        cleaned = "\n".join(lines)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        return RecognitionResult(text=cleaned, blocks=[], success=True)

    if not isinstance(data, dict) or not isinstance(data.get("blocks"), list):
        return RecognitionResult(text=cleaned, blocks=[], success=True)

    blocks: list[list[str]] = []
    for block in data["blocks"]:
        lines = block.get("lines") if isinstance(block, dict) else None
        if isinstance(lines, str):
            lines = [lines]
        if not isinstance(lines, list):
            # Skip malformed blocks.
            continue
        blocks.append([str(line) for line in lines if line is not None])
    return RecognitionResult.from_lines(blocks)


class OCRBackend(ABC):
    """Abstract base for text recognition of grocery list images."""

    @abstractmethod
    async def recognize(self, image_path: str) -> RecognitionResult:
        """Recognize the text in an image.

        Engine or transport failures are reported through an unsuccessful
        RecognitionResult rather than raised.
        """
        ...


def create_backend(config: PantryLensConfig) -> OCRBackend:
    """Create an OCR backend based on configuration."""
    backend_name = config.ocr.backend

    match backend_name:
        case "claude":
            from .claude import ClaudeOCRBackend

            return ClaudeOCRBackend(
                api_key=config.ocr.claude.api_key,
                model=config.ocr.claude.model,
            )
        case "gemini":
            from .gemini import GeminiOCRBackend

            return GeminiOCRBackend(
                api_key=config.ocr.gemini.api_key,
                model=config.ocr.gemini.model,
            )
        case "tesseract":
            from .tesseract import TesseractOCRBackend

            return TesseractOCRBackend(
                lang=config.ocr.tesseract.lang,
                tesseract_cmd=config.ocr.tesseract.tesseract_cmd,
            )
        case _:
            raise ValueError(
                f"Unknown OCR backend: {backend_name!r} "
                f"(choose one of claude / gemini / tesseract)"
            )
