"""Offline Tesseract OCR backend."""

from __future__ import annotations

import asyncio
import logging

from . import OCRBackend, RecognitionResult

logger = logging.getLogger(__name__)


def group_words(data: dict[str, list]) -> list[list[str]]:
    """Group pytesseract ``image_to_data`` words into blocks of lines.

    Words are keyed by (block_num, par_num, line_num); engine order is kept.
    Paragraphs of the same block are flattened into that block's lines.
    """
    blocks: dict[int, dict[tuple[int, int], list[str]]] = {}
    for i, word in enumerate(data.get("text", [])):
        word = (word or "").strip()
        if not word:
            continue
        block_num = int(data["block_num"][i])
        line_key = (int(data["par_num"][i]), int(data["line_num"][i]))
        blocks.setdefault(block_num, {}).setdefault(line_key, []).append(word)

    return [
        [" ".join(words) for words in lines.values()]
        for lines in blocks.values()
    ]


class TesseractOCRBackend(OCRBackend):
    """Recognize grocery lists locally with Tesseract.

    Works offline but is noticeably weaker on handwriting than the
    cloud backends.
    """

    def __init__(self, lang: str = "eng", tesseract_cmd: str = "") -> None:
        self._lang = lang
        self._tesseract_cmd = tesseract_cmd

    async def recognize(self, image_path: str) -> RecognitionResult:
        try:
            import pytesseract
            from PIL import Image
        except ImportError:
            raise ImportError(
                "pytesseract and Pillow are required: pip install pytesseract Pillow"
            ) from None

        if self._tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self._tesseract_cmd

        def _run() -> dict[str, list]:
            with Image.open(image_path) as image:
                return pytesseract.image_to_data(
                    image, lang=self._lang, output_type=pytesseract.Output.DICT
                )

        try:
            data = await asyncio.to_thread(_run)
        except Exception as e:
            logger.exception("Tesseract failed on %s", image_path)
            return RecognitionResult.failed(str(e))

        return RecognitionResult.from_lines(group_words(data))
