"""Scan pipeline: image → OCR → ingredient list → (optionally) history."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from .db.scans import ScanHistoryDB
from .errors import NoIngredientsError, OCRError
from .ocr import OCRBackend
from .parser import parse_recognition_result
from .types import ScanResult

logger = logging.getLogger(__name__)


class ScanPipeline:
    """Runs one photo through OCR and the ingredient parser.

    Args:
        ocr_backend: Backend used to read text from the image.
        history: Where scans are saved; None disables saving.
    """

    def __init__(
        self, ocr_backend: OCRBackend, history: ScanHistoryDB | None = None
    ) -> None:
        self._ocr = ocr_backend
        self._history = history

    async def process_image(
        self, image_path: str | Path, save_to_history: bool = True
    ) -> ScanResult:
        """Recognize, parse and optionally save a scan.

        Raises:
            OCRError: The OCR backend reported a failure.
            NoIngredientsError: Text was read but no ingredient was found.
        """
        logger.info("Scanning %s", image_path)
        result = await self._ocr.recognize(image_path)
        if not result.success:
            raise OCRError(result.error or "OCR failed")

        ingredients = parse_recognition_result(result)
        if not ingredients:
            raise NoIngredientsError(
                "No ingredients found. Please retake the photo."
            )
        logger.info("Parsed %d ingredients from %s", len(ingredients), image_path)

        scan = ScanResult(
            timestamp=time.time(),
            raw_text=result.text,
            ingredients=ingredients,
            image_path=str(image_path),
        )
        if save_to_history and self._history is not None:
            scan.id = self._history.save_scan(scan)
            logger.debug("Saved scan %d", scan.id)
        return scan
