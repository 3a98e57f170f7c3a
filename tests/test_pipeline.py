"""Tests for the scan pipeline (mocked OCR)."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from pantrylens.db.scans import ScanHistoryDB
from pantrylens.errors import NoIngredientsError, OCRError
from pantrylens.ocr import OCRBackend, RecognitionResult
from pantrylens.pipeline import ScanPipeline


def _ocr(result: RecognitionResult) -> MagicMock:
    backend = MagicMock(spec=OCRBackend)
    backend.recognize = AsyncMock(return_value=result)
    return backend


class TestScanPipeline:
    @pytest.mark.asyncio
    async def test_process_image(self, tmp_path):
        history = ScanHistoryDB(tmp_path / "history.db")
        ocr = _ocr(RecognitionResult.from_lines([["Rice - 2kg", "Eggs", "rice"]]))

        scan = await ScanPipeline(ocr, history=history).process_image("/tmp/list.jpg")

        assert [i.name for i in scan.ingredients] == ["Rice", "Eggs"]
        assert scan.raw_text == "Rice - 2kg\nEggs\nrice"
        assert scan.image_path == "/tmp/list.jpg"
        assert scan.id > 0
        assert history.get_scan(scan.id).ingredients == scan.ingredients
        ocr.recognize.assert_awaited_once_with("/tmp/list.jpg")
        history.close()

    @pytest.mark.asyncio
    async def test_no_save(self, tmp_path):
        history = ScanHistoryDB(tmp_path / "history.db")
        ocr = _ocr(RecognitionResult.from_lines([["Milk 1l"]]))

        scan = await ScanPipeline(ocr, history=history).process_image(
            "/tmp/list.jpg", save_to_history=False
        )

        assert scan.id == 0
        assert history.count() == 0
        history.close()

    @pytest.mark.asyncio
    async def test_without_history(self):
        ocr = _ocr(RecognitionResult.from_lines([["Milk 1l"]]))
        scan = await ScanPipeline(ocr).process_image("/tmp/list.jpg")
        assert scan.id == 0
        assert scan.ingredients[0].unit == "l"

    @pytest.mark.asyncio
    async def test_ocr_failure(self):
        ocr = _ocr(RecognitionResult.failed("engine down"))
        with pytest.raises(OCRError, match="engine down"):
            await ScanPipeline(ocr).process_image("/tmp/list.jpg")

    @pytest.mark.asyncio
    async def test_ocr_failure_without_message(self):
        ocr = _ocr(RecognitionResult(text="", success=False))
        with pytest.raises(OCRError, match="OCR failed"):
            await ScanPipeline(ocr).process_image("/tmp/list.jpg")

    @pytest.mark.asyncio
    async def test_no_ingredients(self, tmp_path):
        history = ScanHistoryDB(tmp_path / "history.db")
        ocr = _ocr(RecognitionResult.from_lines([["@@", "5kg"]]))

        with pytest.raises(NoIngredientsError, match="retake"):
            await ScanPipeline(ocr, history=history).process_image("/tmp/list.jpg")

        assert history.count() == 0
        history.close()
