"""Turn recognized OCR text into structured Ingredient records.

The parser is a best-effort heuristic: lines that cannot be made sense of
are dropped, never reported as errors.
"""

from __future__ import annotations

import logging
import re

from .ocr import RecognitionResult
from .types import DEFAULT_QUANTITY, DEFAULT_UNIT, PARSED_CONFIDENCE, Ingredient
from .units import extract_quantity_and_unit

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2

_WHITESPACE = re.compile(r"\s+")
# OCR often reads a leading 1/0 as I/O: "Ikg" → "1kg", "O ml" → "0ml".
_OCR_ONE = re.compile(r"\bI\s*((?i:kg|mg|ml|lb|g|l))\b")
_OCR_ZERO = re.compile(r"\bO\s*((?i:kg|mg|ml|lb|g|l))\b")
# Keep word characters, whitespace, dots and the three dash variants.
_DISALLOWED_CHARS = re.compile(r"[^\w\s.\-–—]")
# "Item - Quantity+Unit" with -, – or —
_DASH_SPLIT = re.compile(r"(.+?)\s*[-–—]\s*(.+)")
_NAME_PUNCTUATION = re.compile(r"[-–—:,.]")


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def clean_text(text: str) -> str:
    """Normalize a raw OCR line before parsing."""
    text = _WHITESPACE.sub(" ", text)
    text = _OCR_ONE.sub(r"1\1", text)
    text = _OCR_ZERO.sub(r"0\1", text)
    text = _DISALLOWED_CHARS.sub(" ", text)
    return _collapse(text)


def _strip_quantity(name: str, quantity: str, unit: str) -> str:
    q, u = re.escape(quantity), re.escape(unit)
    name = re.sub(rf"{q}\s*{u}", "", name, flags=re.IGNORECASE)
    name = re.sub(rf"{u}\s*{q}", "", name, flags=re.IGNORECASE)
    return name.strip()


def parse_line(line: str) -> Ingredient | None:
    """Parse one OCR line into an Ingredient.

    Handles "Rice - 2kg", "Rice 2kg", "2 kg rice", "Rice kg 2" and bare
    names ("Tomatoes"), which get quantity "1" and unit "piece".

    Returns:
        The parsed Ingredient, or None if the line is rejected.
    """
    if not line.strip():
        return None

    cleaned = clean_text(line)
    if len(cleaned) < MIN_NAME_LENGTH:
        logger.debug("Rejected line (too short): %r", line)
        return None

    quantity = DEFAULT_QUANTITY
    unit = DEFAULT_UNIT
    name = cleaned

    dash = _DASH_SPLIT.search(cleaned)
    if dash is not None:
        name = dash.group(1).strip()
        extracted = extract_quantity_and_unit(dash.group(2).strip())
        if extracted is not None:
            quantity, unit = extracted
    else:
        extracted = extract_quantity_and_unit(cleaned)
        if extracted is not None:
            quantity, unit = extracted
            name = _strip_quantity(cleaned, quantity, unit)

    name = _collapse(_NAME_PUNCTUATION.sub(" ", name))
    if len(name) < MIN_NAME_LENGTH:
        logger.debug("Rejected line (no usable name): %r", line)
        return None

    return Ingredient(
        name=name.capitalize(),
        quantity=quantity,
        unit=unit,
        confidence=PARSED_CONFIDENCE,
    )


def dedupe_ingredients(items: list[Ingredient]) -> list[Ingredient]:
    """Drop repeated names (case-insensitive), keeping the first occurrence."""
    seen: set[str] = set()
    result: list[Ingredient] = []
    for item in items:
        key = item.name.lower()
        if key not in seen:
            seen.add(key)
            result.append(item)
    return result


def _parse_lines(lines: list[str]) -> list[Ingredient]:
    items: list[Ingredient] = []
    for line in lines:
        item = parse_line(line)
        if item is not None:
            items.append(item)
    return items


def parse_recognition_result(result: RecognitionResult) -> list[Ingredient]:
    """Parse a structured OCR result into a deduplicated ingredient list.

    Lines are read block by block. If that yields nothing and the result
    carries flat text, the text is split on newlines and parsed instead.
    An unsuccessful result yields an empty list.
    """
    if not result.success:
        logger.info("Skipping parse of failed OCR result: %s", result.error)
        return []

    items = _parse_lines([line.text for block in result.blocks for line in block.lines])

    if not items and result.text.strip():
        logger.debug("No ingredients from text blocks, falling back to raw text")
        items = _parse_lines(result.text.split("\n"))

    return dedupe_ingredients(items)


def parse_text(raw_text: str) -> list[Ingredient]:
    """Parse unstructured text (one ingredient per line)."""
    if not raw_text.strip():
        return []
    return parse_recognition_result(
        RecognitionResult(text=raw_text, blocks=[], success=True)
    )
