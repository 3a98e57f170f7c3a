"""Exception types raised by pantrylens."""

from __future__ import annotations


class PantryLensError(Exception):
    """Base class for pantrylens failures."""


class OCRError(PantryLensError):
    """The OCR engine reported a failure for an image."""


class NoIngredientsError(PantryLensError):
    """Text was recognized but no ingredient could be parsed from it."""


class CatalogError(PantryLensError):
    """The recipe catalog could not be read or parsed."""


class GenerationError(PantryLensError):
    """LLM recipe generation produced nothing usable."""
