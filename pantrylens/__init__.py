"""Ingredient list scanning and recipe matching."""

from .catalog import RecipeCatalog
from .config import PantryLensConfig, load_config
from .errors import (
    CatalogError,
    GenerationError,
    NoIngredientsError,
    OCRError,
    PantryLensError,
)
from .matcher import RecipeMatcher, find_matches, quick_suggestions
from .parser import parse_line, parse_recognition_result, parse_text
from .pipeline import ScanPipeline
from .types import (
    AIRecipe,
    Category,
    Difficulty,
    Ingredient,
    Recipe,
    RecipeMatch,
    ScanResult,
)

__all__ = [
    "Ingredient",
    "Recipe",
    "RecipeMatch",
    "ScanResult",
    "AIRecipe",
    "Category",
    "Difficulty",
    "parse_line",
    "parse_text",
    "parse_recognition_result",
    "RecipeCatalog",
    "RecipeMatcher",
    "find_matches",
    "quick_suggestions",
    "ScanPipeline",
    "PantryLensConfig",
    "load_config",
    "PantryLensError",
    "OCRError",
    "NoIngredientsError",
    "CatalogError",
    "GenerationError",
]
