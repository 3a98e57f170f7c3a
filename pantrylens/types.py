"""Core data types shared by the parser, matcher, catalog and history store."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

DEFAULT_QUANTITY = "1"
DEFAULT_UNIT = "piece"
PARSED_CONFIDENCE = 0.8


@dataclass
class Ingredient:
    name: str
    quantity: str = DEFAULT_QUANTITY
    unit: str = DEFAULT_UNIT
    confidence: float = 1.0  # 0.8 when parsed from OCR, 1.0 when typed in


class Difficulty(Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    @classmethod
    def parse(cls, value: Any) -> Difficulty:
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Unknown difficulty: {value!r}")


class Category(Enum):
    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"
    DESSERT = "Dessert"

    @classmethod
    def parse(cls, value: Any) -> Category:
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Unknown category: {value!r}")


@dataclass(frozen=True)
class Recipe:
    """Read-only catalog entry."""

    id: str
    name: str
    ingredients: tuple[str, ...]
    instructions: tuple[str, ...]
    prep_time_minutes: int
    difficulty: Difficulty
    category: Category
    description: str = ""
    servings: int = 4
    tags: frozenset[str] = frozenset()
    image_url: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Recipe:
        """Build a Recipe from a catalog JSON object.

        Keys follow the catalog's camelCase naming; unknown keys are ignored.

        Raises:
            KeyError: A required key is missing.
            ValueError: difficulty/category is not a known value.
        """
        return cls(
            id=str(data["id"]),
            name=data["name"],
            description=data.get("description", ""),
            ingredients=tuple(data["ingredients"]),
            instructions=tuple(data["instructions"]),
            prep_time_minutes=int(data["prepTimeMinutes"]),
            servings=int(data.get("servings", 4)),
            difficulty=Difficulty.parse(data["difficulty"]),
            category=Category.parse(data["category"]),
            tags=frozenset(data.get("tags", [])),
            image_url=data.get("imageUrl"),
        )


@dataclass
class RecipeMatch:
    recipe: Recipe
    match_score: float  # 0.0 - 1.0
    matched_ingredients: list[str] = field(default_factory=list)
    missing_ingredients: list[str] = field(default_factory=list)


@dataclass
class ScanResult:
    timestamp: float
    raw_text: str
    ingredients: list[Ingredient]
    image_path: str | None = None
    processed_image_path: str | None = None
    id: int = 0


@dataclass
class AIRecipe:
    title: str
    ingredients: list[str] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    cooking_time_minutes: int | None = None
    tips: list[str] = field(default_factory=list)
    generated_at: float = field(default_factory=time.time)
