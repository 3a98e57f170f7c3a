"""Recipe matching: fuzzy ingredient similarity, scoring and ranking."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from .types import Ingredient, Recipe, RecipeMatch

if TYPE_CHECKING:
    from .catalog import RecipeCatalog

logger = logging.getLogger(__name__)

# Recipes must score strictly above this to be returned at all.
MIN_MATCH_SCORE = 0.2
MAX_EDIT_DISTANCE = 2

_LEADING_NUMBER = re.compile(r"^\d+\.?\d*\s*")
_UNIT_WORD = re.compile(
    r"\b(?:cup|cups|tbsp|tsp|kg|g|ml|l|piece|pieces)s?\b\s*", re.IGNORECASE
)

# (keywords that must all appear, suggestion)
_QUICK_SUGGESTIONS: list[tuple[tuple[str, ...], str]] = [
    (("rice",), "Fried Rice with available vegetables"),
    (("egg",), "Scrambled Eggs or Omelette"),
    (("potato",), "Potato Curry or Mashed Potatoes"),
    (("tomato", "onion"), "Tomato-Onion Curry Base"),
    (("chicken",), "Chicken Stir Fry or Curry"),
]
_GENERIC_SUGGESTIONS = ["Mixed Vegetable Stir Fry", "Soup with available ingredients"]
MAX_QUICK_SUGGESTIONS = 5


def levenshtein_distance(s1: str, s2: str) -> int:
    """Edit distance with unit-cost insertion, deletion and substitution."""
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    previous_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


def is_similar(name1: str, name2: str) -> bool:
    """Check whether two ingredient names denote the same ingredient.

    Matches on containment ("rice" / "brown rice"), a plural "s"
    ("onion" / "onions") or a small typo (edit distance ≤ 2).
    """
    n1 = name1.lower()
    n2 = name2.lower()

    if n1 in n2 or n2 in n1:
        return True
    if n1 == f"{n2}s" or n2 == f"{n1}s":
        return True
    return levenshtein_distance(n1, n2) <= MAX_EDIT_DISTANCE


def extract_ingredient_name(ingredient: str) -> str:
    """Reduce a recipe ingredient line to its key word.

    e.g. "2 cups rice" → "rice", "200g chicken breast" → "chicken"
    """
    cleaned = _LEADING_NUMBER.sub("", ingredient)
    cleaned = _UNIT_WORD.sub("", cleaned, count=1).strip()

    for word in cleaned.split(" "):
        if len(word) > 2:
            return word.lower()
    return cleaned.lower()


def calculate_match(available: set[str], recipe: Recipe) -> RecipeMatch:
    """Score one recipe against a set of lower-cased ingredient names."""
    matched: list[str] = []
    missing: list[str] = []

    for raw in recipe.ingredients:
        name = extract_ingredient_name(raw)
        if name in available or any(is_similar(a, name) for a in available):
            matched.append(name)
        else:
            missing.append(name)

    total = len(recipe.ingredients)
    score = len(matched) / total if total else 0.0

    return RecipeMatch(
        recipe=recipe,
        match_score=score,
        matched_ingredients=matched,
        missing_ingredients=missing,
    )


def find_matches(
    ingredients: list[Ingredient],
    recipes: list[Recipe] | tuple[Recipe, ...],
    min_score: float = MIN_MATCH_SCORE,
) -> list[RecipeMatch]:
    """Rank recipes by how many of their ingredients are available.

    Recipes scoring ``min_score`` or less are dropped. Ties keep catalog
    order.
    """
    available = {i.name.lower() for i in ingredients}
    if not available or not recipes:
        return []

    matches = [
        m for m in (calculate_match(available, r) for r in recipes)
        if m.match_score > min_score
    ]
    return sorted(matches, key=lambda m: m.match_score, reverse=True)


def quick_suggestions(ingredients: list[Ingredient]) -> list[str]:
    """Suggest a few dish ideas from common ingredient combinations."""
    names = [i.name.lower() for i in ingredients]
    suggestions: list[str] = []

    for keywords, suggestion in _QUICK_SUGGESTIONS:
        if all(any(k in n for n in names) for k in keywords):
            suggestions.append(suggestion)

    if len(names) >= 3:
        suggestions.extend(_GENERIC_SUGGESTIONS)

    return suggestions[:MAX_QUICK_SUGGESTIONS]


class RecipeMatcher:
    """Match scanned ingredients against the recipe catalog."""

    def __init__(
        self, catalog: RecipeCatalog, min_score: float = MIN_MATCH_SCORE
    ) -> None:
        self._catalog = catalog
        self._min_score = min_score

    def match_recipes(self, ingredients: list[Ingredient]) -> list[RecipeMatch]:
        """Return catalog recipes ranked by match score.

        Raises:
            CatalogError: The catalog could not be loaded.
        """
        recipes = self._catalog.load()
        matches = find_matches(ingredients, recipes, self._min_score)
        logger.info(
            "Matched %d of %d recipes for %d ingredients",
            len(matches), len(recipes), len(ingredients),
        )
        return matches
