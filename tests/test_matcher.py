"""Tests for ingredient similarity, recipe scoring and ranking."""

import pytest

from pantrylens.catalog import RecipeCatalog
from pantrylens.errors import CatalogError
from pantrylens.matcher import (
    MIN_MATCH_SCORE,
    RecipeMatcher,
    calculate_match,
    extract_ingredient_name,
    find_matches,
    is_similar,
    levenshtein_distance,
    quick_suggestions,
)
from pantrylens.types import Category, Difficulty, Ingredient, Recipe


def _recipe(recipe_id: str, ingredients: list[str]) -> Recipe:
    return Recipe(
        id=recipe_id,
        name=f"Recipe {recipe_id}",
        ingredients=tuple(ingredients),
        instructions=("Cook.",),
        prep_time_minutes=10,
        difficulty=Difficulty.EASY,
        category=Category.DINNER,
    )


class TestLevenshtein:
    def test_classic(self):
        assert levenshtein_distance("kitten", "sitting") == 3

    def test_identical(self):
        assert levenshtein_distance("rice", "rice") == 0

    def test_empty(self):
        assert levenshtein_distance("", "abc") == 3
        assert levenshtein_distance("abc", "") == 3

    def test_symmetric(self):
        assert levenshtein_distance("onion", "union") == levenshtein_distance("union", "onion")


class TestIsSimilar:
    def test_containment(self):
        assert is_similar("rice", "brown rice")
        assert is_similar("brown rice", "rice")

    def test_plural(self):
        assert is_similar("onion", "onions")

    def test_typo(self):
        assert is_similar("tomato", "tomatoe")
        assert is_similar("chiken", "chicken")

    def test_case_insensitive(self):
        assert is_similar("Rice", "RICE")

    def test_unrelated(self):
        assert not is_similar("chicken", "beef")
        assert not is_similar("carrot", "rice")

    def test_short_words_collide(self):
        # Edit distance alone is coarse for short names.
        assert is_similar("tomato", "potato")


class TestExtractIngredientName:
    @pytest.mark.parametrize(
        "line, expected",
        [
            ("2 cups rice", "rice"),
            ("200g chicken breast", "chicken"),
            ("1 kg potatoes", "potatoes"),
            ("0.5 cup sugar", "sugar"),
            ("1 l stock", "stock"),
            ("2 tbsp soy sauce", "soy"),
            ("1 onion", "onion"),
            ("3 Eggs", "eggs"),
        ],
    )
    def test_extracts_key_word(self, line, expected):
        assert extract_ingredient_name(line) == expected

    def test_unit_letters_inside_words_kept(self):
        assert extract_ingredient_name("2 cloves garlic") == "cloves"
        assert extract_ingredient_name("1 lemon") == "lemon"

    def test_short_words_only(self):
        assert extract_ingredient_name("1 ox") == "ox"


class TestCalculateMatch:
    def test_matched_and_missing(self):
        m = calculate_match({"rice"}, _recipe("1", ["2 cups rice", "1 carrot"]))
        assert m.matched_ingredients == ["rice"]
        assert m.missing_ingredients == ["carrot"]
        assert m.match_score == 0.5

    def test_fuzzy_match(self):
        m = calculate_match({"onions"}, _recipe("1", ["1 onion"]))
        assert m.match_score == 1.0

    def test_empty_recipe_scores_zero(self):
        m = calculate_match({"rice"}, _recipe("1", []))
        assert m.match_score == 0.0

    def test_score_bounds(self):
        m = calculate_match({"basil"}, _recipe("1", ["1 basil", "1 cardamom"]))
        assert 0.0 <= m.match_score <= 1.0
        assert len(m.matched_ingredients) + len(m.missing_ingredients) == 2


class TestFindMatches:
    def test_threshold_is_exclusive(self):
        at_threshold = _recipe("1", ["1 basil"] + ["1 cardamom"] * 4)
        assert find_matches([Ingredient("Basil")], [at_threshold]) == []

    def test_just_above_threshold(self):
        above = _recipe("1", ["1 basil"] * 21 + ["1 cardamom"] * 79)
        matches = find_matches([Ingredient("Basil")], [above])
        assert len(matches) == 1
        assert matches[0].match_score == pytest.approx(0.21)

    def test_sorted_descending_and_stable(self):
        a = _recipe("a", ["1 basil", "1 cardamom"])
        b = _recipe("b", ["1 basil", "1 cardamom"])
        c = _recipe("c", ["1 basil"])
        matches = find_matches([Ingredient("Basil")], [a, b, c])
        assert [m.recipe.id for m in matches] == ["c", "a", "b"]

    def test_empty_ingredients(self):
        assert find_matches([], [_recipe("1", ["1 basil"])]) == []

    def test_empty_recipes(self):
        assert find_matches([Ingredient("Basil")], []) == []

    def test_custom_min_score(self):
        r = _recipe("1", ["1 basil", "1 cardamom"])
        assert find_matches([Ingredient("Basil")], [r], min_score=0.5) == []
        assert len(find_matches([Ingredient("Basil")], [r], min_score=0.4)) == 1

    def test_default_threshold(self):
        assert MIN_MATCH_SCORE == 0.2


class TestQuickSuggestions:
    def test_keyword_suggestions(self):
        result = quick_suggestions([Ingredient("Rice"), Ingredient("Eggs")])
        assert result == [
            "Fried Rice with available vegetables",
            "Scrambled Eggs or Omelette",
        ]

    def test_combination_and_generic(self):
        result = quick_suggestions(
            [Ingredient("Tomato"), Ingredient("Onion"), Ingredient("Potato")]
        )
        assert result == [
            "Potato Curry or Mashed Potatoes",
            "Tomato-Onion Curry Base",
            "Mixed Vegetable Stir Fry",
            "Soup with available ingredients",
        ]

    def test_capped_at_five(self):
        names = ["Rice", "Egg", "Potato", "Tomato", "Onion", "Chicken"]
        result = quick_suggestions([Ingredient(n) for n in names])
        assert len(result) == 5
        assert "Mixed Vegetable Stir Fry" not in result

    def test_empty(self):
        assert quick_suggestions([]) == []


class TestRecipeMatcher:
    def test_bundled_catalog(self):
        matcher = RecipeMatcher(RecipeCatalog())
        matches = matcher.match_recipes(
            [Ingredient("Rice"), Ingredient("Eggs"), Ingredient("Onion")]
        )
        assert matches[0].recipe.name == "Vegetable Fried Rice"
        assert matches[0].match_score == 0.5
        scores = [m.match_score for m in matches]
        assert scores == sorted(scores, reverse=True)
        assert all(s > MIN_MATCH_SCORE for s in scores)

    def test_no_ingredients(self):
        matcher = RecipeMatcher(RecipeCatalog())
        assert matcher.match_recipes([]) == []

    def test_missing_catalog_raises(self, tmp_path):
        matcher = RecipeMatcher(RecipeCatalog(tmp_path / "missing.json"))
        with pytest.raises(CatalogError):
            matcher.match_recipes([Ingredient("Rice")])


class TestScoringExamples:
    def test_full_match(self):
        m = calculate_match({"rice", "onion"}, _recipe("1", ["2 cups rice", "1 onion"]))
        assert m.match_score == 1.0
        assert m.matched_ingredients == ["rice", "onion"]
        assert m.missing_ingredients == []

    def test_rice_is_not_potato(self):
        assert not is_similar("rice", "potato")

    def test_equal_scores_keep_catalog_order(self):
        r1 = _recipe("r1", ["1 basil"] * 9 + ["1 cardamom"])
        r2 = _recipe("r2", ["1 basil", "1 cardamom"])
        r3 = _recipe("r3", ["1 basil"] * 9 + ["1 cardamom"])
        r4 = _recipe("r4", ["1 basil"] * 3 + ["1 cardamom"] * 7)
        matches = find_matches([Ingredient("Basil")], [r1, r2, r3, r4])
        assert [m.recipe.id for m in matches] == ["r1", "r3", "r2", "r4"]
        assert [m.match_score for m in matches] == pytest.approx([0.9, 0.9, 0.5, 0.3])
