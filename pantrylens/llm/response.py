"""Best-effort parsing of free-text LLM recipe output."""

from __future__ import annotations

import re

from ..types import AIRecipe

DEFAULT_TITLE = "AI Generated Recipe"
FALLBACK_TITLE = "AI Recipe Suggestion"
FALLBACK_MAX_LINES = 10

# "Recipe 1:", "### Recipe 2", "## Recipe"
_RECIPE_MARKER = re.compile(
    r"^[ \t]*(?:#{1,3}[ \t]*recipe\b[ \t]*\d*|recipe[ \t]+\d+)[ \t]*[:.]?",
    re.IGNORECASE | re.MULTILINE,
)
_TITLE = re.compile(r"^(?:recipe\s+)?(?:name|title)\s*:\s*(.*)$", re.IGNORECASE)
_INGREDIENTS = re.compile(r"^ingredients?\s*(?:needed)?\s*:?\s*$", re.IGNORECASE)
_INSTRUCTIONS = re.compile(
    r"^(?:instructions?|steps?|directions?|method)\s*:?\s*$", re.IGNORECASE
)
_TIME = re.compile(r"^(?:cooking\s+)?time\s*:\s*(.*)$", re.IGNORECASE)
_TIPS = re.compile(r"^tips?\s*:\s*(.*)$", re.IGNORECASE)
_BULLET = re.compile(r"^(?:[-*•]\s*)+")
_STEP_NUMBER = re.compile(r"^\d+[.)]\s*")
_DIGITS = re.compile(r"\d+")


def _header_text(line: str) -> str:
    # "**Ingredients:**", "## Title: ..."
    return line.replace("*", "").strip().lstrip("#").strip()


def _item_text(line: str) -> str:
    return _BULLET.sub("", line).strip()


def parse_recipe_section(section: str) -> AIRecipe | None:
    """Parse one recipe's worth of text.

    Returns:
        An AIRecipe when the section has ingredients or instructions,
        otherwise None.
    """
    lines = [l.strip() for l in section.splitlines() if l.strip()]
    if not lines:
        return None

    title = DEFAULT_TITLE
    ingredients: list[str] = []
    instructions: list[str] = []
    tips: list[str] = []
    cooking_time: int | None = None
    current = ""

    for line in lines:
        header = _header_text(line)
        title_match = _TITLE.match(header)
        time_match = _TIME.match(header)
        tips_match = _TIPS.match(header)

        if title_match:
            if title_match.group(1).strip():
                title = title_match.group(1).strip()
            current = "title"
        elif _INGREDIENTS.match(header):
            current = "ingredients"
        elif _INSTRUCTIONS.match(header):
            current = "instructions"
        elif time_match:
            digits = _DIGITS.search(time_match.group(1))
            cooking_time = int(digits.group()) if digits else None
            current = "time"
        elif tips_match:
            if tips_match.group(1).strip():
                tips.append(tips_match.group(1).strip())
            current = "tips"
        else:
            item = _item_text(line)
            if not item:
                continue
            match current:
                case "ingredients":
                    ingredients.append(item)
                case "instructions":
                    instructions.append(_STEP_NUMBER.sub("", item).strip())
                case "tips":
                    tips.append(item)
                case "":
                    if title == DEFAULT_TITLE and len(header) > 5:
                        title = header

    if not ingredients and not instructions:
        return None

    return AIRecipe(
        title=title,
        ingredients=ingredients,
        instructions=instructions,
        cooking_time_minutes=cooking_time,
        tips=tips,
    )


def parse_recipes(response: str) -> list[AIRecipe]:
    """Split an LLM reply into recipes.

    If no section parses but the reply has text, a single fallback recipe
    carrying the first lines as instructions is returned.
    """
    sections = [s for s in _RECIPE_MARKER.split(response) if s.strip()]
    recipes = [r for r in (parse_recipe_section(s) for s in sections) if r is not None]

    if not recipes and response.strip():
        lines = [l.strip() for l in response.splitlines() if l.strip()]
        recipes.append(
            AIRecipe(title=FALLBACK_TITLE, instructions=lines[:FALLBACK_MAX_LINES])
        )
    return recipes
