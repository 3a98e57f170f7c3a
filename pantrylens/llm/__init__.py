"""LLM recipe generation: backend base class, prompt, and factory."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..errors import GenerationError
from ..types import AIRecipe
from .response import parse_recipes

if TYPE_CHECKING:
    from ..config import PantryLensConfig

logger = logging.getLogger(__name__)

RECIPES_PER_REQUEST = 2


def build_prompt(ingredient_names: list[str], count: int = RECIPES_PER_REQUEST) -> str:
    """Build the recipe generation prompt for a list of ingredients."""
    ingredient_list = ", ".join(ingredient_names)
    return f"""\
You are a helpful cooking assistant. Generate creative and practical recipes
using the given ingredients.

Create {count} simple recipes using these ingredients: {ingredient_list}

For each recipe, start with a line "Recipe N: <name>" and then provide:
Ingredients: (one per line, with quantities)
Instructions: (numbered steps)
Cooking time: (minutes)
Tips: (one helpful tip)
"""


class LLMBackend(ABC):
    """Abstract base for free-form recipe generation."""

    @abstractmethod
    async def generate_text(self, prompt: str) -> str:
        """Return the model's completion for *prompt*.

        Raises:
            GenerationError: The model call failed.
        """
        ...

    async def generate_recipes(self, ingredient_names: list[str]) -> list[AIRecipe]:
        """Ask the model for recipes and parse its free-text answer.

        Raises:
            GenerationError: No ingredients were given, the call failed, or
                nothing could be parsed from the reply.
        """
        if not ingredient_names:
            raise GenerationError("No ingredients provided")

        prompt = build_prompt(ingredient_names)
        logger.debug("Generating recipes with prompt: %s", prompt)
        response = await self.generate_text(prompt)
        logger.debug("LLM response: %s", response)

        recipes = parse_recipes(response)
        if not recipes:
            raise GenerationError("Failed to generate recipes. Please try again.")
        return recipes


def create_backend(config: PantryLensConfig) -> LLMBackend:
    """Create an LLM backend based on configuration."""
    backend_name = config.llm.backend

    match backend_name:
        case "claude":
            from .claude import ClaudeLLMBackend

            return ClaudeLLMBackend(
                api_key=config.llm.claude.api_key,
                model=config.llm.claude.model,
                max_tokens=config.llm.max_tokens,
            )
        case "gemini":
            from .gemini import GeminiLLMBackend

            return GeminiLLMBackend(
                api_key=config.llm.gemini.api_key,
                model=config.llm.gemini.model,
                max_tokens=config.llm.max_tokens,
            )
        case _:
            raise ValueError(
                f"Unknown LLM backend: {backend_name!r} "
                f"(choose one of claude / gemini)"
            )


__all__ = [
    "LLMBackend",
    "build_prompt",
    "create_backend",
    "parse_recipes",
]
