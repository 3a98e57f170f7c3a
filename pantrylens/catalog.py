"""Static recipe catalog loader (loaded once, cached)."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

from .errors import CatalogError
from .types import Recipe

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = Path(__file__).parent / "data" / "recipes.json"


class RecipeCatalog:
    """Read-only recipe catalog backed by a JSON file.

    The file is parsed on the first ``load()`` and cached for the lifetime
    of the catalog. A process-wide instance over the bundled catalog is
    available from ``RecipeCatalog.default()``.

    Usage:
        catalog = RecipeCatalog.default()
        recipe = catalog.get_by_id("1")
    """

    _default: RecipeCatalog | None = None

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path).expanduser() if path else BUNDLED_CATALOG
        self._recipes: tuple[Recipe, ...] | None = None
        self._lock = threading.Lock()

    @classmethod
    def default(cls) -> RecipeCatalog:
        if cls._default is None:
            cls._default = cls()
        return cls._default

    @classmethod
    def reset(cls) -> None:
        """Drop the shared default catalog (for testing)."""
        cls._default = None

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> tuple[Recipe, ...]:
        """Return all recipes, reading the file on first use.

        Raises:
            CatalogError: The file could not be read or is not a valid
                recipe list. An empty list is a valid, empty catalog.
        """
        if self._recipes is not None:
            return self._recipes

        with self._lock:
            if self._recipes is None:
                self._recipes = self._read()
                logger.info("Loaded %d recipes from %s", len(self._recipes), self._path)
        return self._recipes

    def _read(self) -> tuple[Recipe, ...]:
        try:
            with open(self._path, encoding="utf-8") as f:
                raw = f.read()
        except OSError as e:
            raise CatalogError(f"Failed to load recipes from {self._path}") from e

        try:
            entries = json.loads(raw)
            if not isinstance(entries, list):
                raise ValueError("catalog root must be a JSON list")
            return tuple(Recipe.from_dict(entry) for entry in entries)
        except (ValueError, KeyError, TypeError) as e:
            raise CatalogError(f"Failed to parse recipes in {self._path}: {e}") from e

    def get_by_id(self, recipe_id: str) -> Recipe | None:
        for recipe in self.load():
            if recipe.id == recipe_id:
                return recipe
        return None

    def by_category(self, category: str) -> list[Recipe]:
        """Recipes whose category equals *category* (case-insensitive)."""
        wanted = category.strip().lower()
        return [r for r in self.load() if r.category.value.lower() == wanted]

    def by_tag(self, tag: str) -> list[Recipe]:
        """Recipes carrying *tag* (case-insensitive)."""
        wanted = tag.strip().lower()
        return [r for r in self.load() if any(t.lower() == wanted for t in r.tags)]
