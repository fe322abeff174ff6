"""In-memory recipe collection.

Recipes are grouped per city and kept in insertion order. Ids come from a
single store-wide counter, so they are unique within a city and across
cities. All operations run under one lock since FastAPI may call into the
store from its thread pool.
"""

from __future__ import annotations

import itertools
import threading
from typing import Final

from city_recipes.services.recipes.exceptions import (
    RecipeNotFoundError,
    RecipeValidationError,
)
from city_recipes.services.recipes.models import Recipe


DEFAULT_MIN_LENGTH: Final[int] = 10
DEFAULT_MAX_LENGTH: Final[int] = 2000


class RecipeStore:
    """Per-city recipe collection with validation and id assignment.

    Example:
        ```python
        store = RecipeStore()
        recipe = store.add("paris", "Boil pasta for ten minutes.")
        store.list("paris")  # [Recipe(id=1, content="Boil pasta ...")]
        store.remove("paris", recipe.id)
        ```
    """

    def __init__(
        self,
        *,
        min_length: int = DEFAULT_MIN_LENGTH,
        max_length: int = DEFAULT_MAX_LENGTH,
    ) -> None:
        """Initialize an empty store.

        Args:
            min_length: Minimum accepted content length (inclusive).
            max_length: Maximum accepted content length (inclusive).
        """
        if min_length > max_length:
            msg = f"min_length ({min_length}) exceeds max_length ({max_length})"
            raise ValueError(msg)
        self.min_length = min_length
        self.max_length = max_length
        self._by_city: dict[str, list[Recipe]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def list(self, city_id: str) -> list[Recipe]:
        """Return the city's recipes in insertion order.

        Unknown cities yield an empty list.
        """
        with self._lock:
            return list(self._by_city.get(city_id, ()))

    def add(self, city_id: str, content: object) -> Recipe:
        """Validate content and append a new recipe to the city.

        Args:
            city_id: City identifier, any string.
            content: Submitted recipe text.

        Returns:
            The created recipe.

        Raises:
            RecipeValidationError: If content is not a string or its length
                is out of bounds. The store is left unchanged.
        """
        text = self.validate(content)
        with self._lock:
            recipe = Recipe(id=next(self._ids), content=text)
            self._by_city.setdefault(city_id, []).append(recipe)
        return recipe

    def remove(self, city_id: str, recipe_id: int) -> None:
        """Remove a single recipe from a city.

        Ids match on exact type and value: ``True`` or ``"1"`` never match
        recipe ``1``.

        Raises:
            RecipeNotFoundError: If the city has no recipes or none has the id.
        """
        with self._lock:
            recipes = self._by_city.get(city_id)
            if recipes is None:
                raise RecipeNotFoundError(city_id)

            for index, recipe in enumerate(recipes):
                if type(recipe.id) is type(recipe_id) and recipe.id == recipe_id:
                    del recipes[index]
                    return

        raise RecipeNotFoundError(city_id, recipe_id)

    def validate(self, content: object) -> str:
        """Check content against the type and length rules.

        Returns:
            The content, unchanged.

        Raises:
            RecipeValidationError: With the first rule the content breaks.
        """
        if not isinstance(content, str):
            raise RecipeValidationError("Recipe content must be a string")
        if not content.strip():
            raise RecipeValidationError("Recipe content cannot be empty")
        if len(content) < self.min_length:
            raise RecipeValidationError(
                f"Recipe content must be at least {self.min_length} characters long"
            )
        if len(content) > self.max_length:
            raise RecipeValidationError(
                f"Recipe content must be at most {self.max_length} characters long"
            )
        return content
