"""Recipe collection exceptions.

These exceptions are raised by the RecipeStore and converted to HTTP
responses by the endpoint layer.
"""

from __future__ import annotations


class RecipeError(Exception):
    """Base exception for recipe collection errors."""


class RecipeValidationError(RecipeError):
    """Raised when submitted recipe content is rejected.

    The message is a human-readable reason suitable for API clients.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class RecipeNotFoundError(RecipeError):
    """Raised when a city has no recipes or the recipe id is unknown."""

    def __init__(self, city_id: str, recipe_id: object | None = None) -> None:
        self.city_id = city_id
        self.recipe_id = recipe_id
        if recipe_id is None:
            message = f"No recipes found for city '{city_id}'"
        else:
            message = f"Recipe '{recipe_id}' not found for city '{city_id}'"
        super().__init__(message)
