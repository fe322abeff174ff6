"""Per-city recipe collection."""

from city_recipes.services.recipes.exceptions import (
    RecipeError,
    RecipeNotFoundError,
    RecipeValidationError,
)
from city_recipes.services.recipes.models import Recipe
from city_recipes.services.recipes.store import RecipeStore


__all__ = [
    "Recipe",
    "RecipeError",
    "RecipeNotFoundError",
    "RecipeStore",
    "RecipeValidationError",
]
