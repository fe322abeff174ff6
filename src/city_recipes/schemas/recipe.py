"""Recipe request and response schemas."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field

from city_recipes.schemas.base import APIRequest, APIResponse


if TYPE_CHECKING:
    from city_recipes.services.recipes import Recipe


class CreateRecipeRequest(APIRequest):
    """Body of a recipe submission.

    ``content`` is typed loosely so that type and length problems are
    reported by the recipe store as 400 responses with a readable reason.
    """

    content: Any = Field(
        default=None,
        description="Recipe text, 10 to 2000 characters",
        examples=["Boil pasta for ten minutes."],
        json_schema_extra={"type": "string"},
    )

    @classmethod
    def from_body(cls, payload: Any) -> CreateRecipeRequest:
        """Build a request from a decoded JSON body of any shape."""
        if isinstance(payload, dict):
            return cls.model_validate(payload)
        return cls()


class RecipeResponse(APIResponse):
    """A recipe as returned by the API."""

    id: int = Field(..., description="Recipe identifier", examples=[1])
    content: str = Field(
        ...,
        description="Recipe text",
        examples=["Boil pasta for ten minutes."],
    )

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> RecipeResponse:
        """Build a response from a stored recipe."""
        return cls(id=recipe.id, content=recipe.content)
