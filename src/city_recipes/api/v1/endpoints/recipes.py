"""Recipe endpoints.

Provides:
- GET /cities/{cityId}/recipes listing a city's recipes
- POST /cities/{cityId}/recipes adding a recipe to a known city
- DELETE /cities/{cityId}/recipes/{recipeId} removing a recipe
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Path, Response, status

from city_recipes.api.dependencies import (
    CityIdPath,
    fetch_city,
    get_city_client,
    get_existing_city,
    get_recipe_store,
)
from city_recipes.clients.city_api import City, CityApiClient
from city_recipes.core.exceptions import BadRequestError, ErrorResponse, NotFoundError
from city_recipes.observability.logging import get_logger
from city_recipes.schemas.recipe import CreateRecipeRequest, RecipeResponse
from city_recipes.services.recipes import (
    RecipeNotFoundError,
    RecipeStore,
    RecipeValidationError,
)


logger = get_logger(__name__)

router = APIRouter(tags=["Recipes"])

_NOT_FOUND = {"model": ErrorResponse, "description": "City or recipe not found"}
_BAD_GATEWAY = {"model": ErrorResponse, "description": "City directory failed"}


@router.get(
    "/cities/{cityId}/recipes",
    response_model=list[RecipeResponse],
    summary="List recipes for a city",
    description="Recipes submitted for a city, oldest first. Unknown cities have none.",
)
async def list_recipes(
    city_id: CityIdPath,
    store: Annotated[RecipeStore, Depends(get_recipe_store)],
) -> list[RecipeResponse]:
    """List a city's recipes."""
    return [RecipeResponse.from_recipe(r) for r in store.list(city_id)]


@router.post(
    "/cities/{cityId}/recipes",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a recipe to a city",
    description="Content must be a string of 10 to 2000 characters.",
    responses={
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Invalid recipe content",
        },
        status.HTTP_404_NOT_FOUND: _NOT_FOUND,
        status.HTTP_502_BAD_GATEWAY: _BAD_GATEWAY,
    },
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": CreateRecipeRequest.model_json_schema()}
            },
        },
    },
)
async def create_recipe(
    city_id: CityIdPath,
    payload: Annotated[Any, Body()] = None,
    *,
    client: Annotated[CityApiClient, Depends(get_city_client)],
    store: Annotated[RecipeStore, Depends(get_recipe_store)],
) -> RecipeResponse:
    """Validate the content, check the city exists, then store the recipe.

    The body is read loosely so that a missing or non-object body is
    reported as invalid content rather than a schema error.
    """
    request_body = CreateRecipeRequest.from_body(payload)
    try:
        store.validate(request_body.content)
    except RecipeValidationError as e:
        raise BadRequestError(e.reason) from None

    await fetch_city(client, city_id)
    recipe = store.add(city_id, request_body.content)

    logger.info("Recipe created", city_id=city_id, recipe_id=recipe.id)
    return RecipeResponse.from_recipe(recipe)


@router.delete(
    "/cities/{cityId}/recipes/{recipeId}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a recipe",
    responses={
        status.HTTP_404_NOT_FOUND: _NOT_FOUND,
        status.HTTP_502_BAD_GATEWAY: _BAD_GATEWAY,
    },
)
async def delete_recipe(
    city_id: CityIdPath,
    recipe_id: Annotated[int, Path(alias="recipeId", description="ID of the recipe")],
    _city: Annotated[City, Depends(get_existing_city)],
    store: Annotated[RecipeStore, Depends(get_recipe_store)],
) -> Response:
    """Remove a recipe from a known city."""
    try:
        store.remove(city_id, recipe_id)
    except RecipeNotFoundError as e:
        raise NotFoundError(str(e)) from None

    logger.info("Recipe deleted", city_id=city_id, recipe_id=recipe_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
