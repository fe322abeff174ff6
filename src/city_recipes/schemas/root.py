"""Body of ``GET /``."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from city_recipes.schemas.base import APIResponse


class RootResponse(APIResponse):
    """Service identity plus where to find the docs and the liveness probe."""

    service: str = Field(..., examples=["City Recipes Service"])
    version: str = Field(..., examples=["0.1.0"])
    status: Literal["operational"] = "operational"
    docs: str = Field(
        ...,
        description='Docs path, or "disabled" in production',
        examples=["/docs"],
    )
    health: str = Field(..., examples=["/health"])
