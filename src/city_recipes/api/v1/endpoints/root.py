"""Service information at ``GET /``."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from city_recipes.api.dependencies import get_app_settings
from city_recipes.core.config import Settings
from city_recipes.schemas.root import RootResponse


router = APIRouter(tags=["Root"])


@router.get("/", response_model=RootResponse, summary="Service information")
async def root(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> RootResponse:
    prefix = settings.api.v1_prefix
    return RootResponse(
        service=settings.app.name,
        version=settings.app.version,
        docs=f"{prefix}/docs" if settings.docs_enabled else "disabled",
        health=f"{prefix}/health",
    )
