"""Probe endpoints for the hosting platform.

``/health`` only proves the process answers. ``/ready`` also reports
whether the city API client came up during startup; without it every
city-dependent route answers 503.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from city_recipes.api.dependencies import get_app_settings
from city_recipes.core.config import Settings
from city_recipes.schemas.health import HealthResponse, ReadinessResponse


router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse, summary="Liveness probe")
async def health_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get("/ready", response_model=ReadinessResponse, summary="Readiness probe")
async def readiness_check(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ReadinessResponse:
    city_api_up = getattr(request.app.state, "city_client", None) is not None

    return ReadinessResponse(
        status="ready" if city_api_up else "degraded",
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies={
            "city_api": "initialized" if city_api_up else "not_initialized",
        },
    )
