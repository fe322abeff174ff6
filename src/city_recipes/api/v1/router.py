"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under the configurable api.v1_prefix.
"""

from __future__ import annotations

from fastapi import APIRouter

from city_recipes.api.v1.endpoints import cities, health, recipes, root


router = APIRouter()

router.include_router(root.router)
router.include_router(health.router)
router.include_router(cities.router)
router.include_router(recipes.router)
