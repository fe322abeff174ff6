"""Liveness and readiness probe bodies."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(..., examples=["healthy"])
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    version: str = Field(..., examples=["0.1.0"])
    environment: str = Field(..., examples=["production"])


class ReadinessResponse(HealthResponse):
    """Adds the state of each collaborator the service needs to answer."""

    dependencies: dict[str, Literal["initialized", "not_initialized"]] = Field(
        default_factory=dict,
        examples=[{"city_api": "initialized"}],
    )
