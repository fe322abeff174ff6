"""Application lifecycle events."""

from city_recipes.core.events.lifespan import lifespan


__all__ = ["lifespan"]
