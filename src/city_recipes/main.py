"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn city_recipes.main:app --reload

    # Or via the console script, honouring HOST/PORT/RENDER_EXTERNAL_URL
    city-recipes
"""

from city_recipes.factory import create_app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    from city_recipes.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "city_recipes.main:app",
        host=settings.bind_host,
        port=settings.bind_port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    run()
