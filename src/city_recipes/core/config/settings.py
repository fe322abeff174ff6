"""Settings for the City Recipes service.

Values come from, highest priority first:

1. keyword arguments to ``Settings(...)``
2. environment variables (``CITY_API__TIMEOUT=5`` sets ``city_api.timeout``)
3. a ``.env`` file in the working directory
4. YAML under ``config/`` (see ``yaml_source``)
5. defaults declared below

``PORT``, ``HOST`` and ``RENDER_EXTERNAL_URL`` are set by the hosting
platform and only ever come from the environment.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Annotated
from urllib.parse import urlsplit

from pydantic import BaseModel, BeforeValidator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


NON_PRODUCTION_ENVIRONMENTS = frozenset({"local", "test", "development"})


def parse_list(v: str | list[str]) -> list[str]:
    """Accept ``"a, b"`` as well as ``["a", "b"]``."""
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    return v


class AppSettings(BaseModel):
    name: str = "City Recipes Service"
    version: str = "0.1.0"
    description: str = "City information, weather forecasts and recipes."
    debug: bool = False


class ServerSettings(BaseModel):
    host: str = "localhost"
    port: int = 3000


class ApiSettings(BaseModel):
    """Routing and CORS.

    ``v1_prefix`` is empty so routes live at ``/cities/...``; set it to
    something like ``/api/v1`` to mount everything below a prefix.
    """

    v1_prefix: str = ""
    cors_origins: Annotated[list[str], BeforeValidator(parse_list)] = []


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "json"
    file: str | None = None


class MetricsSettings(BaseModel):
    enabled: bool = True


class ObservabilitySettings(BaseModel):
    metrics: MetricsSettings = MetricsSettings()


class CityApiSettings(BaseModel):
    """Upstream directory serving ``/cities/{id}`` and ``/weather``."""

    url: str = "https://api-ugi2pflmha-ew.a.run.app"
    timeout: float = 10.0


class RecipeSettings(BaseModel):
    """Accepted recipe length, in characters, bounds included."""

    content_min_length: int = 10
    content_max_length: int = 2000


class Settings(BaseSettings):
    """Root settings object, one nested model per YAML section."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    logging: LoggingSettings = LoggingSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
    city_api: CityApiSettings = CityApiSettings()
    recipes: RecipeSettings = RecipeSettings()

    # Hosting platform
    PORT: int | None = None
    HOST: str | None = None
    RENDER_EXTERNAL_URL: str | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def bind_host(self) -> str:
        """Address uvicorn listens on; every interface when hosted."""
        if self.RENDER_EXTERNAL_URL:
            return "0.0.0.0"  # noqa: S104
        return self.HOST or self.server.host

    @property
    def bind_port(self) -> int:
        return self.PORT or self.server.port

    @property
    def public_url(self) -> str:
        """Base URL listed under ``servers`` in the OpenAPI document.

        The platform terminates TLS, so a hosted deployment is advertised as
        ``https://<external host>`` whatever scheme the variable carries.
        """
        if self.RENDER_EXTERNAL_URL:
            return f"https://{urlsplit(self.RENDER_EXTERNAL_URL).netloc}"
        return f"http://{self.server.host}:{self.bind_port}"

    @property
    def cities_url(self) -> str:
        return f"{self.city_api.url.rstrip('/')}/cities"

    @property
    def weather_url(self) -> str:
        return f"{self.city_api.url.rstrip('/')}/weather"

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def is_testing(self) -> bool:
        return self.APP_ENV == "test"

    @property
    def is_non_production(self) -> bool:
        return self.APP_ENV in NON_PRODUCTION_ENVIRONMENTS

    @property
    def docs_enabled(self) -> bool:
        """True outside production, and on a hosted deploy with a public URL."""
        return self.is_non_production or bool(self.RENDER_EXTERNAL_URL)


@lru_cache
def get_settings() -> Settings:
    """Build the settings once per process."""
    return Settings()
