"""API configuration settings.

FastAPI server, response caching and CORS settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseSettings):
    """FastAPI configuration.

    Attributes:
        host: API host address.
        port: API port.
        reload: Enable auto-reload in development.
        title: OpenAPI title.
        version: API version.
        cache_max_age: Shared-cache freshness for rankings (seconds).
        cache_stale_while_revalidate: Stale-tolerant window (seconds).
    """

    host: str = Field(default="0.0.0.0", alias="API_HOST")
    port: int = Field(default=8000, alias="API_PORT")
    reload: bool = Field(default=False, alias="API_RELOAD")
    title: str = Field(default="Box Office Ranking API", alias="API_TITLE")
    version: str = Field(default="1.0.0", alias="API_VERSION")

    cache_max_age: int = Field(default=3600, ge=0, alias="CACHE_MAX_AGE")
    cache_stale_while_revalidate: int = Field(
        default=86400,
        ge=0,
        alias="CACHE_STALE_WHILE_REVALIDATE",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cache_control(self) -> str:
        """Cache-Control header value for successful ranking responses."""
        return (
            f"public, s-maxage={self.cache_max_age}, "
            f"stale-while-revalidate={self.cache_stale_while_revalidate}"
        )


class CORSSettings(BaseSettings):
    """CORS configuration.

    Attributes:
        origins_raw: Comma-separated allowed origins.
    """

    origins_raw: str = Field(
        default="http://localhost:3000",
        alias="CORS_ORIGINS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def origins(self) -> list[str]:
        """Parse origins from comma-separated string."""
        return [o.strip() for o in self.origins_raw.split(",") if o.strip()]
