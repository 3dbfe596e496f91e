"""TMDB API configuration settings.

Upstream metadata provider for discovery, detail, watch providers and genres.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TMDBSettings(BaseSettings):
    """TMDB API configuration.

    Attributes:
        api_key: TMDB API key (required).
        base_url: TMDB API base URL.
        image_base_url: TMDB image CDN base URL used for poster URLs.
        language: Language for API responses (genre names, titles).
        watch_region: ISO 3166-1 region for watch-provider lookups.
        request_timeout: Total deadline per upstream call, in seconds.
        include_adult: Include adult titles in discovery results.
    """

    api_key: str = Field(default="", alias="TMDB_API_KEY")
    base_url: str = Field(
        default="https://api.themoviedb.org/3",
        alias="TMDB_BASE_URL",
    )
    image_base_url: str = Field(
        default="https://image.tmdb.org/t/p/w500",
        alias="TMDB_IMAGE_BASE_URL",
    )

    language: str = Field(default="en-US", alias="TMDB_LANGUAGE")
    watch_region: str = Field(default="US", alias="TMDB_WATCH_REGION")
    request_timeout: float = Field(default=10.0, gt=0, alias="TMDB_REQUEST_TIMEOUT")
    include_adult: bool = Field(default=False, alias="TMDB_INCLUDE_ADULT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        """Check if TMDB API key is configured."""
        return bool(self.api_key and self.api_key != "your_api_key_here")

    @field_validator("watch_region")
    @classmethod
    def validate_watch_region(cls, v: str) -> str:
        """Normalize region code to upper case."""
        v_upper = v.strip().upper()
        if len(v_upper) != 2 or not v_upper.isalpha():
            raise ValueError("TMDB_WATCH_REGION must be a two-letter region code")
        return v_upper

    @field_validator("base_url", "image_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Drop trailing slash so paths can be appended directly."""
        return v.rstrip("/")
