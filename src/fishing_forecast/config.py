"""Application settings loaded from the environment.

Every field can be set with a ``FISHING_`` prefixed environment variable
(``FISHING_LAT``, ``FISHING_WEATHER_API_KEY``, ...) or from a ``.env`` file
in the working directory.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FISHING_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    app_name: str = "fishing-forecast"
    app_env: str = "development"
    debug: bool = False

    # Default location: Monterey Bay
    lat: float = Field(default=36.6002, ge=-90, le=90)
    lon: float = Field(default=-121.8947, ge=-180, le=180)

    api_port: int = 8000

    # Provider credentials; missing keys only fail when a fetch runs
    weather_api_key: str | None = None
    marine_api_key: str | None = None

    request_timeout: float = Field(default=30.0, gt=0)
    cache_ttl_seconds: float = Field(default=3600.0, ge=0)

    temperature_unit: Literal["fahrenheit", "celsius"] = "fahrenheit"
    wind_unit: Literal["mph", "kph"] = "mph"
    pressure_unit: Literal["hPa", "inHg"] = "hPa"


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings instance."""
    return Settings()
