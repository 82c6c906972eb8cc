"""5-day / 3-hour forecast from the OpenWeatherMap forecast API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fishing_forecast.datasources.weather._request import get_json
from fishing_forecast.datasources.weather.client import FORECAST_CACHE_SOURCE, OWM_FORECAST_API
from fishing_forecast.services.http import DEFAULT_TIMEOUT
from fishing_forecast.store import DEFAULT_CACHE_TTL

if TYPE_CHECKING:
    from fishing_forecast.store import ResponseCache


def fetch_forecast(
    lat: float,
    lon: float,
    *,
    api_key: str | None,
    cache: ResponseCache | None = None,
    ttl: float = DEFAULT_CACHE_TTL,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, Any]:
    """
    Fetch the multi-step weather forecast.

    Args:
        lat: Latitude.
        lon: Longitude.
        api_key: OpenWeatherMap API key.
        cache: Optional response cache.
        ttl: Cache lifetime in seconds.
        timeout: Seconds to wait for the provider.

    Returns:
        Raw API response dict with a ``list`` of forecast steps.
    """
    return get_json(
        OWM_FORECAST_API,
        FORECAST_CACHE_SOURCE,
        lat,
        lon,
        api_key=api_key,
        cache=cache,
        ttl=ttl,
        timeout=timeout,
    )
