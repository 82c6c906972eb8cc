"""Shared request helper for OpenWeatherMap endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fishing_forecast.datasources.weather.client import UNITS
from fishing_forecast.errors import ProviderConfigurationError
from fishing_forecast.services.http import session
from fishing_forecast.store import cache_key

if TYPE_CHECKING:
    from fishing_forecast.store import ResponseCache


def get_json(
    url: str,
    source: str,
    lat: float,
    lon: float,
    *,
    api_key: str | None,
    cache: ResponseCache | None,
    ttl: float,
    timeout: float,
) -> dict[str, Any]:
    """GET an OpenWeatherMap endpoint, going through ``cache`` when given.

    Raises:
        ProviderConfigurationError: If no API key is configured.
        requests.HTTPError: If the API returns an error status.
    """
    if not api_key:
        raise ProviderConfigurationError("Weather API key not configured")

    key = cache_key(source, lat, lon)
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            return cached

    params: dict[str, str | float] = {
        "lat": lat,
        "lon": lon,
        "appid": api_key,
        "units": UNITS,
    }
    resp = session.get(url, params=params, timeout=timeout)
    resp.raise_for_status()
    result: dict[str, Any] = resp.json()

    if cache is not None:
        cache.put(key, result, ttl)
    return result
