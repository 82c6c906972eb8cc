"""Tide extrema from the World Weather Online marine API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import requests

from fishing_forecast.datasources.tides.client import CACHE_SOURCE, MARINE_API
from fishing_forecast.datasources.tides.parse import parse_marine
from fishing_forecast.errors import OptionalCollaboratorFailure
from fishing_forecast.services.http import DEFAULT_TIMEOUT, session
from fishing_forecast.store import DEFAULT_CACHE_TTL, cache_key

if TYPE_CHECKING:
    from fishing_forecast.store import ResponseCache


def fetch_marine(
    lat: float,
    lon: float,
    *,
    api_key: str | None,
    cache: ResponseCache | None = None,
    ttl: float = DEFAULT_CACHE_TTL,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, Any]:
    """
    Fetch marine weather with tide data for a coordinate.

    Args:
        lat: Latitude.
        lon: Longitude.
        api_key: World Weather Online API key.
        cache: Optional response cache checked before, and filled after, the request.
        ttl: Cache lifetime in seconds.
        timeout: Seconds to wait for the provider before giving up.

    Returns:
        Raw API response dict with ``data.weather[*].tides``.

    Raises:
        OptionalCollaboratorFailure: On a missing key, network error, HTTP
            error status, or a response that is not shaped like
            ``data.weather[*].tides[*].tide_data``.
    """
    if not api_key:
        raise OptionalCollaboratorFailure("Marine API key not configured")

    key = cache_key(CACHE_SOURCE, lat, lon)
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            return cached

    params: dict[str, str | float] = {
        "key": api_key,
        "q": f"{lat},{lon}",
        "format": "json",
        "tide": "yes",
        "tp": 1,
    }
    try:
        resp = session.get(MARINE_API, params=params, timeout=timeout)
        resp.raise_for_status()
        result: dict[str, Any] = resp.json()
    except (requests.RequestException, ValueError) as e:
        msg = f"Marine API request failed: {e}"
        raise OptionalCollaboratorFailure(msg) from e

    if not parse_marine(result).data.weather:
        msg = "Invalid response format from Marine API: no weather days"
        raise OptionalCollaboratorFailure(msg)

    if cache is not None:
        cache.put(key, result, ttl)
    return result
