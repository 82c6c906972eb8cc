"""
Prefect flow for building the fishing forecast.

Fetches weather (mandatory) and tides (optional) concurrently, scores
current conditions plus every forecast step, and saves the timeline to
``derived/forecast.json``.

Run locally:
    python -m fishing_forecast.flows.forecast
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

from prefect import flow, task

from fishing_forecast.analysis.timeline import ForecastTimeline, build_from_payloads
from fishing_forecast.config import get_settings
from fishing_forecast.datasources import tides, weather
from fishing_forecast.datasources.tides.models import TideReading
from fishing_forecast.errors import OptionalCollaboratorFailure
from fishing_forecast.serialization import timeline_to_dict
from fishing_forecast.store import DataStore

logger = logging.getLogger(__name__)

# Data store; also the response cache handed to the fetch functions
store = DataStore(Path("data"))

FORECAST_PATH = Path("derived/forecast.json")

# How long a built timeline is considered current
REFRESH_WINDOW = timedelta(minutes=30)


# =============================================================================
# Fetch tasks
# =============================================================================


@task(name="fetch-weather", retries=2, retry_delay_seconds=5)
def fetch_weather(
    lat: float,
    lon: float,
    api_key: str | None,
    timeout: float,
    ttl: float,
) -> dict[str, Any]:
    """Fetch current conditions and the 3-hourly forecast."""
    current = weather.fetch_current(
        lat, lon, api_key=api_key, cache=store, ttl=ttl, timeout=timeout
    )
    forecast = weather.fetch_forecast(
        lat, lon, api_key=api_key, cache=store, ttl=ttl, timeout=timeout
    )
    return {"current": current, "forecast": forecast}


@task(name="fetch-tides")
def fetch_tides(
    lat: float,
    lon: float,
    api_key: str | None,
    timeout: float,
    ttl: float,
    now: datetime,
) -> TideReading | None:
    """Fetch tide extrema and reconstruct the tide at ``now``.

    Raises:
        OptionalCollaboratorFailure: If the marine API could not be used.
    """
    payload = tides.fetch_marine(
        lat, lon, api_key=api_key, cache=store, ttl=ttl, timeout=timeout
    )
    return tides.reading_from_payload(payload, now)


# =============================================================================
# Build and save tasks
# =============================================================================


@task(name="build-timeline")
def build_timeline(
    weather_data: dict[str, Any],
    tide: TideReading | None,
) -> ForecastTimeline:
    """Score current conditions and forecast steps into a timeline."""
    return build_from_payloads(weather_data["current"], weather_data["forecast"], tide)


@task(name="save-timeline")
def save_timeline(
    timeline: ForecastTimeline,
    lat: float,
    lon: float,
    now: datetime,
) -> Path:
    """Save the serialized timeline via store."""
    return store.write(
        FORECAST_PATH,
        timeline_to_dict(timeline, lat=lat, lon=lon),
        source="openweathermap.org+worldweatheronline.com",
        valid_until=now + REFRESH_WINDOW,
        lat=lat,
        lon=lon,
    )


# =============================================================================
# Flow
# =============================================================================


@flow(name="fishing-forecast", log_prints=True)
def forecast_all(
    lat: float | None = None,
    lon: float | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Build and save the fishing forecast for a location.

    Weather and tides are fetched concurrently. A weather failure fails the
    flow; a tide failure only drops the tide terms from the scores.

    Args:
        lat: Latitude (defaults to the configured location).
        lon: Longitude (defaults to the configured location).
        now: Instant the tide is evaluated at (defaults to the current time).

    Returns:
        Summary with point count, current score and condition, and whether
        tide data was available.
    """
    settings = get_settings()
    lat = settings.lat if lat is None else lat
    lon = settings.lon if lon is None else lon
    now = datetime.now(UTC) if now is None else now

    print(f"Fetching weather and tides for ({lat}, {lon})...")
    weather_future = fetch_weather.submit(
        lat,
        lon,
        settings.weather_api_key,
        settings.request_timeout,
        settings.cache_ttl_seconds,
    )
    tide_future = fetch_tides.submit(
        lat,
        lon,
        settings.marine_api_key,
        settings.request_timeout,
        settings.cache_ttl_seconds,
        now,
    )
    # Join both before looking at either outcome
    weather_future.wait()
    tide_future.wait()

    tide: TideReading | None
    try:
        tide = tide_future.result()
    except OptionalCollaboratorFailure as e:
        logger.warning("Tide data unavailable: %s", e)
        print(f"Warning: tide data unavailable ({e}). Scoring without tides.")
        tide = None
    if tide is None:
        print("No tide reading; tide terms are skipped.")

    weather_data = weather_future.result()

    print("Building timeline...")
    timeline = build_timeline(weather_data, tide)

    output_path = save_timeline(timeline, lat, lon, now)
    current = timeline.current
    print(
        f"Saved {len(timeline)} points to {output_path}. "
        f"Now: {current.score} ({current.condition})"
    )

    return {
        "points": len(timeline),
        "current_score": current.score,
        "current_condition": str(current.condition),
        "has_tide": tide is not None,
        "output": str(output_path),
    }


if __name__ == "__main__":
    result = forecast_all()
    print(f"Flow complete: {result}")
