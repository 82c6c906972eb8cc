"""JSON serialization helpers for forecast timelines.

Instants are written as ISO-8601 strings; enums as their string values.
The resulting dicts are what the store persists and renderers consume.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fishing_forecast.analysis.timeline import ForecastTimeline, ScoredPoint
    from fishing_forecast.datasources.moon.models import MoonPhase
    from fishing_forecast.datasources.tides.models import TideReading
    from fishing_forecast.datasources.weather.models import WeatherSnapshot


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def moon_phase_to_dict(moon: MoonPhase) -> dict[str, Any]:
    return {
        "phase": moon.phase,
        "illumination": moon.illumination,
        "age": moon.age,
        "next_full_moon": _iso(moon.next_full_moon),
        "next_new_moon": _iso(moon.next_new_moon),
    }


def tide_reading_to_dict(tide: TideReading) -> dict[str, Any]:
    return {
        "height": tide.height,
        "state": str(tide.state),
        "next_high": _iso(tide.next_high),
        "next_low": _iso(tide.next_low),
    }


def weather_to_dict(weather: WeatherSnapshot) -> dict[str, Any]:
    return {
        "wind_speed": weather.wind_speed,
        "wind_direction": weather.wind_direction,
        "temperature": weather.temperature,
        "precipitation": weather.precipitation,
        "cloud_cover": weather.cloud_cover,
        "pressure": weather.pressure,
    }


def point_to_dict(point: ScoredPoint) -> dict[str, Any]:
    """Serialize one scored point.

    Optional parts (tide, moon phase) are written as None when absent.
    """
    return {
        "timestamp": point.timestamp.isoformat(),
        "score": point.score,
        "condition": str(point.condition),
        "weather": weather_to_dict(point.weather),
        "tide": tide_reading_to_dict(point.tide) if point.tide is not None else None,
        "moon_phase": moon_phase_to_dict(point.moon_phase) if point.moon_phase else None,
        "reasons": list(point.reasons),
    }


def timeline_to_dict(
    timeline: ForecastTimeline,
    lat: float | None = None,
    lon: float | None = None,
) -> dict[str, Any]:
    """Serialize a timeline to a JSON-compatible dict.

    Args:
        timeline: Timeline to serialize.
        lat: Latitude the forecast was built for, if known.
        lon: Longitude the forecast was built for, if known.

    Returns:
        Dict with ``location``, ``current`` (the first point) and ``points``
        (every point, current included, in time order).
    """
    points = [point_to_dict(p) for p in timeline.points]
    return {
        "location": {"lat": lat, "lon": lon},
        "current": points[0] if points else None,
        "points": points,
    }
