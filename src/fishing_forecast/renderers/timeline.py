"""Forecast timeline renderers.

Current-conditions card plus one table row per forecast point. Input is
the dict produced by ``serialization.timeline_to_dict`` (as read back from
the store).
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Any

from fishing_forecast.renderers import render_template
from fishing_forecast.renderers.date_utils import date_label, time_label
from fishing_forecast.renderers.weather_utils import (
    format_pressure,
    format_temperature,
    format_wind,
)


def _tide_text(tide: dict[str, Any] | None) -> str:
    if not tide:
        return "No tide data"
    return f"{tide['height']:.2f} m {tide['state']}"


def _moon_text(moon: dict[str, Any] | None) -> str:
    if not moon:
        return "-"
    return f"{moon['phase']} ({moon['illumination']}%)"


def _row(
    point: dict[str, Any],
    tz: tzinfo | None,
    temperature_unit: str,
    wind_unit: str,
    pressure_unit: str,
) -> dict[str, Any]:
    weather = point["weather"]
    return {
        "time": time_label(point["timestamp"], tz),
        "score": point["score"],
        "condition": point["condition"],
        "wind": format_wind(weather["wind_speed"], weather["wind_direction"], wind_unit),
        "temperature": format_temperature(weather["temperature"], temperature_unit),
        "pressure": format_pressure(weather["pressure"], pressure_unit),
        "clouds": f"{weather['cloud_cover']:.0f}%",
        "precipitation": f"{weather['precipitation']:.0f}%",
        "tide": _tide_text(point.get("tide")),
        "moon": _moon_text(point.get("moon_phase")),
        "reasons": point.get("reasons", []),
    }


def build_current_html(
    timeline_data: dict[str, Any],
    tz: tzinfo | None = None,
    temperature_unit: str = "fahrenheit",
    wind_unit: str = "mph",
    pressure_unit: str = "hPa",
) -> str:
    """Build the current-conditions card."""
    current = timeline_data.get("current")
    if not current:
        return "<p>No current conditions available.</p>"

    row = _row(current, tz, temperature_unit, wind_unit, pressure_unit)
    tide = current.get("tide") or {}
    moon = current.get("moon_phase") or {}
    return render_template(
        "current.html.j2",
        row=row,
        next_high=date_label(tide.get("next_high"), tz),
        next_low=date_label(tide.get("next_low"), tz),
        next_full_moon=date_label(moon.get("next_full_moon"), tz),
        next_new_moon=date_label(moon.get("next_new_moon"), tz),
    )


def build_timeline_html(
    timeline_data: dict[str, Any],
    tz: tzinfo | None = None,
    temperature_unit: str = "fahrenheit",
    wind_unit: str = "mph",
    pressure_unit: str = "hPa",
) -> str:
    """Build the forecast table, one row per point after the current one."""
    points = timeline_data.get("points", [])[1:]
    if not points:
        return "<p>No forecast data available.</p>"

    rows = [_row(p, tz, temperature_unit, wind_unit, pressure_unit) for p in points]
    return render_template("timeline.html.j2", rows=rows)
