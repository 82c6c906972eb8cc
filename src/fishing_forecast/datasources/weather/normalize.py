"""Normalize OpenWeatherMap payloads into ``WeatherSnapshot`` records.

Structural problems are mapped onto the pipeline's error taxonomy:
a bad *current* item or a forecast payload without ``list`` is
``MalformedUpstreamData``; a bad forecast *step* is ``SkippableSampleError``.
"""

from __future__ import annotations

import logging
import math
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from fishing_forecast.datasources.weather.client import COMPASS_POINTS, DEFAULT_PRESSURE_HPA
from fishing_forecast.datasources.weather.models import (
    ObservedWeather,
    RawWeatherItem,
    WeatherSnapshot,
)
from fishing_forecast.errors import MalformedUpstreamData, SkippableSampleError

logger = logging.getLogger(__name__)


def wind_direction(degrees: float | None) -> str:
    """Compass octant (N, NE, ... NW) for a bearing in degrees."""
    index = math.floor(((degrees or 0) % 360) / 45 + 0.5) % 8
    return COMPASS_POINTS[index]


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"{field} ({first['msg']})"


def _snapshot(item: RawWeatherItem, precipitation: float) -> ObservedWeather:
    weather = WeatherSnapshot(
        wind_speed=item.wind.speed or 0,
        wind_direction=wind_direction(item.wind.deg),
        temperature=item.main.temp or 0,
        precipitation=precipitation,
        cloud_cover=item.clouds.coverage or 0,
        pressure=item.main.pressure or DEFAULT_PRESSURE_HPA,
    )
    return ObservedWeather(timestamp=datetime.fromtimestamp(item.dt, tz=UTC), weather=weather)


def current_from_raw(raw: Any) -> ObservedWeather:
    """Normalize the current-conditions payload.

    Precipitation is binary here: 100 if the payload reports rain, else 0.

    Raises:
        MalformedUpstreamData: If ``dt``, ``main``, ``wind`` or ``clouds`` is missing.
    """
    try:
        item = RawWeatherItem.model_validate(raw)
    except ValidationError as e:
        msg = f"Current weather is malformed: {_describe(e)}"
        raise MalformedUpstreamData(msg) from e
    return _snapshot(item, precipitation=100.0 if item.rain is not None else 0.0)


def step_from_raw(raw: Any) -> ObservedWeather:
    """Normalize one forecast step; precipitation is ``pop`` as a percentage.

    Raises:
        SkippableSampleError: If the step lacks required structure.
    """
    try:
        item = RawWeatherItem.model_validate(raw)
    except ValidationError as e:
        msg = f"Forecast step is malformed: {_describe(e)}"
        raise SkippableSampleError(msg) from e
    return _snapshot(item, precipitation=(item.pop or 0) * 100)


def forecast_from_raw(raw: Any) -> list[ObservedWeather]:
    """Normalize every usable step of a forecast payload.

    Steps that fail validation are logged and skipped.

    Raises:
        MalformedUpstreamData: If the payload has no ``list`` array.
    """
    steps = raw.get("list") if isinstance(raw, dict) else None
    if not isinstance(steps, list):
        msg = "Forecast payload is malformed: missing 'list'"
        raise MalformedUpstreamData(msg)

    observed: list[ObservedWeather] = []
    for i, step in enumerate(steps):
        try:
            observed.append(step_from_raw(step))
        except SkippableSampleError as e:
            logger.warning("Skipping forecast step %d: %s", i, e)
    return observed
