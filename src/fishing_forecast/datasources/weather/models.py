"""Weather data models.

``Raw*`` models validate the OpenWeatherMap payload at the provider
boundary; ``WeatherSnapshot`` is the normalized record the rest of the
pipeline works with.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime  # noqa: TC003
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RawMain(BaseModel):
    temp: float | None = None
    pressure: float | None = None


class RawWind(BaseModel):
    speed: float | None = None
    deg: float | None = None


class RawClouds(BaseModel):
    coverage: float | None = Field(default=None, alias="all")


class RawWeatherItem(BaseModel):
    """One observed or forecast instant as reported by OpenWeatherMap.

    ``main``, ``wind`` and ``clouds`` are required: an item without them
    cannot be scored.
    """

    model_config = ConfigDict(extra="ignore")

    dt: int = Field(..., description="Epoch seconds")
    main: RawMain
    wind: RawWind
    clouds: RawClouds
    rain: dict[str, Any] | None = None
    pop: float | None = Field(default=None, description="Probability of precipitation (0-1)")


@dataclass(frozen=True)
class WeatherSnapshot:
    """Normalized weather at one instant (mph, °F, hPa, percentages)."""

    wind_speed: float
    wind_direction: str
    temperature: float
    precipitation: float  # 0-100
    cloud_cover: float  # 0-100
    pressure: float


@dataclass(frozen=True)
class ObservedWeather:
    """A weather snapshot paired with the instant it describes."""

    timestamp: datetime
    weather: WeatherSnapshot
