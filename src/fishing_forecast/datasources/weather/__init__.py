"""OpenWeatherMap weather data source.

Fetches current conditions and the 5-day / 3-hour forecast (imperial units),
and normalizes them into ``WeatherSnapshot`` records.

Public API:
  - current: fetch_current
  - forecast: fetch_forecast
  - models: WeatherSnapshot, ObservedWeather, RawWeatherItem
  - normalize: current_from_raw, step_from_raw, forecast_from_raw, wind_direction
"""

from fishing_forecast.datasources.weather.client import (
    OWM_CURRENT_API,
    OWM_FORECAST_API,
)
from fishing_forecast.datasources.weather.current import fetch_current
from fishing_forecast.datasources.weather.forecast import fetch_forecast
from fishing_forecast.datasources.weather.models import (
    ObservedWeather,
    RawWeatherItem,
    WeatherSnapshot,
)
from fishing_forecast.datasources.weather.normalize import (
    current_from_raw,
    forecast_from_raw,
    step_from_raw,
    wind_direction,
)

__all__ = [
    "OWM_CURRENT_API",
    "OWM_FORECAST_API",
    "ObservedWeather",
    "RawWeatherItem",
    "WeatherSnapshot",
    "current_from_raw",
    "fetch_current",
    "fetch_forecast",
    "forecast_from_raw",
    "step_from_raw",
    "wind_direction",
]
