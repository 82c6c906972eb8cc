"""OpenWeatherMap API constants and shared configuration.

API docs:
  - Current weather: https://openweathermap.org/current
  - 5 day / 3 hour forecast: https://openweathermap.org/forecast5
"""

OWM_CURRENT_API = "https://api.openweathermap.org/data/2.5/weather"
OWM_FORECAST_API = "https://api.openweathermap.org/data/2.5/forecast"

# Scoring thresholds are in mph and °F
UNITS = "imperial"

DEFAULT_PRESSURE_HPA = 1013.0

COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")

CURRENT_CACHE_SOURCE = "weather-current"
FORECAST_CACHE_SOURCE = "weather-forecast"
