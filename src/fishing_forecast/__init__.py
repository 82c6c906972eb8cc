"""Fishing Forecast - fishing-quality scores from weather, tides and moon.

Architecture::

    datasources/   Weather (OpenWeatherMap), tides (World Weather Online), moon phase
    store.py       Injectable response cache + JSON store with TTL (live → derived)
    analysis/      Fishing score engine and forecast timeline builder
    renderers/     Pure data → HTML (current conditions, forecast table)
    flows/         Prefect orchestration (forecast fetches + scores, build renders site)
    services/      Shared utilities (HTTP client with retry)

Data flow: datasources → analysis (score per instant) → store (derived/) → renderers → site/

Extension points, see each package's docstring for step-by-step guides:
  - New data source:   datasources/__init__.py
  - New analysis:      analysis/__init__.py
  - New UI module:     renderers/__init__.py
"""

__version__ = "0.1.0"

from fishing_forecast.config import Settings

__all__ = ["Settings", "__version__"]
