"""
Prefect flows for the forecast pipeline.

Flows:
- forecast: Fetch weather and tides, score the timeline, save it
- build: Render the saved timeline into a static HTML page

Usage (local):
    python -m fishing_forecast.flows.forecast
    python -m fishing_forecast.flows.build

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'fishing-forecast/default'
"""
