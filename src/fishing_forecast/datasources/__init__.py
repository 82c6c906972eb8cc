"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants
    ├── models.py         # Dataclasses / boundary models
    └── {feature}.py      # Fetch, parse and compute functions

Sources:
  - weather: OpenWeatherMap current conditions + 3-hourly forecast
  - tides: World Weather Online marine extrema + tide curve reconstruction
  - moon: lunar phase, computed locally from the instant

Adding a new datasource
-----------------------
1. Create ``datasources/{name}/`` with files above.
   See ``tides/`` for a fetch + parse + compute example.

2. Write fetch functions that accept an optional ``ResponseCache``::

       from fishing_forecast.services.http import session

       def fetch_something(lat, lon, *, cache=None) -> dict[str, Any]:
           resp = session.get(API_URL, params={...})
           resp.raise_for_status()
           return resp.json()

3. Validate raw payloads at the boundary and map failures onto
   ``fishing_forecast.errors`` (fatal vs. skippable).

4. Re-export public API in ``__init__.py`` with ``__all__``.

5. Wire into the pipeline (see ``flows/forecast.py``) and add tests in
   ``tests/test_{name}.py``.
"""
