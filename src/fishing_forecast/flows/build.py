"""
Prefect flow for building the static site from the saved forecast.

Renders ``derived/forecast.json`` into a single HTML page.

Run locally:
    python -m fishing_forecast.flows.build
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

from prefect import flow, task

from fishing_forecast.config import get_settings
from fishing_forecast.renderers import render_template
from fishing_forecast.renderers.timeline import build_current_html, build_timeline_html
from fishing_forecast.store import DataStore

# Store and output paths
store = DataStore(Path("data"))
SITE_DIR = store.derived / "site"

# Path matching what flows/forecast.py writes
FORECAST_PATH = Path("derived/forecast.json")

DISPLAY_TZ = ZoneInfo("America/Los_Angeles")


@task(name="load-forecast")
def load_forecast() -> dict[str, Any] | None:
    """Load the saved timeline with its fetched_at timestamp."""
    raw = store.read_raw(FORECAST_PATH)
    if raw is None:
        return None
    return {
        "fetched_at": raw.get("meta", {}).get("fetched_at", ""),
        "data": raw.get("data", {}),
    }


@task(name="build-html")
def build_html(forecast: dict[str, Any]) -> str:
    """Build the HTML page for a loaded forecast."""
    settings = get_settings()
    timeline_data = forecast["data"]

    updated = ""
    if forecast.get("fetched_at"):
        fetched_dt = datetime.fromisoformat(forecast["fetched_at"])
        updated = fetched_dt.astimezone(DISPLAY_TZ).strftime("%Y-%m-%d %H:%M")

    location = timeline_data.get("location") or {}
    units = {
        "temperature_unit": settings.temperature_unit,
        "wind_unit": settings.wind_unit,
        "pressure_unit": settings.pressure_unit,
    }

    return render_template(
        "base.html.j2",
        title="Fishing Forecast",
        location=f"{location.get('lat')}, {location.get('lon')}",
        updated=updated,
        current_html=build_current_html(timeline_data, DISPLAY_TZ, **units),
        timeline_html=build_timeline_html(timeline_data, DISPLAY_TZ, **units),
    )


@task(name="write-site")
def write_site(html: str, site_dir: Path | None = None) -> Path:
    """Write HTML to site directory."""
    site_dir = SITE_DIR if site_dir is None else site_dir
    site_dir.mkdir(parents=True, exist_ok=True)
    output_path = site_dir / "index.html"
    with output_path.open("w") as f:
        f.write(html)
    return output_path


@flow(name="build-site", log_prints=True)
def build_all(site_dir: Path | None = None) -> dict[str, Any]:
    """
    Build static site from the saved forecast.

    Args:
        site_dir: Output directory (defaults to ``derived/site`` in the store).
    """
    print("Loading forecast...")
    forecast = load_forecast()

    if not forecast:
        print("No forecast found. Run the forecast flow first.")
        return {"error": "no data"}

    print("Building HTML...")
    html = build_html(forecast)

    print("Writing site...")
    output_path = write_site(html, site_dir)

    print(f"Site built: {output_path}")
    return {"pages": 1, "output": str(output_path)}


if __name__ == "__main__":
    result = build_all()
    print(f"Flow complete: {result}")
