"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import functools
import http.server
import logging
import sys
from pathlib import Path

import requests

from fishing_forecast import __version__
from fishing_forecast.config import get_settings
from fishing_forecast.errors import ForecastError
from fishing_forecast.flows import forecast
from fishing_forecast.flows.build import build_all
from fishing_forecast.flows.forecast import forecast_all

SITE_DIR = Path("site")

# Forecast points listed by the 'forecast' command after the current one
FORECAST_PREVIEW = 8


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="fishing-forecast",
        description="Fishing conditions from weather, tides and moon phase",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'info' command
    subparsers.add_parser("info", help="Show application info")

    # 'forecast' command - build the timeline and print it
    forecast_parser = subparsers.add_parser("forecast", help="Build and print the forecast")
    forecast_parser.add_argument("--lat", type=float, default=None, help="Latitude")
    forecast_parser.add_argument("--lon", type=float, default=None, help="Longitude")

    # 'refresh' command - build forecast and site
    subparsers.add_parser("refresh", help="Build forecast and site")

    # 'serve' command - serve built site locally
    serve_parser = subparsers.add_parser("serve", help="Serve site locally")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )

    return parser


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Location: ({settings.lat}, {settings.lon})")
    print(f"Weather API key: {'set' if settings.weather_api_key else 'missing'}")
    print(f"Marine API key: {'set' if settings.marine_api_key else 'missing'}")
    return 0


def cmd_forecast(args: argparse.Namespace) -> int:
    """Handle the 'forecast' command: run the flow and print the timeline."""
    try:
        summary = forecast_all(lat=args.lat, lon=args.lon)
    except (ForecastError, requests.RequestException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Now: {summary['current_score']} ({summary['current_condition']})")
    if not summary["has_tide"]:
        print("Tide data unavailable.")

    data = forecast.store.read(forecast.FORECAST_PATH) or {}
    for point in data.get("points", [])[1 : FORECAST_PREVIEW + 1]:
        print(f"  {point['timestamp']}  {point['score']:>3}  {point['condition']}")
    return 0


def cmd_refresh(_args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: build the forecast then the site."""
    settings = get_settings()
    print(f"Building forecast for ({settings.lat}, {settings.lon})...")
    try:
        forecast_all(lat=settings.lat, lon=settings.lon)
    except (ForecastError, requests.RequestException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("Building site...")
    build_all(site_dir=SITE_DIR)

    print("Done.")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: serve the built site locally."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.api_port
    site_dir = SITE_DIR

    if not site_dir.exists():
        print("No site directory found. Run 'fishing-forecast refresh' first.", file=sys.stderr)
        return 1

    handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))

    with http.server.HTTPServer(("", port), handler) as server:
        print(f"Serving site on http://localhost:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(getattr(args, "debug", False))

    commands = {
        "info": cmd_info,
        "forecast": cmd_forecast,
        "refresh": cmd_refresh,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
