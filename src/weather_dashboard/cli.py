"""Weather dashboard CLI: search places, replay history, render forecasts."""

from __future__ import annotations

import argparse
import sys

from rich.console import Console

from .config import Settings, load_settings
from .dashboard import WeatherDashboard
from .exceptions import (
    ConfigError,
    InsufficientForecastDataError,
    LocationNotFoundError,
    StateStoreError,
    WeatherAPIError,
)
from .log_setup import setup_logger
from .state import HistoryStore
from .ui.renderer import ForecastRenderer
from .weather.openweather import OpenWeatherProvider

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_STATE = 3
EXIT_WEATHER_API = 4
EXIT_NOT_FOUND = 5
EXIT_INSUFFICIENT_DATA = 6
EXIT_UNEXPECTED = 99


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse weather dashboard CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Current conditions and a multi-day forecast from OpenWeatherMap."
    )
    parser.add_argument(
        "--units",
        choices=["standard", "metric", "imperial"],
        default=None,
        help="Override WEATHER_UNITS for this run.",
    )
    parser.add_argument("--lang", type=str, default=None, help="Override WEATHER_LANG.")
    parser.add_argument(
        "--days",
        type=int,
        default=None,
        help="Override WEATHER_DAYS_PER_FORECAST (1-5).",
    )
    parser.add_argument("--debug", action="store_true", help="Log built request URIs.")

    commands = parser.add_subparsers(dest="command", required=True)
    search = commands.add_parser("search", help="Geocode a place and show its forecast.")
    search.add_argument("place", nargs="+", help="City name, optionally 'City,State,CC'.")

    commands.add_parser("history", help="List previous searches, newest first.")

    replay = commands.add_parser("replay", help="Show the forecast for a history entry.")
    replay.add_argument("index", type=int, help="History index as listed by 'history'.")

    coords = commands.add_parser("coords", help="Show the forecast for coordinates.")
    coords.add_argument("--lat", type=float, required=True)
    coords.add_argument("--lon", type=float, required=True)

    commands.add_parser(
        "startup",
        help="Show the forecast for the saved or default location (needs geodiscovery).",
    )
    commands.add_parser("reset", help="Clear search history and saved geolocation.")
    return parser.parse_args(argv)


def _apply_overrides(args: argparse.Namespace, settings: Settings) -> Settings:
    if args.days is not None and not (1 <= args.days <= 5):
        raise ConfigError("--days must be between 1 and 5.")
    if args.lang is not None and not args.lang.strip():
        raise ConfigError("--lang must not be empty.")

    updates: dict[str, object] = {}
    if args.units is not None:
        updates["weather_units"] = args.units
    if args.lang is not None:
        updates["weather_lang"] = args.lang.strip()
    if args.days is not None:
        updates["weather_days_per_forecast"] = args.days
    if args.debug:
        updates["weather_debug"] = True
    return settings.model_copy(update=updates) if updates else settings


def _run_command(
    args: argparse.Namespace,
    dashboard: WeatherDashboard,
    renderer: ForecastRenderer,
    console: Console,
) -> int:
    if args.command == "search":
        outcome = dashboard.search(" ".join(args.place))
        renderer.render_projection(outcome.forecast.today, outcome.forecast.daily)
        return EXIT_OK

    if args.command == "replay":
        _, forecast = dashboard.replay(args.index)
        renderer.render_projection(forecast.today, forecast.daily)
        return EXIT_OK

    if args.command == "coords":
        forecast = dashboard.forecast_for(args.lat, args.lon)
        renderer.render_projection(forecast.today, forecast.daily)
        return EXIT_OK

    if args.command == "startup":
        startup = dashboard.startup_forecast()
        if startup is None:
            console.print("No startup location: enable WEATHER_GEODISCOVERY and search once.")
        else:
            renderer.render_projection(startup.forecast.today, startup.forecast.daily)
        return EXIT_OK

    if args.command == "history":
        renderer.render_history(dashboard.history())
        return EXIT_OK

    if args.command == "reset":
        dashboard.reset()
        console.print("History and saved geolocation cleared.")
        return EXIT_OK

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    """Run one dashboard action and return the process exit code."""
    args = parse_args(argv)
    logger = setup_logger()
    console = Console()

    try:
        settings = _apply_overrides(args, load_settings())
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return EXIT_USAGE

    logger = setup_logger(debug=settings.weather_debug)
    logger.debug("Loaded settings", extra={"context": settings.safe_summary()})

    try:
        store = HistoryStore(settings.weather_state_file)
    except StateStoreError as exc:
        logger.error("State store failure: %s", exc)
        return EXIT_STATE

    renderer = ForecastRenderer(
        console,
        units=settings.weather_units,
        date_format=settings.weather_date_format,
    )

    try:
        with OpenWeatherProvider(settings=settings, logger=logger) as provider:
            dashboard = WeatherDashboard(settings, provider, store, logger=logger)
            return _run_command(args, dashboard, renderer, console)
    except LocationNotFoundError as exc:
        logger.error("Search error: %s", exc)
        console.print(f"Location not found: {exc.query}")
        return EXIT_NOT_FOUND
    except InsufficientForecastDataError as exc:
        logger.error("Forecast data insufficient: %s", exc)
        return EXIT_INSUFFICIENT_DATA
    except WeatherAPIError as exc:
        logger.error("Weather API failure: %s", exc)
        return EXIT_WEATHER_API
    except StateStoreError as exc:
        logger.error("State store failure: %s", exc)
        return EXIT_STATE
    except (LookupError, ValueError) as exc:
        logger.error("Invalid request: %s", exc)
        return EXIT_USAGE
    except Exception as exc:  # pragma: no cover
        logger.exception("Unexpected dashboard failure: %s", exc)
        return EXIT_UNEXPECTED


if __name__ == "__main__":
    sys.exit(main())
