"""Dashboard actions: search, history replay, startup forecast and reset."""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import BaseModel

from .config import Settings
from .state import HistoryEntry, HistoryStore
from .weather.base import WeatherProvider
from .weather.models import ForecastProjection


class SearchOutcome(BaseModel):
    """Result of one successful search."""

    entry: HistoryEntry
    forecast: ForecastProjection


class StartupForecast(BaseModel):
    source: Literal["saved", "default"]
    lat: float
    lon: float
    forecast: ForecastProjection


class WeatherDashboard:
    """Owns the dashboard state and runs one request chain per action.

    Every action runs to completion before returning. A failing action raises
    before anything is persisted, so earlier history stays untouched.
    """

    def __init__(
        self,
        settings: Settings,
        provider: WeatherProvider,
        store: HistoryStore,
        logger: logging.Logger | None = None,
    ) -> None:
        self.settings = settings
        self.provider = provider
        self.store = store
        self.logger = logger or logging.getLogger("weather_dashboard.dashboard")

    def search(
        self,
        text: str,
        *,
        units: str | None = None,
        lang: str | None = None,
    ) -> SearchOutcome:
        """Geocode ``text``, fetch its forecast and record the search."""
        query = text.strip()
        if not query:
            raise ValueError("Search input must not be empty.")

        coords = self.provider.resolve_location(query)
        forecast = self.forecast_for(coords.lat, coords.lon, units=units, lang=lang)

        entry = HistoryEntry(name=query, lat=coords.lat, lon=coords.lon)
        self.store.record_search(entry)
        self.logger.info("Search %r saved to history (%d entries)", query, len(self.history()))
        return SearchOutcome(entry=entry, forecast=forecast)

    def replay(
        self,
        index: int,
        *,
        units: str | None = None,
        lang: str | None = None,
    ) -> tuple[HistoryEntry, ForecastProjection]:
        """Fetch the forecast for a stored history entry; history is unchanged."""
        entry = self.store.get_location(index)
        self.logger.info("Replaying history entry %d (%s)", index, entry.name)
        return entry, self.forecast_for(entry.lat, entry.lon, units=units, lang=lang)

    def forecast_for(
        self,
        lat: float,
        lon: float,
        *,
        units: str | None = None,
        lang: str | None = None,
    ) -> ForecastProjection:
        result = self.provider.fetch_forecast(lat=lat, lon=lon, units=units, lang=lang)
        return result.projection

    def startup_forecast(self) -> StartupForecast | None:
        """Forecast for the saved geolocation, falling back to configured defaults.

        Returns ``None`` when geodiscovery is disabled or no location is known.
        Disabling geodiscovery also forgets any saved geolocation.
        """
        if not self.settings.weather_geodiscovery:
            if self.store.geolocation() is not None:
                self.store.clear_geolocation()
            self.logger.info("Geodiscovery disabled; skipping startup forecast")
            return None

        saved = self.store.geolocation()
        if saved is not None:
            forecast = self.forecast_for(saved.lat, saved.lon)
            return StartupForecast(source="saved", lat=saved.lat, lon=saved.lon, forecast=forecast)

        lat = self.settings.weather_default_lat
        lon = self.settings.weather_default_lon
        if lat is None or lon is None:
            self.logger.info("No saved or default geolocation; skipping startup forecast")
            return None

        forecast = self.forecast_for(lat, lon)
        self.store.save_geolocation(lat, lon)
        return StartupForecast(source="default", lat=lat, lon=lon, forecast=forecast)

    def history(self) -> list[HistoryEntry]:
        return self.store.locations()

    def reset(self) -> None:
        self.store.reset()
        self.logger.info("Dashboard history and geolocation cleared")
