"""Provider-agnostic weather interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import Coordinates, ForecastFetchResult


class WeatherProvider(ABC):
    """Base contract for the geocoding + forecast backends used by the dashboard."""

    @abstractmethod
    def resolve_location(self, location: str) -> Coordinates:
        """Resolve free-text input to the best matching coordinates."""

    @abstractmethod
    def fetch_forecast(
        self,
        *,
        lat: float,
        lon: float,
        units: str | None = None,
        lang: str | None = None,
    ) -> ForecastFetchResult:
        """Fetch a forecast series and project it into today + daily records."""

    @abstractmethod
    def close(self) -> None:
        """Release provider resources."""
