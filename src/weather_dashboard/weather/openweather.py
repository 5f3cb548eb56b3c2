"""OpenWeatherMap geocoding and 5 day / 3 hour forecast provider."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..exceptions import LocationNotFoundError, WeatherAPIError
from ..query import build_query, endpoints_from_settings
from ..redaction import sanitize_text
from .base import WeatherProvider
from .models import Coordinates, ForecastFetchResult, GeocodingCandidate, RawForecastResponse
from .projector import project_forecast


class OpenWeatherProvider(WeatherProvider):
    """Resolves place names and fetches projected forecasts from OpenWeatherMap.

    Requests are issued once; failures are reported, never retried.
    """

    provider_name = "openweathermap"

    def __init__(self, settings: Settings, logger: logging.Logger) -> None:
        self.settings = settings
        self.logger = logger
        self.endpoints = endpoints_from_settings(settings)
        self._client = httpx.Client(
            timeout=settings.weather_timeout_seconds,
            headers={"Accept": "application/json"},
        )

    def __enter__(self) -> OpenWeatherProvider:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def resolve_location(self, location: str) -> Coordinates:
        """Return the single best geocoding match for ``location``."""
        query_text = location.strip()
        if not query_text:
            raise LocationNotFoundError(location)

        url = build_query(
            self.endpoints["geocoding"],
            {"q": query_text, "limit": 1},
            self.settings.openweather_api_key,
            logger=self.logger,
        )
        payload = self._request_json(url, context="geocoding")
        if not isinstance(payload, list):
            raise WeatherAPIError(
                f"Geocoding returned unexpected payload type {type(payload).__name__}."
            )
        if not payload:
            raise LocationNotFoundError(query_text)

        try:
            best = GeocodingCandidate.model_validate(payload[0])
        except ValidationError as exc:
            raise WeatherAPIError(f"Geocoding payload failed validation: {exc}") from exc

        self.logger.info(
            "Resolved location %r to (%s, %s)", query_text, best.lat, best.lon
        )
        return Coordinates(lat=best.lat, lon=best.lon, name=best.name, country=best.country)

    def fetch_forecast(
        self,
        *,
        lat: float,
        lon: float,
        units: str | None = None,
        lang: str | None = None,
    ) -> ForecastFetchResult:
        """Fetch the forecast series for coordinates and project it."""
        self._validate_coordinates(lat, lon)
        url = build_query(
            self.endpoints["forecast"],
            {
                "lat": lat,
                "lon": lon,
                "units": units or self.settings.weather_units,
                "lang": lang or self.settings.weather_lang,
            },
            self.settings.openweather_api_key,
            logger=self.logger,
        )
        payload = self._request_json(url, context="forecast")
        if not isinstance(payload, dict):
            raise WeatherAPIError(
                f"Forecast returned unexpected payload type {type(payload).__name__}."
            )

        try:
            response = RawForecastResponse.model_validate(payload)
        except ValidationError as exc:
            raise WeatherAPIError(f"Forecast payload failed validation: {exc}") from exc

        projection = project_forecast(
            response.samples,
            response.city,
            days_per_forecast=self.settings.weather_days_per_forecast,
            hours_per_sample=self.settings.weather_hours_per_sample,
            short_series=self.settings.weather_short_series_policy,
            logger=self.logger,
        )
        self.logger.info(
            "Fetched forecast for (%s, %s): samples=%d daily=%d",
            lat, lon, len(response.samples), len(projection.daily),
        )
        return ForecastFetchResult(
            projection=projection,
            source_url=sanitize_text(url),
            raw_payload=payload,
        )

    @staticmethod
    def _validate_coordinates(lat: float, lon: float) -> None:
        if not (-90 <= lat <= 90):
            raise WeatherAPIError(f"Invalid latitude {lat}; expected between -90 and 90.")
        if not (-180 <= lon <= 180):
            raise WeatherAPIError(f"Invalid longitude {lon}; expected between -180 and 180.")

    def _request_json(self, url: str, context: str) -> Any:
        safe_url = sanitize_text(url)
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise WeatherAPIError(
                f"OpenWeatherMap {context} failed with status {status} "
                f"at {safe_url}: {sanitize_text(exc.response.text[:300])}",
                status_code=status,
            ) from exc
        except httpx.HTTPError as exc:
            raise WeatherAPIError(
                f"OpenWeatherMap {context} request failed at {safe_url}: "
                f"{sanitize_text(str(exc))}"
            ) from exc

        self.logger.debug(
            "OpenWeatherMap %s response",
            context,
            extra={"context": {"endpoint": context, "url": url, "status": response.status_code}},
        )
        try:
            return response.json()
        except ValueError as exc:
            raise WeatherAPIError(
                f"OpenWeatherMap {context} returned non-JSON response at {safe_url}."
            ) from exc
