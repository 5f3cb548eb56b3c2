"""Weather provider integrations and forecast projection."""

from .base import WeatherProvider
from .models import (
    Coordinates,
    ForecastFetchResult,
    ForecastProjection,
    RawCity,
    RawSample,
    WeatherRecord,
)
from .openweather import OpenWeatherProvider
from .projector import daily_sample_indices, map_sample, project_forecast

__all__ = [
    "Coordinates",
    "ForecastFetchResult",
    "ForecastProjection",
    "OpenWeatherProvider",
    "RawCity",
    "RawSample",
    "WeatherProvider",
    "WeatherRecord",
    "daily_sample_indices",
    "map_sample",
    "project_forecast",
]
