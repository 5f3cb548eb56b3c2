"""Down-sample a fixed-cadence forecast series into today + one record per day."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Literal

from ..exceptions import InsufficientForecastDataError
from .models import (
    ICON_URL_TEMPLATE,
    CityInfo,
    ForecastProjection,
    RawCity,
    RawSample,
    Temperature,
    WeatherCondition,
    WeatherRecord,
    Wind,
)

TODAY_INDEX = 0


def samples_per_day(hours_per_sample: int) -> int:
    if not (1 <= hours_per_sample <= 24):
        raise ValueError(f"hours_per_sample must be between 1 and 24, got {hours_per_sample}.")
    return 24 // hours_per_sample


def daily_sample_indices(days_per_forecast: int, hours_per_sample: int) -> list[int]:
    """Index of the last sample of each future day.

    With 5 days at a 3 hour cadence this is ``[7, 15, 23, 31, 39]``: one
    late-evening reading per day, not an aggregate over the day.
    """
    if days_per_forecast < 1:
        raise ValueError(f"days_per_forecast must be >= 1, got {days_per_forecast}.")
    offset = samples_per_day(hours_per_sample)
    return [day * offset - 1 for day in range(1, days_per_forecast + 1)]


def map_sample(sample: RawSample, city: RawCity) -> WeatherRecord:
    """Copy and rename fields of one raw sample into a normalized record."""
    condition = sample.weather[0] if sample.weather else None
    icon_url: str | None = None
    if condition is not None and condition.icon:
        icon_url = ICON_URL_TEMPLATE.format(icon=condition.icon)

    return WeatherRecord(
        city=CityInfo(
            name=city.name,
            country=city.country,
            latitude=city.coord.lat,
            longitude=city.coord.lon,
            population=city.population,
            timezone=city.timezone,
            sunrise=city.sunrise,
            sunset=city.sunset,
        ),
        date=sample.dt,
        date_formatted=sample.dt_txt,
        weather=WeatherCondition(
            icon=icon_url,
            condition=condition.main if condition else None,
            description=condition.description if condition else None,
        ),
        temperature=Temperature(
            feels_like=sample.main.feels_like,
            avg=sample.main.temp,
            min=sample.main.temp_min,
            max=sample.main.temp_max,
        ),
        wind=Wind(
            speed=sample.wind.speed,
            direction=sample.wind.deg,
            gust=sample.wind.gust,
        ),
        humidity=sample.main.humidity,
        pressure=sample.main.pressure,
        sea_level=sample.main.sea_level,
        visibility=sample.visibility,
    )


def project_forecast(
    samples: Sequence[RawSample],
    city: RawCity,
    days_per_forecast: int = 5,
    hours_per_sample: int = 3,
    short_series: Literal["clamp", "error"] = "clamp",
    logger: logging.Logger | None = None,
) -> ForecastProjection:
    """Select the today sample and one sample per future day, then normalize.

    ``samples`` must be ordered ascending at exactly ``hours_per_sample``
    spacing, starting with the current slot. When the series is too short for
    ``days_per_forecast`` the missing days are omitted (``"clamp"``) or an
    ``InsufficientForecastDataError`` is raised (``"error"``).
    """
    log = logger or logging.getLogger("weather_dashboard.weather.projector")
    indices = daily_sample_indices(days_per_forecast, hours_per_sample)

    if not samples:
        raise InsufficientForecastDataError("Forecast series is empty; no current conditions.")

    available = [index for index in indices if index < len(samples)]
    if len(available) < len(indices):
        missing = len(indices) - len(available)
        if short_series == "error":
            raise InsufficientForecastDataError(
                f"Forecast series has {len(samples)} samples; index {indices[-1]} is required "
                f"for {days_per_forecast} days at {hours_per_sample}h spacing."
            )
        log.warning(
            "Forecast series has %d samples; omitting %d of %d forecast days",
            len(samples), missing, len(indices),
        )

    return ForecastProjection(
        today=map_sample(samples[TODAY_INDEX], city),
        daily=[map_sample(samples[index], city) for index in available],
    )
