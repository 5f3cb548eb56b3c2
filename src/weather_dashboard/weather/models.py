"""Typed models for raw OpenWeatherMap payloads and normalized weather records."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ICON_URL_TEMPLATE = "http://openweathermap.org/img/wn/{icon}@2x.png"


# Raw payload schemas. Unknown upstream fields are ignored.


class GeocodingCandidate(BaseModel):
    """One entry of the geocoding API response array."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    lat: float
    lon: float
    country: str | None = None
    state: str | None = None


class RawCondition(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    main: str | None = None
    description: str | None = None
    icon: str | None = None


class RawMain(BaseModel):
    model_config = ConfigDict(extra="ignore")

    temp: float | None = None
    feels_like: float | None = None
    temp_min: float | None = None
    temp_max: float | None = None
    pressure: float | None = None
    sea_level: float | None = None
    humidity: float | None = None


class RawWind(BaseModel):
    model_config = ConfigDict(extra="ignore")

    speed: float | None = None
    deg: float | None = None
    gust: float | None = None


class RawSample(BaseModel):
    """One element of the forecast ``list`` time series."""

    model_config = ConfigDict(extra="ignore")

    dt: int
    dt_txt: str | None = None
    weather: list[RawCondition] = Field(default_factory=list)
    main: RawMain = Field(default_factory=RawMain)
    wind: RawWind = Field(default_factory=RawWind)
    visibility: float | None = None


class RawCoord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    lat: float | None = None
    lon: float | None = None


class RawCity(BaseModel):
    """City metadata shared by every sample of one forecast response."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    country: str | None = None
    coord: RawCoord = Field(default_factory=RawCoord)
    population: int | None = None
    timezone: int | None = None
    sunrise: int | None = None
    sunset: int | None = None


class RawForecastResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    city: RawCity
    samples: list[RawSample] = Field(alias="list")


# Normalized records handed to the renderer.


class Coordinates(BaseModel):
    """Resolved geocoding result."""

    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float
    name: str | None = None
    country: str | None = None


class CityInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str | None = None
    country: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    population: int | None = None
    timezone: int | None = Field(default=None, description="UTC offset in seconds")
    sunrise: int | None = None
    sunset: int | None = None


class WeatherCondition(BaseModel):
    model_config = ConfigDict(frozen=True)

    icon: str | None = Field(default=None, description="Icon image URL")
    condition: str | None = None
    description: str | None = None


class Temperature(BaseModel):
    model_config = ConfigDict(frozen=True)

    feels_like: float | None = None
    avg: float | None = None
    min: float | None = None
    max: float | None = None


class Wind(BaseModel):
    model_config = ConfigDict(frozen=True)

    speed: float | None = None
    direction: float | None = None
    gust: float | None = None


class WeatherRecord(BaseModel):
    """Flat renderer-ready combination of one raw sample and its city."""

    model_config = ConfigDict(frozen=True)

    city: CityInfo
    date: int = Field(description="Unix timestamp of the sample")
    date_formatted: str | None = None
    weather: WeatherCondition
    temperature: Temperature
    wind: Wind
    humidity: float | None = None
    pressure: float | None = None
    sea_level: float | None = None
    visibility: float | None = None


class ForecastProjection(BaseModel):
    """Today record plus one representative record per future day."""

    today: WeatherRecord
    daily: list[WeatherRecord] = Field(default_factory=list)


class ForecastFetchResult(BaseModel):
    """Raw + projected result returned by weather providers."""

    projection: ForecastProjection
    source_url: str
    raw_payload: dict[str, Any]
