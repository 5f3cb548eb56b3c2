"""Typed settings loader for the weather dashboard."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import AnyHttpUrl, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError

Units = Literal["standard", "metric", "imperial"]
ShortSeriesPolicy = Literal["clamp", "error"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    openweather_api_key: str = Field(alias="OPENWEATHER_API_KEY", repr=False)
    openweather_geocoding_url: AnyHttpUrl = Field(
        default="https://api.openweathermap.org/geo/1.0/direct",
        alias="OPENWEATHER_GEOCODING_URL",
    )
    openweather_forecast_url: AnyHttpUrl = Field(
        default="https://api.openweathermap.org/data/2.5/forecast",
        alias="OPENWEATHER_FORECAST_URL",
    )

    weather_units: Units = Field(default="metric", alias="WEATHER_UNITS")
    weather_lang: str = Field(default="en", alias="WEATHER_LANG")
    weather_days_per_forecast: int = Field(default=5, alias="WEATHER_DAYS_PER_FORECAST")
    weather_hours_per_sample: int = Field(default=3, alias="WEATHER_HOURS_PER_SAMPLE")
    weather_short_series_policy: ShortSeriesPolicy = Field(
        default="clamp",
        alias="WEATHER_SHORT_SERIES_POLICY",
    )
    weather_timeout_seconds: float = Field(default=10.0, alias="WEATHER_TIMEOUT_SECONDS")

    weather_state_file: Path = Field(default=Path("./data/state.json"), alias="WEATHER_STATE_FILE")
    weather_date_format: str = Field(default="%d/%m/%Y", alias="WEATHER_DATE_FORMAT")
    weather_geodiscovery: bool = Field(default=False, alias="WEATHER_GEODISCOVERY")
    weather_default_lat: float | None = Field(default=None, alias="WEATHER_DEFAULT_LAT")
    weather_default_lon: float | None = Field(default=None, alias="WEATHER_DEFAULT_LON")
    weather_debug: bool = Field(default=False, alias="WEATHER_DEBUG")

    @field_validator("weather_default_lat", "weather_default_lon", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat empty env-string values as unset optional coordinates."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @model_validator(mode="after")
    def validate_ranges(self) -> Settings:
        """Validate cross-field constraints and numeric ranges."""
        if not self.openweather_api_key.strip():
            raise ValueError("OPENWEATHER_API_KEY must not be empty.")
        if not self.weather_lang.strip():
            raise ValueError("WEATHER_LANG must not be empty.")
        # The 5 day / 3 hour endpoint never returns more than five days.
        if not (1 <= self.weather_days_per_forecast <= 5):
            raise ValueError("WEATHER_DAYS_PER_FORECAST must be between 1 and 5.")
        if not (1 <= self.weather_hours_per_sample <= 24):
            raise ValueError("WEATHER_HOURS_PER_SAMPLE must be between 1 and 24.")
        if self.weather_timeout_seconds <= 0:
            raise ValueError("WEATHER_TIMEOUT_SECONDS must be > 0.")
        if not self.weather_date_format.strip():
            raise ValueError("WEATHER_DATE_FORMAT must not be empty.")

        has_default_lat = self.weather_default_lat is not None
        has_default_lon = self.weather_default_lon is not None
        if has_default_lat != has_default_lon:
            raise ValueError("WEATHER_DEFAULT_LAT and WEATHER_DEFAULT_LON must be set together.")
        if has_default_lat and not (-90 <= self.weather_default_lat <= 90):
            raise ValueError("WEATHER_DEFAULT_LAT must be between -90 and 90.")
        if has_default_lon and not (-180 <= self.weather_default_lon <= 180):
            raise ValueError("WEATHER_DEFAULT_LON must be between -180 and 180.")
        return self

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging (no credentials)."""
        return {
            "geocoding_url": str(self.openweather_geocoding_url),
            "forecast_url": str(self.openweather_forecast_url),
            "units": self.weather_units,
            "lang": self.weather_lang,
            "days_per_forecast": self.weather_days_per_forecast,
            "hours_per_sample": self.weather_hours_per_sample,
            "short_series_policy": self.weather_short_series_policy,
            "timeout_seconds": self.weather_timeout_seconds,
            "state_file": str(self.weather_state_file),
            "geodiscovery": self.weather_geodiscovery,
            "debug": self.weather_debug,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc

    settings.weather_state_file.parent.mkdir(parents=True, exist_ok=True)
    return settings
