"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class WeatherDashboardError(Exception):
    """Base class for failures surfaced to a dashboard action."""


class WeatherAPIError(WeatherDashboardError):
    """Raised when weather API requests fail or return malformed data."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LocationNotFoundError(WeatherDashboardError):
    """Raised when geocoding returns no candidates for the given input."""

    def __init__(self, query: str) -> None:
        super().__init__(f"Location could not be found: {query!r}")
        self.query = query


class InsufficientForecastDataError(WeatherDashboardError):
    """Raised when a forecast series is too short for the configured day count."""


class StateStoreError(WeatherDashboardError):
    """Raised when reading or writing the persisted dashboard state fails."""
