"""Request URI construction for allow-listed OpenWeatherMap endpoints."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict

from .config import Settings

CREDENTIAL_PARAM = "appid"


class EndpointDescriptor(BaseModel):
    """Base URI paired with the ordered parameter names it accepts."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    allowed_params: tuple[str, ...]


def geocoding_endpoint(url: str) -> EndpointDescriptor:
    return EndpointDescriptor(name="geocoding", url=url, allowed_params=("q", "limit"))


def forecast_endpoint(url: str) -> EndpointDescriptor:
    return EndpointDescriptor(
        name="forecast",
        url=url,
        allowed_params=("lat", "lon", "units", "lang"),
    )


def endpoints_from_settings(settings: Settings) -> dict[str, EndpointDescriptor]:
    """Build the geocoding and forecast descriptors once at startup."""
    return {
        "geocoding": geocoding_endpoint(str(settings.openweather_geocoding_url)),
        "forecast": forecast_endpoint(str(settings.openweather_forecast_url)),
    }


def _is_defined(value: Any) -> bool:
    # 0 and 0.0 are real coordinates (equator / prime meridian).
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    return quote(str(value), safe=",")


def build_query(
    endpoint: EndpointDescriptor,
    params: Mapping[str, Any],
    api_key: str,
    logger: logging.Logger | None = None,
) -> str:
    """Return the request URI for ``endpoint`` with the credential first.

    Parameters are emitted in the descriptor's declared order, not the order of
    ``params``. Names outside the allow-list are dropped silently, as are
    ``None`` and blank-string values.
    """
    query = f"{endpoint.url.rstrip('?')}?{CREDENTIAL_PARAM}={quote(api_key, safe='')}"
    for key in endpoint.allowed_params:
        value = params.get(key)
        if _is_defined(value):
            query += f"&{key}={_format_value(value)}"

    log = logger or logging.getLogger("weather_dashboard.query")
    log.debug("build_query endpoint=%s query=%s", endpoint.name, query)
    return query
