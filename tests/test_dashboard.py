"""Dashboard actions against an in-memory provider."""

from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

from weather_dashboard.dashboard import WeatherDashboard
from weather_dashboard.exceptions import (
    LocationNotFoundError,
    StateStoreError,
    WeatherAPIError,
)
from weather_dashboard.state import HistoryEntry, HistoryStore
from weather_dashboard.weather.base import WeatherProvider
from weather_dashboard.weather.models import (
    Coordinates,
    ForecastFetchResult,
    RawForecastResponse,
)
from weather_dashboard.weather.projector import project_forecast

FIXTURES = Path(__file__).parent / "fixtures"


class FakeProvider(WeatherProvider):
    def __init__(
        self,
        places: dict[str, tuple[float, float]] | None = None,
        fail_forecast: bool = False,
    ) -> None:
        self.places = places or {}
        self.fail_forecast = fail_forecast
        self.geocode_calls: list[str] = []
        self.forecast_calls: list[tuple[float, float, str | None, str | None]] = []
        self.payload = json.loads((FIXTURES / "forecast_london.json").read_text(encoding="utf-8"))

    def resolve_location(self, location: str) -> Coordinates:
        self.geocode_calls.append(location)
        if location not in self.places:
            raise LocationNotFoundError(location)
        lat, lon = self.places[location]
        return Coordinates(lat=lat, lon=lon, name=location)

    def fetch_forecast(
        self,
        *,
        lat: float,
        lon: float,
        units: str | None = None,
        lang: str | None = None,
    ) -> ForecastFetchResult:
        self.forecast_calls.append((lat, lon, units, lang))
        if self.fail_forecast:
            raise WeatherAPIError("HTTP error! Status: 500", status_code=500)
        response = RawForecastResponse.model_validate(self.payload)
        return ForecastFetchResult(
            projection=project_forecast(response.samples, response.city),
            source_url="https://example.com/forecast",
            raw_payload=self.payload,
        )

    def close(self) -> None:
        return None


def _settings(**overrides: Any) -> Any:
    defaults: dict[str, Any] = {
        "weather_geodiscovery": False,
        "weather_default_lat": None,
        "weather_default_lon": None,
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


def _dashboard(
    tmp_path: Path,
    provider: FakeProvider,
    **settings_overrides: Any,
) -> WeatherDashboard:
    store = HistoryStore(tmp_path / "state.json")
    return WeatherDashboard(_settings(**settings_overrides), provider, store)


def test_search_records_history_and_geolocation(tmp_path: Path) -> None:
    provider = FakeProvider({"Paris": (48.8589, 2.32)})
    dashboard = _dashboard(tmp_path, provider)

    outcome = dashboard.search("  Paris ")

    assert outcome.entry == HistoryEntry(name="Paris", lat=48.8589, lon=2.32)
    assert len(outcome.forecast.daily) == 5
    assert provider.forecast_calls == [(48.8589, 2.32, None, None)]
    geolocation = dashboard.store.geolocation()
    assert geolocation is not None
    assert (geolocation.lat, geolocation.lon) == (48.8589, 2.32)


def test_repeated_search_appends_duplicate_history(tmp_path: Path) -> None:
    provider = FakeProvider({"Paris": (48.8589, 2.32)})
    dashboard = _dashboard(tmp_path, provider)

    dashboard.search("Paris")
    dashboard.search("Paris")

    assert [entry.name for entry in dashboard.history()] == ["Paris", "Paris"]
    assert [entry.name for entry in HistoryStore(tmp_path / "state.json").locations()] == [
        "Paris",
        "Paris",
    ]


def test_not_found_issues_no_forecast_request(tmp_path: Path) -> None:
    provider = FakeProvider()
    dashboard = _dashboard(tmp_path, provider)

    with pytest.raises(LocationNotFoundError):
        dashboard.search("Atlantis")

    assert provider.geocode_calls == ["Atlantis"]
    assert provider.forecast_calls == []
    assert dashboard.history() == []
    assert dashboard.store.geolocation() is None


def test_failed_forecast_leaves_history_untouched(tmp_path: Path) -> None:
    provider = FakeProvider({"Paris": (48.8589, 2.32), "Oslo": (59.91, 10.75)})
    dashboard = _dashboard(tmp_path, provider)
    dashboard.search("Oslo")

    provider.fail_forecast = True
    with pytest.raises(WeatherAPIError):
        dashboard.search("Paris")

    assert [entry.name for entry in dashboard.history()] == ["Oslo"]
    geolocation = dashboard.store.geolocation()
    assert geolocation is not None
    assert (geolocation.lat, geolocation.lon) == (59.91, 10.75)


def test_failed_state_write_keeps_previous_search(tmp_path: Path, monkeypatch: Any) -> None:
    provider = FakeProvider({"Paris": (48.8589, 2.32), "Oslo": (59.91, 10.75)})
    dashboard = _dashboard(tmp_path, provider)
    dashboard.search("Oslo")

    def _failing_write(self: HistoryStore, state: Any) -> None:
        raise StateStoreError("Failed writing state file: disk full")

    monkeypatch.setattr(HistoryStore, "_write", _failing_write)
    with pytest.raises(StateStoreError):
        dashboard.search("Paris")
    monkeypatch.undo()

    reloaded = HistoryStore(tmp_path / "state.json")
    assert [entry.name for entry in reloaded.locations()] == ["Oslo"]
    geolocation = reloaded.geolocation()
    assert geolocation is not None
    assert (geolocation.lat, geolocation.lon) == (59.91, 10.75)
    assert [entry.name for entry in dashboard.history()] == ["Oslo"]


@pytest.mark.parametrize("text", ["", "   "])
def test_empty_search_input_is_rejected(tmp_path: Path, text: str) -> None:
    provider = FakeProvider()
    with pytest.raises(ValueError, match="must not be empty"):
        _dashboard(tmp_path, provider).search(text)
    assert provider.geocode_calls == []


def test_replay_fetches_without_geocoding_or_history_change(tmp_path: Path) -> None:
    provider = FakeProvider({"Paris": (48.8589, 2.32), "Oslo": (59.91, 10.75)})
    dashboard = _dashboard(tmp_path, provider)
    dashboard.search("Paris")
    dashboard.search("Oslo")
    provider.geocode_calls.clear()
    provider.forecast_calls.clear()

    entry, forecast = dashboard.replay(0, units="imperial")

    assert entry.name == "Paris"
    assert forecast.today.city.name == "London"
    assert provider.geocode_calls == []
    assert provider.forecast_calls == [(48.8589, 2.32, "imperial", None)]
    assert len(dashboard.history()) == 2


def test_replay_unknown_index_raises(tmp_path: Path) -> None:
    with pytest.raises(LookupError):
        _dashboard(tmp_path, FakeProvider()).replay(0)


def test_startup_forecast_disabled_forgets_saved_geolocation(tmp_path: Path) -> None:
    provider = FakeProvider()
    dashboard = _dashboard(tmp_path, provider)
    dashboard.store.save_geolocation(1.0, 2.0)

    assert dashboard.startup_forecast() is None
    assert provider.forecast_calls == []
    assert dashboard.store.geolocation() is None
    assert HistoryStore(tmp_path / "state.json").geolocation() is None


def test_startup_forecast_prefers_saved_geolocation(tmp_path: Path) -> None:
    provider = FakeProvider()
    dashboard = _dashboard(
        tmp_path,
        provider,
        weather_geodiscovery=True,
        weather_default_lat=10.0,
        weather_default_lon=20.0,
    )
    dashboard.store.save_geolocation(0.0, 0.0)

    startup = dashboard.startup_forecast()

    assert startup is not None
    assert startup.source == "saved"
    assert provider.forecast_calls == [(0.0, 0.0, None, None)]


def test_startup_forecast_falls_back_to_defaults_and_saves_them(tmp_path: Path) -> None:
    provider = FakeProvider()
    dashboard = _dashboard(
        tmp_path,
        provider,
        weather_geodiscovery=True,
        weather_default_lat=10.0,
        weather_default_lon=20.0,
    )

    startup = dashboard.startup_forecast()

    assert startup is not None
    assert startup.source == "default"
    saved = dashboard.store.geolocation()
    assert saved is not None
    assert (saved.lat, saved.lon) == (10.0, 20.0)


def test_startup_forecast_without_any_location(tmp_path: Path) -> None:
    dashboard = _dashboard(tmp_path, FakeProvider(), weather_geodiscovery=True)
    assert dashboard.startup_forecast() is None


def test_reset_clears_history_and_geolocation(tmp_path: Path) -> None:
    provider = FakeProvider({"Paris": (48.8589, 2.32)})
    dashboard = _dashboard(tmp_path, provider)
    dashboard.search("Paris")
    dashboard.reset()
    assert dashboard.history() == []
    assert dashboard.store.geolocation() is None
