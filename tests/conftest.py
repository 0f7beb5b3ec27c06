"""Shared test fixtures."""

from pathlib import Path

import pytest

from weatherwidget.errors import FetchFailed, LocationDenied
from weatherwidget.location import Coordinates
from weatherwidget.storage import CityStore
from weatherwidget.widgets.weather import WeatherWidget
from weatherwidget.wttr import parse_snapshot


def make_payload(temp_c: str = "18", days: list[tuple[str, str, str]] | None = None) -> dict:
    """Build a wttr.in ``format=j1`` payload."""
    if days is None:
        days = [
            ("2026-10-17", "17", "06:02 AM"),
            ("2026-10-18", "15", "06:03 AM"),
            ("2026-10-19", "14", "06:05 AM"),
        ]
    return {
        "current_condition": [
            {
                "temp_C": temp_c,
                "humidity": "64",
                "weatherDesc": [{"value": "Partly cloudy"}],
            }
        ],
        "weather": [
            {"date": date, "avgtempC": avg, "astronomy": [{"sunrise": sunrise}]}
            for date, avg, sunrise in days
        ],
    }


class FakeWeather:
    """Stands in for WttrClient; records every city asked for."""

    def __init__(self, payloads: dict | None = None, failures: dict | None = None):
        self.payloads = payloads or {}
        self.failures = failures or {}
        self.calls: list[str] = []

    def get_weather(self, city: str):
        self.calls.append(city)
        if city in self.failures:
            raise self.failures[city]
        return parse_snapshot(city, self.payloads.get(city, make_payload()))


class FakeLocator:
    def __init__(self, coords: Coordinates | None = None, error: Exception | None = None):
        self.coords = coords or Coordinates(35.68, 139.69)
        self.error = error
        self.calls = 0

    def current_position(self) -> Coordinates:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.coords


class FakeGeocoder:
    def __init__(self, name: str | None = "Tokyo", error: Exception | None = None):
        self.name = name
        self.error = error
        self.calls: list[tuple[float, float]] = []

    def city_for(self, latitude: float, longitude: float) -> str:
        self.calls.append((latitude, longitude))
        if self.error is not None:
            raise self.error
        return self.name


@pytest.fixture
def store(tmp_path: Path) -> CityStore:
    return CityStore(tmp_path / "storage.json")


@pytest.fixture
def weather() -> FakeWeather:
    return FakeWeather()


@pytest.fixture
def widget(weather: FakeWeather, store: CityStore) -> WeatherWidget:
    """Widget with no location capability."""
    return WeatherWidget(client=weather, store=store)


@pytest.fixture
def denied_locator() -> FakeLocator:
    return FakeLocator(error=LocationDenied("user blocked location"))


@pytest.fixture
def fetch_failed() -> FetchFailed:
    return FetchFailed("Failed to fetch", status_code=500)
