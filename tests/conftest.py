"""Pytest configuration and fixtures."""

import os
from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment variables before importing app
os.environ.setdefault("OWM_API_KEY", "test-owm-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from sprinkler_weather.models.weather import TimeData, WeatherSnapshot  # noqa: E402
from sprinkler_weather.services.http_client import HttpFetcher  # noqa: E402


@pytest.fixture
def time_data() -> TimeData:
    """Fixed sun/timezone data for UTC-5 with 06:00 sunrise, 20:00 sunset."""
    return TimeData(timezone=-300, sunrise=360, sunset=1200)


@pytest.fixture
def make_snapshot() -> Callable[..., WeatherSnapshot]:
    """Factory for snapshots with neutral Zimmerman weather by default."""

    def _make(**overrides) -> WeatherSnapshot:
        fields = {
            "timezone": -300,
            "sunrise": 360,
            "sunset": 1200,
            "min_temp": 60,
            "max_temp": 80,
            "temp": 70.0,
            "humidity": 30,
            "wind": 5,
            "precip": 0.0,
            "description": "sky is clear",
            "icon": "01d",
            "forecast": [],
        }
        fields.update(overrides)
        return WeatherSnapshot(**fields)

    return _make


@pytest.fixture
def forecast_payload() -> dict:
    """OpenWeatherMap daily forecast payload in imperial units."""
    return {
        "city": {"name": "Philadelphia", "country": "US"},
        "list": [
            {
                "dt": 1717243200,
                "temp": {"min": 60.7, "max": 80.2},
                "humidity": 30,
                "speed": 5.6,
                "weather": [{"description": "sky is clear", "icon": "01d"}],
            },
            {
                "dt": 1717329600,
                "temp": {"min": 58.1, "max": 75.9},
                "humidity": 55,
                "speed": 9.1,
                "rain": 2.5,
                "weather": [{"description": "light rain", "icon": "10d"}],
            },
        ],
    }


@pytest.fixture
def mock_fetcher() -> MagicMock:
    """Mock HTTP fetcher; configure ``fetch_json`` per test."""
    fetcher = MagicMock(spec=HttpFetcher)
    fetcher.fetch_json = AsyncMock()
    fetcher.fetch_text = AsyncMock()
    fetcher.close = AsyncMock()
    return fetcher
