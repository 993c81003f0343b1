"""Unit tests for weather service."""

from unittest.mock import patch

import pytest

from sprinkler_weather.exceptions import UpstreamUnavailable
from sprinkler_weather.models.location import Coordinates
from sprinkler_weather.services.weather_service import (
    WeatherService,
    _build_snapshot,
    _mm_to_inches,
)

BASE_URL = "http://owm.test/data/2.5"
PHILADELPHIA = Coordinates(latitude=40.0, longitude=-75.5)


class TestUnitConversion:
    """Tests for unit conversion helpers."""

    def test_mm_to_inches(self):
        """Test millimeters to inches conversion."""
        assert _mm_to_inches(25.4) == 1.0
        assert _mm_to_inches(0) == 0.0


class TestBuildSnapshot:
    """Tests for payload normalization."""

    def test_first_day_fields(self, time_data, forecast_payload):
        """Test first forecast entry maps to the snapshot fields."""
        snapshot = _build_snapshot(time_data, forecast_payload)

        assert snapshot.region == "US"
        assert snapshot.city == "Philadelphia"
        assert snapshot.min_temp == 60
        assert snapshot.max_temp == 80
        assert snapshot.temp == 70.0
        assert snapshot.humidity == 30
        assert snapshot.wind == 5
        assert snapshot.precip == 0.0
        assert snapshot.description == "sky is clear"
        assert snapshot.icon == "01d"
        assert snapshot.timezone == -300
        assert snapshot.sunrise == 360
        assert snapshot.sunset == 1200

    def test_rain_converted_to_inches(self, time_data, forecast_payload):
        """Test rain in millimeters becomes inches."""
        forecast_payload["list"][0]["rain"] = 12.7
        snapshot = _build_snapshot(time_data, forecast_payload)
        assert snapshot.precip == pytest.approx(0.5)

    def test_forecast_preserves_order(self, time_data, forecast_payload):
        """Test one forecast entry per provider day, in provider order."""
        snapshot = _build_snapshot(time_data, forecast_payload)

        assert [day.date for day in snapshot.forecast] == [1717243200, 1717329600]
        assert snapshot.forecast[1].temp_min == 58
        assert snapshot.forecast[1].temp_max == 75
        assert snapshot.forecast[1].icon == "10d"
        assert snapshot.forecast[1].description == "light rain"

    def test_negative_temperatures_truncate(self, time_data, forecast_payload):
        """Test temperatures truncate toward zero like integer parsing."""
        forecast_payload["list"][0]["temp"] = {"min": -3.7, "max": 2.4}
        snapshot = _build_snapshot(time_data, forecast_payload)
        assert snapshot.min_temp == -3
        assert snapshot.temp == -0.5

    def test_missing_field_raises(self, time_data, forecast_payload):
        """Test a malformed entry raises for the caller to handle."""
        del forecast_payload["list"][0]["humidity"]
        with pytest.raises(KeyError):
            _build_snapshot(time_data, forecast_payload)


class TestWeatherServiceGetWeather:
    """Tests for WeatherService.get_weather."""

    @pytest.fixture(autouse=True)
    def fixed_time_data(self, time_data):
        """Pin sun/timezone data."""
        with patch(
            "sprinkler_weather.services.weather_service.get_time_data",
            return_value=time_data,
        ) as mock:
            yield mock

    @pytest.fixture
    def service(self, mock_fetcher):
        """WeatherService with an API key and the mock fetcher."""
        return WeatherService(mock_fetcher, api_key="test-api-key", base_url=BASE_URL)

    @pytest.mark.asyncio
    async def test_success(self, service, mock_fetcher, forecast_payload):
        """Test a full snapshot is returned."""
        mock_fetcher.fetch_json.return_value = forecast_payload

        snapshot = await service.get_weather(PHILADELPHIA)

        assert snapshot.has_weather
        assert snapshot.temp == 70.0
        assert len(snapshot.forecast) == 2
        mock_fetcher.fetch_json.assert_awaited_once_with(
            f"{BASE_URL}/forecast/daily",
            params={
                "appid": "test-api-key",
                "units": "imperial",
                "lat": 40.0,
                "lon": -75.5,
            },
        )

    @pytest.mark.asyncio
    async def test_time_data_computed_first(
        self, service, mock_fetcher, fixed_time_data
    ):
        """Test sun data is looked up even when the forecast call fails."""
        mock_fetcher.fetch_json.side_effect = UpstreamUnavailable("down")

        snapshot = await service.get_weather(PHILADELPHIA)

        fixed_time_data.assert_called_once_with(PHILADELPHIA)
        assert snapshot.sunrise == 360
        assert snapshot.sunset == 1200
        assert snapshot.timezone == -300
        assert snapshot.temp is None
        assert not snapshot.has_weather

    @pytest.mark.asyncio
    async def test_single_attempt(self, service, mock_fetcher):
        """Test failures are not retried."""
        mock_fetcher.fetch_json.side_effect = UpstreamUnavailable("down")
        await service.get_weather(PHILADELPHIA)
        assert mock_fetcher.fetch_json.await_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"cod": "401", "message": "Invalid API key"},
            {"list": []},
            ["unexpected"],
        ],
    )
    async def test_unusable_payload_is_partial(self, service, mock_fetcher, payload):
        """Test payloads without forecast entries give a partial snapshot."""
        mock_fetcher.fetch_json.return_value = payload

        snapshot = await service.get_weather(PHILADELPHIA)

        assert snapshot.humidity is None
        assert snapshot.forecast is None
        assert snapshot.sunrise == 360

    @pytest.mark.asyncio
    async def test_malformed_entry_is_partial(self, service, mock_fetcher, forecast_payload):
        """Test a forecast entry with missing fields gives a partial snapshot."""
        forecast_payload["list"][0]["weather"] = []
        mock_fetcher.fetch_json.return_value = forecast_payload

        snapshot = await service.get_weather(PHILADELPHIA)

        assert not snapshot.has_weather
        assert snapshot.timezone == -300

    @pytest.mark.asyncio
    async def test_non_object_city_ignored(self, service, mock_fetcher, forecast_payload):
        """Test a city block that is not an object leaves region and city unset."""
        forecast_payload["city"] = "Philadelphia"
        mock_fetcher.fetch_json.return_value = forecast_payload

        snapshot = await service.get_weather(PHILADELPHIA)

        assert snapshot.has_weather
        assert snapshot.city is None
        assert snapshot.region is None
        assert snapshot.min_temp == 60

    @pytest.mark.asyncio
    async def test_missing_api_key_skips_request(self, mock_fetcher):
        """Test no request is made without an API key."""
        service = WeatherService(mock_fetcher, api_key="", base_url=BASE_URL)

        snapshot = await service.get_weather(PHILADELPHIA)

        mock_fetcher.fetch_json.assert_not_awaited()
        assert not snapshot.has_weather
        assert snapshot.sunset == 1200

    @pytest.mark.asyncio
    async def test_partial_snapshot_json(self, service, mock_fetcher):
        """Test partial snapshots serialize only the time fields."""
        mock_fetcher.fetch_json.side_effect = UpstreamUnavailable("down")

        snapshot = await service.get_weather(PHILADELPHIA)

        assert snapshot.to_json() == {"timezone": -300, "sunrise": 360, "sunset": 1200}
