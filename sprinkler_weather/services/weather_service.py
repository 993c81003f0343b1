"""Weather service for OpenWeatherMap daily forecast integration."""

import time

import structlog

from sprinkler_weather.config import get_settings
from sprinkler_weather.exceptions import UpstreamUnavailable
from sprinkler_weather.models.location import Coordinates
from sprinkler_weather.models.weather import ForecastDay, TimeData, WeatherSnapshot
from sprinkler_weather.services.http_client import HttpFetcher
from sprinkler_weather.services.time_service import get_time_data

logger = structlog.get_logger(__name__)

MM_PER_INCH = 25.4


def _mm_to_inches(mm: float) -> float:
    """Convert millimeters to inches."""
    return mm / MM_PER_INCH


def _parse_forecast_day(item: dict) -> ForecastDay:
    """Map one entry of the provider's ``list`` to a ForecastDay."""
    condition = item["weather"][0]
    return ForecastDay(
        temp_min=int(float(item["temp"]["min"])),
        temp_max=int(float(item["temp"]["max"])),
        date=int(item["dt"]),
        icon=condition["icon"],
        description=condition["description"],
    )


def _build_snapshot(time_data: TimeData, data: dict) -> WeatherSnapshot:
    """Normalize a daily forecast payload into a WeatherSnapshot.

    Raises:
        KeyError, IndexError, TypeError, ValueError: If the payload is
            missing required fields
    """
    today = data["list"][0]
    condition = today["weather"][0]
    city = data.get("city")
    if not isinstance(city, dict):
        city = {}

    min_temp = int(float(today["temp"]["min"]))
    max_temp = int(float(today["temp"]["max"]))

    return WeatherSnapshot(
        timezone=time_data.timezone,
        sunrise=time_data.sunrise,
        sunset=time_data.sunset,
        region=city.get("country"),
        city=city.get("name"),
        min_temp=min_temp,
        max_temp=max_temp,
        temp=(min_temp + max_temp) / 2,
        humidity=int(float(today["humidity"])),
        wind=int(float(today["speed"])),
        precip=_mm_to_inches(float(today.get("rain") or 0)),
        description=condition["description"],
        icon=condition["icon"],
        forecast=[_parse_forecast_day(item) for item in data["list"]],
    )


class WeatherService:
    """Service for fetching weather data from OpenWeatherMap."""

    def __init__(
        self,
        fetcher: HttpFetcher,
        api_key: str | None = None,
        base_url: str | None = None,
    ):
        settings = get_settings()
        self.fetcher = fetcher
        self.api_key = settings.owm_api_key if api_key is None else api_key
        self.base_url = base_url or settings.weather_api_base_url

    async def _fetch_daily_forecast(self, coordinates: Coordinates) -> dict | None:
        """Call the daily forecast endpoint in imperial units.

        Returns:
            Parsed payload, or None when the call failed
        """
        if not self.api_key:
            logger.error("weather_api_key_missing")
            return None

        params = {
            "appid": self.api_key,
            "units": "imperial",
            "lat": coordinates.latitude,
            "lon": coordinates.longitude,
        }
        try:
            data = await self.fetcher.fetch_json(
                f"{self.base_url}/forecast/daily", params=params
            )
        except UpstreamUnavailable:
            return None

        return data if isinstance(data, dict) else None

    async def get_weather(self, coordinates: Coordinates) -> WeatherSnapshot:
        """Get a weather snapshot for a coordinate pair.

        Sun and timezone data are computed before the forecast request, so
        they are present even when the provider is unreachable.

        Args:
            coordinates: Resolved location

        Returns:
            WeatherSnapshot; weather fields are None if the forecast failed
        """
        start_time = time.perf_counter()
        time_data = get_time_data(coordinates)
        partial = WeatherSnapshot(**time_data.model_dump())

        data = await self._fetch_daily_forecast(coordinates)
        latency_ms = int((time.perf_counter() - start_time) * 1000)

        if not data or not data.get("list"):
            logger.warning(
                "weather_forecast_unavailable",
                latitude=coordinates.latitude,
                longitude=coordinates.longitude,
                latency_ms=latency_ms,
            )
            return partial

        try:
            snapshot = _build_snapshot(time_data, data)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(
                "weather_forecast_parse_error",
                error=str(e),
                error_type=type(e).__name__,
            )
            return partial

        logger.info(
            "weather_request_success",
            latitude=coordinates.latitude,
            longitude=coordinates.longitude,
            latency_ms=latency_ms,
            forecast_days=len(snapshot.forecast),
        )
        return snapshot
