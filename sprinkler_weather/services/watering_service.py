"""Per-request pipeline from raw location to watering decision."""

import time
from typing import Any

import structlog

from sprinkler_weather.models.adjustment import AdjustmentResult, EncodedMethod
from sprinkler_weather.services.adjustment_service import (
    compute_adjustment,
    parse_adjustment_options,
)
from sprinkler_weather.services.location_service import LocationService
from sprinkler_weather.services.response_formatter import ip_to_int
from sprinkler_weather.services.timezone_codec import encode_timezone
from sprinkler_weather.services.weather_service import WeatherService

logger = structlog.get_logger(__name__)


class WateringService:
    """Runs location resolution, weather lookup and the adjustment engine."""

    def __init__(self, locations: LocationService, weather: WeatherService):
        self.locations = locations
        self.weather = weather

    async def get_adjustment(
        self,
        encoded: EncodedMethod,
        location: str | None,
        raw_options: str | None,
        remote_address: str,
    ) -> AdjustmentResult:
        """Compute the watering adjustment for one controller request.

        Args:
            encoded: Method and restriction decoded from the URL path
            location: Raw ``loc`` parameter
            raw_options: Raw ``wto`` parameter
            remote_address: Client IPv4 address

        Returns:
            AdjustmentResult ready for formatting

        Raises:
            MissingLocation, UnsupportedLocationFormat, UnresolvedLocation:
                When the location cannot be turned into coordinates
        """
        start_time = time.perf_counter()

        coordinates = await self.locations.resolve(location)
        options = parse_adjustment_options(raw_options)
        snapshot = await self.weather.get_weather(coordinates)
        decision = compute_adjustment(encoded, options, snapshot)

        result = AdjustmentResult(
            scale=decision.scale,
            rain_delay=decision.rain_delay,
            timezone=encode_timezone(snapshot.timezone),
            sunrise=snapshot.sunrise,
            sunset=snapshot.sunset,
            external_ip=ip_to_int(remote_address),
        )

        logger.info(
            "adjustment_computed",
            method_index=encoded.method_index,
            california_restriction=encoded.california_restriction,
            has_weather=snapshot.has_weather,
            scale=result.scale,
            rain_delay=result.rain_delay,
            latency_ms=int((time.perf_counter() - start_time) * 1000),
        )
        return result

    async def get_weather_report(self, location: str | None) -> dict[str, Any]:
        """Resolve a location and return its full snapshot as JSON data.

        Raises:
            MissingLocation, UnsupportedLocationFormat, UnresolvedLocation:
                When the location cannot be turned into coordinates
        """
        coordinates = await self.locations.resolve(location)
        snapshot = await self.weather.get_weather(coordinates)
        return snapshot.to_json(location=coordinates.as_list())
