"""Location classification and geocoding fallback."""

import re
from zoneinfo import ZoneInfoNotFoundError

import structlog

from sprinkler_weather.config import get_settings
from sprinkler_weather.exceptions import (
    MissingLocation,
    UnresolvedLocation,
    UnsupportedLocationFormat,
    UpstreamUnavailable,
)
from sprinkler_weather.models.location import (
    ClassifiedLocation,
    Coordinates,
    LocationKind,
    ResolvedLocation,
)
from sprinkler_weather.services.http_client import HttpFetcher
from sprinkler_weather.services.time_service import utc_offset_minutes

logger = structlog.get_logger(__name__)

# "lat,lon" with latitude in [-90, 90] and longitude in [-180, 180]
GPS_PATTERN = re.compile(
    r"^[-+]?([1-8]?\d(\.\d+)?|90(\.0+)?),\s*"
    r"[-+]?(180(\.0+)?|((1[0-7]\d)|([1-9]?\d))(\.\d+)?)$"
)
# Weather Underground station identifiers
LEGACY_STATION_PATTERN = re.compile(r"^(?:pws|icao|zmw):")

MISSING_TIMEZONE = "MISSING"


def classify_location(raw: str) -> ClassifiedLocation:
    """Classify a raw ``loc`` value.

    GPS coordinates are checked first, then legacy station identifiers;
    anything else is free text for the geocoder.
    """
    if GPS_PATTERN.match(raw):
        latitude, longitude = raw.split(",")
        return ClassifiedLocation(
            kind=LocationKind.GPS,
            raw=raw,
            coordinates=Coordinates(
                latitude=float(latitude), longitude=float(longitude)
            ),
        )

    if LEGACY_STATION_PATTERN.match(raw):
        return ClassifiedLocation(kind=LocationKind.LEGACY_STATION, raw=raw)

    return ClassifiedLocation(kind=LocationKind.FREE_TEXT, raw=raw)


class LocationService:
    """Resolves user-supplied locations to coordinates."""

    def __init__(self, fetcher: HttpFetcher, geocode_url: str | None = None):
        self.fetcher = fetcher
        self.geocode_url = geocode_url or get_settings().geocode_api_url

    async def geocode(self, query: str) -> ResolvedLocation | None:
        """Resolve free text through the autocomplete service.

        Makes exactly one request. Returns None when the service is down,
        answers with garbage, finds nothing, or has no timezone for the
        best match.
        """
        try:
            data = await self.fetcher.fetch_json(
                self.geocode_url, params={"h": 0, "query": query}
            )
        except UpstreamUnavailable:
            return None

        results = data.get("RESULTS") if isinstance(data, dict) else None
        if not isinstance(results, list) or not results:
            logger.info("geocode_no_results", query=query)
            return None

        best = results[0]
        if not isinstance(best, dict):
            logger.info("geocode_no_results", query=query)
            return None

        timezone_name = best.get("tz")
        if not timezone_name or timezone_name == MISSING_TIMEZONE:
            logger.info("geocode_missing_timezone", query=query)
            return None

        try:
            return ResolvedLocation(
                coordinates=Coordinates(
                    latitude=float(best["lat"]), longitude=float(best["lon"])
                ),
                timezone_name=timezone_name,
                utc_offset=utc_offset_minutes(timezone_name),
            )
        except (KeyError, TypeError, ValueError, ZoneInfoNotFoundError) as e:
            # pydantic.ValidationError is a ValueError
            logger.warning(
                "geocode_parse_error",
                query=query,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

    async def resolve(self, raw: str | None) -> Coordinates:
        """Turn a raw location into coordinates.

        Raises:
            MissingLocation: If no location was supplied
            UnsupportedLocationFormat: For legacy station identifiers
            UnresolvedLocation: If geocoding fails
        """
        if not raw:
            raise MissingLocation()

        location = classify_location(raw)

        if location.kind is LocationKind.LEGACY_STATION:
            raise UnsupportedLocationFormat()

        if location.kind is LocationKind.GPS:
            return location.coordinates

        resolved = await self.geocode(raw)
        if resolved is None:
            raise UnresolvedLocation()

        logger.debug(
            "location_geocoded",
            query=raw,
            latitude=resolved.coordinates.latitude,
            longitude=resolved.coordinates.longitude,
            timezone_name=resolved.timezone_name,
        )
        return resolved.coordinates
