"""Timezone offset and sunrise/sunset lookup for coordinates."""

from datetime import date, datetime, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog
from astral import Observer
from astral.sun import elevation, noon, sunrise, sunset
from timezonefinder import TimezoneFinder

from sprinkler_weather.models.location import Coordinates
from sprinkler_weather.models.weather import TimeData

logger = structlog.get_logger(__name__)

MINUTES_PER_DAY = 1440
FALLBACK_TIMEZONE = "UTC"


@lru_cache
def _get_timezone_finder() -> TimezoneFinder:
    """Get cached timezone finder (loads its polygon data once)."""
    return TimezoneFinder()


def timezone_name_at(coordinates: Coordinates) -> str:
    """Look up the IANA timezone name for a coordinate pair."""
    name = _get_timezone_finder().timezone_at(
        lat=coordinates.latitude, lng=coordinates.longitude
    )
    if name is None:
        logger.debug(
            "timezone_not_found",
            latitude=coordinates.latitude,
            longitude=coordinates.longitude,
        )
        return FALLBACK_TIMEZONE
    return name


def utc_offset_minutes(timezone_name: str, now: datetime | None = None) -> int:
    """UTC offset of a timezone in minutes, as of ``now``.

    Raises:
        zoneinfo.ZoneInfoNotFoundError: If the timezone name is unknown
    """
    now = now or datetime.now(timezone.utc)
    offset = now.astimezone(ZoneInfo(timezone_name)).utcoffset()
    return int(offset.total_seconds() // 60)


def _minutes_since_midnight(moment: datetime, offset: int) -> int:
    """Shift a UTC time by ``offset`` minutes and return local minutes of day."""
    return (moment.hour * 60 + moment.minute + offset) % MINUTES_PER_DAY


def _sun_times(observer: Observer, day: date, offset: int) -> tuple[int, int]:
    """Local sunrise/sunset minutes, with polar day/night clamped to the day."""
    try:
        rise = sunrise(observer, date=day, tzinfo=timezone.utc)
        set_ = sunset(observer, date=day, tzinfo=timezone.utc)
    except ValueError:
        # Sun never crosses the horizon today
        solar_noon = noon(observer, date=day, tzinfo=timezone.utc)
        if elevation(observer, solar_noon) > 0:
            return 0, MINUTES_PER_DAY - 1
        return 0, 0

    return _minutes_since_midnight(rise, offset), _minutes_since_midnight(set_, offset)


def get_time_data(coordinates: Coordinates, now: datetime | None = None) -> TimeData:
    """Compute UTC offset and local sun times for a coordinate pair.

    The offset is taken as of ``now`` rather than the forecast date, so it
    can be off by an hour around a DST transition.

    Args:
        coordinates: Location to evaluate
        now: Reference time, defaults to the current UTC time

    Returns:
        TimeData with offset minutes and sunrise/sunset as minutes since
        local midnight
    """
    now = now or datetime.now(timezone.utc)
    tz_name = timezone_name_at(coordinates)
    try:
        tz_offset = utc_offset_minutes(tz_name, now)
    except ZoneInfoNotFoundError:
        logger.warning("timezone_unknown", timezone_name=tz_name)
        tz_offset = 0

    observer = Observer(latitude=coordinates.latitude, longitude=coordinates.longitude)
    sunrise_minutes, sunset_minutes = _sun_times(observer, now.date(), tz_offset)

    return TimeData(timezone=tz_offset, sunrise=sunrise_minutes, sunset=sunset_minutes)
