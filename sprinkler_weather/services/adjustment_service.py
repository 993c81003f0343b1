"""Watering scale, restriction and rain delay calculations.

All functions here are pure: they read a WeatherSnapshot and the decoded
firmware options and never touch the network.
"""

import math
from urllib.parse import unquote

import structlog
from pydantic import BaseModel, ValidationError

from sprinkler_weather.exceptions import InvalidAdjustmentOptions
from sprinkler_weather.models.adjustment import (
    AdjustmentMethod,
    AdjustmentOptions,
    EncodedMethod,
)
from sprinkler_weather.models.weather import WeatherSnapshot

logger = structlog.get_logger(__name__)

NEUTRAL_SCALE = 100
MIN_SCALE = 0
MAX_SCALE = 200
NOT_APPLICABLE = -1
MISSING_VALUE = -999

DEFAULT_BASELINE_HUMIDITY = 30
DEFAULT_BASELINE_TEMP = 70
DEFAULT_BASELINE_PRECIP = 0
DEFAULT_RAIN_DELAY_HOURS = 24

# California restriction: no watering after more than 0.01" of rain
RESTRICTION_PRECIP_THRESHOLD = 0.01

ADVERSE_CONDITION_CODES = frozenset(
    list(range(0, 19)) + [35] + list(range(37, 48))
)
ADVERSE_CONDITION_WORDS = frozenset({"flurries", "sleet", "rain", "snow", "tstorms"})


class AdjustmentDecision(BaseModel):
    """Scale and rain delay chosen for one request."""

    scale: int
    rain_delay: int = NOT_APPLICABLE


def decode_adjustment_options(raw: str | None) -> AdjustmentOptions:
    """Decode the firmware's ``wto`` parameter.

    The firmware sends the inside of a JSON object with ``\\x`` escapes in
    place of percent signs, e.g. ``"h":100,"t":100``.

    Raises:
        InvalidAdjustmentOptions: If the value is absent or not decodable
    """
    if raw is None:
        raise InvalidAdjustmentOptions("No adjustment options supplied")

    text = unquote(raw.replace("\\x", "%"))
    try:
        return AdjustmentOptions.model_validate_json("{" + text + "}")
    except ValidationError as e:
        raise InvalidAdjustmentOptions(f"Malformed adjustment options: {text!r}") from e


def parse_adjustment_options(raw: str | None) -> AdjustmentOptions:
    """Decode ``wto``, falling back to empty options on any problem."""
    try:
        return decode_adjustment_options(raw)
    except InvalidAdjustmentOptions as e:
        if raw is not None:
            logger.warning("adjustment_options_invalid", error=str(e))
        return AdjustmentOptions()


def _is_valid_number(value) -> bool:
    """Check a weather value is usable by the scale formula."""
    if value is None or isinstance(value, bool):
        return False
    if not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value != MISSING_VALUE


def _weighted(factor: float, weight: float | None) -> float:
    """Apply an optional percentage weight to a factor."""
    if weight is None:
        return factor
    return factor * (weight / 100)


def calculate_zimmerman_scale(
    method_index: int,
    options: AdjustmentOptions,
    weather: WeatherSnapshot,
) -> int:
    """Calculate the watering scale with the Zimmerman method.

    Args:
        method_index: Decoded adjustment method index
        options: Firmware tuning options (baselines and factor weights)
        weather: Snapshot to evaluate

    Returns:
        Percentage in [0, 200]; 100 when temperature, humidity or
        precipitation is unavailable; -1 for any method but Zimmerman
    """
    if method_index != AdjustmentMethod.ZIMMERMAN:
        return NOT_APPLICABLE

    if not all(
        _is_valid_number(value)
        for value in (weather.temp, weather.humidity, weather.precip)
    ):
        return NEUTRAL_SCALE

    humidity_base = DEFAULT_BASELINE_HUMIDITY if options.bh is None else options.bh
    temp_base = DEFAULT_BASELINE_TEMP if options.bt is None else options.bt
    precip_base = DEFAULT_BASELINE_PRECIP if options.br is None else options.br

    humidity_factor = _weighted(humidity_base - weather.humidity, options.h)
    temp_factor = _weighted((weather.temp - temp_base) * 4, options.t)
    precip_factor = _weighted((precip_base - weather.precip) * 200, options.r)

    scale = NEUTRAL_SCALE + humidity_factor + temp_factor + precip_factor
    return int(min(max(MIN_SCALE, scale), MAX_SCALE))


def check_weather_restriction(encoded: EncodedMethod, weather: WeatherSnapshot) -> bool:
    """Check if the California watering restriction blocks watering."""
    if not encoded.california_restriction:
        return False
    return weather.precip is not None and weather.precip > RESTRICTION_PRECIP_THRESHOLD


def check_rain_status(weather: WeatherSnapshot) -> bool:
    """Check if the reported conditions indicate rain."""
    if weather.icon_code is not None and weather.icon_code in ADVERSE_CONDITION_CODES:
        return True
    return any(
        token in ADVERSE_CONDITION_WORDS for token in (weather.icon, weather.description)
    )


def compute_adjustment(
    encoded: EncodedMethod,
    options: AdjustmentOptions,
    weather: WeatherSnapshot,
) -> AdjustmentDecision:
    """Combine scale, restriction and rain checks into one decision.

    The restriction is applied after the scale is computed and overrides
    it. Rain only matters when an adjustment method is selected: rain delay
    mode reports a delay and keeps the scale, every other method waters 0%.
    """
    method = encoded.method
    scale = calculate_zimmerman_scale(encoded.method_index, options, weather)
    rain_delay = NOT_APPLICABLE

    if check_weather_restriction(encoded, weather):
        scale = 0

    if method is not AdjustmentMethod.NONE and check_rain_status(weather):
        if method is AdjustmentMethod.RAIN_DELAY:
            rain_delay = (
                DEFAULT_RAIN_DELAY_HOURS if options.d is None else int(options.d)
            )
        else:
            scale = 0

    return AdjustmentDecision(scale=scale, rain_delay=rain_delay)
