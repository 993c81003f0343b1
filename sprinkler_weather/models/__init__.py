"""Models package exports."""

from sprinkler_weather.models.adjustment import (
    AdjustmentMethod,
    AdjustmentOptions,
    AdjustmentResult,
    EncodedMethod,
)
from sprinkler_weather.models.location import (
    ClassifiedLocation,
    Coordinates,
    LocationKind,
    ResolvedLocation,
)
from sprinkler_weather.models.weather import ForecastDay, TimeData, WeatherSnapshot

__all__ = [
    "AdjustmentMethod",
    "AdjustmentOptions",
    "AdjustmentResult",
    "ClassifiedLocation",
    "Coordinates",
    "EncodedMethod",
    "ForecastDay",
    "LocationKind",
    "ResolvedLocation",
    "TimeData",
    "WeatherSnapshot",
]
