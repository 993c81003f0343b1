"""Services package exports."""

from sprinkler_weather.services.http_client import HttpFetcher
from sprinkler_weather.services.location_service import LocationService, classify_location
from sprinkler_weather.services.logging_service import configure_logging, get_logger
from sprinkler_weather.services.watering_service import WateringService
from sprinkler_weather.services.weather_service import WeatherService

__all__ = [
    "HttpFetcher",
    "LocationService",
    "WateringService",
    "WeatherService",
    "classify_location",
    "configure_logging",
    "get_logger",
]
