"""FastAPI dependencies wiring services to the shared HTTP transport."""

from fastapi import Depends, Request

from sprinkler_weather.config import get_settings
from sprinkler_weather.services.http_client import HttpFetcher
from sprinkler_weather.services.location_service import LocationService
from sprinkler_weather.services.watering_service import WateringService
from sprinkler_weather.services.weather_service import WeatherService


def get_http_fetcher(request: Request) -> HttpFetcher:
    """Return the fetcher created in the application lifespan.

    Falls back to a fresh fetcher when the app was started without the
    lifespan (e.g. mounted under another application).
    """
    fetcher = getattr(request.app.state, "http_fetcher", None)
    if fetcher is None:
        fetcher = HttpFetcher(timeout=get_settings().http_timeout_seconds)
        request.app.state.http_fetcher = fetcher
    return fetcher


def get_watering_service(
    fetcher: HttpFetcher = Depends(get_http_fetcher),
) -> WateringService:
    """Build the per-request adjustment pipeline."""
    settings = get_settings()
    return WateringService(
        locations=LocationService(fetcher, geocode_url=settings.geocode_api_url),
        weather=WeatherService(
            fetcher,
            api_key=settings.owm_api_key,
            base_url=settings.weather_api_base_url,
        ),
    )
