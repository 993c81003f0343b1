"""Application configuration using Pydantic settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OpenWeatherMap forecast API
    owm_api_key: str = ""  # Required for weather data, service degrades without it
    weather_api_base_url: str = "http://api.openweathermap.org/data/2.5"

    # Autocomplete geocoder used for free-text locations
    geocode_api_url: str = "http://autocomplete.wunderground.com/aq"

    # Transport
    http_timeout_seconds: float = 10.0

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
