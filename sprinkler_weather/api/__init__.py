"""API package exports."""

from sprinkler_weather.api.middleware import CorrelationIdMiddleware
from sprinkler_weather.api.routes import router

__all__ = ["router", "CorrelationIdMiddleware"]
