"""FastAPI application initialization."""

from contextlib import asynccontextmanager

from dotenv import load_dotenv

# Load environment variables before anything else
load_dotenv()

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sprinkler_weather import __version__
from sprinkler_weather.api.middleware import CorrelationIdMiddleware
from sprinkler_weather.api.routes import router
from sprinkler_weather.config import get_settings
from sprinkler_weather.services.http_client import HttpFetcher
from sprinkler_weather.services.logging_service import configure_logging, get_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = get_logger("main")

    app.state.http_fetcher = HttpFetcher(timeout=settings.http_timeout_seconds)

    if not settings.owm_api_key:
        logger.warning(
            "weather_api_key_missing",
            note="Continuing without forecasts - every scale will be neutral",
        )

    logger.info(
        "application_started",
        log_level=settings.log_level,
        weather_api_base_url=settings.weather_api_base_url,
    )

    yield

    await app.state.http_fetcher.close()
    logger.info("application_shutdown")


app = FastAPI(
    title="Sprinkler Weather Service",
    description="Weather-based watering adjustments for sprinkler controllers",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> PlainTextResponse:
    """Render HTTP errors as the plain-text messages controllers expect."""
    if exc.status_code == 404:
        return PlainTextResponse("Error: Request not found", status_code=404)
    return PlainTextResponse(f"Error: {exc.detail}", status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> PlainTextResponse:
    """Handle Pydantic validation errors with a plain-text message."""
    errors = exc.errors()
    if errors:
        first_error = errors[0]
        field = ".".join(str(loc) for loc in first_error.get("loc", ["unknown"]))
        detail = f"Field '{field}': {first_error.get('msg', 'Validation failed')}"
    else:
        detail = "Request validation failed"

    structlog.get_logger().warning("validation_error", detail=detail)
    return PlainTextResponse(f"Error: {detail}", status_code=400)


# Correlation ID middleware for request tracking and observability
app.add_middleware(CorrelationIdMiddleware)

app.include_router(router)
