"""API route definitions for controller, weather data and health endpoints."""

from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, Response

from sprinkler_weather.api.dependencies import get_watering_service
from sprinkler_weather.exceptions import WeatherServiceError
from sprinkler_weather.models.adjustment import EncodedMethod
from sprinkler_weather.services.response_formatter import (
    first_forwarded_address,
    render_adjustment,
    render_error,
)
from sprinkler_weather.services.watering_service import WateringService

router = APIRouter()


def get_remote_address(request: Request) -> str:
    """Client address from X-Forwarded-For, else the transport peer."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return first_forwarded_address(forwarded)
    return request.client.host if request.client else ""


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Status and timestamp in ISO8601 format
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/weatherData")
async def show_weather_data(
    loc: Optional[str] = Query(None),
    service: WateringService = Depends(get_watering_service),
) -> Response:
    """Return the full weather snapshot for a location.

    The resolved coordinates are echoed back in a ``location`` field.
    """
    try:
        data = await service.get_weather_report(loc)
    except WeatherServiceError as e:
        structlog.get_logger().info("weather_data_rejected", reason=str(e))
        return render_error(str(e))
    return JSONResponse(content=data)


async def _adjustment_response(
    method_byte: int,
    request: Request,
    loc: Optional[str],
    wto: Optional[str],
    output_format: Optional[str],
    service: WateringService,
) -> Response:
    """Shared handler for both controller URL styles."""
    encoded = EncodedMethod.from_byte(method_byte)
    try:
        result = await service.get_adjustment(
            encoded,
            location=loc,
            raw_options=wto,
            remote_address=get_remote_address(request),
        )
    except WeatherServiceError as e:
        structlog.get_logger().info(
            "adjustment_rejected",
            method_index=encoded.method_index,
            reason=str(e),
        )
        return render_error(str(e))
    return render_adjustment(result, output_format)


@router.get("/weather{method_byte:int}.py")
async def get_weather_legacy(
    method_byte: int,
    request: Request,
    loc: Optional[str] = Query(None),
    wto: Optional[str] = Query(None),
    output_format: Optional[str] = Query(None, alias="format"),
    service: WateringService = Depends(get_watering_service),
) -> Response:
    """Watering adjustment for firmware calling ``/weatherN.py``.

    N is the encoded method byte: bit 7 is the California restriction,
    bits 0-6 the adjustment method.
    """
    return await _adjustment_response(method_byte, request, loc, wto, output_format, service)


@router.get("/{method_byte:int}")
async def get_weather(
    method_byte: int,
    request: Request,
    loc: Optional[str] = Query(None),
    wto: Optional[str] = Query(None),
    output_format: Optional[str] = Query(None, alias="format"),
    service: WateringService = Depends(get_watering_service),
) -> Response:
    """Watering adjustment for firmware calling ``/N``."""
    return await _adjustment_response(method_byte, request, loc, wto, output_format, service)
