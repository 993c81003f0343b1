"""Rendering of adjustment results for the controller firmware."""

import ipaddress

from fastapi.responses import JSONResponse, PlainTextResponse, Response

from sprinkler_weather.models.adjustment import AdjustmentResult

JSON_FORMAT = "json"
RESPONSE_KEYS = ("scale", "rd", "tz", "sunrise", "sunset", "eip")


def first_forwarded_address(header: str) -> str:
    """Return the first address of an X-Forwarded-For chain."""
    return header.split(",")[0].strip()


def ip_to_int(ip: str) -> int:
    """Pack an IPv4 address into a big-endian 32-bit integer.

    IPv4-mapped IPv6 addresses (``::ffff:a.b.c.d``) are unwrapped. Anything
    that is not an IPv4 address packs to 0.
    """
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        return 0

    if isinstance(address, ipaddress.IPv6Address):
        address = address.ipv4_mapped
        if address is None:
            return 0

    return int(address)


def format_key_value(result: AdjustmentResult) -> str:
    """Render ``&scale=..&rd=..&tz=..&sunrise=..&sunset=..&eip=..``."""
    data = result.model_dump(by_alias=True)
    return "".join(f"&{key}={data[key]}" for key in RESPONSE_KEYS)


def format_json(result: AdjustmentResult) -> dict:
    """Render the result as a JSON-ready dict with firmware key names."""
    data = result.model_dump(by_alias=True)
    return {key: data[key] for key in RESPONSE_KEYS}


def render_adjustment(result: AdjustmentResult, output_format: str | None) -> Response:
    """Build the HTTP response in the format the client asked for."""
    if output_format == JSON_FORMAT:
        return JSONResponse(content=format_json(result))
    return PlainTextResponse(format_key_value(result))


def render_error(message: str) -> PlainTextResponse:
    """Plain-text error in the form the firmware expects."""
    return PlainTextResponse(f"Error: {message}")
