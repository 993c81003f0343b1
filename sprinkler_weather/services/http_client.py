"""Shared HTTP transport for upstream weather and geocoding calls."""

import json
from typing import Any

import httpx
import structlog

from sprinkler_weather.exceptions import UpstreamUnavailable

logger = structlog.get_logger(__name__)


class HttpFetcher:
    """Fetches JSON documents over HTTP.

    One attempt per call, no retries. Timeouts are left to the underlying
    ``httpx`` client.
    """

    def __init__(self, timeout: float = 10.0, client: httpx.AsyncClient | None = None):
        self._timeout = timeout
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._timeout))
        return self._client

    async def close(self):
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def fetch_text(self, url: str, params: dict | None = None) -> str:
        """GET a URL and return the response body.

        Raises:
            UpstreamUnavailable: On transport errors or non-2xx status codes
        """
        client = await self._get_client()
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "upstream_request_failed",
                url=url,
                status_code=e.response.status_code,
                error_type=type(e).__name__,
            )
            raise UpstreamUnavailable(f"Request to {url} failed", url=url) from e
        except httpx.HTTPError as e:
            logger.warning(
                "upstream_request_failed",
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise UpstreamUnavailable(f"Request to {url} failed", url=url) from e
        return response.text

    async def fetch_json(self, url: str, params: dict | None = None) -> Any:
        """GET a URL and decode the body as JSON.

        Raises:
            UpstreamUnavailable: On transport errors or a body that is not JSON
        """
        text = await self.fetch_text(url, params)
        try:
            return json.loads(text)
        except ValueError as e:
            logger.warning("upstream_malformed_payload", url=url, error=str(e))
            raise UpstreamUnavailable(f"Malformed payload from {url}", url=url) from e
