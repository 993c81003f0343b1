"""Application exception classes.

The message of every exception is the user-visible text rendered after the
``Error: `` prefix in plain-text responses.
"""


class WeatherServiceError(Exception):
    """Base class for errors surfaced by the adjustment pipeline."""


class MissingLocation(WeatherServiceError):
    """Raised when a request carries no location."""

    def __init__(self, message: str = "No location provided.") -> None:
        super().__init__(message)


class UnsupportedLocationFormat(WeatherServiceError):
    """Raised for legacy station identifiers (pws:, icao:, zmw:)."""

    def __init__(self, message: str = "Weather Underground is discontinued.") -> None:
        super().__init__(message)


class UnresolvedLocation(WeatherServiceError):
    """Raised when geocoding cannot turn free text into coordinates."""

    def __init__(self, message: str = "Unable to resolve location") -> None:
        super().__init__(message)


class UpstreamUnavailable(WeatherServiceError):
    """Raised when an upstream call fails or returns a malformed payload."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class InvalidAdjustmentOptions(WeatherServiceError):
    """Raised when the firmware's adjustment options cannot be decoded."""
