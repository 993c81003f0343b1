"""Location models for classification and geocoding."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LocationKind(str, Enum):
    """How a raw ``loc`` string must be resolved."""

    GPS = "gps"
    LEGACY_STATION = "legacy_station"
    FREE_TEXT = "free_text"


class Coordinates(BaseModel):
    """A latitude/longitude pair in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    def as_list(self) -> list[float]:
        """Return ``[lat, lon]`` as echoed back to web clients."""
        return [self.latitude, self.longitude]


class ClassifiedLocation(BaseModel):
    """Result of classifying a raw location string.

    Attributes:
        kind: Classification outcome
        raw: Original location text
        coordinates: Parsed coordinates, only set for GPS locations
    """

    model_config = ConfigDict(frozen=True)

    kind: LocationKind
    raw: str
    coordinates: Optional[Coordinates] = None


class ResolvedLocation(BaseModel):
    """Geocoding result for a free-text location."""

    model_config = ConfigDict(frozen=True)

    coordinates: Coordinates
    timezone_name: str = Field(..., description="IANA timezone of the match")
    utc_offset: int = Field(..., description="UTC offset in minutes, as of now")
