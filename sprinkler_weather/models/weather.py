"""Weather snapshot models.

Field aliases are the key names the controller firmware and the web client
expect, so serialize with ``model_dump(by_alias=True, exclude_none=True)``.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class TimeData(BaseModel):
    """Timezone and sun times for a coordinate pair."""

    model_config = ConfigDict(frozen=True)

    timezone: int = Field(..., description="UTC offset in minutes")
    sunrise: int = Field(..., ge=0, le=1439, description="Minutes since local midnight")
    sunset: int = Field(..., ge=0, le=1439, description="Minutes since local midnight")


class ForecastDay(BaseModel):
    """Weather forecast for a single day."""

    model_config = ConfigDict(frozen=True)

    temp_min: int = Field(..., description="Low temperature in Fahrenheit")
    temp_max: int = Field(..., description="High temperature in Fahrenheit")
    date: int = Field(..., description="Forecast date as epoch seconds")
    icon: str = Field(..., description="Weather icon code from provider")
    description: str = Field(..., description="Expected conditions")


class WeatherSnapshot(TimeData):
    """Normalized weather for one request.

    Time fields are always present. Weather fields are ``None`` when the
    forecast provider could not be reached or returned an unusable payload.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    region: Optional[str] = None
    city: Optional[str] = None
    min_temp: Optional[int] = Field(None, alias="minTemp")
    max_temp: Optional[int] = Field(None, alias="maxTemp")
    temp: Optional[float] = Field(None, description="Average of min and max, Fahrenheit")
    humidity: Optional[int] = Field(None, description="Relative humidity percentage")
    wind: Optional[int] = Field(None, description="Wind speed in mph")
    precip: Optional[float] = Field(None, description="Precipitation in inches")
    description: Optional[str] = None
    icon: Optional[str] = None
    icon_code: Optional[int] = Field(None, alias="iconCode")
    forecast: Optional[list[ForecastDay]] = None

    @property
    def has_weather(self) -> bool:
        """Check if the forecast provider contributed any data."""
        return self.forecast is not None

    def to_json(self, **extra: Any) -> dict[str, Any]:
        """Serialize with client key names, dropping absent fields."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        data.update(extra)
        return data
