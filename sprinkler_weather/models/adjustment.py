"""Watering adjustment models shared by the engine and the HTTP layer."""

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

RESTRICTION_BIT = 7
METHOD_MASK = 0x7F


class AdjustmentMethod(IntEnum):
    """Adjustment methods understood by the controller firmware."""

    NONE = 0
    ZIMMERMAN = 1
    RAIN_DELAY = 2


class EncodedMethod(BaseModel):
    """Adjustment method and restriction flag packed into one firmware byte.

    Bit 7 carries the California restriction, bits 0-6 the method index.
    Unknown method indices are kept as-is.
    """

    model_config = ConfigDict(frozen=True)

    method_index: int = Field(..., ge=0, le=METHOD_MASK)
    california_restriction: bool = False

    @classmethod
    def from_byte(cls, value: int) -> "EncodedMethod":
        """Decode the firmware byte."""
        return cls(
            method_index=value & METHOD_MASK,
            california_restriction=bool((value >> RESTRICTION_BIT) & 1),
        )

    def to_byte(self) -> int:
        """Re-encode into the firmware byte."""
        return (int(self.california_restriction) << RESTRICTION_BIT) | self.method_index

    @property
    def method(self) -> Optional[AdjustmentMethod]:
        """Known adjustment method, or None for an unrecognized index."""
        try:
            return AdjustmentMethod(self.method_index)
        except ValueError:
            return None


class AdjustmentOptions(BaseModel):
    """Optional tuning values sent by the firmware in the ``wto`` parameter.

    Attributes:
        bh: Baseline humidity (percent)
        bt: Baseline temperature (Fahrenheit)
        br: Baseline precipitation (inches)
        h: Humidity factor weight (percent)
        t: Temperature factor weight (percent)
        r: Precipitation factor weight (percent)
        d: Rain delay duration (hours)
    """

    model_config = ConfigDict(frozen=True, extra="ignore", allow_inf_nan=False)

    bh: Optional[float] = None
    bt: Optional[float] = None
    br: Optional[float] = None
    h: Optional[float] = None
    t: Optional[float] = None
    r: Optional[float] = None
    d: Optional[float] = None


class AdjustmentResult(BaseModel):
    """Final decision returned to the controller."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    scale: int = Field(..., description="Watering percentage, or -1 when not applicable")
    rain_delay: int = Field(-1, alias="rd", description="Rain delay hours, or -1")
    timezone: int = Field(..., alias="tz", description="Firmware-encoded timezone byte")
    sunrise: int
    sunset: int
    external_ip: int = Field(0, alias="eip", description="Client IPv4 address as uint32")
