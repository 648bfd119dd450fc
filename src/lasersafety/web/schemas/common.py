"""Common Pydantic schemas shared across requests and responses."""

from enum import Enum

from pydantic import BaseModel, Field


class TargetEnum(str, Enum):
    """Tissue an exposure limit applies to."""

    POINT_SOURCE_EYE = "point_source_eye"
    EXTENDED_SOURCE_EYE = "extended_source_eye"
    SKIN = "skin"


class EmissionClassEnum(str, Enum):
    """Laser classes with a tabulated accessible emission limit."""

    CLASS_1 = "1"
    CLASS_2 = "2"
    CLASS_3R = "3R"
    CLASS_3B = "3B"


class QuantitySchema(BaseModel):
    """A value with its unit. Unit "N/A" marks an undefined limit."""

    value: float = Field(..., description="Magnitude")
    unit: str = Field(..., description="W, W/m2, W/cm2, J, J/m2, J/cm2 or N/A")


class PulseTimingSchema(BaseModel):
    """Pulse timing for a repetitively pulsed laser."""

    pulse_width_s: float = Field(..., gt=0, description="Duration of one pulse in s")
    repetition_rate_hz: float = Field(..., gt=0, description="Pulse repetition rate in Hz")
