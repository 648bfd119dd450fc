"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from lasersafety.web.schemas.common import EmissionClassEnum, PulseTimingSchema, TargetEnum


class ExposureLimitRequest(BaseModel):
    """Request for an MPE or, with an emission class, an AEL."""

    wavelength_nm: float = Field(..., gt=0, description="Wavelength in nm")
    exposure_time_s: float = Field(..., gt=0, description="Exposure duration in s")
    angular_subtense_mrad: float | None = Field(
        default=None, ge=0, description="Apparent source size; service default if omitted"
    )
    target: TargetEnum | None = Field(
        default=None, description="Tissue; eye target from the source size if omitted"
    )
    emission_class: EmissionClassEnum | None = Field(
        default=None, description="Evaluate this class AEL instead of the MPE"
    )
    include_trace: bool = Field(default=False, description="Include the derivation trace")


class PulseTrainRequest(BaseModel):
    """Request for the pulse-train correction factor C5."""

    wavelength_nm: float = Field(..., gt=0, description="Wavelength in nm")
    pulse_width_s: float = Field(..., gt=0, description="Duration of one pulse in s")
    repetition_rate_hz: float = Field(..., gt=0, description="Pulse repetition rate in Hz")
    exposure_time_s: float = Field(..., gt=0, description="Exposure duration in s")
    angular_subtense_mrad: float | None = Field(default=None, ge=0)
    include_trace: bool = False


class CriticalLimitRequest(BaseModel):
    """Request for the critical per-pulse limit of a pulse train."""

    wavelength_nm: float = Field(..., gt=0, description="Wavelength in nm")
    exposure_time_s: float = Field(..., gt=0, description="Exposure duration in s")
    pulse_width_s: float = Field(..., gt=0, description="Duration of one pulse in s")
    repetition_rate_hz: float = Field(..., gt=0, description="Pulse repetition rate in Hz")
    angular_subtense_mrad: float | None = Field(default=None, ge=0)
    target: TargetEnum | None = None
    emission_class: EmissionClassEnum | None = None
    include_trace: bool = False


class NOHDRequest(BaseModel):
    """Request for the eye and skin hazard distances of a beam."""

    power_w: float = Field(..., ge=0, description="Beam power in W")
    beam_diameter_mm: float = Field(..., ge=0, description="Beam diameter at the aperture in mm")
    divergence_mrad: float = Field(..., ge=0, description="Full-angle divergence in mrad")
    wavelength_nm: float = Field(..., gt=0, description="Wavelength in nm")
    exposure_time_s: float = Field(default=0.25, gt=0, description="Exposure duration in s")
    angular_subtense_mrad: float | None = Field(default=None, ge=0)
    include_trace: bool = False


class EmissionLineSchema(BaseModel):
    """Laser output at one wavelength as CW power or energy per pulse."""

    wavelength_nm: float = Field(..., gt=0, description="Wavelength in nm")
    power_w: float | None = Field(default=None, ge=0, description="CW power in W")
    pulse_energy_j: float | None = Field(default=None, ge=0, description="Energy per pulse in J")
    pulse: PulseTimingSchema | None = Field(default=None, description="Pulse timing")

    @model_validator(mode="after")
    def validate_emission(self) -> "EmissionLineSchema":
        """Validate that exactly one emission is given, and energy comes with timing."""
        if (self.power_w is None) == (self.pulse_energy_j is None):
            raise ValueError("give exactly one of power_w and pulse_energy_j")
        if self.pulse_energy_j is not None and self.pulse is None:
            raise ValueError("pulse_energy_j requires pulse timing")
        return self


class _EmissionRequest(EmissionLineSchema):
    angular_subtense_mrad: float | None = Field(default=None, ge=0)
    include_trace: bool = False


class ClassifyRequest(_EmissionRequest):
    """Request for laser product classification."""

    intentional_viewing: bool = Field(
        default=False, description="Product is designed for long-term viewing"
    )


class MultiWavelengthClassifyRequest(BaseModel):
    """Request for classifying several wavelengths emitted together."""

    lines: list[EmissionLineSchema] = Field(..., min_length=1, description="Emission lines")
    angular_subtense_mrad: float | None = Field(default=None, ge=0)
    intentional_viewing: bool = False
    include_trace: bool = False


class EyewearRequest(_EmissionRequest):
    """Request for protective eyewear selection."""

    beam_diameter_mm: float = Field(..., gt=0, description="Beam diameter at the eye in mm")
    exposure_time_s: float = Field(default=0.25, gt=0, description="Exposure duration in s")


class ScenarioRequest(BaseModel):
    """Request for running a full scenario."""

    config: dict[str, Any] = Field(..., description="Scenario configuration JSON")
    include_trace: bool = False


class ScenarioValidateRequest(BaseModel):
    """Request for validating a scenario."""

    config: dict[str, Any] = Field(..., description="Scenario configuration JSON")
