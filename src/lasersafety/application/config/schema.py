"""Pydantic configuration schema models for laser exposure scenarios.

This module defines the schema for JSON scenario files. A scenario names
one laser (wavelength, output and beam), optional pulse timing, the
exposure conditions and which analyses to run. It uses Pydantic v2 for
validation and serialization.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Supported schema versions for scenario files
# Version 1.0: Initial schema with laser, pulse, exposure and outputs
# Version 1.1: Added analysis defaults (OD warning threshold, EN 207 scale)
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})

TargetConfig = Literal["auto", "point_source_eye", "extended_source_eye", "skin"]
EmissionClassConfig = Literal["1", "2", "3R", "3B"]


class LaserConfig(BaseModel):
    """Laser output and beam at the aperture.

    Give exactly one of ``power_w`` (CW, or average power of a pulse
    train) and ``pulse_energy_j`` (energy per pulse; needs ``pulse``).

    Example:
        ```json
        "laser": {
            "wavelength_nm": 532,
            "power_w": 0.005,
            "beam_diameter_mm": 2.0,
            "divergence_mrad": 1.0
        }
        ```
    """

    model_config = ConfigDict(extra="forbid")

    wavelength_nm: float = Field(..., gt=0, le=1e6, description="Emission wavelength in nm")
    power_w: float | None = Field(default=None, ge=0, description="CW or average power in W")
    pulse_energy_j: float | None = Field(default=None, ge=0, description="Energy per pulse in J")
    beam_diameter_mm: float = Field(
        default=0.0, ge=0, description="Beam diameter at the aperture in mm"
    )
    divergence_mrad: float = Field(
        default=0.0, ge=0, description="Full-angle beam divergence in mrad"
    )

    @model_validator(mode="after")
    def validate_output(self) -> "LaserConfig":
        """Validate that exactly one of power and pulse energy is given."""
        if (self.power_w is None) == (self.pulse_energy_j is None):
            raise ValueError("give exactly one of power_w and pulse_energy_j")
        return self


class PulseConfig(BaseModel):
    """Pulse timing for a repetitively pulsed laser."""

    model_config = ConfigDict(extra="forbid")

    pulse_width_s: float = Field(..., gt=0, description="Duration of one pulse in s")
    repetition_rate_hz: float = Field(..., gt=0, description="Pulse repetition rate in Hz")


class ExposureConfig(BaseModel):
    """Exposure conditions.

    Attributes:
        exposure_time_s: Exposure duration. 0.25 s is the aversion response
            for visible beams.
        angular_subtense_mrad: Apparent source size seen from the eye.
        target: Tissue to evaluate; "auto" picks point or extended source
            eye from the angular subtense.
        emission_class: Evaluate the AEL of this class instead of the MPE.
    """

    model_config = ConfigDict(extra="forbid")

    exposure_time_s: float = Field(default=0.25, gt=0, le=30000)
    angular_subtense_mrad: float = Field(default=1.5, ge=0)
    target: TargetConfig = "auto"
    emission_class: EmissionClassConfig | None = None
    intentional_viewing: bool = Field(
        default=False, description="Product is designed for long-term viewing"
    )


class OutputsConfig(BaseModel):
    """Which analyses a scenario run produces."""

    model_config = ConfigDict(extra="forbid")

    exposure_limit: bool = True
    critical_limit: bool = True
    nohd: bool = True
    classification: bool = True
    eyewear: bool = True
    trace: bool = False


class AnalysisConfig(BaseModel):
    """Analysis defaults (v1.1+)."""

    model_config = ConfigDict(extra="forbid")

    od_warning_threshold: float = Field(default=7.0, gt=0)
    max_scale_number: int = Field(default=10, ge=1)


class ScenarioConfiguration(BaseModel):
    """Root configuration model for a laser exposure scenario.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        name: Optional scenario name used in reports
        laser: Laser output and beam
        pulse: Pulse timing; omit for CW
        exposure: Exposure conditions
        outputs: Analyses to run
        analysis: Optional analysis defaults (v1.1+)

    Example:
        >>> config = ScenarioConfiguration(
        ...     schema_version="1.0",
        ...     laser=LaserConfig(wavelength_nm=532, power_w=0.005),
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    name: str | None = Field(default=None, max_length=200)
    laser: LaserConfig
    pulse: PulseConfig | None = Field(default=None, description="Pulse timing (optional)")
    exposure: ExposureConfig = Field(default_factory=ExposureConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)
    analysis: AnalysisConfig | None = Field(
        default=None, description="Analysis defaults (optional)"
    )

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported.

        Newer minor versions of a supported major version are accepted.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @model_validator(mode="after")
    def validate_pulse_energy(self) -> "ScenarioConfiguration":
        """Validate that a pulse energy comes with pulse timing."""
        if self.laser.pulse_energy_j is not None and self.pulse is None:
            raise ValueError("laser.pulse_energy_j requires a pulse section")
        return self
