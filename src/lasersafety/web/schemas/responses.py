"""Pydantic response schemas for the REST API.

Infinite hazard distances are sent as ``distance_m: null`` with
``is_infinite: true``; JSON has no infinity.
"""

from typing import Any

from pydantic import BaseModel, Field

from lasersafety.web.schemas.common import QuantitySchema


class CorrectionFactorsSchema(BaseModel):
    """Correction factors a limit was evaluated with."""

    c1: float
    c2: float
    c3: float
    c4: float
    c5: float
    c6: float
    c7: float
    t1: float = Field(..., description="UV-B transition time in s")
    t2: float = Field(..., description="Retinal thermal confinement time in s")
    angular_subtense_max_mrad: float


class ExposureLimitSchema(BaseModel):
    """An MPE or AEL."""

    status: str = Field(..., description="defined, not_applicable, range_violation, ...")
    kind: str = Field(..., description="MPE or AEL")
    quantity: QuantitySchema
    target: str
    emission_class: str | None = None
    limiting_mechanism: str = ""
    formula: str = ""
    factors: CorrectionFactorsSchema | None = None
    trace: list[str] | None = None


class PulseTrainFactorSchema(BaseModel):
    """Pulse-train correction factor C5."""

    status: str
    c5: float = Field(..., description="Correction factor in [0.4, 1]")
    number_of_pulses: int = Field(..., description="Effective pulse count")
    time_base_s: float = Field(..., description="Thermal confinement time Ti")
    grouping: str = Field(..., description="Rule that fired")
    pulses_per_window: int = Field(default=1, description="Pulses sharing one Ti window")
    trace: list[str] | None = None


class PulseValidationSchema(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    duty_cycle: float = 0.0


class CriticalLimitSchema(BaseModel):
    """The three pulse rules and the one that governs."""

    status: str
    limiting_rule: str | None = None
    single_pulse: ExposureLimitSchema
    average_power: ExposureLimitSchema
    thermal_train: ExposureLimitSchema
    critical: ExposureLimitSchema
    pulse_train: PulseTrainFactorSchema | None = None
    validation: PulseValidationSchema | None = None
    trace: list[str] | None = None


class NOHDResultSchema(BaseModel):
    """Hazard distance for one MPE."""

    status: str
    distance_m: float | None = Field(default=None, description="Null when infinite or undefined")
    is_infinite: bool = False
    beam_diameter_at_distance_m: float | None = None
    irradiance_at_distance_w_m2: float | None = None
    mpe_w_m2: float | None = None
    hazard_level: str
    trace: list[str] | None = None


class NOHDAssessmentSchema(BaseModel):
    """Eye and skin hazard distances."""

    status: str
    governing: str = Field(..., description="eye or skin")
    distance_m: float | None = None
    is_infinite: bool = False
    eye: NOHDResultSchema
    skin: NOHDResultSchema


class ClassificationSchema(BaseModel):
    """Laser product classification."""

    status: str
    laser_class: str | None = Field(default=None, description="1, 2, 3R, 3B or 4")
    emission: QuantitySchema
    ael: ExposureLimitSchema | None = None
    ratio: float | None = Field(default=None, description="Emission divided by AEL")
    time_base_s: float
    description: str
    requirements: list[str] = Field(default_factory=list)
    trace: list[str] | None = None


class MultiWavelengthClassificationSchema(BaseModel):
    """Classification of several wavelengths emitted together."""

    status: str
    laser_class: str | None = Field(default=None, description="1, 2, 3R, 3B or 4")
    method: str = Field(..., description="additive or independent")
    additive_group: str | None = None
    sum_of_ratios: float | None = Field(default=None, description="Summed emission/AEL ratios")
    line_ratios: list[float] = Field(default_factory=list)
    lines: list[ClassificationSchema] = Field(
        default_factory=list, description="Per-line classes when independent"
    )
    description: str
    requirements: list[str] = Field(default_factory=list)
    trace: list[str] | None = None


class EyewearSchema(BaseModel):
    """Protective eyewear requirement."""

    status: str
    optical_density: float
    minimum_od: int
    scale_label: str
    test_condition: str
    marking: str = Field(..., description='EN 207 marking, e.g. "532 D LB5"')
    exposure: QuantitySchema
    mpe: QuantitySchema
    eyewear_needed: bool
    warnings: list[str] = Field(default_factory=list)
    trace: list[str] | None = None


class ScenarioSummarySchema(BaseModel):
    """Scenario inputs in SI units."""

    name: str | None = None
    wavelength_nm: float
    exposure_time_s: float
    angular_subtense_mrad: float
    beam_diameter_m: float
    divergence_rad: float
    average_power_w: float
    pulse_energy_j: float | None = None
    pulse_width_s: float | None = None
    repetition_rate_hz: float | None = None


class ScenarioReportSchema(BaseModel):
    """Response for a scenario run."""

    scenario: ScenarioSummarySchema
    exposure_limit: ExposureLimitSchema | None = None
    critical_limit: CriticalLimitSchema | None = None
    nohd: NOHDAssessmentSchema | None = None
    classification: ClassificationSchema | None = None
    eyewear: EyewearSchema | None = None
    errors: list[str] = Field(default_factory=list)


class ValidationResultSchema(BaseModel):
    """Response for scenario validation."""

    is_valid: bool = Field(..., description="Whether the scenario is valid")
    errors: list[dict[str, Any]] = Field(default_factory=list, description="Validation errors")
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation warnings"
    )


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
