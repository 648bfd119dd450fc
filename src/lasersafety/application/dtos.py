"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from lasersafety.domain.services.laser import (
    CriticalLimitResult,
    ExposureLimit,
    EyewearRequirement,
    LaserClassification,
    NOHDAssessment,
)
from lasersafety.domain.value_objects import (
    EmissionClass,
    HazardTarget,
    PulseParameters,
    SourceGeometry,
)


@dataclass
class AnalysisSelection:
    """Analyses requested for a scenario run."""

    exposure_limit: bool = True
    critical_limit: bool = True
    nohd: bool = True
    classification: bool = True
    eyewear: bool = True


@dataclass
class ScenarioInput:
    """Input DTO for one laser exposure scenario, in SI units.

    Attributes:
        wavelength_nm: Emission wavelength.
        exposure_time_s: Exposure duration.
        geometry: Apparent source size.
        beam_diameter_m: Beam diameter at the aperture.
        divergence_rad: Full-angle divergence.
        average_power_w: CW power, or pulse energy times repetition rate.
        pulse_energy_j: Energy per pulse; None for CW.
        pulse: Pulse timing; None for CW.
        target: Explicit tissue; None picks the eye target from the geometry.
        emission_class: Evaluate this class AEL instead of the MPE.
        intentional_viewing: Long-term viewing time base for classification.
        name: Scenario name for reports.
        analyses: Which analyses to run.
    """

    wavelength_nm: float
    exposure_time_s: float
    geometry: SourceGeometry
    beam_diameter_m: float
    divergence_rad: float
    average_power_w: float
    pulse_energy_j: float | None = None
    pulse: PulseParameters | None = None
    target: HazardTarget | None = None
    emission_class: EmissionClass | None = None
    intentional_viewing: bool = False
    name: str | None = None
    analyses: AnalysisSelection = field(default_factory=AnalysisSelection)

    @property
    def is_pulsed(self) -> bool:
        return self.pulse is not None

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if self.wavelength_nm <= 0:
            errors.append("Wavelength must be positive")
        if self.exposure_time_s <= 0:
            errors.append("Exposure time must be positive")
        if self.average_power_w < 0:
            errors.append("Power cannot be negative")
        if self.beam_diameter_m < 0:
            errors.append("Beam diameter cannot be negative")
        if self.divergence_rad < 0:
            errors.append("Divergence cannot be negative")
        if self.pulse_energy_j is not None and self.pulse is None:
            errors.append("Pulse energy requires pulse timing")
        return errors


@dataclass
class ScenarioReport:
    """Output DTO with every analysis a scenario run produced.

    Attributes:
        scenario: The input the report was computed from.
        exposure_limit: MPE (or AEL) at the exposure time.
        critical_limit: Pulse rules result; pulsed scenarios only.
        nohd: Eye and skin hazard distances.
        classification: Laser product class.
        eyewear: Required optical density and EN 207 marking.
        errors: Analyses that could not be run and why.
    """

    scenario: ScenarioInput
    exposure_limit: ExposureLimit | None = None
    critical_limit: CriticalLimitResult | None = None
    nohd: NOHDAssessment | None = None
    classification: LaserClassification | None = None
    eyewear: EyewearRequirement | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if every requested analysis ran."""
        return len(self.errors) == 0
