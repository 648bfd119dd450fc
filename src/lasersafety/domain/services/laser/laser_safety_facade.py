"""Laser safety service facade.

This module provides the LaserSafetyService class that applies the
configured defaults and chains the engine functions for the composite
analyses (hazard distance, eyewear) that need more than one of them.
"""

from __future__ import annotations

import logging

from lasersafety.domain.value_objects import (
    EmissionClass,
    HazardTarget,
    PhysicalQuantity,
    PulseParameters,
    SourceGeometry,
    Unit,
)

from .classification import classify_laser, classify_multiwavelength
from .config import LaserSafetyConfig
from .critical_limit import evaluate_critical_limit
from .evaluator import evaluate_exposure_limit, evaluate_most_restrictive_mpe
from .eyewear import required_eyewear
from .models import (
    CriticalLimitResult,
    EmissionLine,
    ExposureLimit,
    EyewearRequirement,
    LaserClassification,
    MultiWavelengthClassification,
    NOHDAssessment,
    PulseTrainFactor,
    PulseValidation,
)
from .nohd import as_irradiance_limit, solve_nohd
from .pulse_train import evaluate_pulse_train_factor
from .units import beam_area_m2
from .validation import validate_pulse_parameters

logger = logging.getLogger(__name__)


class LaserSafetyService:
    """Service for laser exposure limit and hazard analysis.

    Wraps the pure engine functions, filling in the configured source
    geometry when a caller gives none, and composes them for hazard
    distance and eyewear assessment.

    All results are advisory and carry a status instead of raising for
    inapplicable or out-of-range inputs.

    Example:
        service = LaserSafetyService(LaserSafetyConfig())
        mpe = service.evaluate_exposure_limit(532.0, 0.25)
        nohd = service.assess_nohd(5e-3, 2e-3, 1e-3, 532.0, 0.25)

        print(mpe.formatted_message)
        print(nohd.formatted_message)
    """

    def __init__(self, config: LaserSafetyConfig | None = None) -> None:
        """Initialize LaserSafetyService with configuration.

        Args:
            config: Analysis defaults. Uses LaserSafetyConfig() if omitted.
        """
        self.config = config or LaserSafetyConfig()

    def geometry(self, angular_subtense_mrad: float | None = None) -> SourceGeometry:
        """Source geometry, falling back to the configured default."""
        if angular_subtense_mrad is None:
            angular_subtense_mrad = self.config.default_angular_subtense_mrad
        return SourceGeometry(angular_subtense_mrad)

    def _resolve(self, geometry: SourceGeometry | None) -> SourceGeometry:
        return geometry if geometry is not None else self.geometry()

    def evaluate_exposure_limit(
        self,
        wavelength_nm: float,
        exposure_time_s: float,
        geometry: SourceGeometry | None = None,
        target: HazardTarget | None = None,
        emission_class: EmissionClass | None = None,
    ) -> ExposureLimit:
        """MPE (or AEL) with the eye target implied by the geometry by default."""
        geometry = self._resolve(geometry)
        target = target or geometry.eye_target(wavelength_nm)
        return evaluate_exposure_limit(
            wavelength_nm, exposure_time_s, geometry, target, emission_class
        )

    def evaluate_most_restrictive_mpe(
        self,
        wavelength_nm: float,
        exposure_time_s: float,
        geometry: SourceGeometry | None = None,
    ) -> ExposureLimit:
        """Lowest of the eye and skin MPEs for the exposure."""
        return evaluate_most_restrictive_mpe(
            wavelength_nm, exposure_time_s, self._resolve(geometry)
        )

    def evaluate_pulse_train_factor(
        self,
        wavelength_nm: float,
        pulse_width_s: float,
        repetition_rate_hz: float,
        exposure_time_s: float,
        angular_subtense_mrad: float | None = None,
    ) -> PulseTrainFactor:
        return evaluate_pulse_train_factor(
            wavelength_nm,
            pulse_width_s,
            repetition_rate_hz,
            exposure_time_s,
            self.geometry(angular_subtense_mrad).angular_subtense_mrad,
        )

    def evaluate_critical_limit(
        self,
        wavelength_nm: float,
        exposure_time_s: float,
        pulse_width_s: float,
        repetition_rate_hz: float,
        geometry: SourceGeometry | None = None,
        emission_class: EmissionClass | None = None,
        target: HazardTarget | None = None,
    ) -> CriticalLimitResult:
        return evaluate_critical_limit(
            wavelength_nm,
            exposure_time_s,
            pulse_width_s,
            repetition_rate_hz,
            self._resolve(geometry),
            emission_class,
            target,
        )

    def validate_pulse_parameters(
        self, pulse_width_s: float, repetition_rate_hz: float
    ) -> PulseValidation:
        return validate_pulse_parameters(pulse_width_s, repetition_rate_hz)

    def solve_nohd(
        self,
        power_w: float,
        beam_diameter_m: float,
        divergence_rad: float,
        mpe_eye: ExposureLimit,
        mpe_skin: ExposureLimit,
    ) -> NOHDAssessment:
        return solve_nohd(power_w, beam_diameter_m, divergence_rad, mpe_eye, mpe_skin)

    def assess_nohd(
        self,
        power_w: float,
        beam_diameter_m: float,
        divergence_rad: float,
        wavelength_nm: float,
        exposure_time_s: float,
        geometry: SourceGeometry | None = None,
    ) -> NOHDAssessment:
        """Evaluate eye and skin MPEs and solve both hazard distances.

        Args:
            power_w: Beam power in W.
            beam_diameter_m: Beam diameter at the aperture in m.
            divergence_rad: Full-angle divergence in rad.
            wavelength_nm: Wavelength in nm.
            exposure_time_s: Exposure duration in s.
            geometry: Apparent source size; configured default if omitted.

        Returns:
            NOHDAssessment with the governing distance.
        """
        geometry = self._resolve(geometry)
        eye = self.evaluate_exposure_limit(wavelength_nm, exposure_time_s, geometry)
        skin = self.evaluate_exposure_limit(
            wavelength_nm, exposure_time_s, geometry, HazardTarget.SKIN
        )
        assessment = solve_nohd(
            power_w,
            beam_diameter_m,
            divergence_rad,
            as_irradiance_limit(eye, exposure_time_s),
            as_irradiance_limit(skin, exposure_time_s),
        )
        logger.debug(
            f"NOHD at {wavelength_nm} nm: {assessment.governing} governs, "
            f"{assessment.distance_m} m"
        )
        return assessment

    def classify(
        self,
        wavelength_nm: float,
        emission: PhysicalQuantity,
        geometry: SourceGeometry | None = None,
        pulse: PulseParameters | None = None,
        intentional_viewing: bool = False,
    ) -> LaserClassification:
        return classify_laser(
            wavelength_nm, emission, self._resolve(geometry), pulse, intentional_viewing
        )

    def classify_multiwavelength(
        self,
        lines: list[EmissionLine],
        geometry: SourceGeometry | None = None,
        intentional_viewing: bool = False,
    ) -> MultiWavelengthClassification:
        return classify_multiwavelength(lines, self._resolve(geometry), intentional_viewing)

    def assess_eyewear(
        self,
        wavelength_nm: float,
        beam_diameter_m: float,
        exposure_time_s: float,
        power_w: float | None = None,
        pulse_energy_j: float | None = None,
        pulse: PulseParameters | None = None,
        geometry: SourceGeometry | None = None,
    ) -> EyewearRequirement:
        """Eyewear for a CW beam (``power_w``) or a pulse train (``pulse_energy_j``).

        CW exposure is the beam irradiance compared with the eye MPE at the
        exposure time. Pulsed exposure is the radiant exposure per pulse
        compared with the critical per-pulse MPE.

        Raises:
            ValueError: If neither or both of power and pulse energy are
                given, a pulse energy is given without pulse timing, or the
                beam diameter is not positive.
        """
        if (power_w is None) == (pulse_energy_j is None):
            raise ValueError("give exactly one of power_w and pulse_energy_j")
        if beam_diameter_m <= 0:
            raise ValueError("beam_diameter_m must be positive")
        geometry = self._resolve(geometry)
        area = beam_area_m2(beam_diameter_m)
        thresholds = {
            "od_warning_threshold": self.config.od_warning_threshold,
            "max_scale_number": self.config.max_scale_number,
        }

        if power_w is not None:
            exposure = PhysicalQuantity(power_w / area, Unit.WATT_PER_M2)
            mpe = self.evaluate_exposure_limit(wavelength_nm, exposure_time_s, geometry)
            return required_eyewear(
                wavelength_nm, exposure, mpe, exposure_time_s=exposure_time_s, **thresholds
            )

        if pulse is None:
            raise ValueError("pulse timing is required with pulse_energy_j")
        exposure = PhysicalQuantity(pulse_energy_j / area, Unit.JOULE_PER_M2)
        critical = self.evaluate_critical_limit(
            wavelength_nm,
            exposure_time_s,
            pulse.pulse_width_s,
            pulse.repetition_rate_hz,
            geometry,
        )
        return required_eyewear(
            wavelength_nm,
            exposure,
            critical.critical,
            pulse_width_s=pulse.pulse_width_s,
            exposure_time_s=pulse.pulse_width_s,
            **thresholds,
        )
