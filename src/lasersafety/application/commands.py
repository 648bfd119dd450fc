"""Application commands (use cases) for laser exposure scenarios."""

from __future__ import annotations

import logging

from lasersafety.domain.services.laser import LaserSafetyService
from lasersafety.domain.value_objects import PhysicalQuantity, Unit

from .dtos import ScenarioInput, ScenarioReport

logger = logging.getLogger(__name__)


class EvaluateScenarioCommand:
    """Command to run every requested analysis for one scenario.

    The exposure limit, hazard distance, classification and eyewear
    analyses are independent; a programming error in one (for example a
    unit mismatch) is recorded in the report and the rest still run.
    """

    def __init__(self, service: LaserSafetyService | None = None) -> None:
        self.service = service or LaserSafetyService()

    def execute(self, scenario: ScenarioInput) -> ScenarioReport:
        """Execute the scenario.

        Args:
            scenario: Laser, beam and exposure conditions in SI units.

        Returns:
            ScenarioReport with one entry per requested analysis and the
            errors of any analysis that could not run.
        """
        report = ScenarioReport(scenario=scenario)
        errors = scenario.validate()
        if errors:
            report.errors.extend(errors)
            return report

        label = scenario.name or f"{scenario.wavelength_nm:g} nm"
        logger.info(f"Evaluating scenario {label}")
        analyses = scenario.analyses

        if analyses.exposure_limit:
            report.exposure_limit = self.service.evaluate_exposure_limit(
                scenario.wavelength_nm,
                scenario.exposure_time_s,
                scenario.geometry,
                scenario.target,
                scenario.emission_class,
            )

        if analyses.critical_limit and scenario.pulse is not None:
            report.critical_limit = self.service.evaluate_critical_limit(
                scenario.wavelength_nm,
                scenario.exposure_time_s,
                scenario.pulse.pulse_width_s,
                scenario.pulse.repetition_rate_hz,
                scenario.geometry,
                scenario.emission_class,
                scenario.target,
            )

        if analyses.nohd:
            self._run(report, "Hazard distance", self._nohd, scenario)
        if analyses.classification:
            self._run(report, "Classification", self._classify, scenario)
        if analyses.eyewear:
            self._run(report, "Eyewear", self._eyewear, scenario)

        logger.info(f"Scenario {label} finished with {len(report.errors)} error(s)")
        return report

    def _run(self, report: ScenarioReport, name: str, analysis, scenario: ScenarioInput) -> None:
        try:
            analysis(report, scenario)
        except ValueError as e:
            logger.warning(f"{name} analysis failed: {e}")
            report.errors.append(f"{name}: {e}")

    def _nohd(self, report: ScenarioReport, scenario: ScenarioInput) -> None:
        report.nohd = self.service.assess_nohd(
            scenario.average_power_w,
            scenario.beam_diameter_m,
            scenario.divergence_rad,
            scenario.wavelength_nm,
            scenario.exposure_time_s,
            scenario.geometry,
        )

    def _classify(self, report: ScenarioReport, scenario: ScenarioInput) -> None:
        if scenario.pulse is not None:
            emission = PhysicalQuantity(scenario.pulse_energy_j, Unit.JOULE)
        else:
            emission = PhysicalQuantity(scenario.average_power_w, Unit.WATT)
        report.classification = self.service.classify(
            scenario.wavelength_nm,
            emission,
            scenario.geometry,
            scenario.pulse,
            scenario.intentional_viewing,
        )

    def _eyewear(self, report: ScenarioReport, scenario: ScenarioInput) -> None:
        if scenario.pulse is not None:
            report.eyewear = self.service.assess_eyewear(
                scenario.wavelength_nm,
                scenario.beam_diameter_m,
                scenario.exposure_time_s,
                pulse_energy_j=scenario.pulse_energy_j,
                pulse=scenario.pulse,
                geometry=scenario.geometry,
            )
        else:
            report.eyewear = self.service.assess_eyewear(
                scenario.wavelength_nm,
                scenario.beam_diameter_m,
                scenario.exposure_time_s,
                power_w=scenario.average_power_w,
                geometry=scenario.geometry,
            )
