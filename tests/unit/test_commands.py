"""Unit tests for EvaluateScenarioCommand."""

from __future__ import annotations

import pytest

from lasersafety.application import (
    AnalysisSelection,
    EvaluateScenarioCommand,
    ScenarioInput,
)
from lasersafety.domain.services.laser import LaserClass, LimitingRule
from lasersafety.domain.value_objects import LimitStatus, PulseParameters, SourceGeometry


def _green_pointer(**overrides) -> ScenarioInput:
    values = {
        "wavelength_nm": 532.0,
        "exposure_time_s": 0.25,
        "geometry": SourceGeometry(1.5),
        "beam_diameter_m": 2e-3,
        "divergence_rad": 1e-3,
        "average_power_w": 5e-3,
        "name": "Green pointer",
    }
    values.update(overrides)
    return ScenarioInput(**values)


class TestScenarioInput:
    """Tests for ScenarioInput validation."""

    def test_valid(self) -> None:
        assert _green_pointer().validate() == []

    def test_collects_every_error(self) -> None:
        scenario = _green_pointer(
            wavelength_nm=0.0, exposure_time_s=-1.0, average_power_w=-1.0, pulse_energy_j=1e-3
        )
        errors = scenario.validate()

        assert "Wavelength must be positive" in errors
        assert "Exposure time must be positive" in errors
        assert "Power cannot be negative" in errors
        assert "Pulse energy requires pulse timing" in errors


class TestEvaluateScenarioCommand:
    """Tests for EvaluateScenarioCommand."""

    def test_cw_scenario_runs_every_analysis(self) -> None:
        report = EvaluateScenarioCommand().execute(_green_pointer())

        assert report.is_valid
        assert report.exposure_limit.quantity.value == pytest.approx(6.364, rel=1e-3)
        assert report.critical_limit is None
        assert report.nohd.distance_m == pytest.approx(13.814, rel=1e-3)
        assert report.classification.laser_class == LaserClass.CLASS_3R
        assert report.eyewear.marking == "532 D LB2"

    def test_pulsed_scenario(self) -> None:
        scenario = _green_pointer(
            exposure_time_s=10.0,
            average_power_w=1e-3,
            pulse_energy_j=1e-6,
            pulse=PulseParameters(1e-8, 1000.0),
        )
        report = EvaluateScenarioCommand().execute(scenario)

        assert report.is_valid
        assert report.critical_limit.limiting_rule == LimitingRule.THERMAL_TRAIN
        assert report.eyewear.marking == "532 R LB3"
        assert report.classification.emission.value == 1e-6

    def test_selected_analyses_only(self) -> None:
        scenario = _green_pointer(
            analyses=AnalysisSelection(nohd=False, classification=False, eyewear=False)
        )
        report = EvaluateScenarioCommand().execute(scenario)

        assert report.exposure_limit is not None
        assert report.nohd is None
        assert report.classification is None
        assert report.eyewear is None

    def test_invalid_input_short_circuits(self) -> None:
        report = EvaluateScenarioCommand().execute(_green_pointer(wavelength_nm=-1.0))

        assert not report.is_valid
        assert report.exposure_limit is None

    def test_failed_analysis_is_recorded(self) -> None:
        """A zero beam diameter stops the eyewear analysis only."""
        report = EvaluateScenarioCommand().execute(_green_pointer(beam_diameter_m=0.0))

        assert report.errors == ["Eyewear: beam_diameter_m must be positive"]
        assert report.nohd is not None
        assert report.classification is not None

    def test_out_of_range_is_a_status_not_an_error(self) -> None:
        report = EvaluateScenarioCommand().execute(_green_pointer(exposure_time_s=1e5))

        assert report.exposure_limit.status == LimitStatus.NOT_APPLICABLE
        assert report.nohd.status == LimitStatus.NOT_APPLICABLE
