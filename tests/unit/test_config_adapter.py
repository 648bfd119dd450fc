"""Unit tests for the scenario configuration adapter."""

import copy

import pytest

from lasersafety.application.config import (
    ScenarioConfiguration,
    config_to_analyses,
    config_to_scenario,
    config_to_service_config,
)
from lasersafety.domain.value_objects import EmissionClass, HazardTarget, SourceGeometry


@pytest.fixture
def pulsed_config(helium_neon_config) -> dict:
    data = copy.deepcopy(helium_neon_config)
    data["laser"] = {
        "wavelength_nm": 1064,
        "pulse_energy_j": 1e-6,
        "beam_diameter_mm": 2.0,
        "divergence_mrad": 0.5,
    }
    data["pulse"] = {"pulse_width_s": 1e-8, "repetition_rate_hz": 1000}
    return data


class TestConfigToScenario:
    """Tests for config_to_scenario."""

    def test_converts_to_si(self, helium_neon_config) -> None:
        scenario = config_to_scenario(ScenarioConfiguration.model_validate(helium_neon_config))

        assert scenario.wavelength_nm == 632.8
        assert scenario.beam_diameter_m == pytest.approx(1e-3)
        assert scenario.divergence_rad == pytest.approx(1e-3)
        assert scenario.average_power_w == 1e-3
        assert scenario.geometry == SourceGeometry(1.5)
        assert scenario.name == "HeNe alignment laser"
        assert not scenario.is_pulsed

    def test_auto_target_is_left_to_geometry(self, helium_neon_config) -> None:
        scenario = config_to_scenario(ScenarioConfiguration.model_validate(helium_neon_config))
        assert scenario.target is None

    def test_explicit_target_and_class(self, helium_neon_config) -> None:
        data = copy.deepcopy(helium_neon_config)
        data["exposure"].update({"target": "skin", "emission_class": "3R"})
        scenario = config_to_scenario(ScenarioConfiguration.model_validate(data))

        assert scenario.target == HazardTarget.SKIN
        assert scenario.emission_class == EmissionClass.CLASS_3R

    def test_pulse_energy_gives_average_power(self, pulsed_config) -> None:
        scenario = config_to_scenario(ScenarioConfiguration.model_validate(pulsed_config))

        assert scenario.is_pulsed
        assert scenario.pulse_energy_j == 1e-6
        assert scenario.average_power_w == pytest.approx(1e-3)
        assert scenario.pulse.pulse_width_s == 1e-8

    def test_average_power_gives_pulse_energy(self, pulsed_config) -> None:
        pulsed_config["laser"] = {"wavelength_nm": 1064, "power_w": 0.5, "beam_diameter_mm": 2.0}
        scenario = config_to_scenario(ScenarioConfiguration.model_validate(pulsed_config))

        assert scenario.average_power_w == 0.5
        assert scenario.pulse_energy_j == pytest.approx(5e-4)

    def test_analyses_follow_outputs(self, helium_neon_config) -> None:
        data = copy.deepcopy(helium_neon_config)
        data["outputs"] = {"nohd": False, "eyewear": False}
        analyses = config_to_analyses(ScenarioConfiguration.model_validate(data))

        assert analyses.exposure_limit
        assert not analyses.nohd
        assert not analyses.eyewear


class TestConfigToServiceConfig:
    """Tests for config_to_service_config."""

    def test_geometry_default_from_exposure(self, helium_neon_config) -> None:
        data = copy.deepcopy(helium_neon_config)
        data["exposure"]["angular_subtense_mrad"] = 12.0
        config = config_to_service_config(ScenarioConfiguration.model_validate(data))

        assert config.default_angular_subtense_mrad == 12.0
        assert config.max_scale_number == 10

    def test_analysis_section(self, helium_neon_config) -> None:
        data = {
            **helium_neon_config,
            "schema_version": "1.1",
            "analysis": {"od_warning_threshold": 5.0, "max_scale_number": 8},
        }
        config = config_to_service_config(ScenarioConfiguration.model_validate(data))

        assert config.od_warning_threshold == 5.0
        assert config.max_scale_number == 8
