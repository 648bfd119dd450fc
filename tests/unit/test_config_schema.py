"""Unit tests for scenario schema, loader and advisory validation.

These tests verify:
- Valid scenarios are loaded correctly
- Missing or conflicting laser output fields produce clear errors
- Unknown fields are rejected (extra="forbid")
- Schema version pattern and support validation
- Loader error handling (file not found, JSON parse errors, non-object root)
- Advisory checks and their exit codes
"""

import copy
from typing import Any

import pytest
from pydantic import ValidationError as PydanticValidationError

from lasersafety.application.config import (
    SUPPORTED_VERSIONS,
    ConfigError,
    ExposureConfig,
    LaserConfig,
    OutputsConfig,
    PulseConfig,
    ScenarioConfiguration,
    ValidationResult,
    load_scenario,
    load_scenario_from_dict,
    validate_scenario,
)
from lasersafety.application.config.loader import _dotted


def _with(config: dict[str, Any], **sections: dict[str, Any]) -> dict[str, Any]:
    """Copy a scenario and merge the given sections into it."""
    data = copy.deepcopy(config)
    for key, values in sections.items():
        data.setdefault(key, {}).update(values)
    return data


# =============================================================================
# Schema
# =============================================================================


class TestLaserConfig:
    """Tests for LaserConfig model."""

    def test_power_only(self) -> None:
        config = LaserConfig(wavelength_nm=532, power_w=5e-3)
        assert config.pulse_energy_j is None
        assert config.beam_diameter_mm == 0.0

    def test_requires_exactly_one_output(self) -> None:
        """Neither or both of power and pulse energy is an error."""
        with pytest.raises(PydanticValidationError, match="exactly one"):
            LaserConfig(wavelength_nm=532)
        with pytest.raises(PydanticValidationError, match="exactly one"):
            LaserConfig(wavelength_nm=532, power_w=1.0, pulse_energy_j=1e-3)

    @pytest.mark.parametrize("wavelength", [0, -532, 2e6])
    def test_wavelength_bounds(self, wavelength: float) -> None:
        with pytest.raises(PydanticValidationError):
            LaserConfig(wavelength_nm=wavelength, power_w=1e-3)

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(PydanticValidationError, match="extra"):
            LaserConfig(wavelength_nm=532, power_w=1e-3, colour="green")


class TestPulseAndExposureConfig:
    """Tests for PulseConfig, ExposureConfig and OutputsConfig."""

    def test_pulse_requires_positive_values(self) -> None:
        with pytest.raises(PydanticValidationError):
            PulseConfig(pulse_width_s=0, repetition_rate_hz=1000)

    def test_exposure_defaults(self) -> None:
        exposure = ExposureConfig()
        assert exposure.exposure_time_s == 0.25
        assert exposure.angular_subtense_mrad == 1.5
        assert exposure.target == "auto"
        assert exposure.emission_class is None

    def test_exposure_time_upper_bound(self) -> None:
        with pytest.raises(PydanticValidationError):
            ExposureConfig(exposure_time_s=40000)

    def test_rejects_unknown_target(self) -> None:
        with pytest.raises(PydanticValidationError):
            ExposureConfig(target="cornea")

    def test_outputs_default_to_everything_but_trace(self) -> None:
        outputs = OutputsConfig()
        assert outputs.nohd and outputs.eyewear and outputs.classification
        assert not outputs.trace


class TestScenarioConfiguration:
    """Tests for the root ScenarioConfiguration model."""

    def test_valid_minimal(self, helium_neon_config) -> None:
        config = ScenarioConfiguration.model_validate(helium_neon_config)
        assert config.name == "HeNe alignment laser"
        assert config.laser.wavelength_nm == 632.8
        assert config.pulse is None
        assert config.analysis is None

    @pytest.mark.parametrize("version", sorted(SUPPORTED_VERSIONS))
    def test_supported_versions(self, helium_neon_config, version: str) -> None:
        data = {**helium_neon_config, "schema_version": version}
        assert ScenarioConfiguration.model_validate(data).schema_version == version

    def test_newer_minor_version_accepted(self, helium_neon_config) -> None:
        data = {**helium_neon_config, "schema_version": "1.7"}
        assert ScenarioConfiguration.model_validate(data).schema_version == "1.7"

    def test_unsupported_major_version(self, helium_neon_config) -> None:
        data = {**helium_neon_config, "schema_version": "2.0"}
        with pytest.raises(PydanticValidationError, match="Unsupported schema version"):
            ScenarioConfiguration.model_validate(data)

    def test_version_pattern(self, helium_neon_config) -> None:
        data = {**helium_neon_config, "schema_version": "one"}
        with pytest.raises(PydanticValidationError):
            ScenarioConfiguration.model_validate(data)

    def test_pulse_energy_needs_pulse_section(self, helium_neon_config) -> None:
        data = copy.deepcopy(helium_neon_config)
        data["laser"] = {"wavelength_nm": 1064, "pulse_energy_j": 1e-6}
        with pytest.raises(PydanticValidationError, match="requires a pulse section"):
            ScenarioConfiguration.model_validate(data)


# =============================================================================
# Loader
# =============================================================================


class TestLoadScenario:
    """Tests for load_scenario and load_scenario_from_dict."""

    def test_loads_file(self, helium_neon_config, write_scenario) -> None:
        config = load_scenario(write_scenario(helium_neon_config))
        assert config.laser.power_w == 1e-3

    def test_file_not_found(self, tmp_path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_scenario(tmp_path / "missing.json")

        assert exc_info.value.error_type == "file_not_found"
        assert "not found" in str(exc_info.value)

    def test_json_parse_error(self, write_scenario) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_scenario(write_scenario('{"schema_version": "1.0",'))

        error = exc_info.value
        assert error.error_type == "json_parse"
        assert error.details[0]["line"] == 1
        assert "Invalid JSON" in error.message

    def test_non_object_root(self, write_scenario) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_scenario(write_scenario("[1, 2, 3]"))

        assert exc_info.value.error_type == "validation"
        assert exc_info.value.details[0]["path"] == "(root)"

    def test_validation_error_details(self, helium_neon_config, write_scenario) -> None:
        data = _with(helium_neon_config, laser={"wavelength_nm": -1})

        with pytest.raises(ConfigError) as exc_info:
            load_scenario(write_scenario(data))

        error = exc_info.value
        assert error.error_type == "validation"
        assert error.details[0]["path"] == "laser.wavelength_nm"
        assert error.details[0]["value"] == -1
        assert "laser.wavelength_nm" in error.message
        assert "(got: -1)" in error.message

    def test_validation_error_keeps_the_cause(self, helium_neon_config, write_scenario) -> None:
        data = _with(helium_neon_config, laser={"wavelength_nm": -1})

        with pytest.raises(ConfigError) as exc_info:
            load_scenario(write_scenario(data))

        assert isinstance(exc_info.value.__cause__, PydanticValidationError)
        assert exc_info.value.details[0]["error_type"] == "greater_than"

    @pytest.mark.parametrize(
        "loc,expected",
        [
            (("laser", "wavelength_nm"), "laser.wavelength_nm"),
            (("runs", 0, "power_w"), "runs[0].power_w"),
            ((0, "power_w"), "[0].power_w"),
            ((), "(root)"),
        ],
    )
    def test_error_paths(self, loc: tuple, expected: str) -> None:
        assert _dotted(loc) == expected

    def test_from_dict(self, helium_neon_config) -> None:
        assert load_scenario_from_dict(helium_neon_config).name == "HeNe alignment laser"

    def test_from_dict_error_has_no_path(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_scenario_from_dict({"schema_version": "1.0"})

        assert exc_info.value.path is None
        assert exc_info.value.details[0]["path"] == "laser"


# =============================================================================
# Advisory validation
# =============================================================================


class TestValidationResult:
    """Tests for ValidationResult exit codes."""

    def test_exit_codes(self) -> None:
        result = ValidationResult()
        assert result.exit_code == 0

        result.add_warning("laser", "check this")
        assert result.exit_code == 2
        assert result.is_valid

        result.add_error("laser", "broken")
        assert result.exit_code == 1
        assert not result.is_valid

    def test_merge(self) -> None:
        left = ValidationResult().add_error("a", "one")
        right = ValidationResult().add_warning("b", "two")
        merged = left.merge(right)

        assert merged is left
        assert len(merged.errors) == 1
        assert merged.has_warnings


class TestValidateScenario:
    """Tests for validate_scenario advisory checks."""

    def _validate(self, data: dict[str, Any]) -> ValidationResult:
        return validate_scenario(ScenarioConfiguration.model_validate(data))

    def test_clean_scenario(self, helium_neon_config) -> None:
        result = self._validate(helium_neon_config)
        assert result.exit_code == 0

    def test_pulse_longer_than_period(self, helium_neon_config) -> None:
        data = {**helium_neon_config, "pulse": {"pulse_width_s": 1e-2, "repetition_rate_hz": 1000}}
        result = self._validate(data)

        assert result.exit_code == 1
        assert result.errors[0].path == "pulse"
        assert "exceeds the pulse period" in result.errors[0].message

    def test_pulse_longer_than_exposure(self, helium_neon_config) -> None:
        data = {**helium_neon_config, "pulse": {"pulse_width_s": 0.5, "repetition_rate_hz": 1}}
        result = self._validate(data)

        assert any(error.path == "exposure.exposure_time_s" for error in result.errors)

    def test_near_continuous_duty_cycle(self, helium_neon_config) -> None:
        data = {**helium_neon_config, "pulse": {"pulse_width_s": 6e-4, "repetition_rate_hz": 1000}}
        result = self._validate(data)

        assert result.exit_code == 2
        assert result.warnings[0].suggestion is not None

    def test_eyewear_needs_beam_diameter(self, helium_neon_config) -> None:
        data = _with(helium_neon_config, laser={"beam_diameter_mm": 0})
        result = self._validate(data)

        assert result.exit_code == 1
        assert result.errors[0].path == "laser.beam_diameter_mm"

    def test_beam_diameter_not_needed_without_eyewear(self, helium_neon_config) -> None:
        data = _with(helium_neon_config, laser={"beam_diameter_mm": 0}, outputs={"eyewear": False})
        assert self._validate(data).is_valid

    def test_collimated_beam_warns(self, helium_neon_config) -> None:
        data = _with(helium_neon_config, laser={"divergence_mrad": 0})
        result = self._validate(data)

        assert result.exit_code == 2
        assert result.warnings[0].path == "laser.divergence_mrad"

    def test_outside_tables_warns(self, helium_neon_config) -> None:
        data = _with(helium_neon_config, laser={"wavelength_nm": 150})
        result = self._validate(data)

        assert result.warnings[0].path == "laser.wavelength_nm"
        assert "N/A" in result.warnings[0].suggestion

    def test_skin_with_emission_class_warns(self, helium_neon_config) -> None:
        data = _with(helium_neon_config, exposure={"target": "skin", "emission_class": "1"})
        result = self._validate(data)

        assert any("eye only" in warning.message for warning in result.warnings)

    def test_class_2_outside_visible_warns(self, helium_neon_config) -> None:
        data = _with(
            helium_neon_config,
            laser={"wavelength_nm": 1064},
            exposure={"emission_class": "2"},
        )
        result = self._validate(data)

        assert any("400-700 nm" in warning.message for warning in result.warnings)
