"""Scenario configuration schema and loading.

This package provides JSON-based scenario loading and validation. It
includes Pydantic models for schema validation, a loader with error
reporting, advisory checks and an adapter to the engine's inputs.

Public API:
    - ScenarioConfiguration: Root configuration model
    - LaserConfig, PulseConfig, ExposureConfig, OutputsConfig, AnalysisConfig
    - load_scenario: Load a scenario from a JSON file
    - load_scenario_from_dict: Load a scenario from a dictionary
    - ConfigError: Exception for configuration errors
    - validate_scenario: Advisory checks beyond the schema
    - config_to_scenario: Convert a scenario to a ScenarioInput DTO
    - config_to_service_config: Build LaserSafetyConfig from a scenario

Example:
    >>> from pathlib import Path
    >>> from lasersafety.application.config import load_scenario, ConfigError
    >>>
    >>> try:
    ...     config = load_scenario(Path("green-pointer.json"))
    ...     print(f"Wavelength: {config.laser.wavelength_nm} nm")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from lasersafety.application.config.adapter import (
    config_to_analyses,
    config_to_scenario,
    config_to_service_config,
)
from lasersafety.application.config.loader import (
    ConfigError,
    load_scenario,
    load_scenario_from_dict,
)
from lasersafety.application.config.schema import (
    SUPPORTED_VERSIONS,
    AnalysisConfig,
    ExposureConfig,
    LaserConfig,
    OutputsConfig,
    PulseConfig,
    ScenarioConfiguration,
)
from lasersafety.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_scenario,
)

__all__ = [
    # Loader
    "ConfigError",
    "load_scenario",
    "load_scenario_from_dict",
    # Schema
    "SUPPORTED_VERSIONS",
    "AnalysisConfig",
    "ExposureConfig",
    "LaserConfig",
    "OutputsConfig",
    "PulseConfig",
    "ScenarioConfiguration",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate_scenario",
    # Adapter
    "config_to_analyses",
    "config_to_scenario",
    "config_to_service_config",
]
