"""Validation structures and laser scenario advisory checks.

Pydantic already rejects malformed scenarios. The checks here look at
combinations of fields that parse fine but cannot be evaluated, or that
will produce a result the user may not expect (N/A limits, a collimated
beam, near-CW pulse trains).
"""

from dataclasses import dataclass, field
from typing import Any

from lasersafety.application.config.schema import ScenarioConfiguration
from lasersafety.domain.services.laser import validate_pulse_parameters
from lasersafety.domain.services.laser.evaluator import check_range
from lasersafety.domain.value_objects import LimitStatus

# Class 2 only exists for visible emission
CLASS_2_MIN_NM: float = 400.0
CLASS_2_MAX_NM: float = 700.0


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "pulse.pulse_width_s")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the scenario has no blocking errors."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """Get the CLI exit code based on validation status.

        Returns:
            0 if valid with no warnings
            1 if there are errors
            2 if valid but has warnings
        """
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(ValidationWarning(path=path, message=message, suggestion=suggestion))
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another ValidationResult into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def check_pulse_advisories(config: ScenarioConfiguration) -> ValidationResult:
    """Check that the pulse train fits its period and the exposure.

    Args:
        config: A validated ScenarioConfiguration instance

    Returns:
        ValidationResult with errors for impossible pulse trains and
        warnings for near-CW duty cycles
    """
    result = ValidationResult()
    if config.pulse is None:
        return result

    pulse = config.pulse
    validation = validate_pulse_parameters(pulse.pulse_width_s, pulse.repetition_rate_hz)
    for message in validation.errors:
        result.add_error(path="pulse", message=message, value=pulse.pulse_width_s)
    for message in validation.warnings:
        result.add_warning(
            path="pulse",
            message=message,
            suggestion="Consider evaluating the laser as CW at its average power",
        )

    if pulse.pulse_width_s > config.exposure.exposure_time_s:
        result.add_error(
            path="exposure.exposure_time_s",
            message=(
                f"Exposure time ({config.exposure.exposure_time_s:g} s) is shorter than "
                f"one pulse ({pulse.pulse_width_s:g} s)"
            ),
            value=config.exposure.exposure_time_s,
        )
    return result


def check_range_advisories(config: ScenarioConfiguration) -> ValidationResult:
    """Warn about inputs that evaluate to N/A instead of a number."""
    result = ValidationResult()
    wavelength = config.laser.wavelength_nm
    exposure = config.exposure

    if check_range(wavelength, exposure.exposure_time_s) == LimitStatus.NOT_APPLICABLE:
        result.add_warning(
            path="laser.wavelength_nm",
            message=(
                f"{wavelength:g} nm at {exposure.exposure_time_s:g} s is outside the "
                "tabulated range (180 nm - 1 mm, 1e-13 s - 30000 s)"
            ),
            suggestion="Limits for this scenario will be reported as N/A",
        )

    if exposure.target == "skin" and exposure.emission_class is not None:
        result.add_warning(
            path="exposure.emission_class",
            message="Emission limits are defined for the eye only",
            suggestion="Remove emission_class to evaluate the skin MPE",
        )

    if exposure.emission_class == "2" and not CLASS_2_MIN_NM <= wavelength <= CLASS_2_MAX_NM:
        result.add_warning(
            path="exposure.emission_class",
            message=f"Class 2 is only defined for 400-700 nm, not {wavelength:g} nm",
        )
    return result


def check_beam_advisories(config: ScenarioConfiguration) -> ValidationResult:
    """Check that the beam description supports the requested analyses."""
    result = ValidationResult()
    laser = config.laser
    outputs = config.outputs

    if outputs.eyewear and laser.beam_diameter_mm == 0:
        result.add_error(
            path="laser.beam_diameter_mm",
            message="Eyewear assessment needs a positive beam diameter",
            value=laser.beam_diameter_mm,
        )

    if outputs.nohd and laser.divergence_mrad == 0:
        result.add_warning(
            path="laser.divergence_mrad",
            message="A collimated beam gives a hazard distance of either 0 or infinity",
            suggestion="Use the measured far-field divergence if it is known",
        )
    return result


def validate_scenario(config: ScenarioConfiguration) -> ValidationResult:
    """Perform full validation of a scenario.

    Args:
        config: A ScenarioConfiguration instance (already validated by Pydantic)

    Returns:
        ValidationResult containing any errors or warnings
    """
    result = ValidationResult()
    result.merge(check_pulse_advisories(config))
    result.merge(check_range_advisories(config))
    result.merge(check_beam_advisories(config))
    return result
