"""Laser safety result types.

This module contains the frozen dataclasses returned by every engine entry
point: exposure limits, pulse-train factors, critical limits, hazard
distances, pulse validation, classification and eyewear requirements.
Each carries a ``LimitStatus`` so callers can tell a defined value from an
inapplicable, rejected or geometrically inconsistent one without catching
exceptions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from lasersafety.domain.value_objects import (
    EmissionClass,
    HazardTarget,
    LimitStatus,
    PhysicalQuantity,
    PulseGrouping,
    PulseParameters,
)

from .constants import C5_MINIMUM
from .correction_factors import CorrectionFactorSet

_STATUS_PREFIX = {
    LimitStatus.DEFINED: "[OK]",
    LimitStatus.NOT_APPLICABLE: "[N/A]",
    LimitStatus.RANGE_VIOLATION: "[RANGE]",
    LimitStatus.INVALID_GEOMETRY: "[GEOMETRY]",
}


# ==============================================================================
# Exposure limits
# ==============================================================================


@dataclass(frozen=True)
class ExposureLimit:
    """MPE or AEL produced by the evaluator.

    Attributes:
        status: Outcome tag. Only DEFINED limits carry a numeric quantity.
        quantity: The limit, or the N/A sentinel.
        target: Tissue and viewing condition the limit protects.
        emission_class: Class for an AEL, None for an MPE.
        limiting_mechanism: Damage mechanism (or pulse rule) that set the value.
        formula: Formula text that produced the value.
        trace: Ordered derivation log.
        factors: Correction factors used, when the tables were consulted.
    """

    status: LimitStatus
    quantity: PhysicalQuantity
    target: HazardTarget
    emission_class: EmissionClass | None = None
    limiting_mechanism: str = ""
    formula: str = ""
    trace: tuple[str, ...] = ()
    factors: CorrectionFactorSet | None = None

    def __post_init__(self) -> None:
        if self.status == LimitStatus.DEFINED and not self.quantity.is_applicable:
            raise ValueError("a defined limit must carry an applicable quantity")
        if self.status != LimitStatus.DEFINED and self.quantity.is_applicable:
            raise ValueError(f"a {self.status.value} limit must carry the N/A quantity")

    @classmethod
    def undefined(
        cls,
        status: LimitStatus,
        target: HazardTarget,
        emission_class: EmissionClass | None = None,
        trace: tuple[str, ...] = (),
    ) -> ExposureLimit:
        """Build a non-defined result with the N/A sentinel."""
        return cls(
            status=status,
            quantity=PhysicalQuantity.not_applicable(),
            target=target,
            emission_class=emission_class,
            trace=trace,
        )

    @property
    def is_defined(self) -> bool:
        return self.status == LimitStatus.DEFINED

    @property
    def kind(self) -> str:
        """Either AEL (evaluated for a product class) or MPE."""
        return "AEL" if self.emission_class is not None else "MPE"

    @property
    def formatted_message(self) -> str:
        """Human-readable one-liner with status prefix."""
        prefix = _STATUS_PREFIX[self.status]
        subject = self.kind
        if self.emission_class is not None:
            subject = f"{self.emission_class.label} AEL"
        if not self.is_defined:
            return f"{prefix} {subject} ({self.target.value}): {self.status.value}"
        mechanism = f" [{self.limiting_mechanism}]" if self.limiting_mechanism else ""
        return f"{prefix} {subject} ({self.target.value}): {self.quantity.formatted}{mechanism}"


# ==============================================================================
# Pulse trains
# ==============================================================================


@dataclass(frozen=True)
class PulseTrainFactor:
    """C5 and the pulse count it was derived from.

    Attributes:
        c5: Correction factor in [0.4, 1.0].
        number_of_pulses: Effective pulse count after Ti grouping.
        time_base_s: Thermal confinement time Ti used for grouping.
        grouping: Which C5 rule fired.
        pulses_per_window: Pulses sharing one Ti window; above 1 each
            window counts as one pulse lasting Ti.
        status: DEFINED, or RANGE_VIOLATION for non-positive inputs.
        trace: One line per decision.
    """

    c5: float
    number_of_pulses: int
    time_base_s: float
    grouping: PulseGrouping
    pulses_per_window: int = 1
    status: LimitStatus = LimitStatus.DEFINED
    trace: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.pulses_per_window < 1:
            raise ValueError("pulses_per_window must be at least 1")
        if not C5_MINIMUM <= self.c5 <= 1.0:
            raise ValueError(f"c5 must be within [{C5_MINIMUM}, 1.0], got {self.c5}")
        if self.number_of_pulses < 0:
            raise ValueError("number_of_pulses must be non-negative")

    @property
    def is_defined(self) -> bool:
        return self.status == LimitStatus.DEFINED

    @property
    def formatted_message(self) -> str:
        return (
            f"C5 = {self.c5:.4f} (N = {self.number_of_pulses}, "
            f"Ti = {self.time_base_s:.3g} s, {self.grouping.value})"
        )


@dataclass(frozen=True)
class PulseValidation:
    """Result of checking pulse width against repetition rate.

    Attributes:
        is_valid: False when the train cannot physically exist.
        errors: Reasons the train is invalid.
        warnings: Advisory notes (e.g. near-CW duty cycle).
        duty_cycle: Pulse width times repetition rate.
    """

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    duty_cycle: float = 0.0


class LimitingRule(str, Enum):
    """Pulse rule that produced the critical limit."""

    SINGLE_PULSE = "single_pulse"
    AVERAGE_POWER = "average_power"
    THERMAL_TRAIN = "thermal_train"

    @property
    def label(self) -> str:
        return _RULE_LABELS[self]


_RULE_LABELS = {
    LimitingRule.SINGLE_PULSE: "Single pulse (Rule 1)",
    LimitingRule.AVERAGE_POWER: "Average power (Rule 2)",
    LimitingRule.THERMAL_TRAIN: "Thermal accumulation with C5 (Rule 3)",
}


@dataclass(frozen=True)
class CriticalLimitResult:
    """Per-pulse limits from the three pulse rules and the most restrictive.

    Every defined limit here is an energy per pulse (J/m2 or J).

    Attributes:
        status: DEFINED when all three rules produced a value.
        single_pulse: Rule 1, limit at the pulse width.
        average_power: Rule 2, full-duration limit shared among the pulses.
        thermal_train: Rule 3, Rule 1 derated by C5.
        critical: The smallest of the three.
        limiting_rule: Which rule produced ``critical`` (None if undefined).
        pulse_train: C5 details.
        validation: Pulse parameter check run before the rules.
        trace: Derivation log of the selection.
    """

    status: LimitStatus
    single_pulse: ExposureLimit
    average_power: ExposureLimit
    thermal_train: ExposureLimit
    critical: ExposureLimit
    limiting_rule: LimitingRule | None = None
    pulse_train: PulseTrainFactor | None = None
    validation: PulseValidation | None = None
    trace: tuple[str, ...] = ()

    @property
    def is_defined(self) -> bool:
        return self.status == LimitStatus.DEFINED

    @property
    def formatted_message(self) -> str:
        if not self.is_defined or self.limiting_rule is None:
            return f"{_STATUS_PREFIX[self.status]} critical limit: {self.status.value}"
        return (
            f"{_STATUS_PREFIX[self.status]} critical limit: "
            f"{self.critical.quantity.formatted} per pulse ({self.limiting_rule.label})"
        )


# ==============================================================================
# Hazard distance
# ==============================================================================


class HazardLevel(str, Enum):
    """Coarse hazard label derived from a hazard distance."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"
    COLLIMATED_EXCEEDS_MPE = "collimated_exceeds_mpe"
    UNDETERMINED = "undetermined"

    @property
    def description(self) -> str:
        return _HAZARD_DESCRIPTIONS[self]


_HAZARD_DESCRIPTIONS = {
    HazardLevel.LOW: "Low hazard, beam falls below the MPE within 0.1 m",
    HazardLevel.MODERATE: "Moderate hazard, NOHD under 3 m",
    HazardLevel.HIGH: "High hazard, NOHD under 100 m",
    HazardLevel.VERY_HIGH: "Very high hazard, NOHD of 100 m or more",
    HazardLevel.COLLIMATED_EXCEEDS_MPE: "Collimated beam exceeds the MPE at all distances",
    HazardLevel.UNDETERMINED: "Hazard distance could not be determined",
}


@dataclass(frozen=True)
class NOHDResult:
    """Hazard distance for one MPE.

    Attributes:
        status: DEFINED, NOT_APPLICABLE (no MPE), RANGE_VIOLATION or
            INVALID_GEOMETRY.
        distance_m: Hazard distance, 0.0 or ``math.inf`` when defined,
            otherwise None.
        beam_diameter_at_distance_m: Beam diameter at ``distance_m``.
        irradiance_at_distance_w_m2: Irradiance at ``distance_m``.
        mpe_w_m2: Irradiance limit the distance was solved for.
        hazard_level: Label derived from the distance.
        trace: Derivation log.
    """

    status: LimitStatus
    distance_m: float | None = None
    beam_diameter_at_distance_m: float | None = None
    irradiance_at_distance_w_m2: float | None = None
    mpe_w_m2: float | None = None
    hazard_level: HazardLevel = HazardLevel.UNDETERMINED
    trace: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.status == LimitStatus.DEFINED:
            if self.distance_m is None or self.distance_m < 0:
                raise ValueError("a defined NOHD needs a non-negative distance")
        elif self.distance_m is not None:
            raise ValueError(f"a {self.status.value} NOHD must not carry a distance")

    @property
    def is_defined(self) -> bool:
        return self.status == LimitStatus.DEFINED

    @property
    def is_infinite(self) -> bool:
        return self.distance_m is not None and math.isinf(self.distance_m)

    @property
    def formatted_distance(self) -> str:
        if self.distance_m is None:
            return self.status.value
        if self.is_infinite:
            return "infinite"
        return f"{self.distance_m:.3g} m"


@dataclass(frozen=True)
class NOHDAssessment:
    """Eye and skin hazard distances and the one that governs.

    Attributes:
        eye: Result for the eye MPE.
        skin: Result for the skin MPE.
        governing: "eye" or "skin"; the eye wins ties.
        distance_m: Governing distance, None if neither is defined.
        status: DEFINED when at least one distance is defined.
    """

    eye: NOHDResult
    skin: NOHDResult
    governing: str
    distance_m: float | None
    status: LimitStatus

    @property
    def is_defined(self) -> bool:
        return self.status == LimitStatus.DEFINED

    @property
    def governing_result(self) -> NOHDResult:
        return self.eye if self.governing == "eye" else self.skin

    @property
    def formatted_message(self) -> str:
        result = self.governing_result
        return (
            f"{_STATUS_PREFIX[self.status]} NOHD ({self.governing}): "
            f"{result.formatted_distance}, {result.hazard_level.description}"
        )


# ==============================================================================
# Classification
# ==============================================================================


class LaserClass(str, Enum):
    """Product class assigned by classification."""

    CLASS_1 = "1"
    CLASS_2 = "2"
    CLASS_3R = "3R"
    CLASS_3B = "3B"
    CLASS_4 = "4"

    @property
    def label(self) -> str:
        return f"Class {self.value}"


@dataclass(frozen=True)
class LaserClassification:
    """Outcome of classifying a product against the class AELs.

    Attributes:
        laser_class: Lowest class whose AEL the emission does not exceed,
            None when no AEL could be evaluated.
        emission: Emission that was compared (W, or J per pulse).
        ael: AEL of the assigned class (of Class 3B for Class 4).
        ratio: Emission divided by that AEL.
        time_base_s: Time base of the assigned class test.
        description: Short description of the class.
        requirements: Safety measures for the class.
        status: DEFINED unless no AEL could be evaluated.
        trace: Derivation log of every class test.
    """

    laser_class: LaserClass | None
    emission: PhysicalQuantity
    ael: ExposureLimit | None
    ratio: float | None
    time_base_s: float
    description: str
    requirements: tuple[str, ...] = ()
    status: LimitStatus = LimitStatus.DEFINED
    trace: tuple[str, ...] = ()

    @property
    def is_defined(self) -> bool:
        return self.status == LimitStatus.DEFINED

    @property
    def formatted_message(self) -> str:
        if self.laser_class is None:
            return f"{_STATUS_PREFIX[self.status]} classification: {self.description}"
        ratio = f" (emission/AEL = {self.ratio:.3g})" if self.ratio is not None else ""
        return f"{self.laser_class.label}: {self.description}{ratio}"


@dataclass(frozen=True)
class EmissionLine:
    """One wavelength of a multi-wavelength product.

    Attributes:
        wavelength_nm: Wavelength in nm.
        emission: CW power (W), or energy per pulse (J) when ``pulse`` is given.
        pulse: Pulse timing for pulsed lines.
    """

    wavelength_nm: float
    emission: PhysicalQuantity
    pulse: PulseParameters | None = None

    def __post_init__(self) -> None:
        if not math.isfinite(self.wavelength_nm) or self.wavelength_nm <= 0:
            raise ValueError("wavelength_nm must be a positive finite number")


class CombinationMethod(str, Enum):
    """How the lines of a multi-wavelength product are combined."""

    ADDITIVE = "additive"
    INDEPENDENT = "independent"


@dataclass(frozen=True)
class MultiWavelengthClassification:
    """Outcome of classifying several wavelengths emitted together.

    Lines in one additive group act on the same tissue, so a class passes
    only when the sum of their emission/AEL ratios is at most 1. Lines
    with no common group are classified independently and the highest
    class wins.

    Attributes:
        laser_class: Assigned class, None when it could not be determined.
        method: Additive or independent combination.
        additive_group: Name of the group holding every line, if any.
        sum_of_ratios: Summed ratio of the assigned class test (additive only).
        line_ratios: Per-line ratios of the assigned class test (additive only).
        lines: Single-line classifications (independent only).
        description: Short description of the class.
        requirements: Safety measures for the class.
        status: DEFINED unless some needed AEL could not be evaluated.
        trace: Derivation log.
    """

    laser_class: LaserClass | None
    method: CombinationMethod
    description: str
    additive_group: str | None = None
    sum_of_ratios: float | None = None
    line_ratios: tuple[float, ...] = ()
    lines: tuple[LaserClassification, ...] = ()
    requirements: tuple[str, ...] = ()
    status: LimitStatus = LimitStatus.DEFINED
    trace: tuple[str, ...] = ()

    @property
    def is_defined(self) -> bool:
        return self.status == LimitStatus.DEFINED

    @property
    def formatted_message(self) -> str:
        if self.laser_class is None:
            return f"{_STATUS_PREFIX[self.status]} classification: {self.description}"
        if self.method == CombinationMethod.ADDITIVE:
            how = f"additive, {self.additive_group}, sum of ratios = {self.sum_of_ratios:.3g}"
        else:
            how = f"independent, highest of {len(self.lines)} lines"
        return f"{self.laser_class.label} ({how}): {self.description}"


# ==============================================================================
# Eyewear
# ==============================================================================


@dataclass(frozen=True)
class EyewearRequirement:
    """Optical density and EN 207 marking for protective eyewear.

    Attributes:
        status: DEFINED unless the MPE was undefined.
        optical_density: log10(exposure / MPE), floored at 0.
        minimum_od: Smallest integer OD that suffices.
        scale_label: EN 207 scale number ("LB5", or "LB10+").
        test_condition: EN 207 letter (D, I, R or M).
        marking: Full marking, e.g. "532 D LB5".
        exposure: Exposure at the eye, per m2.
        mpe: MPE it was compared with, per m2.
        warnings: Advisory notes.
        trace: Derivation log.
    """

    status: LimitStatus
    optical_density: float = 0.0
    minimum_od: int = 0
    scale_label: str = ""
    test_condition: str = ""
    marking: str = ""
    exposure: PhysicalQuantity = field(default_factory=PhysicalQuantity.not_applicable)
    mpe: PhysicalQuantity = field(default_factory=PhysicalQuantity.not_applicable)
    warnings: tuple[str, ...] = ()
    trace: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.optical_density < 0:
            raise ValueError("optical_density must be non-negative")

    @property
    def is_defined(self) -> bool:
        return self.status == LimitStatus.DEFINED

    @property
    def eyewear_needed(self) -> bool:
        return self.is_defined and self.minimum_od > 0

    @property
    def formatted_message(self) -> str:
        if not self.is_defined:
            return f"{_STATUS_PREFIX[self.status]} eyewear: {self.status.value}"
        return f"OD {self.optical_density:.2f} -> {self.marking}"
