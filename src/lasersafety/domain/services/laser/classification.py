"""Laser product classification.

Classes are tested in ascending order, each against its AEL at its own
classification time base, and the first class the emission does not
exceed is assigned. Emission that exceeds the Class 3B AEL is Class 4.
Only measurement condition 3 (unaided eye) is modelled, so the M classes
are never assigned.

Products with several wavelengths add their emission/AEL ratios when the
lines fall in one additive group and are otherwise classified line by line.
"""

from __future__ import annotations

import logging
import math

from lasersafety.domain.value_objects import (
    EmissionClass,
    LimitStatus,
    PhysicalQuantity,
    PulseParameters,
    SourceGeometry,
    Unit,
    UnitMismatchError,
)

from .critical_limit import evaluate_critical_limit
from .evaluator import evaluate_exposure_limit
from .constants import ADDITIVE_GROUPS
from .measurement import measurement_aperture_mm
from .models import (
    CombinationMethod,
    EmissionLine,
    ExposureLimit,
    LaserClass,
    LaserClassification,
    MultiWavelengthClassification,
)
from .time_base import classification_time_base
from .units import irradiance_through_aperture, to_energy, to_per_m2, to_power

logger = logging.getLogger(__name__)

_TEST_ORDER = (
    (EmissionClass.CLASS_1, LaserClass.CLASS_1),
    (EmissionClass.CLASS_2, LaserClass.CLASS_2),
    (EmissionClass.CLASS_3R, LaserClass.CLASS_3R),
    (EmissionClass.CLASS_3B, LaserClass.CLASS_3B),
)

# Class 2 exists only for visible emission
_CLASS_2_MIN_NM: float = 400.0
_CLASS_2_MAX_NM: float = 700.0

CLASS_DESCRIPTIONS = {
    LaserClass.CLASS_1: "Safe under reasonably foreseeable conditions of operation",
    LaserClass.CLASS_2: "Visible emission; momentary exposure is protected by the blink reflex",
    LaserClass.CLASS_3R: "Direct intrabeam viewing is potentially hazardous; risk is low",
    LaserClass.CLASS_3B: (
        "Direct intrabeam viewing is hazardous; diffuse reflections are normally safe"
    ),
    LaserClass.CLASS_4: "Eye and skin hazard, including diffuse reflections; possible fire hazard",
}

CLASS_REQUIREMENTS = {
    LaserClass.CLASS_1: ("No special safety measures required",),
    LaserClass.CLASS_2: (
        "Warning label required",
        "Do not stare into the beam",
    ),
    LaserClass.CLASS_3R: (
        "Warning label required",
        "Avoid direct eye exposure",
        "Safety training recommended",
    ),
    LaserClass.CLASS_3B: (
        "Warning and aperture labels required",
        "Eye protection within the hazard zone",
        "Controlled area with interlocks",
        "Laser safety officer required",
    ),
    LaserClass.CLASS_4: (
        "All Class 3B measures",
        "Skin protection may be required",
        "Fire prevention measures",
        "Emergency procedures and training",
    ),
}


def _class_ael(
    wavelength_nm: float,
    time_base_s: float,
    geometry: SourceGeometry,
    emission_class: EmissionClass,
    pulse: PulseParameters | None,
) -> ExposureLimit:
    target = geometry.eye_target(wavelength_nm)
    if pulse is None:
        return evaluate_exposure_limit(
            wavelength_nm, time_base_s, geometry, target, emission_class
        )
    result = evaluate_critical_limit(
        wavelength_nm,
        time_base_s,
        pulse.pulse_width_s,
        pulse.repetition_rate_hz,
        geometry,
        emission_class,
        target,
    )
    return result.critical


def emission_to_ael_ratio(
    emission: PhysicalQuantity,
    ael: PhysicalQuantity,
    wavelength_nm: float,
    time_base_s: float,
) -> tuple[float, str]:
    """Ratio of emission to AEL after bringing both to one unit.

    Power is integrated over the time base when the AEL is an energy;
    per-area AELs are compared with the emission spread over the
    measurement aperture.

    Returns:
        Tuple of (ratio, description of the comparison).

    Raises:
        UnitMismatchError: If the two cannot be put in one unit.
    """
    emitted = emission
    if ael.unit.is_energy and emitted.unit.is_power:
        emitted = to_energy(emitted, time_base_s)
    elif ael.unit.is_power and emitted.unit.is_energy:
        emitted = to_power(emitted, time_base_s)

    if ael.unit.is_per_area:
        aperture = measurement_aperture_mm(wavelength_nm, time_base_s)
        emitted = irradiance_through_aperture(emitted, aperture)
        note = f" through {aperture:.3g} mm aperture"
    else:
        note = ""

    limit = to_per_m2(ael)
    if emitted.unit != limit.unit:
        raise UnitMismatchError(emitted.unit, limit.unit)
    ratio = emitted.value / limit.value
    return ratio, f"{emitted.formatted}{note} vs {limit.formatted}: ratio {ratio:.4g}"


def classify_laser(
    wavelength_nm: float,
    emission: PhysicalQuantity,
    geometry: SourceGeometry,
    pulse: PulseParameters | None = None,
    intentional_viewing: bool = False,
) -> LaserClassification:
    """Assign a laser class to an emission.

    Args:
        wavelength_nm: Emission wavelength in nm.
        emission: CW power (W), or energy per pulse (J) when ``pulse`` is given.
        geometry: Apparent source size.
        pulse: Pulse timing for pulsed emission.
        intentional_viewing: Product is designed for long-term viewing,
            which lengthens the time base.

    Returns:
        LaserClassification with the trace of every class tested.

    Raises:
        UnitMismatchError: If the emission unit does not match the mode.
    """
    expected = Unit.WATT if pulse is None else Unit.JOULE
    if emission.unit != expected:
        raise UnitMismatchError(emission.unit, expected, operation="classify")

    trace: list[str] = [
        f"Classifying {emission.formatted} at {wavelength_nm:g} nm "
        f"({'CW' if pulse is None else 'per pulse'})"
    ]
    if not math.isfinite(emission.value) or emission.value < 0:
        trace.append("Emission must be finite and non-negative")
        return LaserClassification(
            laser_class=None,
            emission=emission,
            ael=None,
            ratio=None,
            time_base_s=0.0,
            description="Classification cannot be completed",
            status=LimitStatus.RANGE_VIOLATION,
            trace=tuple(trace),
        )

    last_defined: tuple[ExposureLimit, float, float] | None = None
    last_status = LimitStatus.NOT_APPLICABLE
    for emission_class, laser_class in _TEST_ORDER:
        if emission_class == EmissionClass.CLASS_2 and not (
            _CLASS_2_MIN_NM <= wavelength_nm <= _CLASS_2_MAX_NM
        ):
            trace.append("Class 2: not applicable outside 400-700 nm")
            continue

        time_base = classification_time_base(wavelength_nm, emission_class, intentional_viewing)
        trace.append(f"{emission_class.label}: time base {time_base:g} s")
        ael = _class_ael(wavelength_nm, time_base, geometry, emission_class, pulse)
        if not ael.is_defined:
            trace.append(f"{emission_class.label}: no AEL ({ael.status.value})")
            last_status = ael.status
            continue

        ratio, comparison = emission_to_ael_ratio(
            emission, ael.quantity, wavelength_nm, time_base
        )
        passes = ratio <= 1.0
        trace.append(f"{emission_class.label}: {comparison} -> {'PASS' if passes else 'FAIL'}")
        last_defined = (ael, ratio, time_base)
        if passes:
            logger.info(f"Classified {wavelength_nm} nm emission as {laser_class.label}")
            return LaserClassification(
                laser_class=laser_class,
                emission=emission,
                ael=ael,
                ratio=ratio,
                time_base_s=time_base,
                description=CLASS_DESCRIPTIONS[laser_class],
                requirements=CLASS_REQUIREMENTS[laser_class],
                trace=tuple(trace),
            )

    if last_defined is None:
        trace.append("No class AEL could be evaluated")
        return LaserClassification(
            laser_class=None,
            emission=emission,
            ael=None,
            ratio=None,
            time_base_s=0.0,
            description="Classification cannot be completed",
            status=last_status,
            trace=tuple(trace),
        )

    ael, ratio, time_base = last_defined
    trace.append("Emission exceeds the Class 3B AEL: Class 4")
    logger.info(f"Classified {wavelength_nm} nm emission as Class 4")
    return LaserClassification(
        laser_class=LaserClass.CLASS_4,
        emission=emission,
        ael=ael,
        ratio=ratio,
        time_base_s=time_base,
        description=CLASS_DESCRIPTIONS[LaserClass.CLASS_4],
        requirements=CLASS_REQUIREMENTS[LaserClass.CLASS_4],
        trace=tuple(trace),
    )


# ==============================================================================
# Multiple wavelengths
# ==============================================================================

_CLASS_RANK = {laser_class: rank for rank, laser_class in enumerate(LaserClass)}


def additive_group(wavelengths: list[float]) -> str | None:
    """Name of the first additive group holding every wavelength, or None."""
    for name, lower, upper in ADDITIVE_GROUPS:
        if all(lower <= wavelength <= upper for wavelength in wavelengths):
            return name
    return None


def _check_line_unit(line: EmissionLine) -> None:
    expected = Unit.WATT if line.pulse is None else Unit.JOULE
    if line.emission.unit != expected:
        raise UnitMismatchError(line.emission.unit, expected, operation="classify")


def _is_visible(wavelength_nm: float) -> bool:
    return _CLASS_2_MIN_NM <= wavelength_nm <= _CLASS_2_MAX_NM


def _classify_additive(
    lines: list[EmissionLine],
    group: str,
    geometry: SourceGeometry,
    intentional_viewing: bool,
    trace: list[str],
) -> MultiWavelengthClassification:
    last_ratios: tuple[float, ...] | None = None
    last_status = LimitStatus.NOT_APPLICABLE
    for emission_class, laser_class in _TEST_ORDER:
        if emission_class == EmissionClass.CLASS_2 and not any(
            _is_visible(line.wavelength_nm) for line in lines
        ):
            trace.append("Class 2: no line within 400-700 nm")
            continue

        ratios: list[float] = []
        for line in lines:
            line_class = emission_class
            if emission_class == EmissionClass.CLASS_2 and not _is_visible(line.wavelength_nm):
                # Invisible lines have no Class 2 AEL
                line_class = EmissionClass.CLASS_1
            time_base = classification_time_base(
                line.wavelength_nm, line_class, intentional_viewing
            )
            ael = _class_ael(line.wavelength_nm, time_base, geometry, line_class, line.pulse)
            if not ael.is_defined:
                trace.append(
                    f"{emission_class.label}: no AEL at {line.wavelength_nm:g} nm "
                    f"({ael.status.value})"
                )
                last_status = ael.status
                break
            ratio, comparison = emission_to_ael_ratio(
                line.emission, ael.quantity, line.wavelength_nm, time_base
            )
            trace.append(f"{emission_class.label} at {line.wavelength_nm:g} nm: {comparison}")
            ratios.append(ratio)
        else:
            total = sum(ratios)
            passes = total <= 1.0
            trace.append(
                f"{emission_class.label}: sum of ratios {total:.4g} -> "
                f"{'PASS' if passes else 'FAIL'}"
            )
            last_ratios = tuple(ratios)
            if passes:
                return MultiWavelengthClassification(
                    laser_class=laser_class,
                    method=CombinationMethod.ADDITIVE,
                    description=CLASS_DESCRIPTIONS[laser_class],
                    additive_group=group,
                    sum_of_ratios=total,
                    line_ratios=last_ratios,
                    requirements=CLASS_REQUIREMENTS[laser_class],
                    trace=tuple(trace),
                )

    if last_ratios is None:
        trace.append("No class AEL could be evaluated for every line")
        return MultiWavelengthClassification(
            laser_class=None,
            method=CombinationMethod.ADDITIVE,
            description="Classification cannot be completed",
            additive_group=group,
            status=last_status,
            trace=tuple(trace),
        )

    trace.append("Combined emission exceeds the Class 3B AEL: Class 4")
    return MultiWavelengthClassification(
        laser_class=LaserClass.CLASS_4,
        method=CombinationMethod.ADDITIVE,
        description=CLASS_DESCRIPTIONS[LaserClass.CLASS_4],
        additive_group=group,
        sum_of_ratios=sum(last_ratios),
        line_ratios=last_ratios,
        requirements=CLASS_REQUIREMENTS[LaserClass.CLASS_4],
        trace=tuple(trace),
    )


def _classify_independent(
    lines: list[EmissionLine],
    geometry: SourceGeometry,
    intentional_viewing: bool,
    trace: list[str],
) -> MultiWavelengthClassification:
    results = tuple(
        classify_laser(
            line.wavelength_nm, line.emission, geometry, line.pulse, intentional_viewing
        )
        for line in lines
    )
    for line, result in zip(lines, results):
        trace.append(f"{line.wavelength_nm:g} nm: {result.formatted_message}")

    undefined = [result for result in results if result.laser_class is None]
    if undefined:
        trace.append("At least one line could not be classified")
        return MultiWavelengthClassification(
            laser_class=None,
            method=CombinationMethod.INDEPENDENT,
            description="Classification cannot be completed",
            lines=results,
            status=undefined[0].status,
            trace=tuple(trace),
        )

    highest = max((result.laser_class for result in results), key=_CLASS_RANK.__getitem__)
    trace.append(f"Highest individual class: {highest.label}")
    return MultiWavelengthClassification(
        laser_class=highest,
        method=CombinationMethod.INDEPENDENT,
        description=CLASS_DESCRIPTIONS[highest],
        lines=results,
        requirements=CLASS_REQUIREMENTS[highest],
        trace=tuple(trace),
    )


def classify_multiwavelength(
    lines: list[EmissionLine],
    geometry: SourceGeometry,
    intentional_viewing: bool = False,
) -> MultiWavelengthClassification:
    """Classify a product emitting several wavelengths at once.

    When one additive group holds every line, each class is tested on the
    sum of the per-line emission/AEL ratios. Lines outside 400-700 nm are
    held to their Class 1 AEL in the Class 2 test. Otherwise each line is
    classified on its own and the highest class is assigned.

    Raises:
        ValueError: If ``lines`` is empty.
        UnitMismatchError: If a line's emission unit does not match its mode.
    """
    if not lines:
        raise ValueError("At least one emission line is required")
    for line in lines:
        _check_line_unit(line)

    wavelengths = [line.wavelength_nm for line in lines]
    trace: list[str] = [
        f"Classifying {len(lines)} lines at "
        f"{', '.join(f'{wavelength:g}' for wavelength in wavelengths)} nm"
    ]
    if any(not math.isfinite(line.emission.value) or line.emission.value < 0 for line in lines):
        trace.append("Emission must be finite and non-negative")
        return MultiWavelengthClassification(
            laser_class=None,
            method=CombinationMethod.INDEPENDENT,
            description="Classification cannot be completed",
            status=LimitStatus.RANGE_VIOLATION,
            trace=tuple(trace),
        )

    group = additive_group(wavelengths)
    if group is not None:
        trace.append(f"Additive group: {group}")
        result = _classify_additive(lines, group, geometry, intentional_viewing, trace)
    else:
        trace.append("No common additive group: lines are independent")
        result = _classify_independent(lines, geometry, intentional_viewing, trace)
    logger.info(f"Classified {len(lines)}-line product: {result.formatted_message}")
    return result
