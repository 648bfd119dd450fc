"""Protective eyewear selection (EN 207 style).

Required optical density is the decadic attenuation that brings the
exposure at the eye down to the MPE. The EN 207 marking combines the
wavelength, a test-condition letter chosen by pulse duration and the
scale number LB1-LB10.
"""

from __future__ import annotations

import logging
import math

from lasersafety.domain.value_objects import LimitStatus, PhysicalQuantity, UnitMismatchError

from .constants import EN207_MAX_SCALE_NUMBER, HIGH_OPTICAL_DENSITY_WARNING
from .models import ExposureLimit, EyewearRequirement
from .units import normalize_to_energy, to_per_m2

logger = logging.getLogger(__name__)

# EN 207 test conditions by pulse duration (s): (lower bound inclusive, letter)
_TEST_CONDITIONS: tuple[tuple[float, str], ...] = (
    (0.25, "D"),
    (1e-6, "I"),
    (1e-9, "R"),
)
_SHORTEST_CONDITION = "M"


def en207_test_condition(pulse_width_s: float | None) -> str:
    """EN 207 letter: D (CW), I, R or M (mode-locked)."""
    if pulse_width_s is None:
        return "D"
    for lower, letter in _TEST_CONDITIONS:
        if pulse_width_s >= lower:
            return letter
    return _SHORTEST_CONDITION


def _comparable(
    exposure: PhysicalQuantity, mpe: PhysicalQuantity, exposure_time_s: float | None
) -> tuple[PhysicalQuantity, PhysicalQuantity]:
    exposure, mpe = to_per_m2(exposure), to_per_m2(mpe)
    if exposure.unit == mpe.unit:
        return exposure, mpe
    if exposure_time_s is None or exposure_time_s <= 0:
        raise UnitMismatchError(exposure.unit, mpe.unit)
    return normalize_to_energy(exposure, mpe, exposure_time_s)


def required_eyewear(
    wavelength_nm: float,
    exposure: PhysicalQuantity,
    mpe: ExposureLimit,
    pulse_width_s: float | None = None,
    exposure_time_s: float | None = None,
    od_warning_threshold: float = HIGH_OPTICAL_DENSITY_WARNING,
    max_scale_number: int = EN207_MAX_SCALE_NUMBER,
) -> EyewearRequirement:
    """Optical density and marking needed to bring an exposure to the MPE.

    Args:
        wavelength_nm: Wavelength in nm, used in the marking.
        exposure: Irradiance or radiant exposure at the eye.
        mpe: Eye MPE (per area).
        pulse_width_s: Pulse duration, None for CW.
        exposure_time_s: Needed only when exposure and MPE are in different
            families (one power, one energy).
        od_warning_threshold: OD above which a visibility warning is added.
        max_scale_number: Highest scale number before "LB<n>+".

    Returns:
        EyewearRequirement. An undefined MPE gives its status back.

    Raises:
        UnitMismatchError: If exposure and MPE cannot be put in one unit.
    """
    trace: list[str] = [f"Eyewear at {wavelength_nm:g} nm, MPE {mpe.quantity.formatted}"]
    if not mpe.is_defined:
        trace.append(f"No MPE: {mpe.status.value}")
        return EyewearRequirement(status=mpe.status, trace=tuple(trace))

    level, limit = _comparable(exposure, mpe.quantity, exposure_time_s)
    trace.append(f"Exposure {level.formatted} vs MPE {limit.formatted}")
    if limit.value <= 0 or level.value < 0:
        trace.append("Exposure and MPE must be positive to form an optical density")
        return EyewearRequirement(status=LimitStatus.RANGE_VIOLATION, trace=tuple(trace))

    raw_od = math.log10(level.value / limit.value) if level.value > 0 else -math.inf
    optical_density = max(0.0, raw_od)
    minimum_od = math.ceil(optical_density)
    trace.append(f"OD = log10(exposure / MPE) = {raw_od:.3f}, minimum integer OD {minimum_od}")

    scale = max(1, minimum_od)
    scale_label = f"LB{max_scale_number}+" if scale > max_scale_number else f"LB{scale}"
    letter = en207_test_condition(pulse_width_s)
    marking = f"{wavelength_nm:g} {letter} {scale_label}"
    trace.append(f"EN 207 marking: {marking}")

    warnings: list[str] = []
    if raw_od <= 0:
        warnings.append("Exposure is at or below the MPE; eyewear is not required by calculation")
    if minimum_od > od_warning_threshold:
        warnings.append(
            f"OD {minimum_od} exceeds {od_warning_threshold:g}; visibility through the "
            "eyewear will be poor, consider enclosing the beam path"
        )
        logger.warning(f"High optical density {minimum_od} required at {wavelength_nm} nm")

    return EyewearRequirement(
        status=LimitStatus.DEFINED,
        optical_density=optical_density,
        minimum_od=minimum_od,
        scale_label=scale_label,
        test_condition=letter,
        marking=marking,
        exposure=level,
        mpe=limit,
        warnings=tuple(warnings),
        trace=tuple(trace),
    )
