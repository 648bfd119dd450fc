"""Nominal ocular hazard distance.

Inverts the far-field beam expansion

    D(r) = D0 + phi * r

to find the range at which the mean irradiance 4P / (pi * D(r)^2) falls to
the MPE:

    NOHD = (sqrt(4P / (pi * MPE)) - D0) / phi

A collimated beam (phi = 0) never expands, so the answer is either zero
or infinite. A negative result means the beam is already safe at the
aperture and is clamped to zero.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace

from lasersafety.domain.value_objects import LimitStatus, Unit, UnitMismatchError

from .constants import (
    HIGH_HAZARD_DISTANCE_M,
    LOW_HAZARD_DISTANCE_M,
    MODERATE_HAZARD_DISTANCE_M,
)
from .models import ExposureLimit, HazardLevel, NOHDAssessment, NOHDResult
from .units import beam_area_m2, to_per_m2, to_power

logger = logging.getLogger(__name__)


def hazard_level(distance_m: float) -> HazardLevel:
    """Label a hazard distance."""
    if math.isinf(distance_m):
        return HazardLevel.COLLIMATED_EXCEEDS_MPE
    if distance_m < LOW_HAZARD_DISTANCE_M:
        return HazardLevel.LOW
    if distance_m < MODERATE_HAZARD_DISTANCE_M:
        return HazardLevel.MODERATE
    if distance_m < HIGH_HAZARD_DISTANCE_M:
        return HazardLevel.HIGH
    return HazardLevel.VERY_HIGH


def as_irradiance_limit(limit: ExposureLimit, exposure_time_s: float) -> ExposureLimit:
    """Express an area-normalized limit in W/m2.

    Radiant exposure is averaged over the exposure time; per-cm2 values are
    rewritten per m2. Non-defined limits are returned unchanged.

    Raises:
        UnitMismatchError: If the limit is an aperture value (W or J).
        ValueError: If a radiant exposure is given with a non-positive time.
    """
    if not limit.is_defined:
        return limit
    if not limit.quantity.unit.is_per_area:
        raise UnitMismatchError(limit.quantity.unit, Unit.WATT_PER_M2, operation="convert")
    irradiance = to_per_m2(to_power(limit.quantity, exposure_time_s))
    if irradiance == limit.quantity:
        return limit
    line = (
        f"As irradiance: {limit.quantity.formatted} over {exposure_time_s:g} s "
        f"= {irradiance.formatted}"
    )
    return replace(limit, quantity=irradiance, trace=(*limit.trace, line))


def _collimated(
    power_w: float, beam_diameter_m: float, mpe_w_m2: float, trace: list[str]
) -> NOHDResult:
    if beam_diameter_m == 0:
        irradiance = math.inf
    else:
        irradiance = power_w / beam_area_m2(beam_diameter_m)
    trace.append(f"Collimated beam: irradiance {irradiance:.4g} W/m2 vs MPE {mpe_w_m2:.4g} W/m2")
    distance = math.inf if irradiance > mpe_w_m2 else 0.0
    trace.append("Hazard at all distances" if math.isinf(distance) else "Safe at all distances")
    return NOHDResult(
        status=LimitStatus.DEFINED,
        distance_m=distance,
        beam_diameter_at_distance_m=beam_diameter_m,
        irradiance_at_distance_w_m2=irradiance,
        mpe_w_m2=mpe_w_m2,
        hazard_level=hazard_level(distance),
        trace=tuple(trace),
    )


def solve_nohd_single(
    power_w: float,
    beam_diameter_m: float,
    divergence_rad: float,
    mpe: ExposureLimit,
) -> NOHDResult:
    """Solve the hazard distance for one irradiance limit.

    Args:
        power_w: Beam power in W.
        beam_diameter_m: Beam diameter at the aperture in m.
        divergence_rad: Full-angle beam divergence in rad.
        mpe: Irradiance limit (W/m2 or W/cm2), see ``as_irradiance_limit``.

    Returns:
        NOHDResult. An undefined MPE gives its own status, bad beam inputs
        give RANGE_VIOLATION and a non-positive MPE gives INVALID_GEOMETRY.

    Raises:
        UnitMismatchError: If the MPE is not an irradiance.
    """
    trace: list[str] = [
        f"NOHD for P = {power_w:.4g} W, D0 = {beam_diameter_m:.4g} m, "
        f"phi = {divergence_rad:.4g} rad, MPE = {mpe.quantity.formatted}"
    ]
    if not mpe.is_defined:
        trace.append(f"No MPE: {mpe.status.value}")
        return NOHDResult(status=mpe.status, trace=tuple(trace))

    beam = (power_w, beam_diameter_m, divergence_rad)
    if not all(math.isfinite(value) for value in beam):
        trace.append("Beam parameters must be finite")
        return NOHDResult(status=LimitStatus.RANGE_VIOLATION, trace=tuple(trace))
    if power_w <= 0 or beam_diameter_m < 0 or divergence_rad < 0:
        trace.append("Power must be positive; diameter and divergence non-negative")
        return NOHDResult(status=LimitStatus.RANGE_VIOLATION, trace=tuple(trace))

    irradiance_limit = to_per_m2(mpe.quantity)
    if irradiance_limit.unit != Unit.WATT_PER_M2:
        raise UnitMismatchError(mpe.quantity.unit, Unit.WATT_PER_M2, operation="solve NOHD with")
    mpe_w_m2 = irradiance_limit.value

    if mpe_w_m2 <= 0:
        trace.append(f"MPE {mpe_w_m2:.4g} W/m2 leaves 4P/(pi*MPE) without a real root")
        logger.warning(f"Invalid NOHD geometry: MPE {mpe_w_m2} W/m2")
        return NOHDResult(
            status=LimitStatus.INVALID_GEOMETRY, mpe_w_m2=mpe_w_m2, trace=tuple(trace)
        )

    if divergence_rad == 0:
        return _collimated(power_w, beam_diameter_m, mpe_w_m2, trace)

    safe_diameter = math.sqrt(4.0 * power_w / (math.pi * mpe_w_m2))
    distance = (safe_diameter - beam_diameter_m) / divergence_rad
    trace.append(f"Safe beam diameter sqrt(4P/(pi*MPE)) = {safe_diameter:.4g} m")
    trace.append(
        f"NOHD = ({safe_diameter:.4g} - {beam_diameter_m:.4g}) / {divergence_rad:.4g} "
        f"= {distance:.4g} m"
    )
    if distance < 0:
        trace.append("Beam is below the MPE at the aperture: NOHD = 0")
        distance = 0.0

    diameter = beam_diameter_m + divergence_rad * distance
    irradiance = power_w / beam_area_m2(diameter) if diameter > 0 else math.inf
    logger.debug(f"NOHD {distance:.4g} m for MPE {mpe_w_m2:.4g} W/m2")
    return NOHDResult(
        status=LimitStatus.DEFINED,
        distance_m=distance,
        beam_diameter_at_distance_m=diameter,
        irradiance_at_distance_w_m2=irradiance,
        mpe_w_m2=mpe_w_m2,
        hazard_level=hazard_level(distance),
        trace=tuple(trace),
    )


def solve_nohd(
    power_w: float,
    beam_diameter_m: float,
    divergence_rad: float,
    mpe_eye: ExposureLimit,
    mpe_skin: ExposureLimit,
) -> NOHDAssessment:
    """Solve eye and skin hazard distances and report the governing one.

    The larger defined distance governs; the eye wins ties. When only one
    distance is defined it governs.
    """
    eye = solve_nohd_single(power_w, beam_diameter_m, divergence_rad, mpe_eye)
    skin = solve_nohd_single(power_w, beam_diameter_m, divergence_rad, mpe_skin)

    if eye.is_defined and skin.is_defined:
        governing = "skin" if skin.distance_m > eye.distance_m else "eye"
    elif skin.is_defined:
        governing = "skin"
    else:
        governing = "eye"

    chosen = skin if governing == "skin" else eye
    return NOHDAssessment(
        eye=eye,
        skin=skin,
        governing=governing,
        distance_m=chosen.distance_m,
        status=chosen.status,
    )

