"""AEL/MPE evaluator.

Dispatches a (wavelength, exposure time, geometry, target, class) request
to the matching limit table, selects the wavelength region and time row
in one pass and evaluates the row formula against the correction factors.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from types import MappingProxyType
from typing import Mapping

from lasersafety.domain.value_objects import (
    EmissionClass,
    HazardTarget,
    LimitStatus,
    SourceGeometry,
)

from .ael_tables import (
    AEL_CLASS_1_EXTENDED,
    AEL_CLASS_1_POINT,
    AEL_CLASS_2_EXTENDED,
    AEL_CLASS_2_POINT,
    AEL_CLASS_3B,
    AEL_CLASS_3R_EXTENDED,
    AEL_CLASS_3R_POINT,
)
from .bands import LimitTable
from .constants import (
    MAX_EXPOSURE_TIME_S,
    MAX_WAVELENGTH_NM,
    MIN_EXPOSURE_TIME_S,
    MIN_WAVELENGTH_NM,
)
from .correction_factors import compute_correction_factors
from .models import ExposureLimit
from .mpe_tables import MPE_EXTENDED_SOURCE, MPE_POINT_SOURCE, MPE_SKIN
from .units import to_energy, to_per_m2

logger = logging.getLogger(__name__)

_POINT = HazardTarget.POINT_SOURCE_EYE
_EXTENDED = HazardTarget.EXTENDED_SOURCE_EYE

# (target, class) -> table; class None selects an MPE table.
# Skin has no AEL table.
LIMIT_TABLES: Mapping[tuple[HazardTarget, EmissionClass | None], LimitTable] = MappingProxyType(
    {
        (_POINT, None): MPE_POINT_SOURCE,
        (_EXTENDED, None): MPE_EXTENDED_SOURCE,
        (HazardTarget.SKIN, None): MPE_SKIN,
        (_POINT, EmissionClass.CLASS_1): AEL_CLASS_1_POINT,
        (_EXTENDED, EmissionClass.CLASS_1): AEL_CLASS_1_EXTENDED,
        (_POINT, EmissionClass.CLASS_2): AEL_CLASS_2_POINT,
        (_EXTENDED, EmissionClass.CLASS_2): AEL_CLASS_2_EXTENDED,
        (_POINT, EmissionClass.CLASS_3R): AEL_CLASS_3R_POINT,
        (_EXTENDED, EmissionClass.CLASS_3R): AEL_CLASS_3R_EXTENDED,
        (_POINT, EmissionClass.CLASS_3B): AEL_CLASS_3B,
        (_EXTENDED, EmissionClass.CLASS_3B): AEL_CLASS_3B,
    }
)


def check_range(wavelength_nm: float, exposure_time_s: float) -> LimitStatus | None:
    """Classify inputs that must not reach band dispatch.

    Returns:
        RANGE_VIOLATION for non-finite or non-positive inputs,
        NOT_APPLICABLE for positive values outside the tabulated domain,
        None when the inputs are inside the domain.
    """
    if not (math.isfinite(wavelength_nm) and math.isfinite(exposure_time_s)):
        return LimitStatus.RANGE_VIOLATION
    if wavelength_nm <= 0 or exposure_time_s <= 0:
        return LimitStatus.RANGE_VIOLATION
    if not MIN_WAVELENGTH_NM <= wavelength_nm <= MAX_WAVELENGTH_NM:
        return LimitStatus.NOT_APPLICABLE
    if not MIN_EXPOSURE_TIME_S <= exposure_time_s <= MAX_EXPOSURE_TIME_S:
        return LimitStatus.NOT_APPLICABLE
    return None


def evaluate_exposure_limit(
    wavelength_nm: float,
    exposure_time_s: float,
    geometry: SourceGeometry,
    target: HazardTarget,
    emission_class: EmissionClass | None = None,
) -> ExposureLimit:
    """Evaluate the MPE, or the AEL when a class is given.

    Args:
        wavelength_nm: Wavelength in nm (180 nm - 1 mm).
        exposure_time_s: Exposure or emission duration in s (1e-13 - 30000 s).
        geometry: Apparent source size, used for C6 and T2.
        target: Tissue and viewing condition.
        emission_class: Product class for an AEL, None for an MPE.

    Returns:
        ExposureLimit. Combinations without a tabulated limit come back with
        status NOT_APPLICABLE and the N/A quantity; invalid inputs with
        RANGE_VIOLATION. Nothing is raised.
    """
    kind = "MPE" if emission_class is None else f"{emission_class.label} AEL"
    trace: list[str] = [
        f"{kind} for {target.value} at {wavelength_nm:g} nm, t = {exposure_time_s:g} s, "
        f"alpha = {geometry.angular_subtense_mrad:g} mrad"
    ]

    range_status = check_range(wavelength_nm, exposure_time_s)
    if range_status is not None:
        trace.append(
            f"Inputs outside {MIN_WAVELENGTH_NM:g}-{MAX_WAVELENGTH_NM:g} nm / "
            f"{MIN_EXPOSURE_TIME_S:g}-{MAX_EXPOSURE_TIME_S:g} s: {range_status.value}"
        )
        logger.debug(f"{kind} rejected: {range_status.value}")
        return ExposureLimit.undefined(range_status, target, emission_class, tuple(trace))

    table = LIMIT_TABLES.get((target, emission_class))
    if table is None:
        trace.append(f"No {kind} table for {target.value}")
        return ExposureLimit.undefined(
            LimitStatus.NOT_APPLICABLE, target, emission_class, tuple(trace)
        )
    trace.append(f"Table: {table.name}")

    region = table.region_for(wavelength_nm)
    if region is None:
        trace.append(f"{wavelength_nm:g} nm is outside every region of {table.name}")
        logger.debug(f"{table.name}: no region for {wavelength_nm} nm")
        return ExposureLimit.undefined(
            LimitStatus.NOT_APPLICABLE, target, emission_class, tuple(trace)
        )
    trace.append(f"Wavelength region {region.band.label} nm")

    row = region.row_for(exposure_time_s)
    if row is None:
        trace.append(f"{exposure_time_s:g} s is outside every time band of this region")
        return ExposureLimit.undefined(
            LimitStatus.NOT_APPLICABLE, target, emission_class, tuple(trace)
        )
    trace.append(f"Exposure time band {row.band.label} s")

    factors = compute_correction_factors(
        wavelength_nm, exposure_time_s, geometry.angular_subtense_mrad
    )
    trace.extend(factors.trace)

    term = row.formula(factors, exposure_time_s)
    trace.extend(term.notes)
    trace.append(f"{kind} = {term.formula} = {term.quantity.formatted}")
    logger.debug(
        f"{table.name} at {wavelength_nm} nm, {exposure_time_s} s: {term.quantity.formatted}"
    )

    return ExposureLimit(
        status=LimitStatus.DEFINED,
        quantity=term.quantity,
        target=target,
        emission_class=emission_class,
        limiting_mechanism=term.mechanism,
        formula=term.formula,
        trace=tuple(trace),
        factors=factors,
    )


def evaluate_most_restrictive_mpe(
    wavelength_nm: float,
    exposure_time_s: float,
    geometry: SourceGeometry,
) -> ExposureLimit:
    """Evaluate the eye and skin MPEs and return the most restrictive.

    The point-source and skin tables are always consulted; the
    extended-source table only for an extended source in the retinal
    hazard region. Candidates are compared as radiant exposure per m2
    over the exposure time. On a tie the earlier table wins.

    Returns:
        The winning ExposureLimit with every candidate in its trace, or
        the point-source result when no table gives a limit.
    """
    targets = [HazardTarget.POINT_SOURCE_EYE]
    if geometry.eye_target(wavelength_nm) == HazardTarget.EXTENDED_SOURCE_EYE:
        targets.append(HazardTarget.EXTENDED_SOURCE_EYE)
    targets.append(HazardTarget.SKIN)

    candidates = [
        evaluate_exposure_limit(wavelength_nm, exposure_time_s, geometry, target)
        for target in targets
    ]
    trace: list[str] = [
        f"Most restrictive MPE at {wavelength_nm:g} nm, t = {exposure_time_s:g} s"
    ]
    winner: ExposureLimit | None = None
    winner_exposure = math.inf
    for limit in candidates:
        if not limit.is_defined:
            trace.append(f"{limit.target.value}: {limit.status.value}")
            continue
        exposure = to_energy(to_per_m2(limit.quantity), exposure_time_s)
        trace.append(f"{limit.target.value}: {limit.quantity.formatted} ({exposure.formatted})")
        if exposure.value < winner_exposure:
            winner, winner_exposure = limit, exposure.value

    if winner is None:
        return candidates[0]
    trace.append(f"Limiting table: {winner.target.value}")
    logger.debug(f"Most restrictive MPE at {wavelength_nm} nm: {winner.target.value}")
    return replace(winner, trace=(*winner.trace, *trace))
