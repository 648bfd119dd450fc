"""Unit conversion for exposure limit quantities.

Conversions never infer a unit from a magnitude: every function takes a
PhysicalQuantity and returns a new one with the target unit stated.
Crossing between the aperture form (W, J) and an area-normalized form
needs an aperture and is only done by ``irradiance_through_aperture``.
"""

from __future__ import annotations

import math

from lasersafety.domain.value_objects import PhysicalQuantity, Unit, UnitMismatchError

from .constants import CM2_TO_M2, M2_TO_CM2, MM2_TO_M2

# m² <-> cm² conversion within one family: (from, to) -> multiplier
_AREA_CONVERSIONS: dict[tuple[Unit, Unit], float] = {
    (Unit.WATT_PER_CM2, Unit.WATT_PER_M2): 1.0 / CM2_TO_M2,
    (Unit.WATT_PER_M2, Unit.WATT_PER_CM2): 1.0 / M2_TO_CM2,
    (Unit.JOULE_PER_CM2, Unit.JOULE_PER_M2): 1.0 / CM2_TO_M2,
    (Unit.JOULE_PER_M2, Unit.JOULE_PER_CM2): 1.0 / M2_TO_CM2,
}

_PER_M2 = {
    Unit.WATT_PER_CM2: Unit.WATT_PER_M2,
    Unit.JOULE_PER_CM2: Unit.JOULE_PER_M2,
}


def convert_quantity(quantity: PhysicalQuantity, unit: Unit) -> PhysicalQuantity:
    """Express a quantity in another unit of the same family.

    Args:
        quantity: Quantity to convert.
        unit: Target unit. Must share the power/energy family and the
            aperture/area form with the quantity's unit.

    Returns:
        New PhysicalQuantity in the target unit.

    Raises:
        UnitMismatchError: If the units belong to different families.
    """
    if quantity.unit == unit:
        return quantity
    multiplier = _AREA_CONVERSIONS.get((quantity.unit, unit))
    if multiplier is None:
        raise UnitMismatchError(quantity.unit, unit, operation="convert")
    return PhysicalQuantity(quantity.value * multiplier, unit)


def to_per_m2(quantity: PhysicalQuantity) -> PhysicalQuantity:
    """Rewrite per-cm² quantities per m²; everything else is returned as is."""
    target = _PER_M2.get(quantity.unit)
    if target is None:
        return quantity
    return convert_quantity(quantity, target)


def to_energy(quantity: PhysicalQuantity, duration_s: float) -> PhysicalQuantity:
    """Integrate a power-family quantity over a duration.

    Energy-family quantities are returned unchanged.
    """
    if not quantity.unit.is_power:
        _require_applicable(quantity)
        return quantity
    return PhysicalQuantity(quantity.value * duration_s, quantity.unit.energy_counterpart)


def to_power(quantity: PhysicalQuantity, duration_s: float) -> PhysicalQuantity:
    """Average an energy-family quantity over a duration.

    Power-family quantities are returned unchanged.
    """
    if not quantity.unit.is_energy:
        _require_applicable(quantity)
        return quantity
    if duration_s <= 0:
        raise ValueError("duration_s must be positive to average an energy")
    return PhysicalQuantity(quantity.value / duration_s, quantity.unit.power_counterpart)


def normalize_to_energy(
    first: PhysicalQuantity,
    second: PhysicalQuantity,
    duration_s: float,
) -> tuple[PhysicalQuantity, PhysicalQuantity]:
    """Bring two quantities into one energy unit so they can be compared.

    Power values are integrated over ``duration_s`` and per-cm² values are
    rewritten per m². The aperture/area form is never changed.

    Raises:
        UnitMismatchError: If one is an aperture value and the other is
            area-normalized, or either is N/A.
    """
    left = to_per_m2(to_energy(first, duration_s))
    right = to_per_m2(to_energy(second, duration_s))
    if left.unit != right.unit:
        raise UnitMismatchError(first.unit, second.unit)
    return left, right


def aperture_area_m2(diameter_mm: float) -> float:
    """Area of a circular aperture given its diameter in mm."""
    return math.pi * (diameter_mm / 2.0) ** 2 * MM2_TO_M2


def beam_area_m2(diameter_m: float) -> float:
    """Area of a circular beam given its diameter in metres."""
    return math.pi * (diameter_m / 2.0) ** 2


def irradiance_through_aperture(
    emission: PhysicalQuantity, aperture_diameter_mm: float
) -> PhysicalQuantity:
    """Spread an aperture-form emission (W or J) over a circular aperture.

    Args:
        emission: Power (W) or energy (J) passing the aperture.
        aperture_diameter_mm: Aperture diameter in millimetres.

    Returns:
        Irradiance (W/m2) or radiant exposure (J/m2).
    """
    if emission.unit not in (Unit.WATT, Unit.JOULE):
        raise UnitMismatchError(emission.unit, Unit.WATT_PER_M2, operation="spread")
    if aperture_diameter_mm <= 0:
        raise ValueError("aperture_diameter_mm must be positive")
    area = aperture_area_m2(aperture_diameter_mm)
    unit = Unit.WATT_PER_M2 if emission.unit == Unit.WATT else Unit.JOULE_PER_M2
    return PhysicalQuantity(emission.value / area, unit)


def _require_applicable(quantity: PhysicalQuantity) -> None:
    if not quantity.is_applicable:
        raise UnitMismatchError(quantity.unit, quantity.unit, operation="normalize")
