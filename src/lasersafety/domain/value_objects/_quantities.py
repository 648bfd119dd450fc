"""Physical quantity value objects."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class Unit(str, Enum):
    """Units an exposure limit can be expressed in.

    Power and energy families each come in an aperture form (W, J) and
    two area-normalized forms (per m², per cm²). NOT_APPLICABLE is the
    explicit marker for "no standard-defined limit".
    """

    WATT = "W"
    WATT_PER_M2 = "W/m2"
    WATT_PER_CM2 = "W/cm2"
    JOULE = "J"
    JOULE_PER_M2 = "J/m2"
    JOULE_PER_CM2 = "J/cm2"
    NOT_APPLICABLE = "N/A"

    @property
    def is_power(self) -> bool:
        """Check if this unit belongs to the power family."""
        return self in _POWER_UNITS

    @property
    def is_energy(self) -> bool:
        """Check if this unit belongs to the energy family."""
        return self in _ENERGY_UNITS

    @property
    def is_per_area(self) -> bool:
        """Check if this unit is normalized to an area."""
        return self in _PER_AREA_UNITS

    @property
    def is_applicable(self) -> bool:
        return self != Unit.NOT_APPLICABLE

    @property
    def energy_counterpart(self) -> Unit:
        """Same spatial form in the energy family (W/m2 -> J/m2)."""
        return _POWER_TO_ENERGY.get(self, self)

    @property
    def power_counterpart(self) -> Unit:
        """Same spatial form in the power family (J/m2 -> W/m2)."""
        return _ENERGY_TO_POWER.get(self, self)


_POWER_TO_ENERGY: dict[Unit, Unit] = {
    Unit.WATT: Unit.JOULE,
    Unit.WATT_PER_M2: Unit.JOULE_PER_M2,
    Unit.WATT_PER_CM2: Unit.JOULE_PER_CM2,
}
_ENERGY_TO_POWER: dict[Unit, Unit] = {v: k for k, v in _POWER_TO_ENERGY.items()}
_POWER_UNITS = frozenset(_POWER_TO_ENERGY)
_ENERGY_UNITS = frozenset(_ENERGY_TO_POWER)
_PER_AREA_UNITS = frozenset(
    {Unit.WATT_PER_M2, Unit.WATT_PER_CM2, Unit.JOULE_PER_M2, Unit.JOULE_PER_CM2}
)


class UnitMismatchError(ValueError):
    """Raised when two quantities from incompatible unit families meet.

    Comparing a power-per-area value with an energy value (or an aperture
    value with a per-area one) without an explicit normalization step is
    a programming error, not a domain outcome.
    """

    def __init__(self, left: Unit, right: Unit, operation: str = "compare") -> None:
        self.left = left
        self.right = right
        self.operation = operation
        super().__init__(f"Cannot {operation} {left.value} with {right.value}")


@dataclass(frozen=True)
class PhysicalQuantity:
    """A magnitude with its unit carried explicitly.

    Attributes:
        value: Magnitude. Always 0.0 for the N/A sentinel.
        unit: Unit of the magnitude.
    """

    value: float
    unit: Unit

    def __post_init__(self) -> None:
        if math.isnan(self.value):
            raise ValueError("value must not be NaN")
        if self.unit == Unit.NOT_APPLICABLE and self.value != 0.0:
            raise ValueError("N/A quantities must carry value 0.0")

    @classmethod
    def not_applicable(cls) -> PhysicalQuantity:
        """The explicit out-of-applicability marker."""
        return cls(0.0, Unit.NOT_APPLICABLE)

    @property
    def is_applicable(self) -> bool:
        return self.unit.is_applicable

    def scaled(self, factor: float) -> PhysicalQuantity:
        """Return a new quantity multiplied by a dimensionless factor."""
        if not self.is_applicable:
            return self
        return PhysicalQuantity(self.value * factor, self.unit)

    @property
    def formatted(self) -> str:
        """Human-readable value with unit."""
        if not self.is_applicable:
            return "N/A"
        return f"{self.value:.4g} {self.unit.value}"

    def __str__(self) -> str:
        return self.formatted
