"""Unit tests for exposure limit unit conversion."""

from __future__ import annotations

import math

import pytest

from lasersafety.domain.services.laser import (
    UNIT_CONVERSIONS,
    aperture_area_m2,
    convert_quantity,
    irradiance_through_aperture,
    to_energy,
    to_power,
)
from lasersafety.domain.services.laser.units import normalize_to_energy, to_per_m2
from lasersafety.domain.value_objects import PhysicalQuantity, Unit, UnitMismatchError


class TestConversionTable:
    """Tests for the read-only conversion constants."""

    def test_known_conversions(self) -> None:
        assert UNIT_CONVERSIONS["mm->m"] == 1e-3
        assert UNIT_CONVERSIONS["mrad->rad"] == 1e-3
        assert UNIT_CONVERSIONS["cm2->m2"] == 1e-4

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            UNIT_CONVERSIONS["mm->m"] = 1.0  # type: ignore[index]


class TestConvertQuantity:
    """Tests for convert_quantity and to_per_m2."""

    def test_per_cm2_to_per_m2(self) -> None:
        result = convert_quantity(PhysicalQuantity(1.0, Unit.WATT_PER_CM2), Unit.WATT_PER_M2)
        assert result.unit == Unit.WATT_PER_M2
        assert result.value == pytest.approx(1e4)

    def test_per_m2_to_per_cm2(self) -> None:
        result = convert_quantity(PhysicalQuantity(1e4, Unit.JOULE_PER_M2), Unit.JOULE_PER_CM2)
        assert result.value == pytest.approx(1.0)

    def test_same_unit_is_identity(self) -> None:
        quantity = PhysicalQuantity(3.0, Unit.JOULE)
        assert convert_quantity(quantity, Unit.JOULE) is quantity

    def test_cross_family_raises(self) -> None:
        with pytest.raises(UnitMismatchError):
            convert_quantity(PhysicalQuantity(1.0, Unit.WATT), Unit.JOULE)

    def test_aperture_to_area_raises(self) -> None:
        with pytest.raises(UnitMismatchError):
            convert_quantity(PhysicalQuantity(1.0, Unit.WATT), Unit.WATT_PER_M2)

    def test_to_per_m2_leaves_aperture_units(self) -> None:
        quantity = PhysicalQuantity(1.0, Unit.WATT)
        assert to_per_m2(quantity) is quantity

    def test_to_per_m2_rewrites_per_cm2(self) -> None:
        result = to_per_m2(PhysicalQuantity(2.0, Unit.JOULE_PER_CM2))
        assert result.unit == Unit.JOULE_PER_M2
        assert result.value == pytest.approx(2e4)


class TestPowerEnergy:
    """Tests for to_energy, to_power and normalize_to_energy."""

    def test_to_energy_integrates_power(self) -> None:
        result = to_energy(PhysicalQuantity(10.0, Unit.WATT_PER_M2), 0.5)
        assert result == PhysicalQuantity(5.0, Unit.JOULE_PER_M2)

    def test_to_energy_keeps_energy(self) -> None:
        quantity = PhysicalQuantity(5.0, Unit.JOULE)
        assert to_energy(quantity, 10.0) is quantity

    def test_to_power_averages_energy(self) -> None:
        result = to_power(PhysicalQuantity(6.0, Unit.JOULE_PER_M2), 0.25)
        assert result == PhysicalQuantity(24.0, Unit.WATT_PER_M2)

    def test_to_power_rejects_zero_duration(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            to_power(PhysicalQuantity(1.0, Unit.JOULE), 0.0)

    def test_not_applicable_cannot_be_normalized(self) -> None:
        with pytest.raises(UnitMismatchError):
            to_energy(PhysicalQuantity.not_applicable(), 1.0)

    def test_normalize_mixed_families(self) -> None:
        left, right = normalize_to_energy(
            PhysicalQuantity(10.0, Unit.WATT_PER_M2),
            PhysicalQuantity(1e-2, Unit.JOULE_PER_CM2),
            2.0,
        )
        assert left == PhysicalQuantity(20.0, Unit.JOULE_PER_M2)
        assert right.unit == Unit.JOULE_PER_M2
        assert right.value == pytest.approx(100.0)

    def test_normalize_aperture_with_area_raises(self) -> None:
        with pytest.raises(UnitMismatchError):
            normalize_to_energy(
                PhysicalQuantity(1.0, Unit.WATT),
                PhysicalQuantity(1.0, Unit.JOULE_PER_M2),
                1.0,
            )


class TestApertures:
    """Tests for aperture areas and irradiance through an aperture."""

    def test_aperture_area(self) -> None:
        assert aperture_area_m2(7.0) == pytest.approx(math.pi * 3.5**2 * 1e-6)

    def test_power_through_7mm_aperture(self) -> None:
        result = irradiance_through_aperture(PhysicalQuantity(1e-3, Unit.WATT), 7.0)
        assert result.unit == Unit.WATT_PER_M2
        assert result.value == pytest.approx(25.98, rel=1e-3)

    def test_energy_through_aperture(self) -> None:
        result = irradiance_through_aperture(PhysicalQuantity(1e-6, Unit.JOULE), 1.0)
        assert result.unit == Unit.JOULE_PER_M2

    def test_rejects_area_units(self) -> None:
        with pytest.raises(UnitMismatchError):
            irradiance_through_aperture(PhysicalQuantity(1.0, Unit.WATT_PER_M2), 7.0)

    def test_rejects_zero_aperture(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            irradiance_through_aperture(PhysicalQuantity(1.0, Unit.WATT), 0.0)
