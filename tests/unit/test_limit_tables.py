"""Unit tests for the band skeleton and the MPE/AEL tables.

Covers interval predicates, the dual-limit combinator, table structure
(ordered, non-overlapping bands with full time coverage) and continuity
of the limit across time and wavelength boundaries.
"""

from __future__ import annotations

import pytest

from lasersafety.domain.services.laser import (
    LIMIT_TABLES,
    MAX_EXPOSURE_TIME_S,
    MIN_EXPOSURE_TIME_S,
    Band,
    LimitTable,
    LimitTerm,
    evaluate_exposure_limit,
    minimum_after_normalizing,
    to_energy,
)
from lasersafety.domain.services.laser.bands import constant, region, time_rows
from lasersafety.domain.services.laser.units import to_per_m2
from lasersafety.domain.value_objects import (
    EmissionClass,
    HazardTarget,
    PhysicalQuantity,
    SourceGeometry,
    Unit,
    UnitMismatchError,
)

POINT = HazardTarget.POINT_SOURCE_EYE
EXTENDED = HazardTarget.EXTENDED_SOURCE_EYE
SKIN = HazardTarget.SKIN

SAMPLE_TIMES = (1e-13, 1e-11, 1e-9, 1e-7, 1e-5, 1e-3, 0.25, 10.0, 100.0, 1e3, 3e4)

# T2 for a 20 mrad source: 10 * 10^((alpha - 1.5) / 98.5) s
T2_20_MRAD = 10.0 * 10 ** (18.5 / 98.5)


# ==============================================================================
# Band
# ==============================================================================


class TestBand:
    """Tests for the Band interval predicate."""

    def test_half_open_by_default(self) -> None:
        band = Band(1.0, 2.0)
        assert band.contains(1.0)
        assert band.contains(1.5)
        assert not band.contains(2.0)

    def test_inclusivity_flags(self) -> None:
        band = Band(1.0, 2.0, lower_inclusive=False, upper_inclusive=True)
        assert not band.contains(1.0)
        assert band.contains(2.0)

    def test_rejects_inverted_band(self) -> None:
        with pytest.raises(ValueError, match="below"):
            Band(2.0, 1.0)

    def test_precedes(self) -> None:
        assert Band(1.0, 2.0).precedes(Band(2.0, 3.0))
        assert Band(1.0, 2.0, upper_inclusive=True).precedes(
            Band(2.0, 3.0, lower_inclusive=False)
        )
        assert not Band(1.0, 2.0, upper_inclusive=True).precedes(Band(2.0, 3.0))
        assert not Band(1.0, 2.5).precedes(Band(2.0, 3.0))

    def test_label(self) -> None:
        assert Band(400.0, 700.0).label == "[400, 700)"
        assert Band(400.0, 700.0, False, True).label == "(400, 700]"


# ==============================================================================
# Dual limit
# ==============================================================================


class TestMinimumAfterNormalizing:
    """Tests for the dual-limit combinator."""

    photochemical = LimitTerm(
        PhysicalQuantity(100.0, Unit.JOULE_PER_M2), "100 J/m2", "photochemical"
    )
    thermal = LimitTerm(PhysicalQuantity(10.0, Unit.WATT_PER_M2), "10 W/m2", "thermal")

    def test_power_limit_wins_when_smaller_as_energy(self) -> None:
        result = minimum_after_normalizing(self.photochemical, self.thermal, 5.0)
        assert result.mechanism == "thermal"
        assert result.quantity == PhysicalQuantity(10.0, Unit.WATT_PER_M2)

    def test_energy_limit_wins_when_smaller(self) -> None:
        result = minimum_after_normalizing(self.photochemical, self.thermal, 20.0)
        assert result.mechanism == "photochemical"
        assert result.quantity.unit == Unit.JOULE_PER_M2

    def test_first_wins_ties(self) -> None:
        result = minimum_after_normalizing(self.photochemical, self.thermal, 10.0)
        assert result.mechanism == "photochemical"

    def test_comparison_is_noted(self) -> None:
        result = minimum_after_normalizing(self.photochemical, self.thermal, 5.0)
        assert result.notes[-1].startswith("dual limit:")

    def test_aperture_and_area_cannot_be_compared(self) -> None:
        aperture = LimitTerm(PhysicalQuantity(1e-3, Unit.JOULE), "1e-3 J")
        with pytest.raises(UnitMismatchError):
            minimum_after_normalizing(aperture, self.thermal, 1.0)


# ==============================================================================
# Table structure
# ==============================================================================


class TestTableStructure:
    """Tests for table construction and coverage."""

    def test_time_rows_span_the_tabulated_range(self) -> None:
        rows = time_rows(
            (1e-9, constant(3e10, Unit.WATT_PER_M2)),
            (None, constant(30.0, Unit.JOULE_PER_M2)),
        )
        assert rows[0].band.lower == MIN_EXPOSURE_TIME_S
        assert rows[0].band.lower_inclusive
        assert rows[-1].band.upper == MAX_EXPOSURE_TIME_S
        assert rows[-1].band.upper_inclusive

    def test_closed_edge_opens_next_row(self) -> None:
        rows = time_rows(
            (0.25, constant(1.0, Unit.JOULE), True),
            (None, constant(4.0, Unit.WATT)),
        )
        assert rows[0].band.contains(0.25)
        assert not rows[1].band.contains(0.25)

    def test_overlapping_regions_are_rejected(self) -> None:
        rows = time_rows((None, constant(1.0, Unit.WATT_PER_M2)))
        with pytest.raises(ValueError, match="overlaps"):
            LimitTable(
                name="broken",
                regions=(region(400.0, 700.0, rows), region(600.0, 800.0, rows)),
            )

    def test_class_3b_shared_by_point_and_extended(self) -> None:
        assert (
            LIMIT_TABLES[(POINT, EmissionClass.CLASS_3B)]
            is LIMIT_TABLES[(EXTENDED, EmissionClass.CLASS_3B)]
        )

    def test_no_skin_ael_tables(self) -> None:
        for emission_class in EmissionClass:
            assert (SKIN, emission_class) not in LIMIT_TABLES

    def test_tables_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            LIMIT_TABLES[(SKIN, EmissionClass.CLASS_1)] = ()  # type: ignore[index]

    @pytest.mark.parametrize(
        "key,wavelengths",
        [
            ((POINT, None), (180.0, 302.5, 400.0, 532.0, 1064.0, 1400.0, 1e4, 1e6)),
            ((EXTENDED, None), (400.0, 600.0, 700.0, 1050.0, 1399.0)),
            ((SKIN, None), (180.0, 355.0, 1064.0, 1550.0, 1e6)),
            ((POINT, EmissionClass.CLASS_1), (180.0, 532.0, 1064.0, 3000.0, 1e6)),
            ((POINT, EmissionClass.CLASS_2), (400.0, 532.0, 700.0)),
            ((POINT, EmissionClass.CLASS_3R), (180.0, 632.8, 1550.0, 1e6)),
            ((POINT, EmissionClass.CLASS_3B), (180.0, 700.0, 1050.0, 1400.0, 1e6)),
        ],
    )
    def test_every_time_is_covered(self, key, wavelengths) -> None:
        table = LIMIT_TABLES[key]
        for wavelength in wavelengths:
            found = table.region_for(wavelength)
            assert found is not None, f"{table.name}: no region at {wavelength} nm"
            for t in SAMPLE_TIMES:
                assert found.row_for(t) is not None, f"{table.name}: no row at {t} s"

    @pytest.mark.parametrize(
        "key,wavelength",
        [
            ((EXTENDED, None), 1400.0),
            ((EXTENDED, None), 355.0),
            ((POINT, EmissionClass.CLASS_2), 399.0),
            ((POINT, EmissionClass.CLASS_2), 1064.0),
        ],
    )
    def test_gaps_have_no_region(self, key, wavelength: float) -> None:
        assert LIMIT_TABLES[key].region_for(wavelength) is None

    def test_every_defined_limit_uses_a_declared_unit(self) -> None:
        geometry = SourceGeometry(1.5)
        declared = {unit for unit in Unit if unit.is_applicable}
        for (target, emission_class), table in LIMIT_TABLES.items():
            for found in table.regions:
                wavelength = (found.band.lower + min(found.band.upper, 2e4)) / 2
                for t in SAMPLE_TIMES:
                    limit = evaluate_exposure_limit(
                        wavelength, t, geometry, target, emission_class
                    )
                    assert limit.is_defined, f"{table.name} at {wavelength} nm, {t} s"
                    assert limit.quantity.unit in declared
                    assert limit.quantity.value > 0


# ==============================================================================
# Continuity
# ==============================================================================


def _energy_at(
    wavelength: float,
    t: float,
    target: HazardTarget,
    emission_class: EmissionClass | None = None,
    alpha_mrad: float = 1.5,
) -> PhysicalQuantity:
    geometry = SourceGeometry(alpha_mrad)
    limit = evaluate_exposure_limit(wavelength, t, geometry, target, emission_class)
    assert limit.is_defined
    return to_per_m2(to_energy(limit.quantity, t))


class TestBandContinuity:
    """Limits on either side of a boundary meet without a jump."""

    @pytest.mark.parametrize(
        "wavelength,boundary,target,emission_class",
        [
            (280.0, 1e-9, POINT, None),
            (355.0, 10.0, POINT, None),
            (355.0, 1e3, POINT, None),
            (532.0, 5e-6, POINT, None),
            (532.0, 10.0, POINT, None),
            (800.0, 10.0, POINT, None),
            (1064.0, 13e-6, POINT, None),
            (1064.0, 10.0, POINT, None),
            (1450.0, 1e-9, POINT, None),
            (1450.0, 1e-3, POINT, None),
            (1550.0, 10.0, POINT, None),
            (10600.0, 1e-7, POINT, None),
            (10600.0, 10.0, POINT, None),
            (1064.0, 1e-7, SKIN, None),
            (1064.0, 10.0, SKIN, None),
            (632.8, 5e-6, POINT, EmissionClass.CLASS_1),
            (632.8, 10.0, POINT, EmissionClass.CLASS_1),
            (1450.0, 1e-3, POINT, EmissionClass.CLASS_1),
            (1450.0, 0.35, POINT, EmissionClass.CLASS_1),
            (1450.0, 10.0, POINT, EmissionClass.CLASS_1),
            (632.8, 0.25, POINT, EmissionClass.CLASS_2),
            (532.0, 0.25, POINT, EmissionClass.CLASS_3R),
            (532.0, 1e-9, POINT, EmissionClass.CLASS_3B),
            (355.0, 0.25, POINT, EmissionClass.CLASS_3B),
        ],
    )
    def test_time_boundary(
        self,
        wavelength: float,
        boundary: float,
        target: HazardTarget,
        emission_class: EmissionClass | None,
    ) -> None:
        below = _energy_at(wavelength, boundary * (1 - 1e-6), target, emission_class)
        above = _energy_at(wavelength, boundary * (1 + 1e-6), target, emission_class)
        assert below.unit == above.unit
        ratio = max(below.value, above.value) / min(below.value, above.value)
        assert ratio < 1.1

    @pytest.mark.parametrize(
        "wavelength,boundary",
        [
            (550.0, 5e-6),
            (550.0, 10.0),
            (550.0, T2_20_MRAD),
            (550.0, 100.0),
            (650.0, 10.0),
            (650.0, T2_20_MRAD),
            (800.0, 10.0),
            (800.0, T2_20_MRAD),
            (1064.0, 13e-6),
            (1064.0, 10.0),
        ],
    )
    def test_extended_source_time_boundary(self, wavelength: float, boundary: float) -> None:
        """A 20 mrad source, where C6 and T2 both differ from a point source."""
        below = _energy_at(wavelength, boundary * (1 - 1e-6), EXTENDED, alpha_mrad=20.0)
        above = _energy_at(wavelength, boundary * (1 + 1e-6), EXTENDED, alpha_mrad=20.0)
        assert below.unit == above.unit
        ratio = max(below.value, above.value) / min(below.value, above.value)
        assert ratio < 1.1

    def test_extended_source_photochemical_takes_over(self) -> None:
        """At 550 nm the C3-scaled photochemical term caps the thermal one past 100 s."""
        energy = _energy_at(550.0, 1e3, EXTENDED, alpha_mrad=20.0)
        assert energy.value == pytest.approx(1e5, rel=1e-6)

        assert ratio < 1.1

    @pytest.mark.parametrize(
        "boundary,exposure_time",
        [(450.0, 1e3), (500.0, 1e3), (700.0, 100.0), (1050.0, 100.0)],
    )
    def test_wavelength_boundary(self, boundary: float, exposure_time: float) -> None:
        below = _energy_at(boundary * (1 - 1e-8), exposure_time, POINT)
        above = _energy_at(boundary * (1 + 1e-8), exposure_time, POINT)
        assert above.value / below.value == pytest.approx(1.0, abs=0.01)
