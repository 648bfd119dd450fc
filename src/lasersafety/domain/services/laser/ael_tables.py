"""Accessible emission limit tables for Class 1, 2, 3R and 3B.

AELs are aperture values (W or J) except in the far UV and far IR where
they stay area-normalized. Class 1 and 3R have separate point and
extended source tables; Class 2 exists only in the visible band; Class
3B has one table for every source size. C5 is not applied here; pulse
trains go through the critical limit selector.
"""

from __future__ import annotations

from lasersafety.domain.value_objects import Unit

from .bands import (
    LimitTable,
    constant,
    dual_limit,
    power_law,
    region,
    threshold_split,
    time_rows,
)
from .constants import MAX_WAVELENGTH_NM
from .mpe_tables import (
    PHOTOCHEMICAL,
    THERMAL,
    retinal_short_rows,
    retinal_thermal_limit,
    uv_b_limit,
)

_W = Unit.WATT
_J = Unit.JOULE
_WM2 = Unit.WATT_PER_M2
_JM2 = Unit.JOULE_PER_M2


# ==============================================================================
# Class 1
# ==============================================================================

_CLASS_1_SHORT = retinal_short_rows(3.8e-8, 7.7e-8, 5e-6, 7e-4, unit=_J)

# 1400-1500 nm and 1800-2600 nm
_CLASS_1_IR_WATER_ROWS = time_rows(
    (1e-9, constant(8e5, _W)),
    (1e-3, constant(8e-4, _J, mechanism=THERMAL)),
    (0.35, power_law(4.4e-3, 0.25, _J, mechanism=THERMAL)),
    (10.0, power_law(1e-2, 1.0, _J, mechanism=THERMAL)),
    (None, constant(1e-2, _W, mechanism=THERMAL)),
)

AEL_CLASS_1_POINT = LimitTable(
    name="Class 1 AEL (point source)",
    regions=(
        region(
            180.0,
            302.5,
            time_rows(
                (1e-9, constant(3e10, _WM2)),
                (None, constant(30.0, _JM2, mechanism=PHOTOCHEMICAL)),
            ),
        ),
        region(
            302.5,
            315.0,
            time_rows(
                (1e-9, constant(2.4e4, _W)),
                (10.0, uv_b_limit(7.9e-7, _J)),
                (None, constant(7.9e-7, _J, "C2", mechanism=PHOTOCHEMICAL)),
            ),
        ),
        region(
            315.0,
            400.0,
            time_rows(
                (1e-9, constant(2.4e4, _W)),
                (10.0, constant(7.9e-7, _J, "C1", mechanism=THERMAL)),
                (1e3, constant(7.9e-3, _J, mechanism=PHOTOCHEMICAL)),
                (None, constant(7.9e-6, _W, mechanism=PHOTOCHEMICAL)),
            ),
        ),
        region(
            400.0,
            450.0,
            time_rows(
                *_CLASS_1_SHORT,
                (100.0, constant(3.9e-3, _J, mechanism=PHOTOCHEMICAL)),
                (None, constant(3.9e-5, _W, "C3", mechanism=PHOTOCHEMICAL)),
            ),
        ),
        region(
            450.0,
            500.0,
            time_rows(
                *_CLASS_1_SHORT,
                (
                    100.0,
                    dual_limit(
                        constant(3.9e-3, _J, "C3", mechanism=PHOTOCHEMICAL),
                        constant(3.9e-4, _W, mechanism=THERMAL),
                    ),
                ),
                (None, constant(3.9e-5, _W, "C3", mechanism=PHOTOCHEMICAL)),
            ),
        ),
        region(
            500.0,
            700.0,
            time_rows(
                *_CLASS_1_SHORT,
                (None, constant(3.9e-4, _W, mechanism=THERMAL)),
            ),
        ),
        region(
            700.0,
            1050.0,
            time_rows(
                *retinal_short_rows(3.8e-8, 7.7e-8, 5e-6, 7e-4, "C4", unit=_J),
                (None, constant(3.9e-4, _W, "C4", "C7", mechanism=THERMAL)),
            ),
        ),
        region(
            1050.0,
            1400.0,
            time_rows(
                *retinal_short_rows(3.8e-8, 7.7e-7, 13e-6, 3.5e-3, "C7", unit=_J),
                (None, constant(3.9e-4, _W, "C4", "C7", mechanism=THERMAL)),
            ),
        ),
        region(1400.0, 1500.0, _CLASS_1_IR_WATER_ROWS),
        region(
            1500.0,
            1800.0,
            time_rows(
                (1e-9, constant(8e6, _W)),
                (0.35, constant(8e-3, _J, mechanism=THERMAL)),
                (10.0, power_law(1.8e-2, 0.75, _J, mechanism=THERMAL)),
                (None, constant(1e-2, _W, mechanism=THERMAL)),
            ),
        ),
        region(1800.0, 2600.0, _CLASS_1_IR_WATER_ROWS),
        region(
            2600.0,
            4000.0,
            time_rows(
                (1e-9, constant(8e4, _W)),
                (1e-7, constant(8e-5, _J, mechanism=THERMAL)),
                (0.35, power_law(4.4e-3, 0.25, _J, mechanism=THERMAL)),
                (10.0, power_law(1e-2, 1.0, _J, mechanism=THERMAL)),
                (None, constant(1e-2, _W, mechanism=THERMAL)),
            ),
        ),
        region(
            4000.0,
            MAX_WAVELENGTH_NM,
            time_rows(
                (1e-9, constant(1e11, _WM2)),
                (1e-7, constant(100.0, _JM2, mechanism=THERMAL)),
                (10.0, power_law(5600.0, 0.25, _JM2, mechanism=THERMAL)),
                (None, constant(1000.0, _WM2, mechanism=THERMAL)),
            ),
            upper_inclusive=True,
        ),
    ),
)

_CLASS_1_EXTENDED_SHORT = retinal_short_rows(3.8e-8, 7.7e-8, 5e-6, 7e-4, "C6", unit=_J)

AEL_CLASS_1_EXTENDED = LimitTable(
    name="Class 1 AEL (extended source)",
    regions=(
        region(
            400.0,
            600.0,
            time_rows(
                *_CLASS_1_EXTENDED_SHORT,
                (
                    100.0,
                    dual_limit(
                        constant(3.9e-3, _J, "C3", mechanism=PHOTOCHEMICAL),
                        retinal_thermal_limit(7e-4, "C6", unit=_J),
                    ),
                ),
                (
                    None,
                    dual_limit(
                        constant(3.9e-5, _W, "C3", mechanism=PHOTOCHEMICAL),
                        retinal_thermal_limit(7e-4, "C6", unit=_J),
                    ),
                ),
            ),
            upper_inclusive=True,
        ),
        region(
            600.0,
            700.0,
            time_rows(
                *_CLASS_1_EXTENDED_SHORT,
                (None, retinal_thermal_limit(7e-4, "C6", unit=_J)),
            ),
            lower_inclusive=False,
        ),
        region(
            700.0,
            1050.0,
            time_rows(
                *retinal_short_rows(3.8e-8, 7.7e-8, 5e-6, 7e-4, "C4", "C6", unit=_J),
                (None, retinal_thermal_limit(7e-4, "C4", "C6", unit=_J)),
            ),
        ),
        region(
            1050.0,
            1400.0,
            time_rows(
                *retinal_short_rows(3.8e-8, 7.7e-7, 13e-6, 3.5e-3, "C6", "C7", unit=_J),
                (None, retinal_thermal_limit(3.5e-3, "C6", "C7", unit=_J)),
            ),
        ),
    ),
)


# ==============================================================================
# Class 2 (visible only)
# ==============================================================================


def _class_2_table(name: str, *names: str) -> LimitTable:
    return LimitTable(
        name=name,
        regions=(
            region(
                400.0,
                700.0,
                time_rows(
                    *retinal_short_rows(
                        3.8e-8, 7.7e-8, 5e-6, 7e-4, *names, unit=_J, t_law_end=0.25
                    ),
                    (None, constant(1e-3, _W, *names, mechanism=THERMAL)),
                ),
                upper_inclusive=True,
            ),
        ),
    )


AEL_CLASS_2_POINT = _class_2_table("Class 2 AEL (point source)")
AEL_CLASS_2_EXTENDED = _class_2_table("Class 2 AEL (extended source)", "C6")


# ==============================================================================
# Class 3R
# ==============================================================================

# 1400-1500 nm and 1800-2600 nm
_CLASS_3R_IR_WATER_ROWS = time_rows(
    (1e-9, constant(4e6, _W)),
    (1e-3, constant(4e-3, _J, mechanism=THERMAL)),
    (0.35, power_law(2.2e-2, 0.25, _J, mechanism=THERMAL)),
    (10.0, power_law(5e-2, 1.0, _J, mechanism=THERMAL)),
    (None, constant(5e-2, _W, mechanism=THERMAL)),
)

AEL_CLASS_3R_POINT = LimitTable(
    name="Class 3R AEL (point source)",
    regions=(
        region(
            180.0,
            302.5,
            time_rows(
                (1e-9, constant(1.5e11, _WM2)),
                (None, constant(150.0, _JM2, mechanism=PHOTOCHEMICAL)),
            ),
        ),
        region(
            302.5,
            315.0,
            time_rows(
                (1e-9, constant(1.2e5, _W)),
                (10.0, uv_b_limit(4e-6, _J)),
                (None, constant(4e-6, _J, "C2", mechanism=PHOTOCHEMICAL)),
            ),
        ),
        region(
            315.0,
            400.0,
            time_rows(
                (1e-9, constant(1.2e5, _W)),
                (10.0, constant(4e-6, _J, "C1", mechanism=THERMAL)),
                (1e3, constant(4e-2, _J, mechanism=PHOTOCHEMICAL)),
                (None, constant(4e-5, _W, mechanism=PHOTOCHEMICAL)),
            ),
        ),
        region(
            400.0,
            700.0,
            time_rows(
                *retinal_short_rows(1.9e-7, 3.8e-7, 5e-6, 3.5e-3, unit=_J, t_law_end=0.25),
                (None, constant(5e-3, _W, mechanism=THERMAL)),
            ),
        ),
        region(
            700.0,
            1050.0,
            time_rows(
                *retinal_short_rows(1.9e-7, 3.8e-7, 5e-6, 3.5e-3, "C4", unit=_J),
                (None, constant(2e-3, _W, "C4", "C7", mechanism=THERMAL)),
            ),
        ),
        region(
            1050.0,
            1400.0,
            time_rows(
                *retinal_short_rows(1.9e-7, 3.8e-6, 13e-6, 1.8e-2, "C7", unit=_J),
                (None, constant(2e-3, _W, "C4", "C7", mechanism=THERMAL)),
            ),
        ),
        region(1400.0, 1500.0, _CLASS_3R_IR_WATER_ROWS),
        region(
            1500.0,
            1800.0,
            time_rows(
                (1e-9, constant(4e7, _W)),
                (0.35, constant(4e-2, _J, mechanism=THERMAL)),
                (10.0, power_law(9e-2, 0.75, _J, mechanism=THERMAL)),
                (None, constant(5e-2, _W, mechanism=THERMAL)),
            ),
        ),
        region(1800.0, 2600.0, _CLASS_3R_IR_WATER_ROWS),
        region(
            2600.0,
            4000.0,
            time_rows(
                (1e-9, constant(4e5, _W)),
                (1e-7, constant(4e-4, _J, mechanism=THERMAL)),
                (0.35, power_law(2.2e-2, 0.25, _J, mechanism=THERMAL)),
                (10.0, power_law(5e-2, 1.0, _J, mechanism=THERMAL)),
                (None, constant(5e-2, _W, mechanism=THERMAL)),
            ),
        ),
        region(
            4000.0,
            MAX_WAVELENGTH_NM,
            time_rows(
                (1e-9, constant(5e11, _WM2)),
                (1e-7, constant(500.0, _JM2, mechanism=THERMAL)),
                (10.0, power_law(2.8e4, 0.25, _JM2, mechanism=THERMAL)),
                (None, constant(5000.0, _WM2, mechanism=THERMAL)),
            ),
            upper_inclusive=True,
        ),
    ),
)

AEL_CLASS_3R_EXTENDED = LimitTable(
    name="Class 3R AEL (extended source)",
    regions=(
        region(
            400.0,
            700.0,
            time_rows(
                *retinal_short_rows(1.9e-7, 3.8e-7, 5e-6, 3.5e-3, "C6", unit=_J, t_law_end=0.25),
                (None, constant(5e-3, _W, "C6", mechanism=THERMAL)),
            ),
        ),
        region(
            700.0,
            1050.0,
            time_rows(
                *retinal_short_rows(1.9e-7, 3.8e-7, 5e-6, 3.5e-3, "C4", "C6", unit=_J),
                (None, retinal_thermal_limit(3.5e-3, "C4", "C6", unit=_J)),
            ),
        ),
        region(
            1050.0,
            1400.0,
            time_rows(
                *retinal_short_rows(1.9e-7, 3.8e-6, 13e-6, 1.8e-2, "C6", "C7", unit=_J),
                (None, retinal_thermal_limit(1.8e-2, "C6", "C7", unit=_J)),
            ),
        ),
    ),
)


# ==============================================================================
# Class 3B
# ==============================================================================


def _class_3b_rows(k_peak: float, k_energy: float, k_power: float, *names: str):
    return time_rows(
        (1e-9, constant(k_peak, _W, *names)),
        (0.25, constant(k_energy, _J, *names, mechanism=THERMAL), True),
        (None, constant(k_power, _W, *names, mechanism=THERMAL)),
    )


def _visible_3b_rows(*names: str):
    """0.03 J below 0.06 s (scaled by C4 in the near IR), 0.5 W after."""
    return time_rows(
        (1e-9, constant(3e7, _W, *names)),
        (
            0.25,
            threshold_split(
                lambda f: 0.06 * (f.c4 if names else 1.0),
                "0.06*C4" if names else "0.06 s",
                constant(0.03, _J, *names, mechanism=THERMAL),
                constant(0.5, _W, mechanism=THERMAL),
                inclusive=False,
            ),
            True,
        ),
        (None, constant(0.5, _W, mechanism=THERMAL)),
    )


AEL_CLASS_3B = LimitTable(
    name="Class 3B AEL",
    regions=(
        region(180.0, 302.5, _class_3b_rows(3.8e5, 3.8e-4, 1.5e-3)),
        region(302.5, 315.0, _class_3b_rows(1.25e4, 1.25e-5, 5e-5, "C2")),
        region(315.0, 400.0, _class_3b_rows(1.25e8, 0.125, 0.5)),
        region(400.0, 700.0, _visible_3b_rows(), upper_inclusive=True),
        region(700.0, 1050.0, _visible_3b_rows("C4"), lower_inclusive=False, upper_inclusive=True),
        region(
            1050.0,
            1400.0,
            _class_3b_rows(1.5e8, 0.15, 0.5),
            lower_inclusive=False,
            upper_inclusive=True,
        ),
        region(
            1400.0,
            MAX_WAVELENGTH_NM,
            _class_3b_rows(1.25e8, 0.125, 0.5),
            lower_inclusive=False,
            upper_inclusive=True,
        ),
    ),
)
