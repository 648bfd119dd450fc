"""Maximum permissible exposure tables.

Three tables share the band skeleton from ``bands``:

- Table A.1: eye, point source, 180 nm - 1 mm
- Table A.2: eye, extended source, retinal hazard region 400 - 1400 nm
- Table A.5: skin, 180 nm - 1 mm

All values are radiant exposure (J/m2) or irradiance (W/m2) at the cornea
or skin. Rows above 1400 nm are shared between eye and skin.
"""

from __future__ import annotations

from lasersafety.domain.value_objects import Unit

from .bands import (
    Formula,
    LimitTable,
    constant,
    dual_limit,
    factor_power,
    power_law,
    region,
    threshold_split,
    time_rows,
)
from .constants import MAX_WAVELENGTH_NM

_WM2 = Unit.WATT_PER_M2
_JM2 = Unit.JOULE_PER_M2

PHOTOCHEMICAL = "photochemical"
THERMAL = "thermal"


def uv_b_limit(k: float, unit: Unit) -> Formula:
    """C1 up to T1, C2 after it (302.5 - 315 nm)."""
    return threshold_split(
        lambda f: f.t1,
        "T1",
        constant(k, unit, "C1", mechanism=THERMAL),
        constant(k, unit, "C2", mechanism=PHOTOCHEMICAL),
    )


def retinal_thermal_limit(k: float, *factor_names: str, unit: Unit = _JM2) -> Formula:
    """Extended-source thermal limit: k*t^0.75 up to T2, then k*T2^-0.25 as a power."""
    return threshold_split(
        lambda f: f.t2,
        "T2",
        power_law(k, 0.75, unit, *factor_names, mechanism=THERMAL),
        factor_power(k, "T2", -0.25, unit.power_counterpart, *factor_names, mechanism=THERMAL),
    )


def retinal_short_rows(
    k_short: float,
    k_mid: float,
    t_mid: float,
    k_law: float,
    *names: str,
    unit: Unit = _JM2,
    t_law_end: float = 10.0,
) -> tuple[tuple[float, Formula], ...]:
    """Retinal rows below 1e-11 s, up to t_mid and up to t_law_end."""
    return (
        (1e-11, constant(k_short, unit, *names)),
        (t_mid, constant(k_mid, unit, *names)),
        (t_law_end, power_law(k_law, 0.75, unit, *names, mechanism=THERMAL)),
    )


# ==============================================================================
# Rows shared by eye and skin
# ==============================================================================

_UV_C_ROWS = time_rows(
    (1e-9, constant(3e10, _WM2)),
    (None, constant(30.0, _JM2, mechanism=PHOTOCHEMICAL)),
)

_UV_B_ROWS = time_rows(
    (1e-9, constant(3e10, _WM2)),
    (10.0, uv_b_limit(1.0, _JM2)),
    (None, constant(1.0, _JM2, "C2", mechanism=PHOTOCHEMICAL)),
)

_UV_A_ROWS = time_rows(
    (1e-9, constant(3e10, _WM2)),
    (10.0, constant(1.0, _JM2, "C1", mechanism=THERMAL)),
    (1e3, constant(1e4, _JM2, mechanism=PHOTOCHEMICAL)),
    (None, constant(10.0, _WM2, mechanism=PHOTOCHEMICAL)),
)

# 1400-1500 nm and 1800-2600 nm
_IR_WATER_ROWS = time_rows(
    (1e-9, constant(1e12, _WM2)),
    (1e-3, constant(1e3, _JM2, mechanism=THERMAL)),
    (10.0, power_law(5600.0, 0.25, _JM2, mechanism=THERMAL)),
    (None, constant(1000.0, _WM2, mechanism=THERMAL)),
)

_IR_1500_ROWS = time_rows(
    (1e-9, constant(1e13, _WM2)),
    (10.0, constant(1e4, _JM2, mechanism=THERMAL)),
    (None, constant(1000.0, _WM2, mechanism=THERMAL)),
)

_FAR_IR_ROWS = time_rows(
    (1e-9, constant(1e11, _WM2)),
    (1e-7, constant(100.0, _JM2, mechanism=THERMAL)),
    (10.0, power_law(5600.0, 0.25, _JM2, mechanism=THERMAL)),
    (None, constant(1000.0, _WM2, mechanism=THERMAL)),
)

_IR_REGIONS = (
    region(1400.0, 1500.0, _IR_WATER_ROWS),
    region(1500.0, 1800.0, _IR_1500_ROWS),
    region(1800.0, 2600.0, _IR_WATER_ROWS),
    region(2600.0, MAX_WAVELENGTH_NM, _FAR_IR_ROWS, upper_inclusive=True),
)


# ==============================================================================
# Table A.1: eye, point source
# ==============================================================================

_VISIBLE_SHORT = retinal_short_rows(1e-3, 2e-3, 5e-6, 18.0)

MPE_POINT_SOURCE = LimitTable(
    name="Table A.1 (eye, point source)",
    regions=(
        region(180.0, 302.5, _UV_C_ROWS),
        region(302.5, 315.0, _UV_B_ROWS),
        region(315.0, 400.0, _UV_A_ROWS),
        region(
            400.0,
            450.0,
            time_rows(
                *_VISIBLE_SHORT,
                (100.0, constant(100.0, _JM2, mechanism=PHOTOCHEMICAL)),
                (None, constant(1.0, _WM2, "C3", mechanism=PHOTOCHEMICAL)),
            ),
        ),
        region(
            450.0,
            500.0,
            time_rows(
                *_VISIBLE_SHORT,
                (
                    100.0,
                    dual_limit(
                        constant(100.0, _JM2, "C3", mechanism=PHOTOCHEMICAL),
                        constant(10.0, _WM2, mechanism=THERMAL),
                    ),
                ),
                (None, constant(1.0, _WM2, "C3", mechanism=PHOTOCHEMICAL)),
            ),
        ),
        region(
            500.0,
            700.0,
            time_rows(
                *_VISIBLE_SHORT,
                (None, constant(10.0, _WM2, mechanism=THERMAL)),
            ),
        ),
        region(
            700.0,
            1050.0,
            time_rows(
                *retinal_short_rows(1e-3, 2e-3, 5e-6, 18.0, "C4"),
                (None, constant(10.0, _WM2, "C4", "C7", mechanism=THERMAL)),
            ),
        ),
        region(
            1050.0,
            1400.0,
            time_rows(
                *retinal_short_rows(1e-3, 2e-2, 13e-6, 90.0, "C7"),
                (None, constant(10.0, _WM2, "C4", "C7", mechanism=THERMAL)),
            ),
        ),
        *_IR_REGIONS,
    ),
)


# ==============================================================================
# Table A.2: eye, extended source (retinal hazard region only)
# ==============================================================================

_EXTENDED_VISIBLE_SHORT = retinal_short_rows(1e-3, 2e-3, 5e-6, 18.0, "C6")

MPE_EXTENDED_SOURCE = LimitTable(
    name="Table A.2 (eye, extended source)",
    regions=(
        region(
            400.0,
            600.0,
            time_rows(
                *_EXTENDED_VISIBLE_SHORT,
                (
                    100.0,
                    dual_limit(
                        constant(100.0, _JM2, "C3", mechanism=PHOTOCHEMICAL),
                        retinal_thermal_limit(18.0, "C6"),
                    ),
                ),
                (
                    None,
                    dual_limit(
                        constant(1.0, _WM2, "C3", mechanism=PHOTOCHEMICAL),
                        retinal_thermal_limit(18.0, "C6"),
                    ),
                ),
            ),
            upper_inclusive=True,
        ),
        region(
            600.0,
            700.0,
            time_rows(
                *_EXTENDED_VISIBLE_SHORT,
                (None, retinal_thermal_limit(18.0, "C6")),
            ),
            lower_inclusive=False,
        ),
        region(
            700.0,
            1050.0,
            time_rows(
                *retinal_short_rows(1e-3, 2e-3, 5e-6, 18.0, "C4", "C6"),
                (None, retinal_thermal_limit(18.0, "C4", "C6")),
            ),
        ),
        region(
            1050.0,
            1400.0,
            time_rows(
                *retinal_short_rows(1e-3, 2e-2, 13e-6, 90.0, "C6", "C7"),
                (None, retinal_thermal_limit(90.0, "C6", "C7")),
            ),
        ),
    ),
)


# ==============================================================================
# Table A.5: skin
# ==============================================================================

MPE_SKIN = LimitTable(
    name="Table A.5 (skin)",
    regions=(
        region(180.0, 302.5, _UV_C_ROWS),
        region(302.5, 315.0, _UV_B_ROWS),
        region(315.0, 400.0, _UV_A_ROWS),
        region(
            400.0,
            1400.0,
            time_rows(
                (1e-9, constant(2e11, _WM2, "C4")),
                (1e-7, constant(200.0, _JM2, "C4", mechanism=THERMAL)),
                (10.0, power_law(1.1e4, 0.25, _JM2, "C4", mechanism=THERMAL)),
                (None, constant(2000.0, _WM2, "C4", mechanism=THERMAL)),
            ),
        ),
        *_IR_REGIONS,
    ),
)
