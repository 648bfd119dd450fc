"""Correction factors C1-C7, T1, T2 and the angular subtense ceiling.

Each factor is an independent predicate over wavelength and, for some,
exposure time or angular subtense. Outside its defining band a factor is
1.0 so it can always be multiplied in. C5 is carried as 1.0 here; the
pulse-train value comes from ``pulse_train.evaluate_pulse_train_factor``.

Boundary inclusivity per factor (nm unless stated):

    C1   [180, 400]           5.6e3 * t^0.25
    T1   [180, 400]           1e-15 * 10^(0.8 * (lambda - 295)) s
    C2   [302.5, 315]         10^(0.2 * (lambda - 295))
    C3   [450, 600]           10^(0.02 * (lambda - 450))
    C4   [700, 1050)          10^(0.002 * (lambda - 700))
         [1050, 1400]         5
    C6   [400, 1400]          alpha / 1.5 for 1.5 <= alpha <= alpha_max
    C7   [1150, 1200]         10^(0.018 * (lambda - 1150))
         (1200, 1400]         8 + 10^(0.04 * (lambda - 1250))
    T2   [400, 1400]          10 s, 10 * 10^((alpha - 1.5) / 98.5) s, 100 s
    alpha_max                 5 mrad (t < 625 us), 200 * sqrt(t), 100 mrad (t > 0.25 s)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import lru_cache

from lasersafety.domain.value_objects import EXTENDED_SOURCE_THRESHOLD_MRAD

from .bands import Band

logger = logging.getLogger(__name__)

_C1_BAND = Band(180.0, 400.0, upper_inclusive=True)
_C2_BAND = Band(302.5, 315.0, upper_inclusive=True)
_C3_BAND = Band(450.0, 600.0, upper_inclusive=True)
_C4_RISING_BAND = Band(700.0, 1050.0)
_C4_FLAT_BAND = Band(1050.0, 1400.0, upper_inclusive=True)
_RETINAL_BAND = Band(400.0, 1400.0, upper_inclusive=True)
_C7_RISING_BAND = Band(1150.0, 1200.0, upper_inclusive=True)
_C7_STEEP_BAND = Band(1200.0, 1400.0, lower_inclusive=False, upper_inclusive=True)

C4_FLAT_VALUE: float = 5.0

# Angular subtense ceiling bands
ALPHA_MAX_SHORT_S: float = 625e-6
ALPHA_MAX_LONG_S: float = 0.25
ALPHA_MAX_SHORT_MRAD: float = 5.0
ALPHA_MAX_LONG_MRAD: float = 100.0

# T2 bands
T2_MIN_S: float = 10.0
T2_MAX_S: float = 100.0
T2_ALPHA_CEILING_MRAD: float = 100.0


@dataclass(frozen=True)
class CorrectionFactorSet:
    """All correction factors for one (wavelength, time, angle) triple.

    Attributes:
        wavelength_nm: Wavelength the set was computed for.
        exposure_time_s: Exposure time the set was computed for.
        angular_subtense_mrad: Apparent source size the set was computed for.
        c1 .. c7: Dimensionless correction factors (C5 fixed at 1.0).
        t1: UV-B transition time in seconds.
        t2: Retinal thermal confinement time for extended sources in seconds.
        angular_subtense_max_mrad: Ceiling on the angle used in C6.
    """

    wavelength_nm: float
    exposure_time_s: float
    angular_subtense_mrad: float
    c1: float = 1.0
    c2: float = 1.0
    c3: float = 1.0
    c4: float = 1.0
    c5: float = 1.0
    c6: float = 1.0
    c7: float = 1.0
    t1: float = 1.0
    t2: float = 1.0
    angular_subtense_max_mrad: float = ALPHA_MAX_SHORT_MRAD

    def __post_init__(self) -> None:
        for name in ("c1", "c2", "c3", "c4", "c5", "c6", "c7", "t1", "t2"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")

    @property
    def trace(self) -> tuple[str, ...]:
        """One line per factor, for derivation logs."""
        return (
            f"C1 = {self.c1:.4g}, C2 = {self.c2:.4g}, C3 = {self.c3:.4g}, "
            f"C4 = {self.c4:.4g}, C6 = {self.c6:.4g}, C7 = {self.c7:.4g}",
            f"T1 = {self.t1:.4g} s, T2 = {self.t2:.4g} s, "
            f"alpha_max = {self.angular_subtense_max_mrad:.4g} mrad",
        )


def angular_subtense_max(exposure_time_s: float) -> float:
    """Largest angle (mrad) over which C6 keeps growing."""
    if exposure_time_s < ALPHA_MAX_SHORT_S:
        return ALPHA_MAX_SHORT_MRAD
    if exposure_time_s > ALPHA_MAX_LONG_S:
        return ALPHA_MAX_LONG_MRAD
    return 200.0 * math.sqrt(exposure_time_s)


def _c1(wavelength_nm: float, exposure_time_s: float) -> float:
    if _C1_BAND.contains(wavelength_nm):
        return 5.6e3 * exposure_time_s**0.25
    return 1.0


def _t1(wavelength_nm: float) -> float:
    if _C1_BAND.contains(wavelength_nm):
        return 1e-15 * 10 ** (0.8 * (wavelength_nm - 295.0))
    return 1.0


def _c2(wavelength_nm: float) -> float:
    if _C2_BAND.contains(wavelength_nm):
        return 10 ** (0.2 * (wavelength_nm - 295.0))
    return 1.0


def _c3(wavelength_nm: float) -> float:
    if _C3_BAND.contains(wavelength_nm):
        return 10 ** (0.02 * (wavelength_nm - 450.0))
    return 1.0


def _c4(wavelength_nm: float) -> float:
    if _C4_RISING_BAND.contains(wavelength_nm):
        return 10 ** (0.002 * (wavelength_nm - 700.0))
    if _C4_FLAT_BAND.contains(wavelength_nm):
        return C4_FLAT_VALUE
    return 1.0


def _c6(wavelength_nm: float, angular_subtense_mrad: float, alpha_max: float) -> float:
    if not _RETINAL_BAND.contains(wavelength_nm):
        return 1.0
    if angular_subtense_mrad < EXTENDED_SOURCE_THRESHOLD_MRAD:
        return 1.0
    if angular_subtense_mrad > alpha_max:
        return alpha_max / EXTENDED_SOURCE_THRESHOLD_MRAD
    return angular_subtense_mrad / EXTENDED_SOURCE_THRESHOLD_MRAD


def _c7(wavelength_nm: float) -> float:
    if _C7_RISING_BAND.contains(wavelength_nm):
        return 10 ** (0.018 * (wavelength_nm - 1150.0))
    if _C7_STEEP_BAND.contains(wavelength_nm):
        return 8.0 + 10 ** (0.04 * (wavelength_nm - 1250.0))
    return 1.0


def _t2(wavelength_nm: float, angular_subtense_mrad: float) -> float:
    if not _RETINAL_BAND.contains(wavelength_nm):
        return 1.0
    if angular_subtense_mrad <= EXTENDED_SOURCE_THRESHOLD_MRAD:
        return T2_MIN_S
    if angular_subtense_mrad <= T2_ALPHA_CEILING_MRAD:
        exponent = (angular_subtense_mrad - EXTENDED_SOURCE_THRESHOLD_MRAD) / 98.5
        return T2_MIN_S * 10**exponent
    return T2_MAX_S


@lru_cache(maxsize=4096)
def compute_correction_factors(
    wavelength_nm: float,
    exposure_time_s: float,
    angular_subtense_mrad: float = EXTENDED_SOURCE_THRESHOLD_MRAD,
) -> CorrectionFactorSet:
    """Compute every correction factor for a wavelength, time and angle.

    The mapping is pure, so results are memoized on the exact input tuple.

    Args:
        wavelength_nm: Wavelength in nm.
        exposure_time_s: Exposure duration in seconds.
        angular_subtense_mrad: Apparent source size in mrad.

    Returns:
        CorrectionFactorSet with factors outside their band set to 1.0.
    """
    alpha_max = angular_subtense_max(exposure_time_s)
    factors = CorrectionFactorSet(
        wavelength_nm=wavelength_nm,
        exposure_time_s=exposure_time_s,
        angular_subtense_mrad=angular_subtense_mrad,
        c1=_c1(wavelength_nm, exposure_time_s),
        c2=_c2(wavelength_nm),
        c3=_c3(wavelength_nm),
        c4=_c4(wavelength_nm),
        c6=_c6(wavelength_nm, angular_subtense_mrad, alpha_max),
        c7=_c7(wavelength_nm),
        t1=_t1(wavelength_nm),
        t2=_t2(wavelength_nm, angular_subtense_mrad),
        angular_subtense_max_mrad=alpha_max,
    )
    logger.debug(
        f"Correction factors at {wavelength_nm} nm, {exposure_time_s} s, "
        f"{angular_subtense_mrad} mrad: C4={factors.c4:.4g} C6={factors.c6:.4g} "
        f"T2={factors.t2:.4g}"
    )
    return factors
