"""Wavelength-dependent time bases.

Ti is the thermal confinement time that decides whether successive
pulses are counted individually or grouped when deriving C5. The
classification time base is the emission duration a product class is
assessed over.
"""

from __future__ import annotations

from lasersafety.domain.value_objects import EmissionClass, SpectralRegion

from .bands import Band
from .constants import (
    AVERSION_RESPONSE_TIME_BASE_S,
    DEFAULT_TI_S,
    GENERAL_TIME_BASE_S,
    INTENTIONAL_VIEWING_TIME_BASE_S,
    TI_BY_WAVELENGTH,
    UV_TIME_BASE_S,
)

_TI_BANDS: tuple[tuple[Band, float], ...] = tuple(
    (Band(lower, upper, upper_inclusive=index == len(TI_BY_WAVELENGTH) - 1), ti)
    for index, (lower, upper, ti) in enumerate(TI_BY_WAVELENGTH)
)

_SPECTRAL_REGIONS: tuple[tuple[Band, SpectralRegion], ...] = (
    (Band(180.0, 400.0), SpectralRegion.UV),
    (Band(400.0, 700.0), SpectralRegion.VISIBLE),
    (Band(700.0, 1400.0), SpectralRegion.NEAR_IR),
    (Band(1400.0, 10600.0), SpectralRegion.IR_B_C),
)

# Classes whose visible-band test relies on the aversion response
_AVERSION_CLASSES = frozenset({EmissionClass.CLASS_2, EmissionClass.CLASS_3R})


def thermal_confinement_time(wavelength_nm: float) -> float:
    """Return Ti in seconds for a wavelength in nm."""
    for band, ti in _TI_BANDS:
        if band.contains(wavelength_nm):
            return ti
    return DEFAULT_TI_S


def spectral_region(wavelength_nm: float) -> SpectralRegion:
    """Name the optical region a wavelength falls in."""
    for band, name in _SPECTRAL_REGIONS:
        if band.contains(wavelength_nm):
            return name
    return SpectralRegion.FAR_IR


def classification_time_base(
    wavelength_nm: float,
    emission_class: EmissionClass | None = None,
    intentional_viewing: bool = False,
) -> float:
    """Time base used to assess emission against a class AEL.

    Args:
        wavelength_nm: Emission wavelength.
        emission_class: Class under test. Class 2 and 3R use the 0.25 s
            aversion response in the visible band.
        intentional_viewing: Product is designed for long-term viewing.

    Returns:
        Time base in seconds.
    """
    if wavelength_nm <= 400.0:
        return UV_TIME_BASE_S
    if intentional_viewing:
        return INTENTIONAL_VIEWING_TIME_BASE_S
    if emission_class in _AVERSION_CLASSES and wavelength_nm <= 700.0:
        return AVERSION_RESPONSE_TIME_BASE_S
    return GENERAL_TIME_BASE_S
