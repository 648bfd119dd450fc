"""Limiting aperture for classification measurements.

Condition 3 (unaided viewing at 100 mm) collects emission through a
wavelength- and time-dependent aperture. Per-area AELs are compared with
the emission spread over this aperture.
"""

from __future__ import annotations

from .bands import Band

# 1400 nm - 0.1 mm: the aperture grows with exposure time
_SHORT_EXPOSURE_S: float = 0.35
_LONG_EXPOSURE_S: float = 10.0

_UV_BAND = Band(0.0, 400.0)
_RETINAL_BAND = Band(400.0, 1400.0)
_IR_BAND = Band(1400.0, 1e5)


def measurement_aperture_mm(wavelength_nm: float, exposure_time_s: float) -> float:
    """Condition 3 aperture diameter in mm.

    1 mm below 400 nm, 7 mm for 400-1400 nm, 1 to 3.5 mm from 1400 nm to 0.1 mm
    depending on exposure time, 11 mm beyond.
    """
    if _UV_BAND.contains(wavelength_nm):
        return 1.0
    if _RETINAL_BAND.contains(wavelength_nm):
        return 7.0
    if _IR_BAND.contains(wavelength_nm):
        if exposure_time_s <= _SHORT_EXPOSURE_S:
            return 1.0
        if exposure_time_s < _LONG_EXPOSURE_S:
            return 1.5 * exposure_time_s ** (3.0 / 8.0)
        return 3.5
    return 11.0
