"""Laser safety constants for exposure limit evaluation.

This module contains unit conversion factors, the physical domain of the
engine, the thermal confinement time table and classification time bases.
All tables are read-only.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# ==============================================================================
# Unit Conversions
# ==============================================================================

MW_TO_W: float = 1e-3
MM_TO_M: float = 1e-3
MRAD_TO_RAD: float = 1e-3
NS_TO_S: float = 1e-9
US_TO_S: float = 1e-6
MJ_TO_J: float = 1e-3
UJ_TO_J: float = 1e-6
CM2_TO_M2: float = 1e-4
M2_TO_CM2: float = 1e4
MM_TO_CM: float = 0.1
MM2_TO_M2: float = 1e-6

UNIT_CONVERSIONS: Mapping[str, float] = MappingProxyType(
    {
        "mW->W": MW_TO_W,
        "mm->m": MM_TO_M,
        "mrad->rad": MRAD_TO_RAD,
        "ns->s": NS_TO_S,
        "us->s": US_TO_S,
        "mJ->J": MJ_TO_J,
        "uJ->J": UJ_TO_J,
        "cm2->m2": CM2_TO_M2,
        "m2->cm2": M2_TO_CM2,
        "mm->cm": MM_TO_CM,
        "mm2->m2": MM2_TO_M2,
    }
)


# ==============================================================================
# Physical Domain
# ==============================================================================

# IEC 60825-1 scope: 180 nm to 1 mm
MIN_WAVELENGTH_NM: float = 180.0
MAX_WAVELENGTH_NM: float = 1e6

# Exposure durations covered by the tables (s)
MIN_EXPOSURE_TIME_S: float = 1e-13
MAX_EXPOSURE_TIME_S: float = 3e4


# ==============================================================================
# Thermal Confinement Time Ti
# ==============================================================================

# (lower nm inclusive, upper nm exclusive, Ti seconds)
TI_BY_WAVELENGTH: tuple[tuple[float, float, float], ...] = (
    (400.0, 1050.0, 5e-6),
    (1050.0, 1400.0, 13e-6),
    (1400.0, 1500.0, 1e-3),
    (1500.0, 1800.0, 10.0),
    (1800.0, 2600.0, 1e-3),
    (2600.0, MAX_WAVELENGTH_NM, 1e-7),
)

# Ti outside every tabulated band (UV)
DEFAULT_TI_S: float = 1e-3


# ==============================================================================
# Classification Time Bases
# ==============================================================================

UV_TIME_BASE_S: float = 3e4
INTENTIONAL_VIEWING_TIME_BASE_S: float = 3e4
AVERSION_RESPONSE_TIME_BASE_S: float = 0.25
GENERAL_TIME_BASE_S: float = 100.0


# ==============================================================================
# Additive Wavelength Groups
# ==============================================================================

# (name, lower nm, upper nm), both bounds inclusive; the first group holding
# every line wins
ADDITIVE_GROUPS: tuple[tuple[str, float, float], ...] = (
    ("Visible Thermal", 400.0, 700.0),
    ("Retinal Broad", 400.0, 1400.0),
    ("Lens Damage", 380.0, 1400.0),
    ("UV Photochemical", 200.0, 400.0),
)


# ==============================================================================
# Pulse Train (C5)
# ==============================================================================

C5_MINIMUM: float = 0.4
C5_LONG_PULSE_S: float = 0.25
C5_SHORT_EXPOSURE_S: float = 0.25
C5_FEW_PULSES_LIMIT: int = 600
C5_MEDIUM_SOURCE_FEW_PULSES_LIMIT: int = 40
C5_SMALL_SOURCE_MRAD: float = 1.5
C5_LARGE_SOURCE_MRAD: float = 100.0

# Duty cycle above which a pulse train is flagged as near-CW
HIGH_DUTY_CYCLE: float = 0.5


# ==============================================================================
# NOHD Hazard Levels
# ==============================================================================

LOW_HAZARD_DISTANCE_M: float = 0.1
MODERATE_HAZARD_DISTANCE_M: float = 3.0
HIGH_HAZARD_DISTANCE_M: float = 100.0


# ==============================================================================
# Protective Eyewear (EN 207)
# ==============================================================================

EN207_MAX_SCALE_NUMBER: int = 10
HIGH_OPTICAL_DENSITY_WARNING: float = 7.0


# ==============================================================================
# Disclaimers
# ==============================================================================

LASER_SAFETY_DISCLAIMER: str = (
    "Exposure limits are computed from IEC 60825-1 style tables for "
    "engineering guidance only. This is not a certified compliance tool; "
    "a qualified laser safety officer must confirm any classification, "
    "hazard distance or eyewear selection."
)
