"""Value objects for the laser safety domain.

This module provides immutable data types used throughout the exposure
limit engine. All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Quantities and units
from ._quantities import (
    PhysicalQuantity,
    Unit,
    UnitMismatchError,
)

# Exposure scenario
from ._exposure import (
    EXTENDED_SOURCE_THRESHOLD_MRAD,
    RETINAL_HAZARD_MAX_NM,
    RETINAL_HAZARD_MIN_NM,
    EmissionClass,
    HazardTarget,
    LimitStatus,
    SourceGeometry,
    SpectralRegion,
)

# Pulsed emission
from ._pulses import (
    PulseGrouping,
    PulseParameters,
)

__all__ = [
    # Quantities
    "PhysicalQuantity",
    "Unit",
    "UnitMismatchError",
    # Exposure scenario
    "EXTENDED_SOURCE_THRESHOLD_MRAD",
    "RETINAL_HAZARD_MAX_NM",
    "RETINAL_HAZARD_MIN_NM",
    "EmissionClass",
    "HazardTarget",
    "LimitStatus",
    "SourceGeometry",
    "SpectralRegion",
    # Pulses
    "PulseGrouping",
    "PulseParameters",
]
