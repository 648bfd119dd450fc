"""Exposure scenario value objects."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

# Apparent source size above which a source is treated as extended (mrad)
EXTENDED_SOURCE_THRESHOLD_MRAD: float = 1.5

# Retinal hazard region where extended-source formulas apply (nm, [min, max))
RETINAL_HAZARD_MIN_NM: float = 400.0
RETINAL_HAZARD_MAX_NM: float = 1400.0


class HazardTarget(str, Enum):
    """Tissue and viewing condition an exposure limit protects.

    Attributes:
        POINT_SOURCE_EYE: Eye, apparent source at or below 1.5 mrad.
        EXTENDED_SOURCE_EYE: Eye, apparent source above 1.5 mrad (400-1400 nm).
        SKIN: Skin exposure.
    """

    POINT_SOURCE_EYE = "point_source_eye"
    EXTENDED_SOURCE_EYE = "extended_source_eye"
    SKIN = "skin"

    @property
    def is_eye(self) -> bool:
        return self != HazardTarget.SKIN


class EmissionClass(str, Enum):
    """Laser product classes with a tabulated accessible emission limit."""

    CLASS_1 = "1"
    CLASS_2 = "2"
    CLASS_3R = "3R"
    CLASS_3B = "3B"

    @property
    def label(self) -> str:
        return f"Class {self.value}"


class LimitStatus(str, Enum):
    """Outcome tag carried by every engine result.

    Attributes:
        DEFINED: A numeric limit or distance was produced.
        NOT_APPLICABLE: No standard-defined limit for this combination.
        RANGE_VIOLATION: Inputs outside the physical domain, rejected up front.
        INVALID_GEOMETRY: Beam parameters and MPE cannot be reconciled.
    """

    DEFINED = "defined"
    NOT_APPLICABLE = "not_applicable"
    RANGE_VIOLATION = "range_violation"
    INVALID_GEOMETRY = "invalid_geometry"


class SpectralRegion(str, Enum):
    """Coarse optical region of a wavelength."""

    UV = "UV"
    VISIBLE = "Visible"
    NEAR_IR = "Near-IR"
    IR_B_C = "IR-B/C"
    FAR_IR = "Far-IR"


@dataclass(frozen=True)
class SourceGeometry:
    """Apparent angular size of the source as seen by the eye.

    Attributes:
        angular_subtense_mrad: Full angle subtended by the source in mrad.
    """

    angular_subtense_mrad: float = EXTENDED_SOURCE_THRESHOLD_MRAD

    def __post_init__(self) -> None:
        if not math.isfinite(self.angular_subtense_mrad):
            raise ValueError("angular_subtense_mrad must be finite")
        if self.angular_subtense_mrad < 0:
            raise ValueError("angular_subtense_mrad must be non-negative")

    @property
    def is_extended_source(self) -> bool:
        """Check if the source subtends more than 1.5 mrad."""
        return self.angular_subtense_mrad > EXTENDED_SOURCE_THRESHOLD_MRAD

    def eye_target(self, wavelength_nm: float) -> HazardTarget:
        """Pick the eye target for this geometry at a wavelength.

        Outside 400-1400 nm a source is point-like regardless of its angle.
        """
        in_retinal_band = RETINAL_HAZARD_MIN_NM <= wavelength_nm < RETINAL_HAZARD_MAX_NM
        if self.is_extended_source and in_retinal_band:
            return HazardTarget.EXTENDED_SOURCE_EYE
        return HazardTarget.POINT_SOURCE_EYE
