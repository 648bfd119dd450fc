"""Laser safety configuration.

This module contains the LaserSafetyConfig dataclass holding the defaults
the service facade applies when a caller leaves a value out.
"""

from __future__ import annotations

from dataclasses import dataclass

from lasersafety.domain.value_objects import EXTENDED_SOURCE_THRESHOLD_MRAD

from .constants import EN207_MAX_SCALE_NUMBER, HIGH_OPTICAL_DENSITY_WARNING


@dataclass(frozen=True)
class LaserSafetyConfig:
    """Configuration for exposure limit analysis.

    Attributes:
        default_angular_subtense_mrad: Source size assumed when none is given.
        od_warning_threshold: Optical density above which eyewear results
            carry a visibility warning.
        max_scale_number: Highest EN 207 scale number; larger requirements
            are reported as "LB<max>+".
    """

    default_angular_subtense_mrad: float = EXTENDED_SOURCE_THRESHOLD_MRAD
    od_warning_threshold: float = HIGH_OPTICAL_DENSITY_WARNING
    max_scale_number: int = EN207_MAX_SCALE_NUMBER

    def __post_init__(self) -> None:
        if self.default_angular_subtense_mrad < 0:
            raise ValueError("default_angular_subtense_mrad must be non-negative")
        if self.od_warning_threshold <= 0:
            raise ValueError("od_warning_threshold must be positive")
        if self.max_scale_number < 1:
            raise ValueError("max_scale_number must be at least 1")
