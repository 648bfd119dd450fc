"""Laser exposure limit engine.

This package evaluates IEC 60825-1 style exposure limits for lasers:
- Correction factors C1-C7, T1, T2 and the angular subtense ceiling
- MPE tables for the eye (point and extended source) and the skin
- AEL tables for Class 1, 2, 3R and 3B
- Pulse-train correction factor C5 and the three pulse rules
- Nominal ocular hazard distance for eye and skin
- Product classification and protective eyewear selection

Every entry point is a pure function returning a frozen result that
carries a LimitStatus. Limits outside the tables come back as the N/A
sentinel instead of raising.

The LaserSafetyService facade applies configured defaults and composes
the functions for hazard distance and eyewear assessment.

Example:
    from lasersafety.domain.services.laser import LaserSafetyService

    service = LaserSafetyService()
    limit = service.evaluate_exposure_limit(532.0, 0.25)
    print(limit.formatted_message)
"""

# Re-export constants
from .constants import (
    ADDITIVE_GROUPS,
    LASER_SAFETY_DISCLAIMER,
    MAX_EXPOSURE_TIME_S,
    MAX_WAVELENGTH_NM,
    MIN_EXPOSURE_TIME_S,
    MIN_WAVELENGTH_NM,
    TI_BY_WAVELENGTH,
    UNIT_CONVERSIONS,
)

# Re-export models (dataclasses)
from .models import (
    CombinationMethod,
    CriticalLimitResult,
    ExposureLimit,
    EmissionLine,
    EyewearRequirement,
    HazardLevel,
    LaserClass,
    LaserClassification,
    LimitingRule,
    MultiWavelengthClassification,
    NOHDAssessment,
    NOHDResult,
    PulseTrainFactor,
    PulseValidation,
)

# Re-export table machinery
from .bands import Band, LimitTable, LimitTerm, minimum_after_normalizing
from .evaluator import LIMIT_TABLES

# Re-export engine functions
from .classification import additive_group, classify_laser, classify_multiwavelength
from .correction_factors import (
    CorrectionFactorSet,
    angular_subtense_max,
    compute_correction_factors,
)
from .critical_limit import evaluate_critical_limit
from .evaluator import evaluate_exposure_limit, evaluate_most_restrictive_mpe
from .eyewear import en207_test_condition, required_eyewear
from .measurement import measurement_aperture_mm
from .nohd import as_irradiance_limit, hazard_level, solve_nohd, solve_nohd_single
from .pulse_train import evaluate_pulse_train_factor
from .time_base import (
    classification_time_base,
    spectral_region,
    thermal_confinement_time,
)
from .units import (
    aperture_area_m2,
    convert_quantity,
    irradiance_through_aperture,
    to_energy,
    to_power,
)
from .validation import validate_pulse_parameters

# Re-export config and facade
from .config import LaserSafetyConfig
from .laser_safety_facade import LaserSafetyService

__all__ = [
    # Constants
    "ADDITIVE_GROUPS",
    "LASER_SAFETY_DISCLAIMER",
    "MAX_EXPOSURE_TIME_S",
    "MAX_WAVELENGTH_NM",
    "MIN_EXPOSURE_TIME_S",
    "MIN_WAVELENGTH_NM",
    "TI_BY_WAVELENGTH",
    "UNIT_CONVERSIONS",
    # Models
    "CombinationMethod",
    "CriticalLimitResult",
    "ExposureLimit",
    "EmissionLine",
    "EyewearRequirement",
    "HazardLevel",
    "LaserClass",
    "LaserClassification",
    "LimitingRule",
    "MultiWavelengthClassification",
    "NOHDAssessment",
    "NOHDResult",
    "PulseTrainFactor",
    "PulseValidation",
    # Tables
    "Band",
    "LIMIT_TABLES",
    "LimitTable",
    "LimitTerm",
    "minimum_after_normalizing",
    # Engine
    "CorrectionFactorSet",
    "additive_group",
    "angular_subtense_max",
    "aperture_area_m2",
    "as_irradiance_limit",
    "classification_time_base",
    "classify_laser",
    "classify_multiwavelength",
    "compute_correction_factors",
    "convert_quantity",
    "en207_test_condition",
    "evaluate_critical_limit",
    "evaluate_exposure_limit",
    "evaluate_most_restrictive_mpe",
    "evaluate_pulse_train_factor",
    "hazard_level",
    "irradiance_through_aperture",
    "measurement_aperture_mm",
    "required_eyewear",
    "solve_nohd",
    "solve_nohd_single",
    "spectral_region",
    "thermal_confinement_time",
    "to_energy",
    "to_power",
    "validate_pulse_parameters",
    # Config and facade
    "LaserSafetyConfig",
    "LaserSafetyService",
]
