"""Domain services for exposure limit evaluation."""

from .laser import (
    LaserSafetyConfig,
    LaserSafetyService,
    compute_correction_factors,
    evaluate_critical_limit,
    evaluate_exposure_limit,
    evaluate_pulse_train_factor,
    solve_nohd,
)

__all__ = [
    "LaserSafetyConfig",
    "LaserSafetyService",
    "compute_correction_factors",
    "evaluate_critical_limit",
    "evaluate_exposure_limit",
    "evaluate_pulse_train_factor",
    "solve_nohd",
]
