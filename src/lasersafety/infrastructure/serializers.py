"""Conversion of engine results to plain dictionaries.

The dictionaries are JSON-safe: infinite distances are reported as
``null`` with ``is_infinite`` set, and enums become their values. Both
the JSON exporter and the REST API build their output from these.
"""

from __future__ import annotations

import math
from typing import Any

from lasersafety.application.dtos import ScenarioInput, ScenarioReport
from lasersafety.domain.services.laser import (
    CorrectionFactorSet,
    CriticalLimitResult,
    ExposureLimit,
    EyewearRequirement,
    LaserClassification,
    MultiWavelengthClassification,
    NOHDAssessment,
    NOHDResult,
    PulseTrainFactor,
    PulseValidation,
)
from lasersafety.domain.value_objects import PhysicalQuantity


def _finite(value: float | None) -> float | None:
    if value is None or not math.isfinite(value):
        return None
    return value


def quantity_to_dict(quantity: PhysicalQuantity) -> dict[str, Any]:
    return {"value": quantity.value, "unit": quantity.unit.value}


def factors_to_dict(factors: CorrectionFactorSet) -> dict[str, float]:
    return {
        "c1": factors.c1,
        "c2": factors.c2,
        "c3": factors.c3,
        "c4": factors.c4,
        "c5": factors.c5,
        "c6": factors.c6,
        "c7": factors.c7,
        "t1": factors.t1,
        "t2": factors.t2,
        "angular_subtense_max_mrad": factors.angular_subtense_max_mrad,
    }


def limit_to_dict(limit: ExposureLimit, include_trace: bool = False) -> dict[str, Any]:
    """Serialize an MPE or AEL."""
    data: dict[str, Any] = {
        "status": limit.status.value,
        "kind": limit.kind,
        "quantity": quantity_to_dict(limit.quantity),
        "target": limit.target.value,
        "emission_class": limit.emission_class.value if limit.emission_class else None,
        "limiting_mechanism": limit.limiting_mechanism,
        "formula": limit.formula,
        "factors": factors_to_dict(limit.factors) if limit.factors else None,
    }
    if include_trace:
        data["trace"] = list(limit.trace)
    return data


def pulse_train_to_dict(factor: PulseTrainFactor, include_trace: bool = False) -> dict[str, Any]:
    data: dict[str, Any] = {
        "status": factor.status.value,
        "c5": factor.c5,
        "number_of_pulses": factor.number_of_pulses,
        "time_base_s": factor.time_base_s,
        "grouping": factor.grouping.value,
        "pulses_per_window": factor.pulses_per_window,
    }
    if include_trace:
        data["trace"] = list(factor.trace)
    return data


def validation_to_dict(validation: PulseValidation) -> dict[str, Any]:
    return {
        "is_valid": validation.is_valid,
        "errors": list(validation.errors),
        "warnings": list(validation.warnings),
        "duty_cycle": validation.duty_cycle,
    }


def critical_to_dict(result: CriticalLimitResult, include_trace: bool = False) -> dict[str, Any]:
    """Serialize the three pulse rules and the one that governs."""
    data: dict[str, Any] = {
        "status": result.status.value,
        "limiting_rule": result.limiting_rule.value if result.limiting_rule else None,
        "single_pulse": limit_to_dict(result.single_pulse),
        "average_power": limit_to_dict(result.average_power),
        "thermal_train": limit_to_dict(result.thermal_train),
        "critical": limit_to_dict(result.critical),
        "pulse_train": pulse_train_to_dict(result.pulse_train) if result.pulse_train else None,
        "validation": validation_to_dict(result.validation) if result.validation else None,
    }
    if include_trace:
        data["trace"] = list(result.trace)
    return data


def nohd_result_to_dict(result: NOHDResult, include_trace: bool = False) -> dict[str, Any]:
    data: dict[str, Any] = {
        "status": result.status.value,
        "distance_m": _finite(result.distance_m),
        "is_infinite": result.is_infinite,
        "beam_diameter_at_distance_m": _finite(result.beam_diameter_at_distance_m),
        "irradiance_at_distance_w_m2": _finite(result.irradiance_at_distance_w_m2),
        "mpe_w_m2": _finite(result.mpe_w_m2),
        "hazard_level": result.hazard_level.value,
    }
    if include_trace:
        data["trace"] = list(result.trace)
    return data


def nohd_to_dict(assessment: NOHDAssessment, include_trace: bool = False) -> dict[str, Any]:
    """Serialize eye and skin hazard distances."""
    return {
        "status": assessment.status.value,
        "governing": assessment.governing,
        "distance_m": _finite(assessment.distance_m),
        "is_infinite": assessment.distance_m is not None and math.isinf(assessment.distance_m),
        "eye": nohd_result_to_dict(assessment.eye, include_trace),
        "skin": nohd_result_to_dict(assessment.skin, include_trace),
    }


def classification_to_dict(
    result: LaserClassification, include_trace: bool = False
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "status": result.status.value,
        "laser_class": result.laser_class.value if result.laser_class else None,
        "emission": quantity_to_dict(result.emission),
        "ael": limit_to_dict(result.ael) if result.ael else None,
        "ratio": result.ratio,
        "time_base_s": result.time_base_s,
        "description": result.description,
        "requirements": list(result.requirements),
    }
    if include_trace:
        data["trace"] = list(result.trace)
    return data


def multiwavelength_to_dict(
    result: MultiWavelengthClassification, include_trace: bool = False
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "status": result.status.value,
        "laser_class": result.laser_class.value if result.laser_class else None,
        "method": result.method.value,
        "additive_group": result.additive_group,
        "sum_of_ratios": result.sum_of_ratios,
        "line_ratios": list(result.line_ratios),
        "lines": [classification_to_dict(line, include_trace) for line in result.lines],
        "description": result.description,
        "requirements": list(result.requirements),
    }
    if include_trace:
        data["trace"] = list(result.trace)
    return data

def eyewear_to_dict(result: EyewearRequirement, include_trace: bool = False) -> dict[str, Any]:
    data: dict[str, Any] = {
        "status": result.status.value,
        "optical_density": result.optical_density,
        "minimum_od": result.minimum_od,
        "scale_label": result.scale_label,
        "test_condition": result.test_condition,
        "marking": result.marking,
        "exposure": quantity_to_dict(result.exposure),
        "mpe": quantity_to_dict(result.mpe),
        "eyewear_needed": result.eyewear_needed,
        "warnings": list(result.warnings),
    }
    if include_trace:
        data["trace"] = list(result.trace)
    return data


def scenario_to_dict(scenario: ScenarioInput) -> dict[str, Any]:
    return {
        "name": scenario.name,
        "wavelength_nm": scenario.wavelength_nm,
        "exposure_time_s": scenario.exposure_time_s,
        "angular_subtense_mrad": scenario.geometry.angular_subtense_mrad,
        "beam_diameter_m": scenario.beam_diameter_m,
        "divergence_rad": scenario.divergence_rad,
        "average_power_w": scenario.average_power_w,
        "pulse_energy_j": scenario.pulse_energy_j,
        "pulse_width_s": scenario.pulse.pulse_width_s if scenario.pulse else None,
        "repetition_rate_hz": scenario.pulse.repetition_rate_hz if scenario.pulse else None,
    }


def report_to_dict(report: ScenarioReport, include_trace: bool = False) -> dict[str, Any]:
    """Serialize a scenario report; analyses that did not run are null."""

    def optional(value, serializer):
        return serializer(value, include_trace) if value is not None else None

    return {
        "scenario": scenario_to_dict(report.scenario),
        "exposure_limit": optional(report.exposure_limit, limit_to_dict),
        "critical_limit": optional(report.critical_limit, critical_to_dict),
        "nohd": optional(report.nohd, nohd_to_dict),
        "classification": optional(report.classification, classification_to_dict),
        "eyewear": optional(report.eyewear, eyewear_to_dict),
        "errors": list(report.errors),
    }
