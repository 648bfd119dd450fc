"""Most restrictive limit for repetitively pulsed sources.

Three rules each give a per-pulse limit:

1. Single pulse: the limit at the pulse width, as an energy per pulse.
2. Average power: the full-exposure limit as a power, divided by the
   repetition rate.
3. Thermal accumulation: the Rule 1 limit multiplied by C5. When several
   pulses share one Ti window, the window counts as one pulse lasting Ti
   and its C5-derated limit is shared among the pulses in it.

All three are expressed in one energy unit before the minimum is taken.
On a tie the earlier rule is reported.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from lasersafety.domain.value_objects import (
    EmissionClass,
    HazardTarget,
    LimitStatus,
    PhysicalQuantity,
    SourceGeometry,
    UnitMismatchError,
)

from .evaluator import evaluate_exposure_limit
from .models import CriticalLimitResult, ExposureLimit, LimitingRule
from .pulse_train import evaluate_pulse_train_factor
from .units import to_energy, to_per_m2, to_power
from .validation import validate_pulse_parameters

logger = logging.getLogger(__name__)


def _per_pulse(limit: ExposureLimit, quantity: PhysicalQuantity, line: str) -> ExposureLimit:
    return replace(limit, quantity=quantity, trace=(*limit.trace, line))


def _undefined_result(
    status: LimitStatus,
    target: HazardTarget,
    emission_class: EmissionClass | None,
    trace: tuple[str, ...],
    **details,
) -> CriticalLimitResult:
    undefined = ExposureLimit.undefined(status, target, emission_class, trace)
    return CriticalLimitResult(
        status=status,
        single_pulse=details.get("single_pulse", undefined),
        average_power=details.get("average_power", undefined),
        thermal_train=details.get("thermal_train", undefined),
        critical=undefined,
        pulse_train=details.get("pulse_train"),
        validation=details.get("validation"),
        trace=trace,
    )


def evaluate_critical_limit(
    wavelength_nm: float,
    exposure_time_s: float,
    pulse_width_s: float,
    repetition_rate_hz: float,
    geometry: SourceGeometry,
    emission_class: EmissionClass | None = None,
    target: HazardTarget | None = None,
) -> CriticalLimitResult:
    """Evaluate the three pulse rules and pick the most restrictive.

    Args:
        wavelength_nm: Wavelength in nm.
        exposure_time_s: Total exposure (or classification) duration in s.
        pulse_width_s: Duration of one pulse in s.
        repetition_rate_hz: Pulse repetition frequency in Hz.
        geometry: Apparent source size.
        emission_class: Product class for AELs, None for MPEs.
        target: Eye target; defaults to the one implied by ``geometry``.

    Returns:
        CriticalLimitResult whose limits are energies per pulse.
    """
    target = target or geometry.eye_target(wavelength_nm)
    trace: list[str] = [
        f"Pulse rules at {wavelength_nm:g} nm: t = {exposure_time_s:g} s, "
        f"pulse width = {pulse_width_s:.3g} s, PRF = {repetition_rate_hz:g} Hz",
    ]

    validation = validate_pulse_parameters(pulse_width_s, repetition_rate_hz)
    trace.extend(f"Warning: {warning}" for warning in validation.warnings)
    if not validation.is_valid:
        trace.extend(f"Invalid pulse train: {error}" for error in validation.errors)
        logger.debug(f"Pulse train rejected: {'; '.join(validation.errors)}")
        return _undefined_result(
            LimitStatus.RANGE_VIOLATION,
            target,
            emission_class,
            tuple(trace),
            validation=validation,
        )

    single = evaluate_exposure_limit(
        wavelength_nm, pulse_width_s, geometry, target, emission_class
    )
    full = evaluate_exposure_limit(
        wavelength_nm, exposure_time_s, geometry, target, emission_class
    )
    train = evaluate_pulse_train_factor(
        wavelength_nm,
        pulse_width_s,
        repetition_rate_hz,
        exposure_time_s,
        geometry.angular_subtense_mrad,
    )
    trace.extend(train.trace)

    for name, limit in (("single pulse", single), ("full exposure", full)):
        if not limit.is_defined:
            trace.append(f"No {name} limit: {limit.status.value}")
            return _undefined_result(
                limit.status,
                target,
                emission_class,
                tuple(trace),
                pulse_train=train,
                validation=validation,
            )
    if not train.is_defined:
        trace.append(f"No pulse-train factor: {train.status.value}")
        return _undefined_result(
            train.status,
            target,
            emission_class,
            tuple(trace),
            pulse_train=train,
            validation=validation,
        )

    # Rule 1
    single_energy = to_energy(single.quantity, pulse_width_s)
    rule_1 = _per_pulse(
        single,
        single_energy,
        f"Rule 1: {single.quantity.formatted} at {pulse_width_s:.3g} s "
        f"-> {single_energy.formatted} per pulse",
    )

    # Rule 2
    full_power = to_power(full.quantity, exposure_time_s)
    average_energy = PhysicalQuantity(
        full_power.value / repetition_rate_hz, full_power.unit.energy_counterpart
    )
    rule_2 = _per_pulse(
        full,
        average_energy,
        f"Rule 2: {full_power.formatted} / {repetition_rate_hz:g} Hz "
        f"-> {average_energy.formatted} per pulse",
    )

    # Rule 3
    if train.pulses_per_window > 1:
        # Pulses within one Ti window act as a single pulse lasting Ti
        window = evaluate_exposure_limit(
            wavelength_nm, train.time_base_s, geometry, target, emission_class
        )
        if not window.is_defined:
            trace.append(f"No Ti window limit: {window.status.value}")
            return _undefined_result(
                window.status,
                target,
                emission_class,
                tuple(trace),
                pulse_train=train,
                validation=validation,
            )
        window_energy = to_energy(window.quantity, train.time_base_s)
        thermal_energy = window_energy.scaled(train.c5 / train.pulses_per_window)
        thermal_base = window
        thermal_line = (
            f"Rule 3: {window_energy.formatted} per Ti window x C5 {train.c5:.4f} "
            f"/ {train.pulses_per_window} pulses -> {thermal_energy.formatted} per pulse"
        )
    else:
        thermal_energy = single_energy.scaled(train.c5)
        thermal_base = single
        thermal_line = (
            f"Rule 3: {single_energy.formatted} x C5 {train.c5:.4f} "
            f"-> {thermal_energy.formatted} per pulse"
        )
    rule_3 = replace(
        _per_pulse(thermal_base, thermal_energy, thermal_line),
        limiting_mechanism="thermal accumulation",
    )

    candidates = (
        (LimitingRule.SINGLE_PULSE, rule_1),
        (LimitingRule.AVERAGE_POWER, rule_2),
        (LimitingRule.THERMAL_TRAIN, rule_3),
    )
    normalized = [(rule, limit, to_per_m2(limit.quantity)) for rule, limit in candidates]
    reference_unit = normalized[0][2].unit
    for _, _, quantity in normalized:
        if quantity.unit != reference_unit:
            raise UnitMismatchError(reference_unit, quantity.unit)

    winner_rule, winner, winner_quantity = normalized[0]
    for rule, limit, quantity in normalized[1:]:
        if quantity.value < winner_quantity.value:
            winner_rule, winner, winner_quantity = rule, limit, quantity

    trace.extend(limit.trace[-1] for _, limit in candidates)
    trace.append(f"Most restrictive: {winner_quantity.formatted} per pulse ({winner_rule.label})")
    logger.debug(f"Critical limit at {wavelength_nm} nm: {winner_rule.value}")

    critical = replace(
        winner,
        quantity=winner_quantity,
        limiting_mechanism=winner_rule.label,
        trace=(*winner.trace, trace[-1]),
    )
    return CriticalLimitResult(
        status=LimitStatus.DEFINED,
        single_pulse=rule_1,
        average_power=rule_2,
        thermal_train=rule_3,
        critical=critical,
        limiting_rule=winner_rule,
        pulse_train=train,
        validation=validation,
        trace=tuple(trace),
    )
