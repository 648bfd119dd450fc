"""Pulse parameter validation."""

from __future__ import annotations

import logging
import math

from lasersafety.domain.value_objects import PulseParameters

from .constants import HIGH_DUTY_CYCLE
from .models import PulseValidation

logger = logging.getLogger(__name__)


def validate_pulse_parameters(pulse_width_s: float, repetition_rate_hz: float) -> PulseValidation:
    """Check that a pulse train can exist.

    A pulse must be positive and fit inside its period. Duty cycles above
    50 % are allowed but flagged as near-CW.

    Args:
        pulse_width_s: Duration of one pulse in seconds.
        repetition_rate_hz: Pulse repetition frequency in hertz.

    Returns:
        PulseValidation with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not (math.isfinite(pulse_width_s) and math.isfinite(repetition_rate_hz)):
        return PulseValidation(is_valid=False, errors=("Pulse parameters must be finite",))
    if pulse_width_s <= 0:
        errors.append("Pulse width must be positive")
    if repetition_rate_hz <= 0:
        errors.append("Repetition rate must be positive")
    if errors:
        return PulseValidation(is_valid=False, errors=tuple(errors))

    pulse = PulseParameters(pulse_width_s, repetition_rate_hz)
    if pulse.pulse_width_s > pulse.period_s:
        errors.append(
            f"Pulse width {pulse_width_s:.3g} s exceeds the pulse period {pulse.period_s:.3g} s"
        )
    elif pulse.duty_cycle > HIGH_DUTY_CYCLE:
        warnings.append(
            f"Duty cycle {pulse.duty_cycle:.0%} is above {HIGH_DUTY_CYCLE:.0%}; "
            "the emission is close to continuous"
        )
        logger.warning(f"High duty cycle {pulse.duty_cycle:.2f} for pulse train")

    return PulseValidation(
        is_valid=not errors,
        errors=tuple(errors),
        warnings=tuple(warnings),
        duty_cycle=pulse.duty_cycle,
    )
