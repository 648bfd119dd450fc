"""Pulsed emission value objects."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class PulseGrouping(str, Enum):
    """Which C5 rule fired for a pulse train.

    Attributes:
        LONG_PULSE: Pulse width of 0.25 s or more, no correction.
        SINGLE_PULSE: One effective pulse, no correction.
        SHORT_EXPOSURE: Pulses within Ti and exposure of 0.25 s or less.
        FEW_PULSES: Pulses within Ti and at most 600 effective pulses.
        MANY_PULSES: Pulses within Ti and more than 600 effective pulses.
        SMALL_SOURCE: Pulses longer than Ti from a source of 1.5 mrad or less.
        MEDIUM_SOURCE_FEW_PULSES: Pulses longer than Ti, 1.5-100 mrad, N <= 40.
        MEDIUM_SOURCE_MANY_PULSES: Pulses longer than Ti, 1.5-100 mrad, N > 40.
        LARGE_SOURCE: Pulses longer than Ti from a source above 100 mrad.
    """

    LONG_PULSE = "long_pulse"
    SINGLE_PULSE = "single_pulse"
    SHORT_EXPOSURE = "short_exposure"
    FEW_PULSES = "few_pulses"
    MANY_PULSES = "many_pulses"
    SMALL_SOURCE = "small_source"
    MEDIUM_SOURCE_FEW_PULSES = "medium_source_few_pulses"
    MEDIUM_SOURCE_MANY_PULSES = "medium_source_many_pulses"
    LARGE_SOURCE = "large_source"


@dataclass(frozen=True)
class PulseParameters:
    """Timing of a repetitively pulsed emission.

    Attributes:
        pulse_width_s: Duration of one pulse in seconds.
        repetition_rate_hz: Pulse repetition frequency in hertz.
    """

    pulse_width_s: float
    repetition_rate_hz: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.pulse_width_s) and math.isfinite(self.repetition_rate_hz)):
            raise ValueError("pulse parameters must be finite")

    @property
    def period_s(self) -> float:
        """Time between pulse starts (infinite for a zero rate)."""
        if self.repetition_rate_hz <= 0:
            return math.inf
        return 1.0 / self.repetition_rate_hz

    @property
    def duty_cycle(self) -> float:
        """Fraction of each period the emission is on."""
        return self.pulse_width_s * self.repetition_rate_hz
