"""Pulse-train correction factor C5.

Repetitive pulses heat the retina cumulatively, so a single-pulse limit
must be derated when many pulses reach the eye within the exposure. The
derating depends on whether each pulse is shorter than the thermal
confinement time Ti and, for longer pulses, on the apparent source size.
"""

from __future__ import annotations

import logging
import math

from lasersafety.domain.value_objects import (
    EXTENDED_SOURCE_THRESHOLD_MRAD,
    LimitStatus,
    PulseGrouping,
)

from .constants import (
    C5_FEW_PULSES_LIMIT,
    C5_LARGE_SOURCE_MRAD,
    C5_LONG_PULSE_S,
    C5_MEDIUM_SOURCE_FEW_PULSES_LIMIT,
    C5_MINIMUM,
    C5_SMALL_SOURCE_MRAD,
    C5_SHORT_EXPOSURE_S,
)
from .models import PulseTrainFactor
from .time_base import thermal_confinement_time

logger = logging.getLogger(__name__)


def effective_pulse_count(
    exposure_time_s: float, repetition_rate_hz: float, ti_s: float
) -> tuple[int, int]:
    """Count pulses in the exposure, grouping those that share a Ti window.

    Returns:
        Tuple of (effective count, pulses per Ti window).
    """
    count = math.floor(exposure_time_s * repetition_rate_hz)
    pulses_per_ti = math.floor(ti_s * repetition_rate_hz)
    if pulses_per_ti > 1:
        count = math.ceil(count / pulses_per_ti)
    return count, pulses_per_ti


def _clamp(c5: float) -> float:
    return min(1.0, max(C5_MINIMUM, c5))


def evaluate_pulse_train_factor(
    wavelength_nm: float,
    pulse_width_s: float,
    repetition_rate_hz: float,
    exposure_time_s: float,
    angular_subtense_mrad: float = EXTENDED_SOURCE_THRESHOLD_MRAD,
) -> PulseTrainFactor:
    """Compute C5 and the pulse grouping for a repetitively pulsed source.

    Args:
        wavelength_nm: Wavelength in nm.
        pulse_width_s: Duration of one pulse in seconds.
        repetition_rate_hz: Pulse repetition frequency in hertz.
        exposure_time_s: Exposure duration in seconds.
        angular_subtense_mrad: Apparent source size in mrad.

    Returns:
        PulseTrainFactor with C5 clamped to [0.4, 1.0]. Non-positive or
        non-finite inputs give C5 = 1 with status RANGE_VIOLATION.
    """
    ti = thermal_confinement_time(wavelength_nm)
    trace: list[str] = [
        f"Ti at {wavelength_nm:g} nm = {ti:.3g} s",
    ]

    inputs = (pulse_width_s, repetition_rate_hz, exposure_time_s)
    if not all(math.isfinite(value) and value > 0 for value in inputs):
        trace.append("Pulse width, repetition rate and exposure time must be positive")
        return PulseTrainFactor(
            c5=1.0,
            number_of_pulses=0,
            time_base_s=ti,
            grouping=PulseGrouping.SINGLE_PULSE,
            status=LimitStatus.RANGE_VIOLATION,
            trace=tuple(trace),
        )

    n, pulses_per_ti = effective_pulse_count(exposure_time_s, repetition_rate_hz, ti)
    if pulses_per_ti > 1:
        trace.append(f"{pulses_per_ti} pulses per Ti window count as one pulse")
    trace.append(f"Effective number of pulses N = {n}")

    if pulse_width_s >= C5_LONG_PULSE_S:
        c5, grouping = 1.0, PulseGrouping.LONG_PULSE
        trace.append(f"Pulse width >= {C5_LONG_PULSE_S:g} s: C5 = 1")
    elif n <= 1:
        c5, grouping = 1.0, PulseGrouping.SINGLE_PULSE
        trace.append("Single effective pulse: C5 = 1")
    elif pulse_width_s <= ti:
        trace.append(f"Pulse width {pulse_width_s:.3g} s <= Ti")
        if exposure_time_s <= C5_SHORT_EXPOSURE_S:
            c5, grouping = 1.0, PulseGrouping.SHORT_EXPOSURE
            trace.append(f"Exposure <= {C5_SHORT_EXPOSURE_S:g} s: C5 = 1")
        elif n <= C5_FEW_PULSES_LIMIT:
            c5, grouping = 1.0, PulseGrouping.FEW_PULSES
            trace.append(f"N <= {C5_FEW_PULSES_LIMIT}: C5 = 1")
        else:
            raw = 5.0 * n**-0.25
            c5, grouping = _clamp(raw), PulseGrouping.MANY_PULSES
            trace.append(f"N > {C5_FEW_PULSES_LIMIT}: C5 = max(0.4, 5*N^-0.25 = {raw:.4f})")
    else:
        trace.append(f"Pulse width {pulse_width_s:.3g} s > Ti")
        if angular_subtense_mrad <= C5_SMALL_SOURCE_MRAD:
            c5, grouping = 1.0, PulseGrouping.SMALL_SOURCE
            trace.append(f"alpha <= {C5_SMALL_SOURCE_MRAD:g} mrad: C5 = 1")
        elif angular_subtense_mrad <= C5_LARGE_SOURCE_MRAD:
            if n <= C5_MEDIUM_SOURCE_FEW_PULSES_LIMIT:
                raw = n**-0.25
                c5, grouping = _clamp(raw), PulseGrouping.MEDIUM_SOURCE_FEW_PULSES
                trace.append(
                    f"alpha <= {C5_LARGE_SOURCE_MRAD:g} mrad, "
                    f"N <= {C5_MEDIUM_SOURCE_FEW_PULSES_LIMIT}: C5 = N^-0.25 = {raw:.4f}"
                )
            else:
                c5, grouping = C5_MINIMUM, PulseGrouping.MEDIUM_SOURCE_MANY_PULSES
                trace.append(
                    f"alpha <= {C5_LARGE_SOURCE_MRAD:g} mrad, "
                    f"N > {C5_MEDIUM_SOURCE_FEW_PULSES_LIMIT}: C5 = {C5_MINIMUM}"
                )
        else:
            c5, grouping = 1.0, PulseGrouping.LARGE_SOURCE
            trace.append(f"alpha > {C5_LARGE_SOURCE_MRAD:g} mrad: C5 = 1")

    trace.append(f"C5 = {c5:.4f} ({grouping.value})")
    logger.debug(f"C5 at {wavelength_nm} nm, N={n}: {c5:.4f} ({grouping.value})")
    return PulseTrainFactor(
        c5=c5,
        number_of_pulses=n,
        time_base_s=ti,
        grouping=grouping,
        pulses_per_window=max(1, pulses_per_ti),
        trace=tuple(trace),
    )
