"""Exposure limit commands: mpe, ael, pulse-train and critical.

Each command prints a one-line summary, the derivation trace with
``--trace`` or the full result as JSON with ``--json``. Limits outside
the tables print as N/A and still exit 0.
"""

from typing import Annotated

import typer

from lasersafety.domain.services.laser import LaserSafetyService, LimitingRule
from lasersafety.domain.value_objects import EmissionClass, HazardTarget
from lasersafety.infrastructure import critical_to_dict, limit_to_dict, pulse_train_to_dict

from .output import echo_result

WavelengthOption = Annotated[
    float, typer.Option("--wavelength", "-w", help="Wavelength in nm")
]
ExposureTimeOption = Annotated[
    float, typer.Option("--time", "-t", help="Exposure duration in s")
]
SubtenseOption = Annotated[
    float | None,
    typer.Option("--subtense", "-a", help="Apparent source size in mrad (default 1.5)"),
]
TargetOption = Annotated[
    HazardTarget | None,
    typer.Option("--target", help="Tissue; eye target from the source size if omitted"),
]
PulseWidthOption = Annotated[
    float, typer.Option("--pulse-width", help="Duration of one pulse in s")
]
RepRateOption = Annotated[
    float, typer.Option("--rep-rate", help="Pulse repetition rate in Hz")
]
TraceOption = Annotated[bool, typer.Option("--trace", help="Print the derivation trace")]
JsonOption = Annotated[bool, typer.Option("--json", help="Print the result as JSON")]


def mpe_command(
    wavelength: WavelengthOption,
    exposure_time: ExposureTimeOption = 0.25,
    subtense: SubtenseOption = None,
    target: TargetOption = None,
    trace: TraceOption = False,
    as_json: JsonOption = False,
) -> None:
    """Maximum permissible exposure for the eye or skin.

    Example:
        laser-safety mpe -w 532 -t 0.25
    """
    service = LaserSafetyService()
    limit = service.evaluate_exposure_limit(
        wavelength, exposure_time, service.geometry(subtense), target
    )
    echo_result(
        limit.formatted_message,
        limit_to_dict(limit, include_trace=trace),
        as_json,
        limit.trace,
        trace,
    )


def ael_command(
    wavelength: WavelengthOption,
    emission_class: Annotated[
        EmissionClass, typer.Option("--class", "-c", help="Laser class: 1, 2, 3R or 3B")
    ],
    exposure_time: ExposureTimeOption = 0.25,
    subtense: SubtenseOption = None,
    trace: TraceOption = False,
    as_json: JsonOption = False,
) -> None:
    """Accessible emission limit of a laser class.

    Example:
        laser-safety ael -w 632.8 -c 2 -t 0.25
    """
    service = LaserSafetyService()
    limit = service.evaluate_exposure_limit(
        wavelength, exposure_time, service.geometry(subtense), emission_class=emission_class
    )
    echo_result(
        limit.formatted_message,
        limit_to_dict(limit, include_trace=trace),
        as_json,
        limit.trace,
        trace,
    )


def pulse_train_command(
    wavelength: WavelengthOption,
    pulse_width: PulseWidthOption,
    rep_rate: RepRateOption,
    exposure_time: ExposureTimeOption = 0.25,
    subtense: SubtenseOption = None,
    trace: TraceOption = False,
    as_json: JsonOption = False,
) -> None:
    """Pulse-train correction factor C5.

    Example:
        laser-safety pulse-train -w 1064 --pulse-width 1e-8 --rep-rate 1000
    """
    service = LaserSafetyService()
    factor = service.evaluate_pulse_train_factor(
        wavelength, pulse_width, rep_rate, exposure_time, subtense
    )
    echo_result(
        factor.formatted_message,
        pulse_train_to_dict(factor, include_trace=trace),
        as_json,
        factor.trace,
        trace,
    )


def critical_command(
    wavelength: WavelengthOption,
    pulse_width: PulseWidthOption,
    rep_rate: RepRateOption,
    exposure_time: ExposureTimeOption = 0.25,
    subtense: SubtenseOption = None,
    emission_class: Annotated[
        EmissionClass | None,
        typer.Option("--class", "-c", help="Evaluate this class AEL instead of the MPE"),
    ] = None,
    target: TargetOption = None,
    trace: TraceOption = False,
    as_json: JsonOption = False,
) -> None:
    """Most restrictive per-pulse limit of a pulse train (Rules 1-3).

    Example:
        laser-safety critical -w 1064 -t 10 --pulse-width 1e-8 --rep-rate 1000
    """
    service = LaserSafetyService()
    result = service.evaluate_critical_limit(
        wavelength,
        exposure_time,
        pulse_width,
        rep_rate,
        service.geometry(subtense),
        emission_class,
        target,
    )
    echo_result(
        result.formatted_message,
        critical_to_dict(result, include_trace=trace),
        as_json,
        result.trace,
        trace,
    )
    if not as_json and result.is_defined:
        rules = zip(LimitingRule, (result.single_pulse, result.average_power, result.thermal_train))
        for rule, rule_limit in rules:
            typer.echo(f"  {rule.label}: {rule_limit.quantity.formatted}")
