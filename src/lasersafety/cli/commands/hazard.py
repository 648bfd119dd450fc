"""Hazard commands: nohd, classify and eyewear."""

from typing import Annotated

import typer

from lasersafety.domain.services.laser import LaserSafetyService
from lasersafety.domain.services.laser.constants import MM_TO_M, MRAD_TO_RAD
from lasersafety.domain.value_objects import PhysicalQuantity, PulseParameters, Unit
from lasersafety.infrastructure import classification_to_dict, eyewear_to_dict, nohd_to_dict

from .limits import (
    ExposureTimeOption,
    JsonOption,
    SubtenseOption,
    TraceOption,
    WavelengthOption,
)
from .output import echo_result

PowerOption = Annotated[
    float | None, typer.Option("--power", "-p", help="CW or average power in W")
]
EnergyOption = Annotated[
    float | None, typer.Option("--energy", "-e", help="Energy per pulse in J")
]
OptionalPulseWidthOption = Annotated[
    float | None, typer.Option("--pulse-width", help="Duration of one pulse in s")
]
OptionalRepRateOption = Annotated[
    float | None, typer.Option("--rep-rate", help="Pulse repetition rate in Hz")
]
DiameterOption = Annotated[
    float, typer.Option("--diameter", "-d", help="Beam diameter at the aperture in mm")
]


def _emission(
    power: float | None,
    energy: float | None,
    pulse_width: float | None,
    rep_rate: float | None,
) -> tuple[PhysicalQuantity, PulseParameters | None]:
    """Emission and pulse timing from the CLI options; exits on bad combinations."""
    if (power is None) == (energy is None):
        typer.echo("Error: give exactly one of --power and --energy", err=True)
        raise typer.Exit(code=1)
    if energy is None:
        return PhysicalQuantity(power, Unit.WATT), None
    if pulse_width is None or rep_rate is None:
        typer.echo("Error: --energy requires --pulse-width and --rep-rate", err=True)
        raise typer.Exit(code=1)
    try:
        pulse = PulseParameters(pulse_width, rep_rate)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    return PhysicalQuantity(energy, Unit.JOULE), pulse


def nohd_command(
    power: Annotated[float, typer.Option("--power", "-p", help="Beam power in W")],
    diameter: DiameterOption,
    divergence: Annotated[
        float, typer.Option("--divergence", help="Full-angle divergence in mrad")
    ],
    wavelength: WavelengthOption,
    exposure_time: ExposureTimeOption = 0.25,
    subtense: SubtenseOption = None,
    trace: TraceOption = False,
    as_json: JsonOption = False,
) -> None:
    """Nominal ocular hazard distance for the eye and skin.

    Example:
        laser-safety nohd -p 0.005 -d 2 --divergence 1 -w 532
    """
    service = LaserSafetyService()
    assessment = service.assess_nohd(
        power,
        diameter * MM_TO_M,
        divergence * MRAD_TO_RAD,
        wavelength,
        exposure_time,
        service.geometry(subtense),
    )
    steps = tuple(f"eye: {line}" for line in assessment.eye.trace) + tuple(
        f"skin: {line}" for line in assessment.skin.trace
    )
    echo_result(
        assessment.formatted_message,
        nohd_to_dict(assessment, include_trace=trace),
        as_json,
        steps,
        trace,
    )


def classify_command(
    wavelength: WavelengthOption,
    power: PowerOption = None,
    energy: EnergyOption = None,
    pulse_width: OptionalPulseWidthOption = None,
    rep_rate: OptionalRepRateOption = None,
    subtense: SubtenseOption = None,
    intentional_viewing: Annotated[
        bool,
        typer.Option("--intentional-viewing", help="Product is designed for long-term viewing"),
    ] = False,
    trace: TraceOption = False,
    as_json: JsonOption = False,
) -> None:
    """Assign a laser class (1, 2, 3R, 3B or 4).

    Example:
        laser-safety classify -w 532 -p 0.005
    """
    emission, pulse = _emission(power, energy, pulse_width, rep_rate)
    service = LaserSafetyService()
    result = service.classify(
        wavelength, emission, service.geometry(subtense), pulse, intentional_viewing
    )
    echo_result(
        result.formatted_message,
        classification_to_dict(result, include_trace=trace),
        as_json,
        result.trace,
        trace,
    )
    if not as_json:
        for requirement in result.requirements:
            typer.echo(f"  - {requirement}")


def eyewear_command(
    wavelength: WavelengthOption,
    diameter: DiameterOption,
    exposure_time: ExposureTimeOption = 0.25,
    power: PowerOption = None,
    energy: EnergyOption = None,
    pulse_width: OptionalPulseWidthOption = None,
    rep_rate: OptionalRepRateOption = None,
    subtense: SubtenseOption = None,
    trace: TraceOption = False,
    as_json: JsonOption = False,
) -> None:
    """Optical density and EN 207 marking for protective eyewear.

    Example:
        laser-safety eyewear -w 1064 -d 3 -p 2
    """
    _, pulse = _emission(power, energy, pulse_width, rep_rate)
    service = LaserSafetyService()
    try:
        requirement = service.assess_eyewear(
            wavelength,
            diameter * MM_TO_M,
            exposure_time,
            power_w=power,
            pulse_energy_j=energy,
            pulse=pulse,
            geometry=service.geometry(subtense),
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    echo_result(
        requirement.formatted_message,
        eyewear_to_dict(requirement, include_trace=trace),
        as_json,
        requirement.trace,
        trace,
    )
    if not as_json:
        for warning in requirement.warnings:
            typer.echo(f"Warning: {warning}")
