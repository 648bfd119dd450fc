"""Adapter to convert ScenarioConfiguration to DTOs and domain objects.

Scenario files use the units people read off a data sheet (mm, mrad).
This module converts them to the SI inputs the engine works in.
"""

from lasersafety.application.config.schema import ScenarioConfiguration
from lasersafety.application.dtos import AnalysisSelection, ScenarioInput
from lasersafety.domain.services.laser import LaserSafetyConfig
from lasersafety.domain.services.laser.constants import MM_TO_M, MRAD_TO_RAD
from lasersafety.domain.value_objects import (
    EmissionClass,
    HazardTarget,
    PulseParameters,
    SourceGeometry,
)


def config_to_scenario(config: ScenarioConfiguration) -> ScenarioInput:
    """Convert a ScenarioConfiguration to a ScenarioInput DTO.

    A pulse energy is turned into an average power (energy times
    repetition rate) for the hazard distance. A power given with pulse
    timing is treated as the average power, and the energy per pulse is
    derived from it.

    Args:
        config: A validated ScenarioConfiguration instance

    Returns:
        ScenarioInput ready for EvaluateScenarioCommand

    Example:
        >>> config = load_scenario(Path("green-pointer.json"))
        >>> report = EvaluateScenarioCommand().execute(config_to_scenario(config))
    """
    laser = config.laser
    exposure = config.exposure

    pulse = None
    pulse_energy_j = laser.pulse_energy_j
    if config.pulse is not None:
        pulse = PulseParameters(
            pulse_width_s=config.pulse.pulse_width_s,
            repetition_rate_hz=config.pulse.repetition_rate_hz,
        )
        if pulse_energy_j is None:
            pulse_energy_j = laser.power_w / pulse.repetition_rate_hz

    if laser.power_w is not None:
        average_power_w = laser.power_w
    else:
        average_power_w = pulse_energy_j * pulse.repetition_rate_hz

    target = None if exposure.target == "auto" else HazardTarget(exposure.target)
    emission_class = (
        EmissionClass(exposure.emission_class) if exposure.emission_class is not None else None
    )

    return ScenarioInput(
        wavelength_nm=laser.wavelength_nm,
        exposure_time_s=exposure.exposure_time_s,
        geometry=SourceGeometry(exposure.angular_subtense_mrad),
        beam_diameter_m=laser.beam_diameter_mm * MM_TO_M,
        divergence_rad=laser.divergence_mrad * MRAD_TO_RAD,
        average_power_w=average_power_w,
        pulse_energy_j=pulse_energy_j,
        pulse=pulse,
        target=target,
        emission_class=emission_class,
        intentional_viewing=exposure.intentional_viewing,
        name=config.name,
        analyses=config_to_analyses(config),
    )


def config_to_analyses(config: ScenarioConfiguration) -> AnalysisSelection:
    outputs = config.outputs
    return AnalysisSelection(
        exposure_limit=outputs.exposure_limit,
        critical_limit=outputs.critical_limit,
        nohd=outputs.nohd,
        classification=outputs.classification,
        eyewear=outputs.eyewear,
    )


def config_to_service_config(config: ScenarioConfiguration) -> LaserSafetyConfig:
    """Build the engine defaults from the scenario.

    The scenario's angular subtense becomes the default geometry so that
    every analysis sees the same source size.
    """
    kwargs: dict = {"default_angular_subtense_mrad": config.exposure.angular_subtense_mrad}
    if config.analysis is not None:
        kwargs["od_warning_threshold"] = config.analysis.od_warning_threshold
        kwargs["max_scale_number"] = config.analysis.max_scale_number
    return LaserSafetyConfig(**kwargs)
