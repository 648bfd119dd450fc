"""Hazard endpoints: hazard distance, classification and eyewear."""

from fastapi import APIRouter

from lasersafety.domain.services.laser import EmissionLine
from lasersafety.domain.services.laser.constants import MM_TO_M, MRAD_TO_RAD
from lasersafety.domain.value_objects import PhysicalQuantity, PulseParameters, Unit
from lasersafety.infrastructure import (
    classification_to_dict,
    eyewear_to_dict,
    multiwavelength_to_dict,
    nohd_to_dict,
)
from lasersafety.web.dependencies import LaserSafetyServiceDep
from lasersafety.web.schemas.common import PulseTimingSchema
from lasersafety.web.schemas.requests import (
    ClassifyRequest,
    EmissionLineSchema,
    EyewearRequest,
    MultiWavelengthClassifyRequest,
    NOHDRequest,
)
from lasersafety.web.schemas.responses import (
    ClassificationSchema,
    EyewearSchema,
    MultiWavelengthClassificationSchema,
    NOHDAssessmentSchema,
)

router = APIRouter(prefix="/hazard", tags=["hazard"])


def _pulse(timing: PulseTimingSchema | None) -> PulseParameters | None:
    if timing is None:
        return None
    return PulseParameters(timing.pulse_width_s, timing.repetition_rate_hz)


def _emission(line: EmissionLineSchema) -> tuple[PhysicalQuantity, PulseParameters | None]:
    if line.pulse_energy_j is not None:
        return PhysicalQuantity(line.pulse_energy_j, Unit.JOULE), _pulse(line.pulse)
    return PhysicalQuantity(line.power_w, Unit.WATT), None


@router.post("/nohd", response_model=NOHDAssessmentSchema)
async def assess_nohd(
    request: NOHDRequest,
    service: LaserSafetyServiceDep,
) -> NOHDAssessmentSchema:
    """Solve the eye and skin hazard distances; the larger governs."""
    assessment = service.assess_nohd(
        request.power_w,
        request.beam_diameter_mm * MM_TO_M,
        request.divergence_mrad * MRAD_TO_RAD,
        request.wavelength_nm,
        request.exposure_time_s,
        service.geometry(request.angular_subtense_mrad),
    )
    return NOHDAssessmentSchema.model_validate(nohd_to_dict(assessment, request.include_trace))


@router.post("/classify", response_model=ClassificationSchema)
async def classify_laser(
    request: ClassifyRequest,
    service: LaserSafetyServiceDep,
) -> ClassificationSchema:
    """Assign a laser class to CW power or energy per pulse."""
    emission, pulse = _emission(request)
    result = service.classify(
        request.wavelength_nm,
        emission,
        service.geometry(request.angular_subtense_mrad),
        pulse,
        request.intentional_viewing,
    )
    return ClassificationSchema.model_validate(
        classification_to_dict(result, request.include_trace)
    )


@router.post("/classify/multi", response_model=MultiWavelengthClassificationSchema)
async def classify_multiwavelength(
    request: MultiWavelengthClassifyRequest,
    service: LaserSafetyServiceDep,
) -> MultiWavelengthClassificationSchema:
    """Classify several wavelengths emitted together."""
    lines = [EmissionLine(line.wavelength_nm, *_emission(line)) for line in request.lines]
    result = service.classify_multiwavelength(
        lines,
        service.geometry(request.angular_subtense_mrad),
        request.intentional_viewing,
    )
    return MultiWavelengthClassificationSchema.model_validate(
        multiwavelength_to_dict(result, request.include_trace)
    )


@router.post("/eyewear", response_model=EyewearSchema)
async def assess_eyewear(
    request: EyewearRequest,
    service: LaserSafetyServiceDep,
) -> EyewearSchema:
    """Required optical density and EN 207 marking."""
    requirement = service.assess_eyewear(
        request.wavelength_nm,
        request.beam_diameter_mm * MM_TO_M,
        request.exposure_time_s,
        power_w=request.power_w,
        pulse_energy_j=request.pulse_energy_j,
        pulse=_pulse(request.pulse) if request.pulse_energy_j is not None else None,
        geometry=service.geometry(request.angular_subtense_mrad),
    )
    return EyewearSchema.model_validate(eyewear_to_dict(requirement, request.include_trace))
