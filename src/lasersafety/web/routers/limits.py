"""Exposure limit endpoints: MPE/AEL, pulse-train factor and critical limit."""

from fastapi import APIRouter

from lasersafety.domain.value_objects import EmissionClass, HazardTarget
from lasersafety.infrastructure import critical_to_dict, limit_to_dict, pulse_train_to_dict
from lasersafety.web.dependencies import LaserSafetyServiceDep
from lasersafety.web.schemas.requests import (
    CriticalLimitRequest,
    ExposureLimitRequest,
    PulseTrainRequest,
)
from lasersafety.web.schemas.responses import (
    CriticalLimitSchema,
    ExposureLimitSchema,
    PulseTrainFactorSchema,
)

router = APIRouter(prefix="/limits", tags=["limits"])


def _target(value) -> HazardTarget | None:
    return HazardTarget(value.value) if value is not None else None


def _emission_class(value) -> EmissionClass | None:
    return EmissionClass(value.value) if value is not None else None


@router.post("/exposure", response_model=ExposureLimitSchema)
async def evaluate_exposure_limit(
    request: ExposureLimitRequest,
    service: LaserSafetyServiceDep,
) -> ExposureLimitSchema:
    """Evaluate the MPE, or the AEL of a class, at one wavelength and time.

    Limits outside the tables come back with status "not_applicable" and
    unit "N/A" rather than as an error.
    """
    limit = service.evaluate_exposure_limit(
        request.wavelength_nm,
        request.exposure_time_s,
        service.geometry(request.angular_subtense_mrad),
        _target(request.target),
        _emission_class(request.emission_class),
    )
    return ExposureLimitSchema.model_validate(limit_to_dict(limit, request.include_trace))


@router.post("/pulse-train", response_model=PulseTrainFactorSchema)
async def evaluate_pulse_train_factor(
    request: PulseTrainRequest,
    service: LaserSafetyServiceDep,
) -> PulseTrainFactorSchema:
    """Evaluate the pulse-train correction factor C5."""
    factor = service.evaluate_pulse_train_factor(
        request.wavelength_nm,
        request.pulse_width_s,
        request.repetition_rate_hz,
        request.exposure_time_s,
        request.angular_subtense_mrad,
    )
    return PulseTrainFactorSchema.model_validate(
        pulse_train_to_dict(factor, request.include_trace)
    )


@router.post("/critical", response_model=CriticalLimitSchema)
async def evaluate_critical_limit(
    request: CriticalLimitRequest,
    service: LaserSafetyServiceDep,
) -> CriticalLimitSchema:
    """Evaluate the three pulse rules and return the most restrictive."""
    result = service.evaluate_critical_limit(
        request.wavelength_nm,
        request.exposure_time_s,
        request.pulse_width_s,
        request.repetition_rate_hz,
        service.geometry(request.angular_subtense_mrad),
        _emission_class(request.emission_class),
        _target(request.target),
    )
    return CriticalLimitSchema.model_validate(critical_to_dict(result, request.include_trace))
