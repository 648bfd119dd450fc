"""Pydantic schemas for the REST API."""

from lasersafety.web.schemas.common import (
    EmissionClassEnum,
    PulseTimingSchema,
    QuantitySchema,
    TargetEnum,
)
from lasersafety.web.schemas.requests import (
    ClassifyRequest,
    CriticalLimitRequest,
    ExposureLimitRequest,
    EyewearRequest,
    MultiWavelengthClassifyRequest,
    NOHDRequest,
    PulseTrainRequest,
    ScenarioRequest,
    ScenarioValidateRequest,
)
from lasersafety.web.schemas.responses import (
    ClassificationSchema,
    CorrectionFactorsSchema,
    CriticalLimitSchema,
    ErrorResponseSchema,
    ExposureLimitSchema,
    EyewearSchema,
    MultiWavelengthClassificationSchema,
    NOHDAssessmentSchema,
    NOHDResultSchema,
    PulseTrainFactorSchema,
    PulseValidationSchema,
    ScenarioReportSchema,
    ScenarioSummarySchema,
    ValidationResultSchema,
)

__all__ = [
    # Common
    "EmissionClassEnum",
    "PulseTimingSchema",
    "QuantitySchema",
    "TargetEnum",
    # Requests
    "ClassifyRequest",
    "CriticalLimitRequest",
    "ExposureLimitRequest",
    "EyewearRequest",
    "MultiWavelengthClassifyRequest",
    "NOHDRequest",
    "PulseTrainRequest",
    "ScenarioRequest",
    "ScenarioValidateRequest",
    # Responses
    "ClassificationSchema",
    "CorrectionFactorsSchema",
    "CriticalLimitSchema",
    "ErrorResponseSchema",
    "ExposureLimitSchema",
    "EyewearSchema",
    "MultiWavelengthClassificationSchema",
    "NOHDAssessmentSchema",
    "NOHDResultSchema",
    "PulseTrainFactorSchema",
    "PulseValidationSchema",
    "ScenarioReportSchema",
    "ScenarioSummarySchema",
    "ValidationResultSchema",
]
