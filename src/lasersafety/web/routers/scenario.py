"""Scenario endpoints: run or validate a full scenario configuration."""

from fastapi import APIRouter

from lasersafety.application.commands import EvaluateScenarioCommand
from lasersafety.application.config import (
    ConfigError,
    config_to_scenario,
    config_to_service_config,
    load_scenario_from_dict,
    validate_scenario,
)
from lasersafety.domain.services.laser import LaserSafetyService
from lasersafety.infrastructure import report_to_dict
from lasersafety.web.exceptions import ScenarioEvaluationError
from lasersafety.web.schemas.requests import ScenarioRequest, ScenarioValidateRequest
from lasersafety.web.schemas.responses import ScenarioReportSchema, ValidationResultSchema

router = APIRouter(prefix="/scenario", tags=["scenario"])


@router.post("", response_model=ScenarioReportSchema)
async def evaluate_scenario(request: ScenarioRequest) -> ScenarioReportSchema:
    """Run every analysis a scenario asks for.

    The scenario's own angular subtense and analysis defaults configure
    the service, so this endpoint does not use the shared service.

    Raises:
        ConfigError: If the configuration fails schema validation (422).
        ScenarioEvaluationError: If the scenario has blocking errors (422).
    """
    config = load_scenario_from_dict(request.config)
    validation = validate_scenario(config)
    if not validation.is_valid:
        raise ScenarioEvaluationError([f"{e.path}: {e.message}" for e in validation.errors])

    command = EvaluateScenarioCommand(LaserSafetyService(config_to_service_config(config)))
    report = command.execute(config_to_scenario(config))
    include_trace = request.include_trace or config.outputs.trace
    return ScenarioReportSchema.model_validate(report_to_dict(report, include_trace))


@router.post("/validate", response_model=ValidationResultSchema)
async def validate_scenario_configuration(
    request: ScenarioValidateRequest,
) -> ValidationResultSchema:
    """Validate a scenario without evaluating it.

    Schema errors are reported in the body rather than as a 422, so a
    client can show every problem at once.
    """
    try:
        config = load_scenario_from_dict(request.config)
    except ConfigError as e:
        return ValidationResultSchema(
            is_valid=False,
            errors=[{"message": d["message"], "path": d["path"]} for d in e.details],
        )

    result = validate_scenario(config)
    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[{"message": e.message, "path": e.path} for e in result.errors],
        warnings=[{"message": w.message, "path": w.path} for w in result.warnings],
    )
