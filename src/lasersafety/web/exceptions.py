"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lasersafety.application.config import ConfigError
from lasersafety.domain.value_objects import UnitMismatchError


class ScenarioEvaluationError(Exception):
    """Raised when a scenario cannot be evaluated at all."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Scenario evaluation failed: {errors}")


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": "Invalid scenario configuration",
                "error_type": exc.error_type,
                "details": [
                    {"path": d.get("path"), "message": d.get("message")} for d in exc.details
                ],
            },
        )

    @app.exception_handler(UnitMismatchError)
    async def unit_mismatch_handler(request: Request, exc: UnitMismatchError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "unit_mismatch",
                "details": None,
            },
        )

    @app.exception_handler(ScenarioEvaluationError)
    async def scenario_error_handler(
        request: Request, exc: ScenarioEvaluationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": "Scenario evaluation failed",
                "error_type": "evaluation",
                "details": [{"message": e} for e in exc.errors],
            },
        )
