"""FastAPI dependency injection for laser safety services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from lasersafety.application.commands import EvaluateScenarioCommand
from lasersafety.domain.services.laser import LaserSafetyConfig, LaserSafetyService


@lru_cache(maxsize=1)
def get_laser_safety_service() -> LaserSafetyService:
    """Get cached LaserSafetyService with default configuration."""
    return LaserSafetyService(LaserSafetyConfig())


def get_scenario_command(
    service: Annotated[LaserSafetyService, Depends(get_laser_safety_service)],
) -> EvaluateScenarioCommand:
    """Dependency for EvaluateScenarioCommand."""
    return EvaluateScenarioCommand(service)


# Type aliases for cleaner endpoint signatures
LaserSafetyServiceDep = Annotated[LaserSafetyService, Depends(get_laser_safety_service)]
ScenarioCommandDep = Annotated[EvaluateScenarioCommand, Depends(get_scenario_command)]
