"""API routers for the REST API."""

from lasersafety.web.routers.hazard import router as hazard_router
from lasersafety.web.routers.limits import router as limits_router
from lasersafety.web.routers.scenario import router as scenario_router

__all__ = [
    "hazard_router",
    "limits_router",
    "scenario_router",
]
