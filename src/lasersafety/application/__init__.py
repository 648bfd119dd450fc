"""Application layer for laser exposure scenarios."""

from .commands import EvaluateScenarioCommand
from .dtos import AnalysisSelection, ScenarioInput, ScenarioReport

__all__ = [
    "AnalysisSelection",
    "EvaluateScenarioCommand",
    "ScenarioInput",
    "ScenarioReport",
]
