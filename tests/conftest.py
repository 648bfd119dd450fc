"""Pytest configuration and shared fixtures for laser safety tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from lasersafety.domain.services.laser import LaserSafetyService
from lasersafety.domain.value_objects import SourceGeometry


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: tests that exercise CLI or HTTP surfaces")
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def service() -> LaserSafetyService:
    """Service with default configuration (1.5 mrad point source)."""
    return LaserSafetyService()


@pytest.fixture
def point_source() -> SourceGeometry:
    """A source at the point/extended threshold."""
    return SourceGeometry(1.5)


@pytest.fixture
def helium_neon_config() -> dict[str, Any]:
    """Scenario for a 1 mW 632.8 nm CW pointer."""
    return {
        "schema_version": "1.0",
        "name": "HeNe alignment laser",
        "laser": {
            "wavelength_nm": 632.8,
            "power_w": 1e-3,
            "beam_diameter_mm": 1.0,
            "divergence_mrad": 1.0,
        },
        "exposure": {"exposure_time_s": 0.25},
    }


@pytest.fixture
def write_scenario(tmp_path: Path) -> Callable[[dict[str, Any] | str], Path]:
    """Write a scenario (dict or raw text) to a temporary JSON file."""

    def _write(content: dict[str, Any] | str, name: str = "scenario.json") -> Path:
        path = tmp_path / name
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text)
        return path

    return _write
