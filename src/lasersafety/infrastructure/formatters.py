"""Output formatters and exporters for scenario reports."""

from __future__ import annotations

import json

from lasersafety.application.dtos import ScenarioReport
from lasersafety.domain.services.laser import LASER_SAFETY_DISCLAIMER

from .serializers import report_to_dict


class JsonExporter:
    """Exports scenario reports as JSON."""

    def __init__(self, include_trace: bool = False) -> None:
        self._include_trace = include_trace

    def export(self, report: ScenarioReport) -> str:
        """Export a scenario report as a JSON string."""
        return json.dumps(report_to_dict(report, self._include_trace), indent=2)


class ReportFormatter:
    """Formats scenario reports for terminal display."""

    def __init__(self, include_trace: bool = False) -> None:
        """Initialize formatter.

        Args:
            include_trace: Whether to list the derivation trace under
                each analysis.
        """
        self._include_trace = include_trace

    def format(self, report: ScenarioReport) -> str:
        scenario = report.scenario
        title = scenario.name or f"{scenario.wavelength_nm:g} nm laser"
        mode = (
            f"pulsed, {scenario.pulse.pulse_width_s:.3g} s at "
            f"{scenario.pulse.repetition_rate_hz:.3g} Hz"
            if scenario.pulse is not None
            else "CW"
        )
        lines = [
            f"LASER SAFETY REPORT: {title}",
            "=" * 70,
            f"Wavelength {scenario.wavelength_nm:g} nm, {mode}, "
            f"exposure {scenario.exposure_time_s:g} s, "
            f"source {scenario.geometry.angular_subtense_mrad:g} mrad",
            "-" * 70,
        ]

        sections = (
            ("Exposure limit", report.exposure_limit),
            ("Critical per-pulse limit", report.critical_limit),
            ("Hazard distance", report.nohd),
            ("Classification", report.classification),
            ("Eyewear", report.eyewear),
        )
        for heading, result in sections:
            if result is None:
                continue
            lines.append(f"{heading}: {result.formatted_message}")
            if heading == "Classification" and result.requirements:
                lines.extend(f"    - {item}" for item in result.requirements)
            if heading == "Eyewear" and result.warnings:
                lines.extend(f"    ! {warning}" for warning in result.warnings)
            if self._include_trace:
                lines.extend(f"    {line}" for line in _trace_of(result))

        if report.errors:
            lines.append("-" * 70)
            lines.append("Errors:")
            lines.extend(f"  {error}" for error in report.errors)

        lines.append("-" * 70)
        lines.append(LASER_SAFETY_DISCLAIMER)
        return "\n".join(lines)


def _trace_of(result) -> tuple[str, ...]:
    # NOHDAssessment keeps its trace on the eye and skin results
    if hasattr(result, "trace"):
        return result.trace
    return tuple(f"eye: {line}" for line in result.eye.trace) + tuple(
        f"skin: {line}" for line in result.skin.trace
    )
