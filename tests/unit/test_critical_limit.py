"""Unit tests for the pulse-train critical limit selector."""

from __future__ import annotations

import pytest

from lasersafety.domain.services.laser import LimitingRule, evaluate_critical_limit
from lasersafety.domain.value_objects import EmissionClass, LimitStatus, Unit


class TestEvaluateCriticalLimit:
    """Tests for evaluate_critical_limit at 532 nm with 10 ns pulses."""

    def test_tie_reports_the_earlier_rule(self, point_source) -> None:
        """Rule 3 equals Rule 1 when C5 is 1; Rule 1 is reported."""
        result = evaluate_critical_limit(532.0, 0.25, 1e-8, 1000.0, point_source)

        assert result.is_defined
        assert result.limiting_rule == LimitingRule.SINGLE_PULSE
        assert result.critical.quantity.unit == Unit.JOULE_PER_M2
        assert result.critical.quantity.value == pytest.approx(2e-3)
        assert result.thermal_train.quantity.value == pytest.approx(2e-3)

    def test_average_power_governs_high_repetition_rate(self, point_source) -> None:
        result = evaluate_critical_limit(532.0, 10.0, 1e-8, 1e5, point_source)

        assert result.limiting_rule == LimitingRule.AVERAGE_POWER
        assert result.critical.quantity.value == pytest.approx(1e-4)
        assert result.critical.limiting_mechanism == "Average power (Rule 2)"

    def test_thermal_accumulation_governs(self, point_source) -> None:
        result = evaluate_critical_limit(532.0, 10.0, 1e-8, 1000.0, point_source)

        assert result.limiting_rule == LimitingRule.THERMAL_TRAIN
        assert result.critical.quantity.value == pytest.approx(1e-3)
        assert result.pulse_train is not None
        assert result.pulse_train.c5 == pytest.approx(0.5)

    def test_every_rule_is_an_energy_per_pulse(self, point_source) -> None:
        result = evaluate_critical_limit(532.0, 10.0, 1e-8, 1000.0, point_source)

        for limit in (result.single_pulse, result.average_power, result.thermal_train):
            assert limit.quantity.unit.is_energy
        assert result.average_power.quantity.value == pytest.approx(1e-2)

    def test_critical_is_the_minimum(self, point_source) -> None:
        result = evaluate_critical_limit(1064.0, 30.0, 1e-9, 5000.0, point_source)
        values = [
            result.single_pulse.quantity.value,
            result.average_power.quantity.value,
            result.thermal_train.quantity.value,
        ]
        assert result.critical.quantity.value == pytest.approx(min(values))

    def test_trace_names_the_winner(self, point_source) -> None:
        result = evaluate_critical_limit(532.0, 10.0, 1e-8, 1e5, point_source)

        assert any(line.startswith("Rule 1:") for line in result.trace)
        assert any(line.startswith("Rule 2:") for line in result.trace)
        assert any(line.startswith("Rule 3:") for line in result.trace)
        assert result.trace[-1].startswith("Most restrictive:")
        assert "per pulse" in result.formatted_message

    def test_pulse_longer_than_period_is_a_range_violation(self, point_source) -> None:
        result = evaluate_critical_limit(532.0, 10.0, 1e-2, 1000.0, point_source)

        assert result.status == LimitStatus.RANGE_VIOLATION
        assert result.limiting_rule is None
        assert not result.critical.is_defined
        assert result.validation is not None
        assert not result.validation.is_valid
        assert any(line.startswith("Invalid pulse train:") for line in result.trace)

    def test_exposure_outside_tables_is_not_applicable(self, point_source) -> None:
        result = evaluate_critical_limit(532.0, 1e5, 1e-8, 1000.0, point_source)
        assert result.status == LimitStatus.NOT_APPLICABLE
        assert "critical limit: not_applicable" in result.formatted_message

    def test_class_ael_stays_an_aperture_energy(self, point_source) -> None:
        result = evaluate_critical_limit(
            532.0, 0.25, 1e-8, 1000.0, point_source, EmissionClass.CLASS_1
        )

        assert result.is_defined
        assert result.critical.quantity.unit == Unit.JOULE
        assert result.critical.emission_class == EmissionClass.CLASS_1


class TestGroupedPulseTrains:
    """Tests for pulse trains whose pulses share a Ti window (1550 nm, Ti = 10 s)."""

    def test_window_limit_is_shared_among_its_pulses(self, point_source) -> None:
        """Two 1 us pulses per window: 1e4 J/m2 x C5(3750 windows) / 2."""
        result = evaluate_critical_limit(1550.0, 30000.0, 1e-6, 0.25, point_source)

        assert result.is_defined
        assert result.pulse_train.pulses_per_window == 2
        expected = 1e4 * 5.0 * 3750**-0.25 / 2
        assert result.thermal_train.quantity.value == pytest.approx(expected)
        assert result.limiting_rule == LimitingRule.THERMAL_TRAIN
        assert any("per Ti window" in line for line in result.trace)

    def test_thermal_limit_never_rises_with_repetition_rate(self, point_source) -> None:
        """Fewer effective windows raise C5, but each window holds more pulses."""
        rates = (0.15, 0.19, 0.25, 0.3, 0.5, 1.0)
        values = [
            evaluate_critical_limit(1550.0, 30000.0, 1e-6, rate, point_source)
            .thermal_train.quantity.value
            for rate in rates
        ]

        assert all(later <= earlier for earlier, later in zip(values, values[1:]))

    def test_critical_limit_never_rises_with_repetition_rate(self, point_source) -> None:
        rates = (0.05, 0.15, 0.19, 0.25, 0.3, 0.5, 1.0, 5.0)
        values = [
            evaluate_critical_limit(1550.0, 30000.0, 1e-6, rate, point_source)
            .critical.quantity.value
            for rate in rates
        ]

        assert all(later <= earlier for earlier, later in zip(values, values[1:]))
