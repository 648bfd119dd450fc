"""Unit tests for Ti, pulse validation and the pulse-train factor C5."""

from __future__ import annotations

import math

import pytest

from lasersafety.domain.services.laser import (
    PulseTrainFactor,
    classification_time_base,
    evaluate_pulse_train_factor,
    spectral_region,
    thermal_confinement_time,
    validate_pulse_parameters,
)
from lasersafety.domain.services.laser.pulse_train import effective_pulse_count
from lasersafety.domain.value_objects import (
    EmissionClass,
    LimitStatus,
    PulseGrouping,
    SpectralRegion,
)


# ==============================================================================
# Time bases
# ==============================================================================


class TestTimeBases:
    """Tests for Ti, classification time bases and spectral regions."""

    @pytest.mark.parametrize(
        "wavelength,expected",
        [
            (300.0, 1e-3),
            (532.0, 5e-6),
            (1050.0, 13e-6),
            (1064.0, 13e-6),
            (1450.0, 1e-3),
            (1550.0, 10.0),
            (2000.0, 1e-3),
            (10600.0, 1e-7),
            (1e6, 1e-7),
        ],
    )
    def test_thermal_confinement_time(self, wavelength: float, expected: float) -> None:
        assert thermal_confinement_time(wavelength) == expected

    @pytest.mark.parametrize(
        "wavelength,emission_class,intentional,expected",
        [
            (355.0, EmissionClass.CLASS_1, False, 3e4),
            (400.0, EmissionClass.CLASS_2, False, 3e4),
            (532.0, EmissionClass.CLASS_2, False, 0.25),
            (532.0, EmissionClass.CLASS_3R, False, 0.25),
            (532.0, EmissionClass.CLASS_1, False, 100.0),
            (532.0, EmissionClass.CLASS_2, True, 3e4),
            (1064.0, EmissionClass.CLASS_3R, False, 100.0),
        ],
    )
    def test_classification_time_base(
        self,
        wavelength: float,
        emission_class: EmissionClass,
        intentional: bool,
        expected: float,
    ) -> None:
        assert classification_time_base(wavelength, emission_class, intentional) == expected

    @pytest.mark.parametrize(
        "wavelength,expected",
        [
            (300.0, SpectralRegion.UV),
            (532.0, SpectralRegion.VISIBLE),
            (1064.0, SpectralRegion.NEAR_IR),
            (1550.0, SpectralRegion.IR_B_C),
            (20000.0, SpectralRegion.FAR_IR),
        ],
    )
    def test_spectral_region(self, wavelength: float, expected: SpectralRegion) -> None:
        assert spectral_region(wavelength) == expected


# ==============================================================================
# Pulse validation
# ==============================================================================


class TestValidatePulseParameters:
    """Tests for validate_pulse_parameters."""

    def test_valid_train(self) -> None:
        result = validate_pulse_parameters(1e-8, 1000.0)
        assert result.is_valid
        assert result.errors == ()
        assert result.duty_cycle == pytest.approx(1e-5)

    def test_pulse_longer_than_period(self) -> None:
        result = validate_pulse_parameters(1e-2, 1000.0)
        assert not result.is_valid
        assert "exceeds the pulse period" in result.errors[0]

    def test_non_positive_inputs(self) -> None:
        result = validate_pulse_parameters(0.0, -1.0)
        assert not result.is_valid
        assert len(result.errors) == 2

    def test_non_finite_inputs(self) -> None:
        result = validate_pulse_parameters(math.nan, 1000.0)
        assert not result.is_valid

    def test_high_duty_cycle_warns(self) -> None:
        result = validate_pulse_parameters(6e-4, 1000.0)
        assert result.is_valid
        assert result.warnings
        assert "close to continuous" in result.warnings[0]


# ==============================================================================
# C5
# ==============================================================================


class TestEffectivePulseCount:
    """Tests for pulse grouping within Ti."""

    def test_no_grouping_below_two_pulses_per_ti(self) -> None:
        assert effective_pulse_count(0.25, 1000.0, 13e-6) == (250, 0)

    def test_pulses_within_ti_count_as_one(self) -> None:
        assert effective_pulse_count(1.0, 1e4, 1e-3) == (1000, 10)


class TestEvaluatePulseTrainFactor:
    """Tests for evaluate_pulse_train_factor."""

    def test_nd_yag_short_exposure(self) -> None:
        """10 ns pulses at 1 kHz for 0.25 s at 1064 nm."""
        factor = evaluate_pulse_train_factor(1064.0, 1e-8, 1000.0, 0.25)

        assert factor.number_of_pulses == 250
        assert factor.time_base_s == 13e-6
        assert factor.grouping == PulseGrouping.SHORT_EXPOSURE
        assert factor.c5 == 1.0
        assert factor.status == LimitStatus.DEFINED
        assert "Pulse width 1e-08 s <= Ti" in factor.trace

    def test_long_pulse(self) -> None:
        factor = evaluate_pulse_train_factor(532.0, 0.5, 1.0, 100.0)
        assert factor.grouping == PulseGrouping.LONG_PULSE
        assert factor.c5 == 1.0

    def test_single_pulse(self) -> None:
        factor = evaluate_pulse_train_factor(532.0, 1e-8, 1.0, 0.25)
        assert factor.grouping == PulseGrouping.SINGLE_PULSE
        assert factor.c5 == 1.0

    def test_few_pulses(self) -> None:
        factor = evaluate_pulse_train_factor(532.0, 1e-8, 100.0, 5.0)
        assert factor.number_of_pulses == 500
        assert factor.grouping == PulseGrouping.FEW_PULSES
        assert factor.c5 == 1.0

    def test_many_pulses(self) -> None:
        factor = evaluate_pulse_train_factor(532.0, 1e-8, 1000.0, 10.0)
        assert factor.number_of_pulses == 10000
        assert factor.grouping == PulseGrouping.MANY_PULSES
        assert factor.c5 == pytest.approx(0.5)

    def test_many_pulses_clamped_to_minimum(self) -> None:
        factor = evaluate_pulse_train_factor(532.0, 1e-8, 1e5, 10.0)
        assert factor.c5 == 0.4

    def test_small_source_long_pulses(self) -> None:
        factor = evaluate_pulse_train_factor(532.0, 1e-4, 100.0, 10.0, 1.5)
        assert factor.grouping == PulseGrouping.SMALL_SOURCE
        assert factor.c5 == 1.0

    def test_medium_source_few_pulses(self) -> None:
        factor = evaluate_pulse_train_factor(532.0, 1e-4, 2.0, 10.0, 10.0)
        assert factor.number_of_pulses == 20
        assert factor.grouping == PulseGrouping.MEDIUM_SOURCE_FEW_PULSES
        assert factor.c5 == pytest.approx(20**-0.25)

    def test_medium_source_many_pulses(self) -> None:
        factor = evaluate_pulse_train_factor(532.0, 1e-4, 100.0, 10.0, 10.0)
        assert factor.grouping == PulseGrouping.MEDIUM_SOURCE_MANY_PULSES
        assert factor.c5 == 0.4

    def test_large_source(self) -> None:
        factor = evaluate_pulse_train_factor(532.0, 1e-4, 100.0, 10.0, 200.0)
        assert factor.grouping == PulseGrouping.LARGE_SOURCE
        assert factor.c5 == 1.0

    @pytest.mark.parametrize(
        "pulse_width,rate,exposure_time",
        [(0.0, 1000.0, 1.0), (1e-8, -5.0, 1.0), (1e-8, 1000.0, math.nan)],
    )
    def test_invalid_inputs(self, pulse_width: float, rate: float, exposure_time: float) -> None:
        factor = evaluate_pulse_train_factor(532.0, pulse_width, rate, exposure_time)
        assert factor.status == LimitStatus.RANGE_VIOLATION
        assert factor.c5 == 1.0
        assert not factor.is_defined

    def test_c5_never_increases_with_pulse_count(self) -> None:
        """Raising the repetition rate (hence N) never raises C5."""
        rates = (100.0, 200.0, 500.0, 1000.0, 5000.0, 20000.0, 100000.0)
        values = [evaluate_pulse_train_factor(1064.0, 1e-9, rate, 10.0).c5 for rate in rates]

        assert all(later <= earlier for earlier, later in zip(values, values[1:]))
        assert values[-1] < values[0]

    def test_c5_never_increases_before_grouping_starts(self) -> None:
        """At 1550 nm (Ti = 10 s) rates below 0.2 Hz keep one pulse per window."""
        rates = (0.01, 0.02, 0.05, 0.1, 0.15, 0.19)
        factors = [evaluate_pulse_train_factor(1550.0, 1e-6, rate, 30000.0) for rate in rates]

        assert all(factor.pulses_per_window == 1 for factor in factors)
        values = [factor.c5 for factor in factors]
        assert all(later <= earlier for earlier, later in zip(values, values[1:]))

    def test_grouped_windows_apply_c5_to_windows(self) -> None:
        """Two pulses per 10 s window: 7500 pulses become 3750 windows."""
        factor = evaluate_pulse_train_factor(1550.0, 1e-6, 0.25, 30000.0)

        assert factor.time_base_s == 10.0
        assert factor.pulses_per_window == 2
        assert factor.number_of_pulses == 3750
        assert factor.grouping == PulseGrouping.MANY_PULSES
        assert factor.c5 == pytest.approx(5.0 * 3750**-0.25)
        assert "2 pulses per Ti window count as one pulse" in factor.trace

    def test_model_rejects_empty_window(self) -> None:
        with pytest.raises(ValueError, match="pulses_per_window"):
            PulseTrainFactor(
                c5=1.0,
                number_of_pulses=10,
                time_base_s=10.0,
                grouping=PulseGrouping.FEW_PULSES,
                pulses_per_window=0,
            )

    @pytest.mark.parametrize("angle", [0.5, 1.5, 10.0, 50.0, 150.0])
    @pytest.mark.parametrize("rate", [1.0, 10.0, 1e3, 1e5])
    def test_c5_bounds(self, angle: float, rate: float) -> None:
        factor = evaluate_pulse_train_factor(800.0, 1e-6, rate, 30.0, angle)
        assert 0.4 <= factor.c5 <= 1.0

    def test_model_rejects_out_of_bounds_c5(self) -> None:
        with pytest.raises(ValueError, match="c5"):
            PulseTrainFactor(
                c5=0.3,
                number_of_pulses=10,
                time_base_s=5e-6,
                grouping=PulseGrouping.MANY_PULSES,
            )
