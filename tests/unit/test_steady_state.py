"""Tests for the analytical steady state."""

from dataclasses import replace

import numpy as np
import pytest

from sfcsim.steady_state import (
    adjustment_factor,
    relaxation_residual,
    steady_state,
    steady_state_income,
)


class TestSteadyStateIncome:
    def test_reference_value(self):
        assert steady_state_income(20.0, 0.2) == 100.0

    def test_zero_spending(self):
        assert steady_state_income(0.0, 0.2) == 0.0

    def test_array_input(self):
        gov = np.array([0.0, 20.0, 20.0])
        np.testing.assert_allclose(steady_state_income(gov, 0.2), [0.0, 100.0, 100.0])

    def test_scalar_returns_float(self):
        assert isinstance(steady_state_income(20, 0.25), float)

    def test_theta_zero_fails_fast(self):
        with pytest.raises(ValueError, match="theta=0"):
            steady_state_income(20.0, 0.0)

    def test_theta_zero_fails_for_arrays(self):
        with pytest.raises(ValueError, match="theta=0"):
            steady_state_income(np.array([1.0, 2.0]), 0.0)


class TestSteadyState:
    def test_reference_calibration(self, reference_config):
        ss = steady_state(reference_config)
        assert ss["y"] == pytest.approx(100.0)
        assert ss["yd"] == pytest.approx(80.0)
        assert ss["c"] == pytest.approx(80.0)
        assert ss["tax"] == pytest.approx(20.0)
        assert ss["g"] == 20.0
        assert ss["h_h"] == pytest.approx(80.0)

    def test_budget_balances(self, reference_config):
        ss = steady_state(reference_config)
        assert ss["tax"] == pytest.approx(ss["g"])

    def test_consumption_function_holds(self, reference_config):
        ss = steady_state(reference_config)
        cfg = reference_config
        assert ss["c"] == pytest.approx(cfg.alpha1 * ss["yd"] + cfg.alpha2 * ss["h_h"])

    def test_explicit_gov(self, reference_config):
        ss = steady_state(reference_config, gov=0.0)
        assert ss["y"] == 0.0
        assert ss["h_h"] == 0.0

    def test_alpha2_zero_with_spending_fails(self, reference_config):
        cfg = replace(reference_config, alpha2=0.0)
        with pytest.raises(ValueError, match="alpha2=0"):
            steady_state(cfg)

    def test_alpha2_zero_without_spending(self, reference_config):
        cfg = replace(reference_config, alpha2=0.0, gov_after=0.0)
        assert steady_state(cfg)["h_h"] == 0.0


class TestAdjustmentFactor:
    def test_reference_value(self):
        # 1 - 0.4*0.2 / (1 - 0.6*0.8) = 1 - 0.08/0.52
        assert adjustment_factor(0.6, 0.4, 0.2) == pytest.approx(1 - 0.08 / 0.52)

    def test_monotone_for_reference(self):
        assert 0.0 <= adjustment_factor(0.6, 0.4, 0.2) < 1.0

    def test_zero_at_full_taxation_and_wealth_spending(self):
        # theta=1, alpha2=1: the whole gap closes in one period
        assert adjustment_factor(0.5, 1.0, 1.0) == pytest.approx(0.0)

    def test_no_wealth_effect_means_no_adjustment(self):
        assert adjustment_factor(0.6, 0.0, 0.2) == 1.0

    def test_infinite_multiplier(self):
        with pytest.raises(ValueError, match="multiplier"):
            adjustment_factor(1.0, 0.4, 0.0)


class TestRelaxationResidual:
    def test_reference_calibration_is_tight(self):
        # 0.48 ** 20
        assert relaxation_residual(0.6, 0.2, 20) == pytest.approx(0.48**20)
        assert relaxation_residual(0.6, 0.2, 20) < 1e-6

    def test_shrinks_with_passes(self):
        assert relaxation_residual(0.9, 0.05, 40) < relaxation_residual(0.9, 0.05, 20)

    def test_no_feedback_relaxes_immediately(self):
        assert relaxation_residual(0.0, 0.2, 1) == 0.0
