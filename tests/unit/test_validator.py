"""Tests for configuration validation."""

import warnings

import pytest

from sfcsim.config import ConfigValidator
from sfcsim.simulation import Simulation


class TestKeyValidation:
    """Unknown parameters are rejected."""

    def test_known_keys_accepted(self):
        ConfigValidator._validate_keys({"alpha1": 0.6, "logging": {}})

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError, match="Unknown config parameter"):
            ConfigValidator._validate_keys({"alpha_1": 0.6})

    def test_unknown_key_via_init(self):
        with pytest.raises(ValueError, match="gov_aftr"):
            Simulation.init(gov_aftr=25.0)


class TestTypeValidation:
    """Test type checking for configuration parameters."""

    def test_integer_params_accept_int(self):
        ConfigValidator._validate_types({"n_periods": 65, "max_iter": 20})

    def test_integer_params_reject_float(self):
        with pytest.raises(ValueError, match="must be int"):
            ConfigValidator._validate_types({"n_periods": 65.0})

    def test_integer_params_reject_bool(self):
        with pytest.raises(ValueError, match="must be int"):
            ConfigValidator._validate_types({"max_iter": True})

    def test_n_samples_accepts_none(self):
        ConfigValidator._validate_types({"n_samples": None})

    def test_float_params_accept_int(self):
        """Float parameters should accept int values (coercion)."""
        ConfigValidator._validate_types({"gov_after": 20, "t_switch": 15})

    def test_float_params_reject_string(self):
        with pytest.raises(ValueError, match="must be float"):
            ConfigValidator._validate_types({"alpha1": "0.6"})

    def test_tol_accepts_none(self):
        ConfigValidator._validate_types({"tol": None})

    def test_required_float_rejects_none(self):
        with pytest.raises(ValueError, match="must be float"):
            ConfigValidator._validate_types({"theta": None})

    def test_method_must_be_string(self):
        with pytest.raises(ValueError, match="must be str"):
            ConfigValidator._validate_types({"method": 45})

    def test_nan_rejected(self):
        with pytest.raises(ValueError, match="'theta' must be finite"):
            ConfigValidator._validate_types({"theta": float("nan")})

    def test_infinite_rejected(self):
        with pytest.raises(ValueError, match="'gov_after' must be finite"):
            ConfigValidator._validate_types({"gov_after": float("inf")})

    @pytest.mark.parametrize("key", ["alpha1", "rtol", "tol", "t_end", "t_switch"])
    def test_non_finite_via_init(self, key):
        with pytest.raises(ValueError, match=f"'{key}' must be finite"):
            Simulation.init(**{key: float("nan")})


class TestRangeValidation:
    """Test range validation for configuration parameters."""

    @pytest.mark.parametrize("key", ["alpha1", "alpha2", "theta"])
    def test_unit_interval(self, key):
        ConfigValidator._validate_ranges({key: 0.5})
        with pytest.raises(ValueError, match="must be >= 0.0"):
            ConfigValidator._validate_ranges({key: -0.1})
        with pytest.raises(ValueError, match="must be <= 1.0"):
            ConfigValidator._validate_ranges({key: 1.5})

    def test_boundaries_accepted(self):
        ConfigValidator._validate_ranges({"alpha1": 0.0, "alpha2": 1.0, "theta": 1.0})

    def test_theta_zero_rejected(self):
        with pytest.raises(ValueError, match="'theta' must be > 0"):
            ConfigValidator._validate_ranges({"theta": 0.0})

    def test_horizon_lower_bounds(self):
        with pytest.raises(ValueError, match="must be >= 2"):
            ConfigValidator._validate_ranges({"n_periods": 1})
        with pytest.raises(ValueError, match="must be >= 1"):
            ConfigValidator._validate_ranges({"max_iter": 0})
        with pytest.raises(ValueError, match="must be >= 2"):
            ConfigValidator._validate_ranges({"n_samples": 1})

    def test_none_values_skipped(self):
        ConfigValidator._validate_ranges({"n_samples": None, "tol": None})

    @pytest.mark.parametrize("key", ["tol", "rtol", "atol"])
    def test_tolerances_positive(self, key):
        with pytest.raises(ValueError, match=f"'{key}' must be > 0"):
            ConfigValidator._validate_ranges({key: 0.0})

    def test_time_span_ordered(self):
        with pytest.raises(ValueError, match="greater"):
            ConfigValidator._validate_ranges({"t_start": 10.0, "t_end": 10.0})

    def test_unknown_method(self):
        with pytest.raises(ValueError, match="Invalid integration method"):
            ConfigValidator._validate_ranges({"method": "Euler"})

    @pytest.mark.parametrize("method", sorted(ConfigValidator.VALID_METHODS))
    def test_known_methods(self, method):
        ConfigValidator._validate_ranges({"method": method})


class TestRelationshipValidation:
    """Cross-parameter checks produce warnings, not errors."""

    def test_reference_calibration_is_silent(self):
        cfg = {
            "alpha1": 0.6,
            "theta": 0.2,
            "max_iter": 20,
            "t_switch": 15.0,
            "n_periods": 65,
            "t_end": 65.0,
        }
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            ConfigValidator._validate_relationships(cfg)

    def test_shock_after_discrete_horizon(self):
        with pytest.warns(UserWarning, match="discrete run will never see"):
            ConfigValidator._validate_relationships(
                {"t_switch": 80.0, "n_periods": 65}
            )

    def test_shock_after_continuous_horizon(self):
        with pytest.warns(UserWarning, match="continuous run will never see"):
            ConfigValidator._validate_relationships({"t_switch": 80.0, "t_end": 65.0})

    def test_slow_relaxation_warns(self):
        # alpha1*(1-theta) = 0.9*0.95 = 0.855; 0.855**20 ~ 0.04
        with pytest.warns(UserWarning, match="Increase max_iter or set tol"):
            ConfigValidator._validate_relationships(
                {"alpha1": 0.9, "theta": 0.05, "max_iter": 20}
            )

    def test_tolerance_mode_does_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            ConfigValidator._validate_relationships(
                {"alpha1": 0.9, "theta": 0.05, "max_iter": 20, "tol": 1e-8}
            )

    def test_warning_surfaces_through_init(self):
        with pytest.warns(UserWarning, match="never see"):
            Simulation.init(t_switch=100.0)


class TestLoggingValidation:
    """Test the logging config section."""

    def test_valid_logging(self):
        ConfigValidator._validate_logging(
            {"default_level": "debug", "modules": {"discrete": "DEEP_DEBUG"}}
        )

    def test_deep_level_name_accepted(self):
        ConfigValidator._validate_logging(
            {"default_level": "deep", "modules": {"discrete": "DEEP"}}
        )

    def test_logging_must_be_dict(self):
        with pytest.raises(ValueError, match="must be dict"):
            ConfigValidator._validate_logging("INFO")

    def test_invalid_default_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            ConfigValidator._validate_logging({"default_level": "LOUD"})

    def test_default_level_must_be_str(self):
        with pytest.raises(ValueError, match="must be str"):
            ConfigValidator._validate_logging({"default_level": 10})

    def test_modules_must_be_dict(self):
        with pytest.raises(ValueError, match="modules must be dict"):
            ConfigValidator._validate_logging({"modules": ["discrete"]})

    def test_invalid_module_level(self):
        with pytest.raises(ValueError, match="for module 'continuous'"):
            ConfigValidator._validate_logging({"modules": {"continuous": "LOUD"}})


class TestValidateConfig:
    def test_full_defaults_valid(self):
        from sfcsim.simulation import _package_defaults

        ConfigValidator.validate_config(_package_defaults())

    def test_errors_propagate_through_init(self):
        with pytest.raises(ValueError, match="alpha2"):
            Simulation.init(alpha2=2.0)
