"""Centralized configuration validation for sfcsim."""

from __future__ import annotations

import math
import warnings
from typing import Any

from sfcsim.steady_state import relaxation_residual


class ConfigValidator:
    """
    Checks a merged Model SIM parameter dict before a Config is built.

    Runs once in Simulation.init(). Hard errors (unknown keys, wrong types,
    out-of-range values) raise ValueError naming the parameter; parameter
    combinations that are legal but probably unintended only warn.
    """

    # Level names accepted in the logging section
    VALID_LOG_LEVELS = {
        "DEEP",
        "DEEP_DEBUG",
        "DEBUG",
        "INFO",
        "WARNING",
        "ERROR",
        "CRITICAL",
    }

    # Methods accepted by scipy.integrate.solve_ivp
    VALID_METHODS = {"RK45", "RK23", "DOP853", "Radau", "BDF", "LSODA"}

    # Unrelaxed fraction of the first-pass gap above which a fixed pass count warns
    RELAXATION_WARN_LEVEL = 1e-4

    @staticmethod
    def validate_config(cfg: dict[str, Any]) -> None:
        """
        Run every check on a merged parameter dict.

        Parameters
        ----------
        cfg : dict
            Configuration dictionary to validate.

        Raises
        ------
        ValueError
            If any validation check fails.
        """
        # Unknown keys are almost always typos
        ConfigValidator._validate_keys(cfg)
        ConfigValidator._validate_types(cfg)
        ConfigValidator._validate_ranges(cfg)
        ConfigValidator._validate_relationships(cfg)
        if "logging" in cfg:
            ConfigValidator._validate_logging(cfg["logging"])

    @staticmethod
    def _validate_keys(cfg: dict[str, Any]) -> None:
        from sfcsim.config.schema import Config

        known = set(Config.__dataclass_fields__) | {"logging"}
        unknown = sorted(set(cfg) - known)
        if unknown:
            raise ValueError(
                f"Unknown config parameter(s): {unknown}. "
                f"Available parameters: {sorted(known)}"
            )

    @staticmethod
    def _validate_types(cfg: dict[str, Any]) -> None:
        """Counts are ints; parameters and times are floats (ints accepted)."""
        # n_samples may be None
        int_params = ["n_periods", "max_iter", "n_samples"]

        float_params = [
            "alpha1",
            "alpha2",
            "theta",
            "gov_before",
            "gov_after",
            "t_switch",
            "t_start",
            "t_end",
            "rtol",
            "atol",
        ]

        optional_float_params = ["tol"]

        for key in int_params:
            if key not in cfg:
                continue
            val = cfg[key]
            if key == "n_samples" and val is None:
                continue
            if isinstance(val, bool) or not isinstance(val, int):
                raise ValueError(
                    f"Config parameter '{key}' must be int, got {type(val).__name__}"
                )

        for key in float_params + optional_float_params:
            if key not in cfg:
                continue
            val = cfg[key]
            if val is None and key in optional_float_params:
                continue
            if isinstance(val, bool) or not isinstance(val, (int, float)):
                raise ValueError(
                    f"Config parameter '{key}' must be float, got {type(val).__name__}"
                )
            if not math.isfinite(val):
                raise ValueError(
                    f"Config parameter '{key}' must be finite, got {val}"
                )

        if "method" in cfg:
            val = cfg["method"]
            if not isinstance(val, str):
                raise ValueError(
                    f"Config parameter 'method' must be str, got {type(val).__name__}"
                )

    @staticmethod
    def _validate_ranges(cfg: dict[str, Any]) -> None:
        """Propensities and tax rate in [0, 1], positive horizons and tolerances."""
        # (min, max), None = unbounded
        constraints = {
            # Propensities to consume
            "alpha1": (0.0, 1.0),
            "alpha2": (0.0, 1.0),
            # Tax rate (zero handled separately below)
            "theta": (0.0, 1.0),
            # Horizons and iteration bounds
            "n_periods": (2, None),
            "max_iter": (1, None),
            "n_samples": (2, None),
        }

        for key, (min_val, max_val) in constraints.items():
            if key not in cfg:
                continue

            val = cfg[key]

            if val is None:
                continue

            if min_val is not None and val < min_val:
                raise ValueError(
                    f"Config parameter '{key}' must be >= {min_val}, got {val}"
                )

            if max_val is not None and val > max_val:
                raise ValueError(
                    f"Config parameter '{key}' must be <= {max_val}, got {val}"
                )

        # Steady-state income is g / theta
        if "theta" in cfg and cfg["theta"] == 0:
            raise ValueError(
                "Config parameter 'theta' must be > 0 "
                "(steady-state income g/theta is undefined for theta=0)"
            )

        # Strictly positive tolerances
        for key in ("tol", "rtol", "atol"):
            val = cfg.get(key)
            if val is not None and val <= 0:
                raise ValueError(f"Config parameter '{key}' must be > 0, got {val}")

        if "t_start" in cfg and "t_end" in cfg and cfg["t_end"] <= cfg["t_start"]:
            raise ValueError(
                f"Config parameter 't_end' ({cfg['t_end']}) must be greater "
                f"than 't_start' ({cfg['t_start']})"
            )

        if "method" in cfg and cfg["method"] not in ConfigValidator.VALID_METHODS:
            raise ValueError(
                f"Invalid integration method '{cfg['method']}'. "
                f"Must be one of {sorted(ConfigValidator.VALID_METHODS)}"
            )

    @staticmethod
    def _validate_relationships(cfg: dict[str, Any]) -> None:
        """Warn about legal but probably unintended parameter combinations."""
        # Warn if the shock never happens within either horizon
        t_switch = cfg.get("t_switch")
        if t_switch is not None:
            n_periods = cfg.get("n_periods")
            t_end = cfg.get("t_end")
            if n_periods is not None and t_switch > n_periods:
                warnings.warn(
                    f"t_switch ({t_switch}) > n_periods ({n_periods}). "
                    "The discrete run will never see the expenditure shock.",
                    UserWarning,
                    stacklevel=3,
                )
            if t_end is not None and t_switch > t_end:
                warnings.warn(
                    f"t_switch ({t_switch}) > t_end ({t_end}). "
                    "The continuous run will never see the expenditure shock.",
                    UserWarning,
                    stacklevel=3,
                )

        # Warn if a fixed pass count leaves periods visibly unrelaxed
        if (
            cfg.get("tol") is None
            and "alpha1" in cfg
            and "theta" in cfg
            and "max_iter" in cfg
        ):
            remaining = relaxation_residual(
                cfg["alpha1"], cfg["theta"], cfg["max_iter"]
            )
            if remaining > ConfigValidator.RELAXATION_WARN_LEVEL:
                warnings.warn(
                    f"alpha1*(1-theta) = {cfg['alpha1'] * (1 - cfg['theta']):.3f}: "
                    f"after max_iter={cfg['max_iter']} passes a fraction "
                    f"{remaining:.1e} of the initial gap remains unrelaxed. "
                    "Increase max_iter or set tol.",
                    UserWarning,
                    stacklevel=3,
                )

    @staticmethod
    def _validate_logging(log_config: dict[str, Any]) -> None:
        """Check the ``logging`` section: ``default_level`` and ``modules``."""
        if not isinstance(log_config, dict):
            raise ValueError(
                f"Logging config must be dict, got {type(log_config).__name__}"
            )

        if "default_level" in log_config:
            level = log_config["default_level"]
            if not isinstance(level, str):
                raise ValueError(
                    f"Logging default_level must be str, got {type(level).__name__}"
                )

            if level.upper() not in ConfigValidator.VALID_LOG_LEVELS:
                raise ValueError(
                    f"Invalid log level '{level}'. "
                    f"Must be one of {ConfigValidator.VALID_LOG_LEVELS}"
                )

        if "modules" in log_config:
            modules = log_config["modules"]
            if not isinstance(modules, dict):
                raise ValueError(
                    f"Logging modules must be dict, got {type(modules).__name__}"
                )

            for module_name, level in modules.items():
                if not isinstance(module_name, str):
                    raise ValueError(
                        f"Module name must be str, got {type(module_name).__name__}"
                    )

                if not isinstance(level, str):
                    raise ValueError(
                        f"Log level for module '{module_name}' must be str, "
                        f"got {type(level).__name__}"
                    )

                if level.upper() not in ConfigValidator.VALID_LOG_LEVELS:
                    raise ValueError(
                        f"Invalid log level '{level}' for module '{module_name}'. "
                        f"Must be one of {ConfigValidator.VALID_LOG_LEVELS}"
                    )
