"""
Configuration dataclass for simulation parameters.

This module defines the Config dataclass, which groups all run parameters
in one immutable object. Config instances are created by Simulation.init()
after merging defaults, user config, and kwargs.

Design Notes
------------
- Immutable (frozen=True) to prevent accidental modification
- Memory-efficient (slots=True)
- Behavioural and shock parameters are required; engine options have defaults
- Simple dataclass, no validation - validation happens in ConfigValidator

See Also
--------
ConfigValidator : Centralized validation for configuration parameters
sfcsim.simulation.Simulation.init : Creates Config from merged parameters
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class Config:
    """
    Immutable configuration for one Model SIM run.

    Parameters
    ----------
    alpha1 : float
        Propensity to consume out of disposable income (0 to 1).
    alpha2 : float
        Propensity to consume out of the lagged household money stock (0 to 1).
    theta : float
        Tax rate on income (strictly positive, at most 1).
    gov_before : float
        Government expenditure before the shock.
    gov_after : float
        Government expenditure from the shock onwards.
    t_switch : float
        Period (discrete) or instant (continuous) at which ``gov_after``
        starts to apply.
    n_periods : int, optional
        Number of periods of the discrete engine, including the quiescent
        first period. Default: 65.
    max_iter : int, optional
        Relaxation passes per period. Default: 20.
    tol : float or None, optional
        If given, stop relaxing a period once successive passes differ by
        at most ``tol`` and fail if ``max_iter`` passes are not enough.
        Default: None (always run exactly ``max_iter`` passes).
    t_start : float, optional
        Start of the continuous time span. Default: 0.0.
    t_end : float, optional
        End of the continuous time span. Default: 65.0.
    method : str, optional
        ``scipy.integrate.solve_ivp`` method. Default: "RK45".
    rtol : float, optional
        Relative error tolerance of the integrator. Default: 1e-8.
    atol : float, optional
        Absolute error tolerance of the integrator. Default: 1e-8.
    n_samples : int or None, optional
        If given, sample the continuous trajectory on ``n_samples`` evenly
        spaced times including both endpoints. Default: None (the solver's
        own accepted steps).

    Examples
    --------
    >>> from sfcsim.config import Config
    >>> cfg = Config(
    ...     alpha1=0.6,
    ...     alpha2=0.4,
    ...     theta=0.2,
    ...     gov_before=0.0,
    ...     gov_after=20.0,
    ...     t_switch=15.0,
    ... )
    >>> cfg.max_iter
    20

    Config is immutable:

    >>> cfg.theta = 0.3  # doctest: +SKIP
    FrozenInstanceError: cannot assign to field 'theta'
    """

    # Behavioural parameters
    alpha1: float
    alpha2: float
    theta: float

    # Shock schedule
    gov_before: float
    gov_after: float
    t_switch: float

    # Discrete engine
    n_periods: int = 65
    max_iter: int = 20
    tol: float | None = None

    # Continuous engine
    t_start: float = 0.0
    t_end: float = 65.0
    method: str = "RK45"
    rtol: float = 1e-8
    atol: float = 1e-8
    n_samples: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict copy of all parameters."""
        return asdict(self)
