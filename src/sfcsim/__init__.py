"""
sfcsim - Model SIM in Discrete and Continuous Time
==================================================

sfcsim solves Model SIM, the simplest stock-flow consistent model with
government money from chapter 3 of Godley & Lavoie (2007), after a
permanent step in government expenditure. Two formulations are provided:

- a discrete-time engine that solves each period by fixed-point relaxation
  of the simultaneous block (consumption, income, taxes, disposable income);
- a continuous-time engine in which income adjusts to demand with
  first-order dynamics, integrated with ``scipy.integrate.solve_ivp``.

Both converge to the same steady state ``Y* = G / theta``.

Quick Start
-----------
Reference calibration (alpha1=0.6, alpha2=0.4, theta=0.2, G: 0 -> 20 at 15):

>>> import sfcsim
>>> sim = sfcsim.Simulation.init()
>>> disc = sim.run_discrete()
>>> cont = sim.run_continuous()
>>> round(disc["y"][-1])
100

Custom configuration via kwargs or YAML file:

>>> sim = sfcsim.Simulation.init(theta=0.25, gov_after=25.0)
>>> sim = sfcsim.Simulation.init(config="my_config.yml", n_periods=120)

Public API
----------
Simulation
    Facade building a validated Config and running either engine.
SimulationResults
    Time grid plus aligned series, with pandas export.
Config, ConfigValidator
    Immutable run parameters and their validation.
StepSchedule
    Government expenditure step function shared by all components.
PeriodState
    Solved values of one discrete period.
relax_period, run_discrete, ConvergenceError
    Discrete-time engine.
vector_field, solve_trajectory, run_continuous, SolverError
    Continuous-time engine.
steady_state_income, steady_state
    Analytical steady state.

Notes
-----
- Configuration precedence: defaults.yml → user config → kwargs
- The discrete engine uses a fixed 20 relaxation passes per period unless a
  tolerance is configured

References
----------
Godley, W., Lavoie, M. (2007). Monetary Economics: An Integrated Approach to
    Credit, Money, Income, Production and Wealth. Palgrave Macmillan.
"""

from __future__ import annotations

__version__: str = "0.1.0"

from . import logging  # noqa: E402 (circular‑safe)
from .config import Config, ConfigValidator  # noqa: E402
from .continuous import (  # noqa: E402
    SolverError,
    run_continuous,
    solve_trajectory,
    vector_field,
)
from .discrete import ConvergenceError, relax_period, run_discrete  # noqa: E402
from .postprocess import derive_auxiliary, records_to_series  # noqa: E402
from .results import SimulationResults  # noqa: E402
from .schedule import StepSchedule  # noqa: E402
from .simulation import Simulation  # noqa: E402
from .state import PeriodState  # noqa: E402
from .steady_state import steady_state, steady_state_income  # noqa: E402

__all__ = [
    "__version__",
    "Simulation",
    "SimulationResults",
    "Config",
    "ConfigValidator",
    "StepSchedule",
    "PeriodState",
    # Discrete engine
    "ConvergenceError",
    "relax_period",
    "run_discrete",
    # Continuous engine
    "SolverError",
    "run_continuous",
    "solve_trajectory",
    "vector_field",
    # Post-processing and steady state
    "derive_auxiliary",
    "records_to_series",
    "steady_state",
    "steady_state_income",
    # Utilities
    "logging",
]
