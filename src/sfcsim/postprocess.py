"""
Derivation of secondary series from solved trajectories.

The ODE solver only returns the three state variables ``(y, h_h, h_s)``;
disposable income, consumption, taxes and the steady-state reference are
recomputed pointwise from them here. The discrete engine already fills every
variable, so its records are only stacked into arrays.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from sfcsim.schedule import StepSchedule
from sfcsim.state import PeriodState
from sfcsim.steady_state import steady_state_income
from sfcsim.typing import Float1D


def derive_auxiliary(
    y: Float1D,
    h_h: Float1D,
    times: Float1D,
    *,
    alpha1: float,
    alpha2: float,
    theta: float,
    schedule: StepSchedule,
    w: float = 1.0,
) -> dict[str, Float1D]:
    """
    Pointwise auxiliary series for a sampled continuous trajectory.

    Parameters
    ----------
    y, h_h : Float1D
        Solved income and household money, aligned with *times*.
    times : Float1D
        Sample times.
    alpha1, alpha2, theta : float
        Behavioural parameters.
    schedule : StepSchedule
        Government expenditure schedule.
    w : float, optional
        Wage rate (employment is ``y / w``). Default: 1.0.

    Returns
    -------
    dict[str, Float1D]
        ``yd, c, g, tax, n, w, y_star``, each the length of *times*.
    """
    y = np.asarray(y, dtype=np.float64)
    h_h = np.asarray(h_h, dtype=np.float64)
    if y.shape != h_h.shape or y.shape != np.shape(times):
        raise ValueError(
            f"y, h_h and times must have the same shape "
            f"(got {y.shape}, {h_h.shape}, {np.shape(times)})"
        )

    g = schedule.over(times)
    yd = (1.0 - theta) * y
    c = alpha1 * yd + alpha2 * h_h
    return {
        "yd": yd,
        "c": c,
        "g": g,
        "tax": theta * y,
        "n": y / w,
        "w": np.full_like(y, w),
        "y_star": steady_state_income(g, theta),
    }


def records_to_series(
    records: Sequence[PeriodState],
) -> tuple[Float1D, dict[str, Float1D]]:
    """
    Stack per-period records into period-indexed arrays.

    Returns
    -------
    periods : Float1D
        Period numbers.
    series : dict[str, Float1D]
        One array per :meth:`PeriodState.series_names` entry, plus
        ``iterations``.
    """
    if not records:
        raise ValueError("cannot build series from an empty run")

    periods = np.array([r.period for r in records], dtype=np.float64)
    series = {
        name: np.array([getattr(r, name) for r in records], dtype=np.float64)
        for name in PeriodState.series_names()
    }
    series["iterations"] = np.array([r.iterations for r in records], dtype=np.int64)
    return periods, series
