"""
Steady-state solution of Model SIM.

With stocks no longer changing, the government budget balances
(``g = theta * y``), so steady-state income is ``y* = g / theta``. The
value is a reference curve only; it never feeds back into the dynamics.

The module also holds the two contraction rates that govern how fast the
discrete model gets there: across periods (:func:`adjustment_factor`) and
within a period (:func:`relaxation_residual`).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, overload

import numpy as np

from sfcsim.typing import Float1D

if TYPE_CHECKING:  # pragma: no cover
    from sfcsim.config import Config


@overload
def steady_state_income(gov: float, theta: float) -> float: ...


@overload
def steady_state_income(gov: Float1D, theta: float) -> Float1D: ...


def steady_state_income(gov: float | Float1D, theta: float) -> float | Float1D:
    """
    Steady-state income ``y* = gov / theta``.

    Parameters
    ----------
    gov : float or Float1D
        Government expenditure, scalar or evaluated on a time grid.
    theta : float
        Tax rate.

    Returns
    -------
    float or Float1D
        Same shape as *gov*.

    Raises
    ------
    ValueError
        If ``theta == 0``.
    """
    if theta == 0:
        raise ValueError("steady-state income is undefined for theta=0")
    if np.isscalar(gov):
        return float(gov) / theta  # type: ignore[arg-type]
    return np.asarray(gov, dtype=np.float64) / theta


def adjustment_factor(alpha1: float, alpha2: float, theta: float) -> float:
    """
    Per-period persistence of the household money gap in the discrete model.

    Once a period is fully relaxed, ``h_h`` follows
    ``h_h[t] - h_h* = k * (h_h[t-1] - h_h*)`` with

        k = 1 - alpha2 * theta / (1 - alpha1 * (1 - theta))

    Income approaches its steady state monotonically iff ``0 <= k < 1``.
    """
    multiplier = 1.0 - alpha1 * (1.0 - theta)
    if multiplier == 0:
        raise ValueError("alpha1*(1-theta) == 1: the income multiplier is infinite")
    return 1.0 - alpha2 * theta / multiplier


def relaxation_residual(alpha1: float, theta: float, n_passes: int) -> float:
    """
    Fraction of a period's initial gap left after *n_passes* relaxation passes.

    Each pass of the within-period relaxation shrinks the distance to the
    period's fixed point by ``alpha1 * (1 - theta)``.
    """
    return abs(alpha1 * (1.0 - theta)) ** n_passes


def steady_state(cfg: Config, gov: float | None = None) -> dict[str, float]:
    """
    Full analytical steady state for a given expenditure level.

    Parameters
    ----------
    cfg : Config
        Run parameters.
    gov : float, optional
        Expenditure level. Defaults to the post-shock level ``cfg.gov_after``.

    Returns
    -------
    dict[str, float]
        Steady-state values of ``y, yd, c, g, tax, h_h``.

    Raises
    ------
    ValueError
        If ``theta == 0``, or ``alpha2 == 0`` with nonzero spending.
    """
    g = cfg.gov_after if gov is None else gov
    y = steady_state_income(g, cfg.theta)
    yd = (1.0 - cfg.theta) * y
    if cfg.alpha2 == 0:
        if yd != 0:
            raise ValueError(
                "alpha2=0: households never spend out of wealth, "
                "so money balances have no finite steady state"
            )
        h_h = 0.0
    else:
        # c* = yd*  =>  alpha1*yd + alpha2*h_h = yd
        h_h = (1.0 - cfg.alpha1) * yd / cfg.alpha2
    return {
        "y": y,
        "yd": yd,
        "c": yd,
        "g": float(g),
        "tax": cfg.theta * y,
        "h_h": h_h,
    }
