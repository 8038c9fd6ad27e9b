"""
Government expenditure schedule.

Government spending is the only exogenous variable of Model SIM. It is a
step function of simulated time: ``before`` up to the shock, ``after`` from
the shock onwards. Both engines and the steady-state calculator evaluate
spending through one StepSchedule so the step logic lives in one place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike

from sfcsim.typing import Float1D

if TYPE_CHECKING:  # pragma: no cover
    from sfcsim.config import Config


@dataclass(slots=True, frozen=True)
class StepSchedule:
    """
    Permanent step change in government expenditure.

    Parameters
    ----------
    before : float
        Expenditure level for ``t < switch``.
    after : float
        Expenditure level for ``t >= switch``.
    switch : float
        Period or instant of the shock.

    Examples
    --------
    >>> sched = StepSchedule(before=0.0, after=20.0, switch=15.0)
    >>> sched.at(14.999), sched.at(15)
    (0.0, 20.0)
    """

    before: float
    after: float
    switch: float

    @classmethod
    def from_config(cls, cfg: Config) -> StepSchedule:
        return cls(
            before=float(cfg.gov_before),
            after=float(cfg.gov_after),
            switch=float(cfg.t_switch),
        )

    def at(self, t: float) -> float:
        """Expenditure level in force at period/instant *t*."""
        return self.after if t >= self.switch else self.before

    def over(self, times: ArrayLike) -> Float1D:
        """Vectorised :meth:`at` over a grid of periods or instants."""
        t = np.asarray(times, dtype=np.float64)
        return np.where(t >= self.switch, self.after, self.before).astype(np.float64)
