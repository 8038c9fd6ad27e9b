"""
Simulation results container for sfcsim.

This module provides the SimulationResults class that encapsulates the
output of one engine run (a time grid plus aligned series) and provides
convenient methods for data access and export to pandas DataFrames.

Note: pandas is an optional dependency. It is only required when using
DataFrame export methods (to_dataframe, summary).
Install with: pip install sfcsim[pandas] or pip install pandas
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray

from sfcsim.state import PeriodState
from sfcsim.typing import Float1D

if TYPE_CHECKING:  # pragma: no cover
    from pandas import DataFrame


def _import_pandas() -> Any:
    """
    Lazily import pandas with helpful error message if not installed.

    Returns
    -------
    module
        The pandas module.

    Raises
    ------
    ImportError
        If pandas is not installed.
    """
    try:
        import pandas as pd

        return pd
    except ImportError:  # pragma: no cover
        raise ImportError(
            "pandas is required for DataFrame export methods. "
            "Install it with: pip install pandas"
        ) from None


# Column order used for exports; anything else follows alphabetically
_PREFERRED_ORDER = ["y", "y_star", "yd", "c", "g", "tax", "h_h", "h_s", "n", "w"]


@dataclass
class SimulationResults:
    """
    Container for the output of one engine run.

    Attributes
    ----------
    engine : {'discrete', 'continuous'}
        Engine that produced the run.
    time : Float1D
        Period numbers (discrete) or sample times (continuous), strictly
        increasing.
    series : dict
        Time series keyed by variable name (``y, yd, c, g, tax, h_h, h_s,
        n, w, y_star``), each aligned with ``time``.
    config : dict
        Configuration parameters used for this run.
    metadata : dict
        Run metadata (runtime, relaxation passes, solver statistics, etc.).
    records : tuple of PeriodState
        Per-period records (discrete engine only, empty otherwise).

    Examples
    --------
    >>> sim = sfcsim.Simulation.init()
    >>> results = sim.run_discrete()
    >>> results["y"][-1]
    99.98...
    >>> df = results.to_dataframe()
    """

    engine: Literal["discrete", "continuous"]
    time: Float1D
    series: dict[str, NDArray[Any]] = field(default_factory=dict)
    config: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)
    records: tuple[PeriodState, ...] = ()

    def __post_init__(self) -> None:
        self.time = np.asarray(self.time, dtype=np.float64)
        for name, arr in self.series.items():
            arr = np.asarray(arr)
            if arr.shape != self.time.shape:
                raise ValueError(
                    f"series '{name}' has shape {arr.shape}, "
                    f"expected {self.time.shape} to match time"
                )
            self.series[name] = arr

        # Results are read-only once a run completes
        self.time.flags.writeable = False
        for arr in self.series.values():
            arr.flags.writeable = False

    def __getitem__(self, name: str) -> NDArray[Any]:
        try:
            return self.series[name]
        except KeyError:
            raise KeyError(
                f"Variable '{name}' not found. Available: {self.variables}"
            ) from None

    def __contains__(self, name: object) -> bool:
        return name in self.series

    def __len__(self) -> int:
        return int(self.time.size)

    @property
    def variables(self) -> list[str]:
        """Series names, in export order."""
        known = [v for v in _PREFERRED_ORDER if v in self.series]
        return known + sorted(set(self.series) - set(known))

    def at(self, t: float) -> dict[str, float]:
        """
        Values at the sample closest to *t*.

        Parameters
        ----------
        t : float
            Period or instant.

        Returns
        -------
        dict[str, float]
            ``{"time": ..., <variable>: ...}`` for the nearest sample.
        """
        idx = int(np.argmin(np.abs(self.time - t)))
        row = {"time": float(self.time[idx])}
        row.update({name: float(self.series[name][idx]) for name in self.variables})
        return row

    def final_state(self) -> dict[str, float]:
        """Values at the last sample of the run."""
        return self.at(float(self.time[-1]))

    def sample(
        self, times: ArrayLike, variables: list[str] | None = None
    ) -> dict[str, Float1D]:
        """
        Linearly interpolate series onto another time grid.

        Used to compare runs with different grids, e.g. the continuous
        trajectory at integer times against discrete periods.

        Parameters
        ----------
        times : array_like
            Target times; must lie within ``[time[0], time[-1]]``.
        variables : list of str, optional
            Series to interpolate. Defaults to all.

        Returns
        -------
        dict[str, Float1D]
        """
        t = np.asarray(times, dtype=np.float64)
        if t.size and (t.min() < self.time[0] or t.max() > self.time[-1]):
            raise ValueError(
                f"sample times must lie within [{self.time[0]}, {self.time[-1]}]"
            )
        names = variables if variables is not None else self.variables
        return {name: np.interp(t, self.time, self[name]) for name in names}

    def to_dataframe(self, variables: list[str] | None = None) -> DataFrame:
        """
        Export results to a pandas DataFrame.

        Parameters
        ----------
        variables : list of str, optional
            Specific variables to include. If None, includes all variables.

        Returns
        -------
        pd.DataFrame
            One column per variable, indexed by ``period`` (discrete) or
            ``time`` (continuous).

        Raises
        ------
        ImportError
            If pandas is not installed.
        """
        pd = _import_pandas()

        names = variables if variables is not None else self.variables
        index_name = "period" if self.engine == "discrete" else "time"
        index = self.time.astype(np.int64) if self.engine == "discrete" else self.time
        return pd.DataFrame(
            {name: self[name] for name in names},
            index=pd.Index(index, name=index_name),
        )

    def summary(self) -> DataFrame:
        """
        Get summary statistics for every series.

        Returns
        -------
        pd.DataFrame
            Summary statistics (count, mean, std, min, quartiles, max, final)
            with one row per variable.
        """
        df = self.to_dataframe()
        summary = df.describe().T
        summary["final"] = df.iloc[-1]
        return summary

    def __repr__(self) -> str:
        """String representation showing summary information."""
        return (
            f"SimulationResults("
            f"engine={self.engine}, "
            f"samples={len(self)}, "
            f"span=[{self.time[0]:g}, {self.time[-1]:g}], "
            f"variables=[{', '.join(self.variables)}])"
        )
