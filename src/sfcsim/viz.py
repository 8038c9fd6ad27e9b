"""
Plotting helpers for Model SIM results.

Reproduces the charts of chapter 3 of Godley & Lavoie (2007):

- Figure 3.1: income Y and steady-state income Y* after a permanent
  increase in government expenditure
- Figure 3.2: disposable income and consumption

matplotlib is imported lazily so the engines never depend on it.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import ArrayLike

from sfcsim.results import SimulationResults

if TYPE_CHECKING:  # pragma: no cover
    from matplotlib.axes import Axes

_FONT_SIZE = 10


def plot_series(
    x: ArrayLike,
    ys: Sequence[ArrayLike],
    *,
    labels: Sequence[str],
    colors: Sequence[str] | None = None,
    ax: Axes | None = None,
    xlabel: str = "",
    ylabel: str = "",
    title: str = "",
    ylim: tuple[float, float] | None = None,
    linewidth: float = 2.0,
) -> Axes:
    """
    Plot one or more series against a common x axis.

    Parameters
    ----------
    x : array_like
        Shared x values.
    ys : sequence of array_like
        Series aligned with *x*.
    labels : sequence of str
        Legend label per series.
    colors : sequence of str, optional
        Line colour per series.
    ax : Axes, optional
        Axes to draw on. A new figure is created if omitted.

    Returns
    -------
    Axes
        The axes drawn on.
    """
    import matplotlib.pyplot as plt

    if len(ys) != len(labels):
        raise ValueError(f"got {len(ys)} series but {len(labels)} labels")
    if colors is not None and len(colors) != len(ys):
        raise ValueError(f"got {len(ys)} series but {len(colors)} colors")

    if ax is None:
        _, ax = plt.subplots(figsize=(8, 5))

    x = np.asarray(x)
    for i, (y, label) in enumerate(zip(ys, labels, strict=True)):
        kwargs: dict[str, Any] = {"label": label, "linewidth": linewidth}
        if colors is not None:
            kwargs["color"] = colors[i]
        ax.plot(x, np.asarray(y), **kwargs)

    ax.set_xlabel(xlabel, fontsize=_FONT_SIZE)
    ax.set_ylabel(ylabel, fontsize=_FONT_SIZE)
    ax.set_title(title, fontsize=_FONT_SIZE)
    ax.tick_params(labelsize=_FONT_SIZE)
    if ylim is not None:
        ax.set_ylim(*ylim)
    ax.legend(fontsize=_FONT_SIZE)
    return ax


def _plot_window(results: SimulationResults) -> slice:
    # The quiescent first period carries no information in the discrete run
    return slice(1, None) if results.engine == "discrete" else slice(None)


def _xlabel(results: SimulationResults) -> str:
    return "Periods" if results.engine == "discrete" else "Time"


def plot_income(
    results: SimulationResults,
    ax: Axes | None = None,
    ylim: tuple[float, float] | None = (0, 130),
) -> Axes:
    """Figure 3.1: income Y against steady-state income Y*."""
    window = _plot_window(results)
    return plot_series(
        results.time[window],
        [results["y_star"][window], results["y"][window]],
        labels=["Steady state solution Y*", "Income Y"],
        colors=["blue", "green"],
        ax=ax,
        xlabel=_xlabel(results),
        title="Figure 3.1: Impact of Y and Y* of a permanent increase in G",
        ylim=ylim,
    )


def plot_consumption(results: SimulationResults, ax: Axes | None = None) -> Axes:
    """Figure 3.2: disposable income against consumption."""
    window = _plot_window(results)
    return plot_series(
        results.time[window],
        [results["yd"][window], results["c"][window]],
        labels=["Disposable income YD", "Consumption C"],
        colors=["red", "blue"],
        ax=ax,
        xlabel=_xlabel(results),
        title="Figure 3.2: Disposable income and consumption",
    )


def save_figure(ax: Axes, path: str | Path, dpi: int = 150) -> Path:
    """Save the figure owning *ax* and close it."""
    import matplotlib.pyplot as plt

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig = ax.get_figure()
    fig.savefig(path, bbox_inches="tight", dpi=dpi)
    plt.close(fig)
    return path
