"""Per-period record of the discrete-time engine."""

from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(slots=True, frozen=True)
class PeriodState:
    """
    Solved values of one period of the discrete model.

    Records are produced once by the discrete engine and never modified
    afterwards; a run is the ordered tuple of its records.
    """

    period: int

    # flows
    y: float  # income / output
    yd: float  # disposable income
    c: float  # consumption
    g: float  # government expenditure
    tax: float  # taxes
    n: float  # employment
    w: float  # wage rate

    # stocks (end of period)
    h_h: float  # money held by households
    h_s: float  # money supplied by government (cumulative deficit)

    # reference
    y_star: float  # steady-state income for this period's g

    # relaxation passes used to solve the period (0 for the initial state)
    iterations: int = 0

    @classmethod
    def initial(cls, period: int = 1, w: float = 1.0) -> PeriodState:
        """Quiescent starting period: zero flows and stocks, unit wage."""
        return cls(
            period=period,
            y=0.0,
            yd=0.0,
            c=0.0,
            g=0.0,
            tax=0.0,
            n=0.0,
            w=w,
            h_h=0.0,
            h_s=0.0,
            y_star=0.0,
        )

    @classmethod
    def series_names(cls) -> list[str]:
        """Names of the time-series fields (everything except bookkeeping)."""
        return [f.name for f in fields(cls) if f.name not in ("period", "iterations")]
