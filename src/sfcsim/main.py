"""Command-line runner for sfcsim."""

from __future__ import annotations

import argparse
from typing import Any, Sequence

from sfcsim.logging import getLogger
from sfcsim.results import SimulationResults
from sfcsim.simulation import Simulation

log = getLogger("sfcsim.main")


def _cli(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Run Model SIM after a permanent change in government spending."
    )
    p.add_argument("--config", type=str, default=None, help="YAML config file")
    p.add_argument(
        "--engine",
        choices=["discrete", "continuous", "both"],
        default="discrete",
        help="Model formulation to solve",
    )
    p.add_argument("--periods", type=int, default=None, help="Discrete periods")
    p.add_argument("--t-end", type=float, default=None, help="End of continuous span")
    p.add_argument("--gov-after", type=float, default=None, help="Spending after shock")
    p.add_argument("--t-switch", type=float, default=None, help="Time of the shock")
    p.add_argument("--log-level", type=str, default=None, help="sfcsim log level")
    p.add_argument("--plot", type=str, default=None, help="Save Figure 3.1 here")
    return p.parse_args(argv)


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.periods is not None:
        overrides["n_periods"] = args.periods
    if args.t_end is not None:
        overrides["t_end"] = args.t_end
    if args.gov_after is not None:
        overrides["gov_after"] = args.gov_after
    if args.t_switch is not None:
        overrides["t_switch"] = args.t_switch
    if args.log_level is not None:
        overrides["logging"] = {"default_level": args.log_level.upper()}
    return overrides


def _report(name: str, results: SimulationResults) -> None:
    final = results.final_state()
    log.info(
        f"[{name}] t={final['time']:g}: Y={final['y']:.4f} Y*={final['y_star']:.4f} "
        f"C={final['c']:.4f} H_h={final['h_h']:.4f} H_s={final['h_s']:.4f}"
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = _cli(argv)

    sim = Simulation.init(config=args.config, **_overrides(args))

    if args.engine == "both":
        runs = sim.run_both()
    else:
        runs = {args.engine: sim.run(args.engine)}

    for name, results in runs.items():
        _report(name, results)

    if args.plot is not None:
        import matplotlib.pyplot as plt

        from sfcsim.viz import plot_income, save_figure

        _, axes = plt.subplots(
            1, len(runs), figsize=(8 * len(runs), 5), squeeze=False
        )
        for ax, results in zip(axes.flat, runs.values(), strict=True):
            plot_income(results, ax=ax)
        path = save_figure(axes.flat[0], args.plot)
        log.info(f"Figure saved to {path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
