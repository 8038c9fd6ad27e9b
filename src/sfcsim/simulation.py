# src/sfcsim/simulation.py
from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Literal, Mapping

# noinspection PyPackageRequirements
import yaml

from sfcsim import logging as sim_logging
from sfcsim.config import Config, ConfigValidator
from sfcsim.continuous import run_continuous
from sfcsim.discrete import run_discrete
from sfcsim.logging import getLogger
from sfcsim.results import SimulationResults
from sfcsim.schedule import StepSchedule
from sfcsim.steady_state import steady_state

__all__ = ["Simulation"]

log = getLogger(__name__)

Engine = Literal["discrete", "continuous"]


# helpers
# ---------------------------------------------------------------------------
def _read_yaml(obj: str | Path | Mapping[str, Any] | None) -> Dict[str, Any]:
    """Return a plain dict – {} if *obj* is None."""
    if obj is None:
        return {}
    if isinstance(obj, Mapping):
        return dict(obj)
    p = Path(obj)
    with p.open("rt", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, Mapping):
        raise TypeError(f"config root must be mapping, got {type(data)!r}")
    return dict(data)


def _package_defaults() -> Dict[str, Any]:
    """Load sfcsim/defaults.yml"""
    txt = resources.files("sfcsim").joinpath("defaults.yml").read_text()
    return yaml.safe_load(txt) or {}


# Simulation
# ---------------------------------------------------------------------
@dataclass(slots=True)
class Simulation:
    """
    Facade that runs Model SIM with either engine from one configuration.

    Both engines share the same Config and the same expenditure schedule;
    every run allocates its own series and leaves the Simulation untouched.
    """

    config: Config
    schedule: StepSchedule

    @property
    def alpha1(self) -> float:
        """Propensity to consume out of disposable income."""
        return self.config.alpha1

    @property
    def alpha2(self) -> float:
        """Propensity to consume out of wealth."""
        return self.config.alpha2

    @property
    def theta(self) -> float:
        """Tax rate."""
        return self.config.theta

    # Constructor
    # ---------------------------------------------------------------------
    @classmethod
    def init(
        cls,
        config: str | Path | Mapping[str, Any] | None = None,
        **overrides: Any,  # anything here wins last
    ) -> "Simulation":
        """
        Build a Simulation.

        Order of precedence (later overrides earlier):

            1. package defaults  (sfcsim/defaults.yml)
            2. *config*  (Path / str / Mapping / None)
            3. explicit keyword arguments (**overrides)
        """
        # 1 + 2 + 3 → one merged dict
        cfg_dict: Dict[str, Any] = _package_defaults()
        cfg_dict.update(_read_yaml(config))
        cfg_dict.update(overrides)

        ConfigValidator.validate_config(cfg_dict)

        log_config = cfg_dict.pop("logging", None)
        if log_config:
            sim_logging.configure(log_config)

        cfg = Config(**cfg_dict)
        return cls(config=cfg, schedule=StepSchedule.from_config(cfg))

    # public API
    # ---------------------------------------------------------------------
    def run(self, engine: Engine = "discrete") -> SimulationResults:
        """
        Run one engine.

        Parameters
        ----------
        engine : {'discrete', 'continuous'}
            Which formulation to solve.

        Returns
        -------
        SimulationResults
        """
        if engine == "discrete":
            return self.run_discrete()
        if engine == "continuous":
            return self.run_continuous()
        raise ValueError(
            f"Unknown engine '{engine}'. Available engines: ['discrete', 'continuous']"
        )

    def run_discrete(self) -> SimulationResults:
        """Period-by-period relaxation over ``config.n_periods`` periods."""
        return run_discrete(self.config, self.schedule)

    def run_continuous(self) -> SimulationResults:
        """ODE integration over ``(config.t_start, config.t_end)``."""
        return run_continuous(self.config, self.schedule)

    def run_both(self) -> dict[str, SimulationResults]:
        """Run both engines with identical parameters."""
        return {
            "discrete": self.run_discrete(),
            "continuous": self.run_continuous(),
        }

    def steady_state(self, gov: float | None = None) -> dict[str, float]:
        """Analytical steady state (post-shock spending unless *gov* is given)."""
        return steady_state(self.config, gov)
