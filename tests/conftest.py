"""Pytest configuration and fixtures for sfcsim tests."""

import os

import pytest

from sfcsim import logging
from sfcsim.config import Config
from sfcsim.schedule import StepSchedule
from sfcsim.simulation import Simulation


@pytest.fixture
def reference_config() -> Config:
    """Godley & Lavoie chapter 3 calibration, written out explicitly."""
    return Config(
        alpha1=0.6,
        alpha2=0.4,
        theta=0.2,
        gov_before=0.0,
        gov_after=20.0,
        t_switch=15.0,
        n_periods=65,
        max_iter=20,
        tol=None,
        t_start=0.0,
        t_end=65.0,
        method="RK45",
        rtol=1e-8,
        atol=1e-8,
        n_samples=None,
    )


@pytest.fixture
def reference_schedule(reference_config: Config) -> StepSchedule:
    return StepSchedule.from_config(reference_config)


@pytest.fixture
def sim() -> Simulation:
    """Simulation built from package defaults."""
    return Simulation.init()


@pytest.fixture(autouse=True)
def mute_sfcsim_logs(caplog):
    # - coverage runs: DEBUG so per-period logging code executes
    # - all other runs: ERROR for faster, quieter tests
    if os.environ.get("COVERAGE_RUN") == "true":
        level = logging.DEBUG
    else:
        level = logging.ERROR

    caplog.set_level(level, logger="sfcsim")
    logging.getLogger("sfcsim").setLevel(level)
