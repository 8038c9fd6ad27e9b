"""
Custom logging configuration for sfcsim.

Extends Python's standard logging with a custom DEEP_DEBUG level (5)
for very verbose debugging output (one line per relaxation pass).
Provides SimLogger class with per-module log level configuration support.

Log Levels
----------
- CRITICAL (50): Critical errors
- ERROR (40): Errors
- WARNING (30): Warnings
- INFO (20): Informational messages (default)
- DEBUG (10): Debug messages (one line per period)
- DEEP_DEBUG (5): Very verbose debug messages (one line per relaxation pass)

Examples
--------
Use logger in a module:

>>> from sfcsim import logging
>>> log = logging.getLogger("sfcsim.discrete")
>>> log.info("Run starting")
>>> log.deep("Pass 3: residual=1.2e-04")

Configure per-module log levels:

>>> import sfcsim
>>> log_config = {
...     "default_level": "INFO",
...     "modules": {"discrete": "DEBUG", "continuous": "WARNING"},
... }
>>> sim = sfcsim.Simulation.init(logging=log_config)

See Also
--------
sfcsim.simulation.Simulation.init : Applies the ``logging`` config section
"""

import logging
from typing import Any

(CRITICAL, ERROR, WARNING, INFO, DEBUG) = (
    logging.CRITICAL,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
)
DEEP_DEBUG = 5
logging.addLevelName(DEEP_DEBUG, "DEEP")


class SimLogger(logging.Logger):
    """
    Custom logger with DEEP_DEBUG level support.

    Extends Python's Logger to add the `deep()` method for very verbose
    debugging output (level 5).
    """

    def deep(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """
        Log message at DEEP_DEBUG level (5).

        Parameters
        ----------
        msg : str
            Message format string.
        *args : Any
            Arguments for message formatting.
        **kwargs : Any
            Additional logging kwargs.
        """
        if self.isEnabledFor(DEEP_DEBUG):
            self._log(DEEP_DEBUG, msg, args, **kwargs)


# Make the logging module hand out our subclass from now on
logging.setLoggerClass(SimLogger)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)


def getLogger(name: str | None = None) -> SimLogger:
    """
    Get a SimLogger instance.

    Convenience wrapper around logging.getLogger() that returns
    a SimLogger instance with DEEP_DEBUG support.

    Parameters
    ----------
    name : str, optional
        Logger name. If None, returns root logger.

    Returns
    -------
    SimLogger
        Logger instance with deep() method.
    """
    return logging.getLogger(name)  # type: ignore[return-value]


def configure(log_config: dict[str, Any]) -> None:
    """
    Apply a ``logging`` configuration section to the sfcsim loggers.

    Parameters
    ----------
    log_config : dict
        Logging configuration with keys:
        - default_level: str (e.g., 'INFO', 'DEBUG', 'DEEP_DEBUG')
        - modules: dict[str, str] (per-module overrides, e.g. {'discrete': 'DEBUG'})
    """
    default_level = log_config.get("default_level", "INFO")
    logging.getLogger("sfcsim").setLevel(_level_number(default_level))

    for module_name, level in log_config.get("modules", {}).items():
        logging.getLogger(f"sfcsim.{module_name}").setLevel(_level_number(level))


def _level_number(level: str) -> int:
    level = level.upper()
    if level in ("DEEP", "DEEP_DEBUG"):
        return DEEP_DEBUG
    return int(getattr(logging, level))
