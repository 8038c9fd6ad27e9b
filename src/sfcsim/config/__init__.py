"""Configuration module for sfcsim."""

from sfcsim.config.schema import Config
from sfcsim.config.validator import ConfigValidator

__all__ = ["Config", "ConfigValidator"]
