"""Stimulus configuration loading and validation."""

from landolt_stimulus.configs.loader import (
    ConfigError,
    OutputConfig,
    PaletteConfig,
    StimulusConfig,
    load_config,
)

__all__ = [
    "ConfigError",
    "OutputConfig",
    "PaletteConfig",
    "StimulusConfig",
    "load_config",
]
