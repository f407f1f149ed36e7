"""Configuration loading, schema, and defaults."""

from cocolog.config.loader import ConfigError, load_config
from cocolog.config.schema import CocoLogConfig, GitConfig, OutputConfig, OutputFormat

__all__ = [
    "CocoLogConfig",
    "ConfigError",
    "GitConfig",
    "OutputConfig",
    "OutputFormat",
    "load_config",
]
