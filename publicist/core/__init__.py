"""Core types: results, exit codes and configuration."""

from publicist.core.config import Config, ConfigError, load_config, load_config_or_default
from publicist.core.errors import ErrorCode
from publicist.core.result import Err, Ok, Result

__all__ = [
    "Config",
    "ConfigError",
    "Err",
    "ErrorCode",
    "Ok",
    "Result",
    "load_config",
    "load_config_or_default",
]
