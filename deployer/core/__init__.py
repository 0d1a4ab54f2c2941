"""Core types: results, errors, configuration."""

from .config import ConfigError, DeployerConfig, load_config
from .errors import DeployError, ErrorCode, exit_code_for
from .result import Err, Ok, Result, collect, is_err, is_ok

__all__ = [
    # config
    "ConfigError",
    "DeployerConfig",
    "load_config",
    # errors
    "DeployError",
    "ErrorCode",
    "exit_code_for",
    # result
    "Err",
    "Ok",
    "Result",
    "collect",
    "is_err",
    "is_ok",
]
