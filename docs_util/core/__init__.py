"""Core types shared by every docs-util command."""

from .config import Config, ConfigError, EnvVar, Product, ProductConfig, load_config
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "Config",
    "ConfigError",
    "EnvVar",
    "Product",
    "ProductConfig",
    "load_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
