"""Core domain types and logic."""

from .config import Config, ConfigError, load_config, load_config_or_default
from .errors import CollaboratorUnavailable, ErrorCode, RunError, SpawnFailure
from .resource import FILE_SCHEME, Resource, parse_resource
from .result import Err, Ok, Result

__all__ = [
    # config
    "Config",
    "ConfigError",
    "load_config",
    "load_config_or_default",
    # errors
    "CollaboratorUnavailable",
    "ErrorCode",
    "RunError",
    "SpawnFailure",
    # resource
    "FILE_SCHEME",
    "Resource",
    "parse_resource",
    # result
    "Err",
    "Ok",
    "Result",
]
