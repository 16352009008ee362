"""Configuration management for the crawl intake service."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, validate_config_file
from .models import (
    AppConfig,
    DispatchConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    QueueBackend,
    QueueConfig,
    ServerConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "ServerConfig",
    "DispatchConfig",
    "QueueConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "QueueBackend",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
