"""Configuration management for the opportunity site build."""

from .environment import EnvironmentConfig, apply_environment_overrides, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config
from .models import (
    AppConfig,
    DataConfig,
    FeedConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    OutputConfig,
    PathStyle,
    SiteConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "load_environment_config",
    "apply_environment_overrides",
    # Configuration models
    "AppConfig",
    "SiteConfig",
    "DataConfig",
    "FeedConfig",
    "OutputConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    "PathStyle",
    # Exceptions
    "ConfigurationError",
]
