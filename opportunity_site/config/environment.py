"""Environment variable loading and validation."""

import os
import re
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .exceptions import ConfigurationError
from .models import AppConfig

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_URL_PATTERN = re.compile(r"^https?://[^\s/]+", re.IGNORECASE)


class EnvironmentConfig:
    """Environment variable overrides."""

    def __init__(
        self,
        site_url: Optional[str] = None,
        data_dir: Optional[str] = None,
        data_base_url: Optional[str] = None,
        output_dir: Optional[str] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.site_url = site_url
        self.data_dir = data_dir
        self.data_base_url = data_base_url
        self.output_dir = output_dir
        self.log_level = log_level.upper() if log_level else None
        self.environment = environment or "local"


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    All variables are optional:
    - SITE_URL: Public site origin (overrides site.base_url)
    - DATA_DIR: Directory with category JSON files (overrides data.data_dir)
    - DATA_BASE_URL: Fetch data over HTTP from this base URL
    - OUTPUT_DIR: Build output directory
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Label stamped on log records (default: local)

    Returns:
        EnvironmentConfig with validated values

    Raises:
        ConfigurationError: If a variable holds an invalid value
    """
    errors = []

    site_url = _getenv("SITE_URL")
    data_dir = _getenv("DATA_DIR")
    data_base_url = _getenv("DATA_BASE_URL")
    output_dir = _getenv("OUTPUT_DIR")
    log_level = _getenv("LOG_LEVEL")
    environment = _getenv("ENVIRONMENT")

    for name, value in (("SITE_URL", site_url), ("DATA_BASE_URL", data_base_url)):
        if value and not _URL_PATTERN.match(value):
            errors.append(f"Invalid {name}: '{value}'. Must be an http:// or https:// URL.")

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check the values in your .env file",
                "Unset variables you do not need; all of them are optional",
            ],
        )

    return EnvironmentConfig(
        site_url=site_url,
        data_dir=data_dir,
        data_base_url=data_base_url,
        output_dir=output_dir,
        log_level=log_level,
        environment=environment,
    )


def apply_environment_overrides(app_config: AppConfig, env_config: EnvironmentConfig) -> AppConfig:
    """Return a copy of ``app_config`` with environment values applied on top.

    Raises:
        ConfigurationError: If an override produces an invalid configuration
    """
    data = app_config.model_dump()

    if env_config.site_url:
        data["site"]["base_url"] = env_config.site_url
    if env_config.data_dir:
        data["data"]["data_dir"] = Path(env_config.data_dir)
        data["data"]["content_dir"] = None
    if env_config.data_base_url:
        data["data"]["base_url"] = env_config.data_base_url
    if env_config.output_dir:
        data["output"]["output_dir"] = Path(env_config.output_dir)
    if env_config.log_level:
        data["logging"]["level"] = env_config.log_level

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(
            e, suggestions=["Check environment variable overrides"]
        ) from e


def _getenv(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None
