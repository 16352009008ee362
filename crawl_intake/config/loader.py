"""Configuration loader for the crawl intake service."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import AppConfig, QueueBackend
from .validators import check_for_warnings, emit_warnings

DEFAULT_CONFIG_CANDIDATES = (
    Path("config.yaml"),
    Path("config") / "config.yaml",
)


def load_config(config_path: Optional[Path] = None) -> tuple[AppConfig, EnvironmentConfig]:
    """
    Load and validate configuration from a YAML file and environment variables.

    File lookup:
    1. Use config_path when given (it must exist)
    2. Otherwise try config.yaml, then config/config.yaml
    3. Otherwise run on built-in defaults

    Args:
        config_path: Optional path to configuration file

    Returns:
        Tuple of (AppConfig, EnvironmentConfig)

    Raises:
        ConfigurationError: If the file or environment is invalid
    """
    config_file = _find_config_file(config_path)
    config_dict = _read_yaml(config_file) if config_file else {}

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    try:
        app_config = AppConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(e) from e

    env_config = load_environment_config(
        require_redis=app_config.queue.backend == QueueBackend.REDIS.value
    )

    return app_config, env_config


def _read_yaml(config_file: Path) -> dict:
    try:
        with open(config_file, "r") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[f"Ensure {config_file} is readable"],
        ) from e

    if config_dict is None:
        return {}

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Configuration file {config_file} must contain a mapping at the top level",
            suggestions=["Review config.example.yaml for the expected layout"],
        )

    return config_dict


def _find_config_file(config_path: Optional[Path] = None) -> Optional[Path]:
    """Resolve the configuration file, or None when running on defaults."""
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Omit --config to run with built-in defaults",
                ],
            )
        return config_path

    for candidate in DEFAULT_CONFIG_CANDIDATES:
        if candidate.exists():
            return candidate

    return None


def validate_config_file(config_path: Path) -> bool:
    """
    Validate a configuration file without reading environment variables.

    Returns:
        True if valid, False otherwise (errors printed to stdout)
    """
    try:
        AppConfig.model_validate(_read_yaml(config_path))
    except ConfigurationError as e:
        print(f"✗ Configuration validation failed:\n{e}")
        return False
    except ValidationError as e:
        print(f"✗ Configuration validation failed:\n{ConfigurationError.from_validation_error(e)}")
        return False

    print(f"✓ Configuration file {config_path} is valid")
    return True
