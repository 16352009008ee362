"""Environment variable loading and validation."""

import os
from typing import Optional
from urllib.parse import urlsplit

from .exceptions import ConfigurationError

DEFAULT_DATABASE_URL = "sqlite:///./data/crawl_intake.db"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        database_url: Optional[str] = None,
        redis_url: Optional[str] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.database_url = database_url or DEFAULT_DATABASE_URL
        self.redis_url = redis_url
        self.log_level = log_level.upper() if log_level else None
        self.environment = environment or "local"


def load_environment_config(require_redis: bool = False) -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Optional environment variables:
    - DATABASE_URL: SQLAlchemy URL of the job store (default: sqlite:///./data/crawl_intake.db)
    - REDIS_URL: Redis connection URL, required when the queue backend is redis
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Environment label attached to every log record

    Args:
        require_redis: Whether REDIS_URL must be present

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable is missing or invalid
    """
    errors = []

    database_url = os.getenv("DATABASE_URL")
    redis_url = os.getenv("REDIS_URL")
    log_level = os.getenv("LOG_LEVEL")
    environment = os.getenv("ENVIRONMENT")

    if database_url is not None and "://" not in database_url:
        errors.append(
            f"Invalid DATABASE_URL: '{database_url}'. Expected a SQLAlchemy URL such as "
            f"'{DEFAULT_DATABASE_URL}'."
        )

    if redis_url:
        scheme = urlsplit(redis_url).scheme
        if scheme not in ("redis", "rediss", "unix"):
            errors.append(
                f"Invalid REDIS_URL scheme: '{scheme}'. Must be redis://, rediss:// or unix://."
            )
    elif require_redis:
        errors.append("Missing required environment variable: REDIS_URL")

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your settings",
                "Set REDIS_URL or switch queue.backend to 'memory' for local runs",
            ],
        )

    return EnvironmentConfig(
        database_url=database_url,
        redis_url=redis_url,
        log_level=log_level,
        environment=environment,
    )
