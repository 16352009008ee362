"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .duration import DurationParseError, parse_duration, validate_duration_range


class QueueBackend(str, Enum):
    """Supported work queue transports."""

    REDIS = "redis"
    MEMORY = "memory"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class ServerConfig(BaseModel):
    """HTTP listener settings."""

    host: str = Field("0.0.0.0", min_length=1, description="Interface to bind")
    port: int = Field(8080, ge=1, le=65535, description="TCP port to listen on")

    @field_validator("host")
    @classmethod
    def strip_host(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("host cannot be empty or whitespace-only")
        return stripped


class DispatchConfig(BaseModel):
    """Dispatch worker pool settings."""

    worker_count: int = Field(
        4, ge=1, le=64, description="Number of threads draining dispatch tasks"
    )
    shutdown_timeout: str = Field(
        "30s", description="How long shutdown waits for queued dispatch tasks"
    )

    # Computed field
    shutdown_timeout_seconds: Optional[int] = None

    @field_validator("shutdown_timeout")
    @classmethod
    def validate_shutdown_timeout(cls, v: str) -> str:
        try:
            validate_duration_range(
                parse_duration(v), min_seconds=1, max_seconds=3600, label="shutdown_timeout"
            )
        except DurationParseError as e:
            raise ValueError(str(e)) from e
        return v

    @model_validator(mode="after")
    def compute_timeout_seconds(self):
        self.shutdown_timeout_seconds = parse_duration(self.shutdown_timeout)
        return self


class QueueConfig(BaseModel):
    """Work queue settings."""

    backend: QueueBackend = Field(QueueBackend.REDIS, description="Queue transport")
    name: str = Field("crawl:urls", min_length=1, description="Queue (list key) name")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Queue name cannot be empty or whitespace-only")
        return stripped

    model_config = {"use_enum_values": True}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the crawl intake service."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    dispatch: DispatchConfig = Field(default_factory=DispatchConfig)
    queue: QueueConfig = Field(default_factory=QueueConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "forbid"}
