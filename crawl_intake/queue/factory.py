"""Publisher construction from configuration."""

from crawl_intake.config.environment import EnvironmentConfig
from crawl_intake.config.exceptions import ConfigurationError
from crawl_intake.config.models import QueueBackend, QueueConfig

from .base import QueuePublisher
from .memory import InMemoryQueuePublisher
from .redis_publisher import RedisQueuePublisher


def build_publisher(queue_config: QueueConfig, env_config: EnvironmentConfig) -> QueuePublisher:
    """Return the publisher selected by ``queue.backend``.

    Raises:
        ConfigurationError: If the backend is unknown or REDIS_URL is missing
    """
    backend = QueueBackend(queue_config.backend)

    if backend is QueueBackend.MEMORY:
        return InMemoryQueuePublisher(queue_config.name)

    if backend is QueueBackend.REDIS:
        if not env_config.redis_url:
            raise ConfigurationError(
                "queue.backend is 'redis' but REDIS_URL is not set",
                suggestions=["Set REDIS_URL, e.g. redis://localhost:6379/0"],
            )
        return RedisQueuePublisher.from_url(env_config.redis_url, queue_config.name)

    raise ConfigurationError(f"Unsupported queue backend: {queue_config.backend}")
