"""Redis list publisher.

Work items are appended with RPUSH as camelCase JSON; crawler workers pop
from the other end, giving FIFO delivery per queue.
"""

import redis

from crawl_intake.domain.models import QueueWorkItem
from crawl_intake.logging import get_logger

from .base import QueuePublisher
from .exceptions import QueuePublishError

logger = get_logger(__name__, component="queue")


class RedisQueuePublisher(QueuePublisher):
    """Publishes work items onto a Redis list."""

    def __init__(self, client: redis.Redis, queue_name: str) -> None:
        """
        Args:
            client: Connected redis-py client (its connection pool is thread-safe)
            queue_name: Key of the Redis list crawler workers consume
        """
        self.client = client
        self.queue_name = queue_name

    @classmethod
    def from_url(cls, url: str, queue_name: str, **client_kwargs) -> "RedisQueuePublisher":
        client_kwargs.setdefault("socket_timeout", 5)
        client_kwargs.setdefault("socket_connect_timeout", 5)
        client_kwargs.setdefault("health_check_interval", 30)
        return cls(redis.Redis.from_url(url, **client_kwargs), queue_name)

    def send(self, item: QueueWorkItem) -> None:
        try:
            depth = self.client.rpush(self.queue_name, item.to_json())
        except redis.RedisError as e:
            raise QueuePublishError(
                f"Failed to publish url {item.url_id} of job {item.job_id}: {e}",
                queue_name=self.queue_name,
            ) from e

        logger.debug(
            "Work item published",
            extra={
                "event": "queue.item.published",
                "queue": self.queue_name,
                "url_id": item.url_id,
                "queue_depth": depth,
            },
        )

    def ping(self) -> bool:
        """True when Redis answers; used at startup to fail fast."""
        try:
            return bool(self.client.ping())
        except redis.RedisError:
            return False

    def close(self) -> None:
        self.client.close()
