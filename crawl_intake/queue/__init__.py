"""Crawl work queue publishers."""

from .base import QueuePublisher
from .exceptions import QueueError, QueuePublishError
from .factory import build_publisher
from .memory import InMemoryQueuePublisher
from .redis_publisher import RedisQueuePublisher

__all__ = [
    "QueuePublisher",
    "InMemoryQueuePublisher",
    "RedisQueuePublisher",
    "build_publisher",
    "QueueError",
    "QueuePublishError",
]
