"""Tests for work queue publishers."""

import json
from unittest.mock import Mock

import pytest
import redis

from crawl_intake.config.environment import EnvironmentConfig
from crawl_intake.config.exceptions import ConfigurationError
from crawl_intake.config.models import QueueConfig
from crawl_intake.domain.models import QueueWorkItem
from crawl_intake.queue import (
    InMemoryQueuePublisher,
    QueuePublishError,
    RedisQueuePublisher,
    build_publisher,
)


@pytest.fixture
def item():
    return QueueWorkItem.for_seed(job_id=3, url_id=17, force_crawl=True)


class TestRedisQueuePublisher:
    """Tests for RedisQueuePublisher with a mocked client."""

    def test_send_rpushes_camel_case_json(self, item):
        client = Mock(spec=redis.Redis)
        client.rpush.return_value = 1
        publisher = RedisQueuePublisher(client, "crawl:urls")

        publisher.send(item)

        client.rpush.assert_called_once()
        key, payload = client.rpush.call_args.args
        assert key == "crawl:urls"
        assert json.loads(payload) == {
            "jobId": 3,
            "originId": 17,
            "urlId": 17,
            "referId": 0,
            "forceCrawl": True,
        }

    def test_redis_error_becomes_publish_error(self, item):
        client = Mock(spec=redis.Redis)
        client.rpush.side_effect = redis.ConnectionError("connection refused")
        publisher = RedisQueuePublisher(client, "crawl:urls")

        with pytest.raises(QueuePublishError) as exc_info:
            publisher.send(item)

        assert exc_info.value.queue_name == "crawl:urls"
        assert isinstance(exc_info.value.__cause__, redis.ConnectionError)

    def test_ping(self):
        client = Mock(spec=redis.Redis)
        client.ping.return_value = True
        assert RedisQueuePublisher(client, "q").ping() is True

        client.ping.side_effect = redis.ConnectionError("down")
        assert RedisQueuePublisher(client, "q").ping() is False

    def test_close_closes_client(self):
        client = Mock(spec=redis.Redis)
        RedisQueuePublisher(client, "q").close()

        client.close.assert_called_once()

    def test_from_url_does_not_connect(self):
        publisher = RedisQueuePublisher.from_url("redis://localhost:6379/0", "crawl:urls")

        assert publisher.queue_name == "crawl:urls"
        assert isinstance(publisher.client, redis.Redis)
        publisher.close()


class TestInMemoryQueuePublisher:
    """Tests for InMemoryQueuePublisher."""

    def test_items_in_publish_order(self):
        publisher = InMemoryQueuePublisher()
        first = QueueWorkItem.for_seed(1, 1)
        second = QueueWorkItem.for_seed(1, 2)

        publisher.send(first)
        publisher.send(second)

        assert publisher.items == [first, second]

    def test_drain_empties_queue(self, item):
        publisher = InMemoryQueuePublisher()
        publisher.send(item)

        assert publisher.drain() == [item]
        assert publisher.items == []


class TestBuildPublisher:
    """Tests for build_publisher."""

    def test_memory_backend(self):
        publisher = build_publisher(
            QueueConfig(backend="memory", name="local"), EnvironmentConfig()
        )

        assert isinstance(publisher, InMemoryQueuePublisher)
        assert publisher.queue_name == "local"

    def test_redis_backend(self):
        publisher = build_publisher(
            QueueConfig(backend="redis", name="crawl:urls"),
            EnvironmentConfig(redis_url="redis://localhost:6379/0"),
        )

        assert isinstance(publisher, RedisQueuePublisher)
        assert publisher.queue_name == "crawl:urls"
        publisher.close()

    def test_redis_backend_requires_url(self):
        with pytest.raises(ConfigurationError, match="REDIS_URL"):
            build_publisher(QueueConfig(backend="redis"), EnvironmentConfig())
