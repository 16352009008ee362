"""In-process publisher for local runs and tests."""

import threading
from typing import List

from crawl_intake.domain.models import QueueWorkItem

from .base import QueuePublisher


class InMemoryQueuePublisher(QueuePublisher):
    """Collects published items in a list guarded by a lock."""

    def __init__(self, queue_name: str = "memory") -> None:
        self.queue_name = queue_name
        self._items: List[QueueWorkItem] = []
        self._lock = threading.Lock()

    def send(self, item: QueueWorkItem) -> None:
        with self._lock:
            self._items.append(item)

    @property
    def items(self) -> List[QueueWorkItem]:
        """Snapshot of everything published so far, in publish order."""
        with self._lock:
            return list(self._items)

    def drain(self) -> List[QueueWorkItem]:
        """Return and forget everything published so far."""
        with self._lock:
            items, self._items = self._items, []
        return items
