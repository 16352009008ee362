"""Publisher interface for the crawl work queue."""

from abc import ABC, abstractmethod

from crawl_intake.domain.models import QueueWorkItem


class QueuePublisher(ABC):
    """Hands work items to the queue consumed by crawler workers.

    Delivery and retry are the transport's business. Implementations must be
    safe to call from several dispatch workers at once and raise
    QueuePublishError when an item cannot be handed over.
    """

    queue_name: str

    @abstractmethod
    def send(self, item: QueueWorkItem) -> None:
        """Publish one work item.

        Raises:
            QueuePublishError: If the transport rejected the item
        """

    def close(self) -> None:
        """Release transport resources. Default: nothing to release."""
