"""Work queue exceptions."""


class QueueError(Exception):
    """Base exception for work queue errors."""


class QueuePublishError(QueueError):
    """A work item could not be handed to the queue transport."""

    def __init__(self, message: str, queue_name: str) -> None:
        super().__init__(message)
        self.queue_name = queue_name
