"""Fan-out of a created job's URLs onto the crawl work queue."""

import time

from crawl_intake.domain.models import QueueWorkItem
from crawl_intake.logging import get_logger
from crawl_intake.persistence.store import JobStore
from crawl_intake.queue.base import QueuePublisher

from .models import DispatchStats, DispatchTask

logger = get_logger(__name__, component="dispatch")


class DispatchFanout:
    """
    Turns each URL record of a job into one queue work item.

    For every URL, in job order, the pending marker is written before the
    work item is published. Failures of either step are advisory: they are
    logged and counted, never retried, and never stop the remaining URLs.
    Nothing is rolled back, so a job can end up partially dispatched.
    """

    def __init__(self, job_store: JobStore, publisher: QueuePublisher):
        self.job_store = job_store
        self.publisher = publisher

    def dispatch(self, task: DispatchTask) -> DispatchStats:
        """
        Mark pending and publish every URL of ``task``.

        Returns:
            DispatchStats describing what was published and what failed
        """
        started = time.time()
        stats = DispatchStats(job_id=task.job_id, url_count=len(task.urls))

        logger.info(
            f"Dispatching {stats.url_count} urls for job {task.job_id}",
            extra={
                "event": "dispatch.task.started",
                "url_count": stats.url_count,
                "force_crawl": task.force_crawl,
            },
        )

        for record in task.urls:
            try:
                self.job_store.add_pending(task.job_id, record.url_id, record.url_id)
            except Exception as e:
                stats.pending_failures += 1
                logger.warning(
                    f"Failed to add job url to pending list: {e}",
                    extra={
                        "event": "dispatch.pending.failed",
                        "url_id": record.url_id,
                        "error_type": type(e).__name__,
                    },
                )

            item = QueueWorkItem.for_seed(task.job_id, record.url_id, task.force_crawl)
            try:
                self.publisher.send(item)
            except Exception as e:
                stats.publish_failures += 1
                stats.failed_url_ids.append(record.url_id)
                logger.error(
                    f"Failed to publish work item: {e}",
                    extra={
                        "event": "dispatch.publish.failed",
                        "url_id": record.url_id,
                        "url": record.url,
                        "error_type": type(e).__name__,
                    },
                )
                continue

            stats.published_count += 1

        stats.duration_seconds = time.time() - started

        logger.info(
            "Dispatch completed",
            extra={
                "event": "dispatch.task.completed",
                "url_count": stats.url_count,
                "published_count": stats.published_count,
                "pending_failures": stats.pending_failures,
                "publish_failures": stats.publish_failures,
                "duration_ms": int(stats.duration_seconds * 1000),
            },
        )
        return stats
