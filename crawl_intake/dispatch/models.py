"""Data models for dispatch tasks and their outcome."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from crawl_intake.domain.models import URLRecord


@dataclass(frozen=True)
class DispatchTask:
    """
    One job's worth of fan-out work, handed from ingestion to the worker pool.

    Attributes:
        job_id: Id of the job the URLs belong to
        urls: The job's URL records, in job order
        force_crawl: Whether crawlers should bypass their already-crawled cache
        request_id: Id of the ingestion request, carried into dispatch logs
    """

    job_id: int
    urls: Tuple[URLRecord, ...]
    force_crawl: bool = False
    request_id: Optional[str] = None

    def __post_init__(self):
        # Tasks are shared across threads; freeze the URL sequence
        object.__setattr__(self, "urls", tuple(self.urls))


@dataclass
class DispatchStats:
    """
    Outcome of dispatching a single task.

    Attributes:
        job_id: Id of the dispatched job
        url_count: Number of URL records in the task
        published_count: Work items handed to the queue
        pending_failures: URLs whose pending marker could not be stored
        publish_failures: URLs whose work item could not be published
        failed_url_ids: Ids of URLs that were not published
        duration_seconds: Wall time spent on the task
    """

    job_id: int
    url_count: int = 0
    published_count: int = 0
    pending_failures: int = 0
    publish_failures: int = 0
    failed_url_ids: list = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def had_errors(self) -> bool:
        return bool(self.pending_failures or self.publish_failures)

    @property
    def fully_published(self) -> bool:
        return self.published_count == self.url_count
