"""Job store facade used by ingestion and dispatch.

Each operation runs in its own session, so callers on any thread can share
one JobStore instance.
"""

from typing import List, Optional, Sequence, Tuple

from crawl_intake.domain.models import Job
from crawl_intake.logging import get_logger

from .database import get_session
from .repositories import JobRepository, PendingRepository

logger = get_logger(__name__, component="job_store")


class JobStore:
    """Durable registry of crawl jobs, their URLs and pending markers."""

    def create_job_from_urls(self, urls: Sequence[str]) -> Job:
        """Create a job and its URL records in a single transaction.

        Args:
            urls: Normalized, deduplicated URL strings

        Returns:
            The created Job, URL records in input order

        Raises:
            PersistenceError: If the job could not be created; nothing is committed
        """
        with get_session() as session:
            job = JobRepository(session).create(urls)

        logger.debug(
            f"Created job {job.id} with {len(job.urls)} urls",
            extra={"event": "job_store.job.created", "job_id": job.id, "url_count": len(job.urls)},
        )
        return job

    def add_pending(self, job_id: int, origin_id: int, url_id: int) -> None:
        """Record that ``url_id`` is awaiting crawl for ``job_id``.

        Raises:
            PersistenceError: If the marker could not be stored
        """
        with get_session() as session:
            PendingRepository(session).add(job_id, origin_id, url_id)

    def get_job(self, job_id: int) -> Optional[Job]:
        with get_session() as session:
            return JobRepository(session).get(job_id)

    def list_pending(self, job_id: int) -> List[Tuple[int, int]]:
        """Return the (origin_id, url_id) pairs still pending for a job."""
        with get_session() as session:
            return PendingRepository(session).list_for_job(job_id)
