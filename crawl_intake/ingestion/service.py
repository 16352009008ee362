"""Job creation from a submitted URL batch."""

from typing import Iterable, List, Optional

from crawl_intake.dispatch.models import DispatchTask
from crawl_intake.logging import get_logger
from crawl_intake.persistence.store import JobStore

from .dedup import dedupe_urls
from .exceptions import BadRequestError, DependencyFailureError, InvalidURLError

logger = get_logger(__name__, component="ingest")


class JobIngestor:
    """
    Registers crawl jobs and hands them off for dispatch.

    The caller gets the job id as soon as the job store has created the job.
    Dispatch happens later on the dispatcher's workers, so the id carries no
    promise that any work item has been published.
    """

    def __init__(self, job_store: JobStore, dispatcher):
        """
        Initialize the ingestor.

        Args:
            job_store: Store that creates jobs and their URL records
            dispatcher: Anything with ``submit(task: DispatchTask)``,
                normally a DispatchWorkerPool
        """
        self.job_store = job_store
        self.dispatcher = dispatcher

    def ingest_batch(
        self,
        lines: Iterable[str],
        force_crawl: bool = False,
        request_id: Optional[str] = None,
    ) -> int:
        """
        Validate a raw batch of candidate lines and schedule it as one job.

        Args:
            lines: Candidate URL lines, blank lines allowed
            force_crawl: Stamp every work item of the job with force_crawl
            request_id: Optional id that ties dispatch logs to this request

        Returns:
            The id of the created job

        Raises:
            BadRequestError: If a line is invalid or no URL remains; the job
                store is not touched
            DependencyFailureError: If the job store could not create the job
        """
        try:
            urls = dedupe_urls(lines)
        except InvalidURLError as e:
            logger.info(
                e.message,
                extra={"event": "ingest.batch.rejected", "reason": "invalid_url", "url": e.url},
            )
            raise BadRequestError(e.message) from e

        if not urls:
            logger.info(
                "No URLs provided",
                extra={"event": "ingest.batch.rejected", "reason": "empty"},
            )
            raise BadRequestError("No URLs provided")

        return self.schedule_job(urls, force_crawl, request_id=request_id)

    def schedule_job(
        self,
        urls: List[str],
        force_crawl: bool = False,
        request_id: Optional[str] = None,
    ) -> int:
        """
        Create a job for already-normalized URLs and queue it for dispatch.

        Args:
            urls: Normalized, deduplicated URLs in job order
            force_crawl: Stamp every work item of the job with force_crawl
            request_id: Optional id that ties dispatch logs to this request

        Returns:
            The id of the created job

        Raises:
            BadRequestError: If ``urls`` is empty
            DependencyFailureError: If the job store could not create the job
        """
        if not urls:
            raise BadRequestError("No URLs provided")

        try:
            job = self.job_store.create_job_from_urls(urls)
        except Exception as e:
            logger.error(
                f"Failed to create job: {e}",
                extra={
                    "event": "ingest.job.create_failed",
                    "url_count": len(urls),
                    "error_type": type(e).__name__,
                },
            )
            raise DependencyFailureError("Create Job Failed") from e

        logger.info(
            f"Created job {job.id} with {len(job.urls)} urls",
            extra={
                "event": "ingest.job.created",
                "job_id": job.id,
                "url_count": len(job.urls),
                "force_crawl": force_crawl,
            },
        )

        task = DispatchTask(
            job_id=job.id,
            urls=job.urls,
            force_crawl=force_crawl,
            request_id=request_id,
        )
        try:
            self.dispatcher.submit(task)
        except Exception as e:
            # The job exists; losing its dispatch is advisory like any fan-out failure
            logger.error(
                f"Failed to queue job {job.id} for dispatch: {e}",
                extra={
                    "event": "ingest.dispatch.submit_failed",
                    "job_id": job.id,
                    "error_type": type(e).__name__,
                },
            )

        return job.id
