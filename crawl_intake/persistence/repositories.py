"""Data access layer (repositories) for the job store.

Repositories wrap a session owned by the caller and return domain models
rather than ORM models. Transaction boundaries belong to get_session().
"""

import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from crawl_intake.domain.models import Job, URLRecord
from crawl_intake.utils.timestamps import format_timestamp, utc_now

from .exceptions import DataIntegrityError, PersistenceError, RecordNotFoundError
from .schema import JobModel, JobURLModel, PendingURLModel, URLModel

logger = logging.getLogger(__name__)


class URLRepository:
    """Repository for canonical URL identities."""

    def __init__(self, session: Session):
        self.session = session

    def get_or_create(self, url: str) -> URLRecord:
        """Return the record for ``url``, inserting it on first sight.

        The insert runs in a savepoint so that losing a race against a
        concurrent ingestion of the same URL falls back to a lookup instead
        of poisoning the caller's transaction.

        Raises:
            DataIntegrityError: If the row can neither be inserted nor found
            PersistenceError: If database error occurs
        """
        try:
            return self._get_or_create_model(url).to_domain()
        except DataIntegrityError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Error creating url {url}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to create url: {e}") from e

    def _get_or_create_model(self, url: str) -> URLModel:
        existing = self._find(url)
        if existing is not None:
            return existing

        model = URLModel(url=url, created_at=format_timestamp(utc_now()))
        try:
            with self.session.begin_nested():
                self.session.add(model)
        except IntegrityError as e:
            existing = self._find(url)
            if existing is None:
                raise DataIntegrityError(f"Failed to create url {url}: {e}") from e
            return existing
        return model

    def _find(self, url: str) -> Optional[URLModel]:
        stmt = select(URLModel).where(URLModel.url == url)
        return self.session.execute(stmt).scalar_one_or_none()


class JobRepository:
    """Repository for crawl jobs and their member URLs."""

    def __init__(self, session: Session):
        self.session = session
        self.urls = URLRepository(session)

    def create(self, urls: Iterable[str]) -> Job:
        """Create a job whose members are ``urls`` in the given order.

        A URL repeated in ``urls`` is linked once, at its first position.

        Args:
            urls: Canonical URL strings

        Returns:
            The created Job with URL records in submission order

        Raises:
            DataIntegrityError: On constraint violation
            PersistenceError: If database error occurs
        """
        try:
            job_model = JobModel(created_at=format_timestamp(utc_now()))
            self.session.add(job_model)
            self.session.flush()

            linked = set()
            for url in urls:
                url_model = self.urls._get_or_create_model(url)
                if url_model.id in linked:
                    continue
                linked.add(url_model.id)
                job_model.members.append(
                    JobURLModel(url_id=url_model.id, url=url_model, position=len(linked) - 1)
                )

            self.session.flush()
            return job_model.to_domain()

        except DataIntegrityError:
            raise
        except IntegrityError as e:
            logger.error(f"Integrity error creating job: {e}", exc_info=True)
            raise DataIntegrityError(f"Failed to create job due to constraint violation: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error creating job: {e}", exc_info=True)
            raise PersistenceError(f"Failed to create job: {e}") from e

    def get(self, job_id: int) -> Optional[Job]:
        """Retrieve a job and its members, or None if it does not exist.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            job_model = self.session.get(JobModel, job_id)
            return job_model.to_domain() if job_model else None
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving job {job_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve job: {e}") from e


class PendingRepository:
    """Repository for the per-job pending crawl markers."""

    def __init__(self, session: Session):
        self.session = session

    def add(self, job_id: int, origin_id: int, url_id: int) -> None:
        """Mark ``url_id`` (reached from ``origin_id``) as pending for ``job_id``.

        Adding an existing marker is a no-op.

        Raises:
            RecordNotFoundError: If the job does not exist
            DataIntegrityError: On constraint violation (e.g. unknown URL id)
            PersistenceError: If database error occurs
        """
        try:
            if self.session.get(JobModel, job_id) is None:
                raise RecordNotFoundError(f"Job {job_id} not found")

            key = (job_id, origin_id, url_id)
            if self.session.get(PendingURLModel, key) is not None:
                return

            self.session.add(
                PendingURLModel(
                    job_id=job_id,
                    origin_id=origin_id,
                    url_id=url_id,
                    added_at=format_timestamp(utc_now()),
                )
            )
            self.session.flush()

        except RecordNotFoundError:
            raise
        except IntegrityError as e:
            logger.error(f"Integrity error adding pending url {url_id} to job {job_id}: {e}", exc_info=True)
            raise DataIntegrityError(f"Failed to add pending url: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error adding pending url {url_id} to job {job_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to add pending url: {e}") from e

    def list_for_job(self, job_id: int) -> List[Tuple[int, int]]:
        """Return (origin_id, url_id) pairs pending for ``job_id``, oldest first.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = (
                select(PendingURLModel.origin_id, PendingURLModel.url_id)
                .where(PendingURLModel.job_id == job_id)
                .order_by(PendingURLModel.added_at.asc(), PendingURLModel.url_id.asc())
            )
            return [(row.origin_id, row.url_id) for row in self.session.execute(stmt)]
        except SQLAlchemyError as e:
            logger.error(f"Error listing pending urls for job {job_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list pending urls: {e}") from e
