"""Ingestion errors and their HTTP-facing error codes."""

from crawl_intake.domain.models import INVALID_ID


class IngestionError(Exception):
    """Base exception for errors surfaced to the submitter of a batch.

    Attributes:
        code: Stable error code written into the JSON error body
        message: Short, client-safe description
        status_code: HTTP status the API answers with
    """

    code = "InternalError"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(IngestionError):
    """The batch is malformed or empty. Never retried."""

    code = "BadRequest"
    status_code = 400


class InvalidURLError(BadRequestError):
    """A candidate URL cannot be normalized into a crawlable absolute URL."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class DependencyFailureError(IngestionError):
    """The job store failed to create the job; no job exists."""

    # Wire spelling kept for client compatibility
    code = "DependancyFailure"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.job_id = INVALID_ID
