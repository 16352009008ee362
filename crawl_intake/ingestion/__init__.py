"""URL batch validation, deduplication and job creation."""

from .dedup import dedupe_urls, split_request_body
from .exceptions import BadRequestError, DependencyFailureError, IngestionError, InvalidURLError
from .normalizer import normalize_url
from .service import JobIngestor

__all__ = [
    "BadRequestError",
    "DependencyFailureError",
    "IngestionError",
    "InvalidURLError",
    "JobIngestor",
    "dedupe_urls",
    "normalize_url",
    "split_request_body",
]
