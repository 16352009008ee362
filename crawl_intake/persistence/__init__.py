"""Job store persistence on SQLAlchemy.

Public API:
    # Database initialization and session management
    - init_database(database_url: str) -> None
    - get_session() -> ContextManager[Session]
    - close_database() -> None
    - get_engine() -> Engine

    # Store facade and repositories
    - JobStore: create_job_from_urls, add_pending, get_job, list_pending
    - JobRepository, URLRepository, PendingRepository: session-scoped access

    # Exceptions
    - PersistenceError and its subclasses

Example usage:
    >>> from crawl_intake.persistence import JobStore, init_database
    >>> init_database("sqlite:///./data/crawl_intake.db")
    >>> job = JobStore().create_job_from_urls(["http://example.com"])
"""

from .database import close_database, get_engine, get_session, init_database
from .exceptions import (
    DatabaseConnectionError,
    DataIntegrityError,
    PersistenceError,
    RecordNotFoundError,
)
from .repositories import JobRepository, PendingRepository, URLRepository
from .store import JobStore

__all__ = [
    # Database functions
    "init_database",
    "get_session",
    "close_database",
    "get_engine",
    # Store and repositories
    "JobStore",
    "JobRepository",
    "URLRepository",
    "PendingRepository",
    # Exceptions
    "PersistenceError",
    "DatabaseConnectionError",
    "RecordNotFoundError",
    "DataIntegrityError",
]
