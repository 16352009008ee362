"""Job store exceptions.

Everything raised by the persistence layer derives from PersistenceError, so
the ingestion path can treat any of them as a dependency failure.
"""


class PersistenceError(Exception):
    """Base exception for all job store errors."""


class DatabaseConnectionError(PersistenceError):
    """Database initialization or connection failed.

    Raised for an empty or malformed database URL, an unreachable database,
    or use of the store before init_database() was called.
    """


class RecordNotFoundError(PersistenceError):
    """A record the operation depends on does not exist.

    Lookups that may legitimately miss return None instead.
    """


class DataIntegrityError(PersistenceError):
    """A write violated a database constraint (unique, foreign key, ...)."""
