"""Database connection and session management for the job store."""

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from crawl_intake.logging import get_logger

from .exceptions import DatabaseConnectionError

# Module-level engine and session factory
_engine: Engine | None = None
_session_factory: sessionmaker | None = None

logger = get_logger(__name__, component="database")


def init_database(database_url: str) -> None:
    """Create the engine, validate the connection and create missing tables.

    Call once at startup, before building the job store. Calling it again
    replaces the previous engine.

    Args:
        database_url: SQLAlchemy URL (e.g. "sqlite:///./data/crawl_intake.db")

    Raises:
        DatabaseConnectionError: If initialization fails
    """
    global _engine, _session_factory

    if not database_url or not isinstance(database_url, str):
        raise DatabaseConnectionError("Database URL must be a non-empty string")

    logger.info(
        "Initializing database",
        extra={
            "event": "database.initializing",
            "database_url": _redact_url(database_url),
        },
    )

    try:
        url = make_url(database_url)
    except ArgumentError as e:
        raise DatabaseConnectionError(f"Invalid database URL: {e}") from e

    if _engine is not None:
        close_database()

    try:
        _engine = _create_engine(database_url, url.get_backend_name(), url.database)
        _validate_connection(_engine)

        _session_factory = sessionmaker(
            bind=_engine,
            autocommit=False,
            autoflush=True,
            expire_on_commit=False,  # Domain conversion happens after commit
        )

        from .schema import create_schema

        create_schema(_engine)

        logger.info(
            "Database initialized successfully",
            extra={
                "event": "database.initialised",
                "database_url": _redact_url(database_url),
            },
        )

    except DatabaseConnectionError:
        raise
    except Exception as e:
        error_msg = f"Failed to initialize database: {e}"
        logger.error(error_msg, exc_info=True, extra={"event": "database.init_failed"})
        raise DatabaseConnectionError(error_msg) from e


def _create_engine(database_url: str, backend: str, database: str | None) -> Engine:
    if backend != "sqlite":
        return create_engine(database_url, pool_pre_ping=True)

    in_memory = not database or database == ":memory:"
    if not in_memory:
        db_file = Path(database)
        if not db_file.parent.exists():
            logger.info(f"Creating database directory: {db_file.parent}")
            db_file.parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        database_url,
        connect_args={
            "check_same_thread": False,  # Sessions are opened from dispatch worker threads
            "timeout": 30,
        },
        # One shared connection, otherwise every thread gets its own empty in-memory database
        poolclass=StaticPool if in_memory else None,
    )
    _configure_sqlite(engine, wal=not in_memory)
    return engine


def _configure_sqlite(engine: Engine, wal: bool) -> None:
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        if wal:
            cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()


def _validate_connection(engine: Engine) -> None:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        logger.debug("Database connection validated successfully")
    except Exception as e:
        raise DatabaseConnectionError(f"Failed to validate database connection: {e}") from e


def _redact_url(url: str) -> str:
    """Hide the password of a database URL for logging."""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return url


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Provide a session that commits on success and rolls back on error.

    Raises:
        DatabaseConnectionError: If the database has not been initialized

    Example:
        >>> with get_session() as session:
        ...     job = JobRepository(session).get(42)
    """
    if _session_factory is None:
        raise DatabaseConnectionError(
            "Database not initialized. Call init_database() before using get_session()"
        )

    session = _session_factory()
    try:
        yield session
        session.commit()
    except Exception as e:
        session.rollback()
        logger.warning(
            f"Database session rolled back due to exception: {e}",
            extra={
                "event": "database.session.rolled_back",
                "error_type": type(e).__name__,
            },
        )
        raise
    finally:
        session.close()


def get_engine() -> Engine:
    """Return the initialized engine.

    Raises:
        DatabaseConnectionError: If database not initialized
    """
    if _engine is None:
        raise DatabaseConnectionError(
            "Database not initialized. Call init_database() before using get_engine()"
        )
    return _engine


def close_database() -> None:
    """Dispose of the engine. Safe to call more than once."""
    global _engine, _session_factory

    if _engine is not None:
        logger.info("Closing database connections", extra={"event": "database.closing"})
        _engine.dispose()
        _engine = None
        _session_factory = None
