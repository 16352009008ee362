"""Shared pytest fixtures."""

import pytest

from crawl_intake.logging.context import clear_log_context
from crawl_intake.persistence import JobStore, close_database, init_database


@pytest.fixture(autouse=True)
def clean_log_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Environment for a service using a local Redis queue."""
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("ENVIRONMENT", raising=False)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every environment variable the service reads."""
    for name in ("DATABASE_URL", "REDIS_URL", "LOG_LEVEL", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def database(tmp_path):
    """File-backed SQLite job store, safe to share across threads."""
    init_database(f"sqlite:///{tmp_path / 'jobs.db'}")
    yield
    close_database()


@pytest.fixture
def memory_database():
    init_database("sqlite:///:memory:")
    yield
    close_database()


@pytest.fixture
def job_store(database):
    return JobStore()
