"""ORM models for the job store.

Tables:
- jobs: one row per ingestion request
- urls: canonical URLs, shared by every job that submits them
- job_urls: job membership, ordered by position
- pending_urls: URLs awaiting crawl completion, per job and origin
"""

import logging

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship

from crawl_intake.domain.models import Job, URLRecord

logger = logging.getLogger(__name__)

Base = declarative_base()


class JobModel(Base):
    """A crawl job. The primary key doubles as the public job id."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(String(50), nullable=False)

    members = relationship(
        "JobURLModel",
        back_populates="job",
        order_by="JobURLModel.position",
        cascade="all, delete-orphan",
    )

    def to_domain(self) -> Job:
        return Job(id=self.id, urls=[member.url.to_domain() for member in self.members])


class URLModel(Base):
    """A canonical URL, unique across all jobs."""

    __tablename__ = "urls"

    id = Column(Integer, primary_key=True, autoincrement=True)
    url = Column(Text, nullable=False, unique=True)
    created_at = Column(String(50), nullable=False)

    def to_domain(self) -> URLRecord:
        return URLRecord(url_id=self.id, url=self.url)


class JobURLModel(Base):
    """Membership of a URL in a job, with its submission position."""

    __tablename__ = "job_urls"

    job_id = Column(Integer, ForeignKey("jobs.id"), primary_key=True)
    url_id = Column(Integer, ForeignKey("urls.id"), primary_key=True)
    position = Column(Integer, nullable=False)

    job = relationship("JobModel", back_populates="members")
    url = relationship("URLModel", lazy="joined")

    __table_args__ = (Index("idx_job_urls_position", "job_id", "position", unique=True),)


class PendingURLModel(Base):
    """Marker that a URL reached from an origin is still awaiting crawl."""

    __tablename__ = "pending_urls"

    job_id = Column(Integer, ForeignKey("jobs.id"), primary_key=True)
    origin_id = Column(Integer, ForeignKey("urls.id"), primary_key=True)
    url_id = Column(Integer, ForeignKey("urls.id"), primary_key=True)
    added_at = Column(String(50), nullable=False)

    __table_args__ = (Index("idx_pending_urls_url", "url_id"),)


def create_schema(engine: Engine) -> None:
    """Create all tables and indexes that do not exist yet (idempotent)."""
    logger.info("Creating database schema if not exists")

    try:
        Base.metadata.create_all(engine, checkfirst=True)
        tables = inspect(engine).get_table_names()
        logger.info(f"Database schema ready. Tables: {', '.join(tables)}")
    except Exception as e:
        logger.error(f"Failed to create database schema: {e}", exc_info=True)
        raise
