"""Core domain models for crawl jobs and queue work items.

- URLRecord: a persisted, identified URL belonging to a job
- Job: a batch of seed URLs registered in the job store
- QueueWorkItem: the message handed to crawler workers, one per URL
"""

from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Reserved id that the job store never assigns. Used as the job id of a failed
# ingestion and as the refer id of seed URLs.
INVALID_ID = 0


class URLRecord(BaseModel):
    """A canonical URL and the identifier the job store assigned to it."""

    url_id: int = Field(..., gt=INVALID_ID, description="Job store assigned URL id")
    url: str = Field(..., min_length=1, description="Normalized absolute URL")

    model_config = ConfigDict(frozen=True)


class Job(BaseModel):
    """A crawl job and its member URLs, in submission order.

    The member set is fixed once the job store has created the job.
    """

    id: int = Field(..., gt=INVALID_ID, description="Job store assigned job id")
    urls: List[URLRecord] = Field(default_factory=list, description="Member URLs in order")

    model_config = ConfigDict(frozen=True)

    @property
    def url_ids(self) -> List[int]:
        return [record.url_id for record in self.urls]


class QueueWorkItem(BaseModel):
    """Work item published to the crawl queue.

    ``origin_id`` is the seed URL a crawl descends from and ``refer_id`` the
    page that linked to ``url_id``. Seed URLs are their own origin and have
    no referrer, so the same shape also carries URLs discovered downstream.

    Serialized with camelCase keys (jobId, originId, urlId, referId, forceCrawl).
    """

    job_id: int
    origin_id: int
    url_id: int
    refer_id: int = INVALID_ID
    force_crawl: bool = False

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    @field_validator("job_id", "origin_id", "url_id")
    @classmethod
    def require_assigned_id(cls, v: int) -> int:
        if v == INVALID_ID:
            raise ValueError("id must be assigned by the job store")
        return v

    @classmethod
    def for_seed(cls, job_id: int, url_id: int, force_crawl: bool = False) -> "QueueWorkItem":
        """Build the work item for a top-level job URL."""
        return cls(
            job_id=job_id,
            origin_id=url_id,
            url_id=url_id,
            refer_id=INVALID_ID,
            force_crawl=force_crawl,
        )

    @property
    def is_seed(self) -> bool:
        return self.refer_id == INVALID_ID and self.origin_id == self.url_id

    def to_json(self) -> str:
        """Wire form: compact JSON with camelCase keys."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, payload: Union[str, bytes]) -> "QueueWorkItem":
        return cls.model_validate_json(payload)
