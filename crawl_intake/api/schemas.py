"""Response bodies of the ingestion API."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class JobScheduledResponse(BaseModel):
    """Body of a successful submission: ``{"jobId": 42}``."""

    job_id: int = Field(..., description="Id of the created job")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    """Body of a failed submission: ``{"code": "BadRequest", "message": "..."}``."""

    code: str
    message: str


class HealthResponse(BaseModel):
    status: str = "ok"
