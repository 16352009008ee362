"""HTTP routes for URL batch submission."""

from uuid import uuid4

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse

from crawl_intake.ingestion.dedup import split_request_body
from crawl_intake.ingestion.exceptions import IngestionError
from crawl_intake.ingestion.service import JobIngestor
from crawl_intake.logging import get_logger
from crawl_intake.logging.context import log_context

from .schemas import ErrorResponse, HealthResponse, JobScheduledResponse

logger = get_logger(__name__, component="api")

router = APIRouter()

FORCE_CRAWL_PARAM = "forceCrawl"
_OTHER_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _ingest(ingestor: JobIngestor, body: bytes, force_crawl: bool, request_id: str) -> int:
    with log_context(request_id=request_id):
        lines = split_request_body(body)
        return ingestor.ingest_batch(lines, force_crawl=force_crawl, request_id=request_id)


def _error_response(error: IngestionError) -> JSONResponse:
    body = ErrorResponse(code=error.code, message=error.message)
    return JSONResponse(status_code=error.status_code, content=body.model_dump())


@router.post("/", response_model=JobScheduledResponse)
async def submit_urls(request: Request):
    """
    Create a crawl job from a newline-separated list of URLs.

    The mere presence of ``forceCrawl`` in the query string sets the flag,
    whatever its value.
    """
    ingestor: JobIngestor = request.app.state.ingestor
    force_crawl = FORCE_CRAWL_PARAM in request.query_params
    request_id = uuid4().hex

    body = await request.body()
    try:
        job_id = await run_in_threadpool(_ingest, ingestor, body, force_crawl, request_id)
    except IngestionError as e:
        return _error_response(e)

    logger.info(
        f"Scheduled job {job_id}",
        extra={
            "event": "api.job.scheduled",
            "job_id": job_id,
            "request_id": request_id,
            "force_crawl": force_crawl,
        },
    )
    return JSONResponse(content=JobScheduledResponse(job_id=job_id).model_dump(by_alias=True))


@router.api_route("/", methods=_OTHER_METHODS, include_in_schema=False)
async def method_not_allowed(request: Request):
    logger.debug(
        f"Rejected {request.method} on /",
        extra={"event": "api.method_not_allowed", "method": request.method},
    )
    return PlainTextResponse("MethodNotAllowed", status_code=405, headers={"Allow": "POST"})


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse()
