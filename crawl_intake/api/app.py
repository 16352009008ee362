"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool

from crawl_intake import __version__
from crawl_intake.ingestion.service import JobIngestor
from crawl_intake.logging import get_logger

from .routes import router

logger = get_logger(__name__, component="api")


def create_app(
    ingestor: JobIngestor,
    dispatcher=None,
    shutdown_timeout: Optional[float] = None,
) -> FastAPI:
    """
    Build the ingestion API around an already wired ingestor.

    Args:
        ingestor: Ingestor handling submitted batches
        dispatcher: Worker pool started with the app and drained on shutdown;
            None when its lifecycle is managed elsewhere
        shutdown_timeout: Seconds to wait for queued dispatch tasks on shutdown

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if dispatcher is not None:
            dispatcher.start()
        logger.info("Ingestion API started", extra={"event": "api.started"})
        try:
            yield
        finally:
            if dispatcher is not None:
                await run_in_threadpool(dispatcher.shutdown, True, shutdown_timeout)
            logger.info("Ingestion API stopped", extra={"event": "api.stopped"})

    app = FastAPI(title="Crawl Intake", version=__version__, lifespan=lifespan)
    app.state.ingestor = ingestor
    app.state.dispatcher = dispatcher
    app.include_router(router)
    return app
