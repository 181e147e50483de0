"""FastAPI application entry point."""

import asyncio
import logging

from dotenv import load_dotenv

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

# Load environment variables from .env file
load_dotenv()

from app import models  # noqa: F401
from app.api.routes import router
from app.core.config import settings
from app.core.exceptions import ConfigurationError
from app.core.logging_config import configure_logging
from app.db.init_db import init_db
from app.db.session import SessionLocal
from app.repositories.memory import (
    InMemoryBusinessRepository,
    InMemoryReviewRepository,
    InMemoryStore,
)
from app.repositories.sql import SqlBusinessRepository, SqlReviewRepository
from app.schemas.ingest import ReviewSweepSummary
from app.services.google_api import GoogleApiClient
from app.services.review_sweep import run_periodic_sweep, sweep_reviews
from app.services.secrets import resolve_google_credentials

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.project_name)
app.include_router(router, prefix=settings.api_prefix)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error("Configuration error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


async def _scheduled_sweep() -> ReviewSweepSummary:
    source = app.state.review_source
    store = app.state.memory_store
    if store is not None:
        return await sweep_reviews(
            source, InMemoryReviewRepository(store), InMemoryBusinessRepository(store)
        )
    db = SessionLocal()
    try:
        return await sweep_reviews(source, SqlReviewRepository(db), SqlBusinessRepository(db))
    finally:
        db.close()


@app.on_event("startup")
async def on_startup() -> None:
    """Initialize stores, the Google client and the optional sweep timer."""
    app.state.memory_store = None
    app.state.sweep_task = None

    if settings.uses_memory_store:
        logger.warning("STORE_BACKEND=memory: data is kept in process memory only")
        app.state.memory_store = InMemoryStore()
    else:
        init_db()

    # secret을 못 읽으면 ConfigurationError로 기동 실패
    credentials_json = resolve_google_credentials(settings)
    if credentials_json:
        app.state.review_source = GoogleApiClient(
            credentials_json,
            base_url=settings.google_api_base_url,
            timeout_seconds=settings.google_api_timeout_seconds,
        )
    else:
        logger.warning("Google credentials not configured; ingestion endpoints will return 503")
        app.state.review_source = None

    if settings.review_sweep_interval_minutes > 0 and app.state.review_source is not None:
        app.state.sweep_task = asyncio.create_task(
            run_periodic_sweep(settings.review_sweep_interval_minutes * 60, _scheduled_sweep)
        )
        logger.info("Review sweep scheduled every %d minutes", settings.review_sweep_interval_minutes)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    task = getattr(app.state, "sweep_task", None)
    if task is not None:
        task.cancel()


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Basic sanity endpoint."""
    return {"message": "Google Connector Service is running"}


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    """Health check endpoint for Docker."""
    return {"status": "healthy"}
