"""Request-scoped dependencies: stores and the review source."""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.exceptions import ConfigurationError
from app.db.session import get_db
from app.repositories.base import BusinessRepository, ReviewRepository
from app.repositories.memory import InMemoryBusinessRepository, InMemoryReviewRepository
from app.repositories.sql import SqlBusinessRepository, SqlReviewRepository
from app.services.google_api import ReviewSource


def get_business_repository(request: Request, db: Session = Depends(get_db)) -> BusinessRepository:
    store = getattr(request.app.state, "memory_store", None)
    if store is not None:
        return InMemoryBusinessRepository(store)
    return SqlBusinessRepository(db)


def get_review_repository(request: Request, db: Session = Depends(get_db)) -> ReviewRepository:
    store = getattr(request.app.state, "memory_store", None)
    if store is not None:
        return InMemoryReviewRepository(store)
    return SqlReviewRepository(db)


def get_review_source(request: Request) -> ReviewSource | None:
    """The configured Google client, or None when credentials are missing."""
    return getattr(request.app.state, "review_source", None)


def require_review_source(source: ReviewSource | None) -> ReviewSource:
    """Call after request validation so missing fields still answer 400."""
    if source is None:
        raise ConfigurationError(
            "Google credentials are not configured "
            "(GOOGLE_CREDENTIALS_JSON, GOOGLE_CREDENTIALS_FILE or GOOGLE_CREDENTIALS_SECRET_ID)."
        )
    return source
