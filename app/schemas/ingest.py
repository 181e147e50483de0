"""Schemas for review ingestion and sweeps."""

from datetime import datetime
from typing import Optional

from app.core.exceptions import ErrorKind
from app.schemas.base import CamelModel


class IngestReviewsRequest(CamelModel):
    business_id: Optional[str] = None
    profile_business_id: Optional[str] = None


class IngestReviewsResult(CamelModel):
    reviews_ingested: int = 0
    sync_time: datetime
    success: bool
    error_message: Optional[str] = None
    error_kind: Optional[ErrorKind] = None


class ReviewSweepSummary(CamelModel):
    businesses_processed: int
    reviews_ingested: int
    failures: int
    failed_locations: list[str] = []
