"""Pull reviews for a location from Google and store them."""

from __future__ import annotations

import asyncio
import logging

from app.core.clock import utcnow
from app.core.exceptions import (
    BusinessNotFoundError,
    MissingIdentifierError,
    classify_error,
    error_message,
)
from app.core.locations import canonical_location_id
from app.repositories.base import BusinessRepository, ReviewRepository
from app.schemas.ingest import IngestReviewsResult
from app.services.google_api import ReviewSource

logger = logging.getLogger(__name__)


def resolve_location(
    businesses: BusinessRepository,
    location_id: str | None,
    profile_id: str | None,
) -> str:
    """Return the identifier to fetch reviews for.

    A bare location ID is swapped for the stored resource path when one is
    known, since the API needs the account segment.
    """
    if location_id:
        if "/" not in location_id:
            business = businesses.get(location_id)
            if business and business.resource_name:
                return business.resource_name
        return location_id

    if not profile_id:
        raise MissingIdentifierError("BusinessId or ProfileBusinessId is required")

    business = businesses.get_by_profile_id(profile_id)
    if business is None:
        raise BusinessNotFoundError(f"No business linked to profile {profile_id}")
    return business.resource_name or business.location_id


async def ingest_reviews(
    source: ReviewSource,
    reviews: ReviewRepository,
    businesses: BusinessRepository,
    location_id: str | None = None,
    profile_id: str | None = None,
) -> IngestReviewsResult:
    """Fetch, upsert and stamp the business sync time; never raises."""
    try:
        # 저장소 호출은 동기라서 스레드에서 실행 (이벤트 루프 블로킹 방지)
        target = await asyncio.to_thread(resolve_location, businesses, location_id, profile_id)
        fetched = await source.fetch_reviews(target)

        # upsert는 개별 실행, 실패하면 남은 리뷰는 건너뜀
        for review in fetched:
            await asyncio.to_thread(reviews.upsert, review)

        sync_time = utcnow()
        business = await asyncio.to_thread(businesses.get, canonical_location_id(target))
        if business is not None:
            business.last_sync_time = sync_time
            business.updated_at = sync_time
            await asyncio.to_thread(businesses.update, business)

        logger.info("Ingested %d reviews for %s", len(fetched), target)
        return IngestReviewsResult(
            reviews_ingested=len(fetched),
            sync_time=sync_time,
            success=True,
        )
    except Exception as exc:  # noqa: BLE001
        logger.error(
            "Review ingestion failed (location=%s, profile=%s): %s",
            location_id,
            profile_id,
            exc,
            exc_info=True,
        )
        return IngestReviewsResult(
            reviews_ingested=0,
            sync_time=utcnow(),
            success=False,
            error_message=error_message(exc),
            error_kind=classify_error(exc),
        )
