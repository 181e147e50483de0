"""Review endpoints: ingest, query, direct add and sweep."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.api.deps import (
    get_business_repository,
    get_review_repository,
    get_review_source,
    require_review_source,
)
from app.repositories.base import BusinessRepository, ReviewRepository
from app.schemas.ingest import IngestReviewsRequest, IngestReviewsResult, ReviewSweepSummary
from app.schemas.review import AddReviewRequest, AddReviewResponse, GetReviewsResult
from app.services.google_api import ReviewSource
from app.services.review_ingest import ingest_reviews
from app.services.review_sweep import sweep_reviews
from app.services.reviews import DEFAULT_TAKE, add_review, get_reviews

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reviews", tags=["reviews"])


def _parse_int(raw: str | None, default: int) -> int:
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@router.post("/ingest", response_model=IngestReviewsResult)
async def ingest(
    payload: IngestReviewsRequest,
    source: ReviewSource | None = Depends(get_review_source),
    reviews: ReviewRepository = Depends(get_review_repository),
    businesses: BusinessRepository = Depends(get_business_repository),
):
    """Fetch reviews from Google for one location and store them."""
    location_id = (payload.business_id or "").strip() or None
    profile_id = (payload.profile_business_id or "").strip() or None
    if not location_id and not profile_id:
        raise HTTPException(status_code=400, detail="BusinessId or ProfileBusinessId is required")

    result = await ingest_reviews(
        require_review_source(source),
        reviews,
        businesses,
        location_id=location_id,
        profile_id=profile_id,
    )
    if not result.success:
        return JSONResponse(status_code=500, content=result.model_dump(mode="json", by_alias=True))
    return result


@router.post("/sweep", response_model=ReviewSweepSummary)
async def sweep(
    source: ReviewSource | None = Depends(get_review_source),
    reviews: ReviewRepository = Depends(get_review_repository),
    businesses: BusinessRepository = Depends(get_business_repository),
) -> ReviewSweepSummary:
    """Ingest reviews for every linked business."""
    source = require_review_source(source)
    try:
        return await sweep_reviews(source, reviews, businesses)
    except Exception as exc:  # noqa: BLE001
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.post("/add", response_model=AddReviewResponse)
def add(
    payload: AddReviewRequest,
    reviews: ReviewRepository = Depends(get_review_repository),
) -> AddReviewResponse:
    """Insert a single review without calling Google."""
    if not (payload.business_id or "").strip():
        raise HTTPException(status_code=400, detail="BusinessId is required")
    try:
        review = add_review(reviews, payload)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Error adding review")
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    logger.info("Review added: %s for business %s", review.id, review.location_id)
    return AddReviewResponse(success=True, review_id=review.id, message="Review added successfully")


@router.get("/{business_id}", response_model=GetReviewsResult)
def list_reviews(
    business_id: str,
    skip: str | None = None,
    take: str | None = None,
    reviews: ReviewRepository = Depends(get_review_repository),
) -> GetReviewsResult:
    """Return stored reviews for a location, newest first."""
    skip_value = max(_parse_int(skip, 0), 0)
    take_value = _parse_int(take, DEFAULT_TAKE)
    if take_value < 0:
        take_value = DEFAULT_TAKE
    try:
        return get_reviews(reviews, business_id, skip=skip_value, take=take_value)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Error retrieving reviews for business %s", business_id)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
