"""Read stored reviews and add reviews directly."""

from __future__ import annotations

import uuid

from app.core.clock import to_naive_utc, utcnow
from app.repositories.base import ReviewRepository
from app.schemas.review import AddReviewRequest, GetReviewsResult, ReviewRecord

DEFAULT_TAKE = 100


def get_reviews(
    reviews: ReviewRepository,
    location_id: str,
    skip: int = 0,
    take: int = DEFAULT_TAKE,
) -> GetReviewsResult:
    """One page of reviews (newest first) plus the location's total count."""
    page = reviews.list_for_location(location_id, skip, take)
    total = reviews.count_for_location(location_id)
    return GetReviewsResult(reviews=page, total_count=total)


def add_review(reviews: ReviewRepository, payload: AddReviewRequest) -> ReviewRecord:
    """Store a review that did not come from Google."""
    now = utcnow()
    review = ReviewRecord(
        id=payload.id or str(uuid.uuid4()),
        location_id=payload.business_id,
        reviewer_name=payload.reviewer_name or "Anonymous",
        rating=payload.rating,
        text=payload.text or "",
        review_date=to_naive_utc(payload.review_date) if payload.review_date else now,
        reply=payload.reply,
        created_at=now,
        updated_at=now,
    )
    return reviews.upsert(review)
