"""SQLAlchemy-backed stores."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.clock import utcnow
from app.core.exceptions import RecordExistsError, RecordNotFoundError
from app.models.business import Business
from app.models.review import Review
from app.schemas.business import BusinessRecord
from app.schemas.review import ReviewRecord

BUSINESS_FIELDS = (
    "resource_name",
    "display_name",
    "address",
    "linked_profile_id",
    "last_sync_time",
    "created_at",
    "updated_at",
)

REVIEW_FIELDS = (
    "location_id",
    "reviewer_name",
    "rating",
    "text",
    "review_date",
    "reply",
)


class SqlBusinessRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, location_id: str) -> BusinessRecord | None:
        row = self.db.get(Business, location_id)
        return BusinessRecord.model_validate(row) if row else None

    def get_by_profile_id(self, profile_id: str) -> BusinessRecord | None:
        row = (
            self.db.query(Business)
            .filter(Business.linked_profile_id == profile_id)
            .order_by(Business.location_id)
            .first()
        )
        return BusinessRecord.model_validate(row) if row else None

    def list_all(self) -> list[BusinessRecord]:
        rows = self.db.query(Business).order_by(Business.location_id).all()
        return [BusinessRecord.model_validate(r) for r in rows]

    def create(self, business: BusinessRecord) -> BusinessRecord:
        if self.db.get(Business, business.location_id) is not None:
            raise RecordExistsError(f"Business {business.location_id} already exists")
        try:
            row = Business(location_id=business.location_id)
            for field in BUSINESS_FIELDS:
                setattr(row, field, getattr(business, field))
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            return BusinessRecord.model_validate(row)
        except Exception:
            self.db.rollback()
            raise

    def update(self, business: BusinessRecord) -> BusinessRecord:
        row = self.db.get(Business, business.location_id)
        if row is None:
            raise RecordNotFoundError(f"Business {business.location_id} does not exist")
        try:
            for field in BUSINESS_FIELDS:
                setattr(row, field, getattr(business, field))
            self.db.commit()
            self.db.refresh(row)
            return BusinessRecord.model_validate(row)
        except Exception:
            self.db.rollback()
            raise


class SqlReviewRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, review_id: str) -> ReviewRecord | None:
        row = self.db.get(Review, review_id)
        return ReviewRecord.model_validate(row) if row else None

    def list_for_location(self, location_id: str, skip: int, take: int) -> list[ReviewRecord]:
        rows = (
            self.db.query(Review)
            .filter(Review.location_id == location_id)
            .order_by(Review.review_date.desc(), Review.id)
            .offset(skip)
            .limit(take)
            .all()
        )
        return [ReviewRecord.model_validate(r) for r in rows]

    def count_for_location(self, location_id: str) -> int:
        return (
            self.db.query(func.count(Review.id))
            .filter(Review.location_id == location_id)
            .scalar()
            or 0
        )

    def upsert(self, review: ReviewRecord) -> ReviewRecord:
        """Insert or update a review; created_at survives re-upserts."""
        now = utcnow()
        try:
            row = self.db.get(Review, review.id)
            if row is None:
                row = Review(id=review.id, created_at=review.created_at or now)
                self.db.add(row)
            for field in REVIEW_FIELDS:
                setattr(row, field, getattr(review, field))
            row.updated_at = now
            self.db.commit()
            self.db.refresh(row)
            return ReviewRecord.model_validate(row)
        except Exception:
            self.db.rollback()
            raise
