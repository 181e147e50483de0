"""Builders for test records."""

from datetime import datetime, timedelta

from app.schemas.business import BusinessRecord
from app.schemas.review import ReviewRecord

BASE_DATE = datetime(2024, 6, 1, 12, 0, 0)


def make_review(review_id: str, location_id: str = "L1", days: int = 0, **kwargs) -> ReviewRecord:
    values = {
        "id": review_id,
        "location_id": location_id,
        "reviewer_name": "John Doe",
        "rating": 5,
        "text": "Great service!",
        "review_date": BASE_DATE + timedelta(days=days),
    }
    values.update(kwargs)
    return ReviewRecord(**values)


def make_business(location_id: str = "L1", **kwargs) -> BusinessRecord:
    values = {
        "location_id": location_id,
        "display_name": "Test Business",
        "address": "Test Location",
        "created_at": BASE_DATE,
        "updated_at": BASE_DATE,
    }
    values.update(kwargs)
    return BusinessRecord(**values)
