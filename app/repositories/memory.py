"""In-memory stores for local runs and tests.

One ``InMemoryStore`` is created per application (or per test) and handed
to the repositories explicitly; nothing is kept at module level.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from app.core.clock import utcnow
from app.core.exceptions import RecordExistsError, RecordNotFoundError
from app.schemas.business import BusinessRecord
from app.schemas.review import ReviewRecord


@dataclass
class InMemoryStore:
    businesses: dict[str, BusinessRecord] = field(default_factory=dict)
    reviews: dict[str, ReviewRecord] = field(default_factory=dict)
    lock: threading.Lock = field(default_factory=threading.Lock)


class InMemoryBusinessRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def get(self, location_id: str) -> BusinessRecord | None:
        with self.store.lock:
            business = self.store.businesses.get(location_id)
            return business.model_copy() if business else None

    def get_by_profile_id(self, profile_id: str) -> BusinessRecord | None:
        with self.store.lock:
            for location_id in sorted(self.store.businesses):
                business = self.store.businesses[location_id]
                if business.linked_profile_id == profile_id:
                    return business.model_copy()
        return None

    def list_all(self) -> list[BusinessRecord]:
        with self.store.lock:
            return [self.store.businesses[k].model_copy() for k in sorted(self.store.businesses)]

    def create(self, business: BusinessRecord) -> BusinessRecord:
        with self.store.lock:
            if business.location_id in self.store.businesses:
                raise RecordExistsError(f"Business {business.location_id} already exists")
            self.store.businesses[business.location_id] = business.model_copy()
        return business.model_copy()

    def update(self, business: BusinessRecord) -> BusinessRecord:
        with self.store.lock:
            if business.location_id not in self.store.businesses:
                raise RecordNotFoundError(f"Business {business.location_id} does not exist")
            self.store.businesses[business.location_id] = business.model_copy()
        return business.model_copy()


class InMemoryReviewRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def get(self, review_id: str) -> ReviewRecord | None:
        with self.store.lock:
            review = self.store.reviews.get(review_id)
            return review.model_copy() if review else None

    def list_for_location(self, location_id: str, skip: int, take: int) -> list[ReviewRecord]:
        with self.store.lock:
            matching = [r for r in self.store.reviews.values() if r.location_id == location_id]
        matching.sort(key=lambda r: r.id)
        matching.sort(key=lambda r: r.review_date, reverse=True)
        return [r.model_copy() for r in matching[skip:skip + take]]

    def count_for_location(self, location_id: str) -> int:
        with self.store.lock:
            return sum(1 for r in self.store.reviews.values() if r.location_id == location_id)

    def upsert(self, review: ReviewRecord) -> ReviewRecord:
        now = utcnow()
        with self.store.lock:
            existing = self.store.reviews.get(review.id)
            created_at = existing.created_at if existing else (review.created_at or now)
            stored = review.model_copy(update={"created_at": created_at, "updated_at": now})
            self.store.reviews[review.id] = stored
        return stored.model_copy()
