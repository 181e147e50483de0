"""Store contracts used by the workflows.

Both the SQL and the in-memory implementations satisfy these protocols,
so workflows and endpoints never depend on a concrete backend.
"""

from __future__ import annotations

from typing import Protocol

from app.schemas.business import BusinessRecord
from app.schemas.review import ReviewRecord


class BusinessRepository(Protocol):
    def get(self, location_id: str) -> BusinessRecord | None: ...

    def get_by_profile_id(self, profile_id: str) -> BusinessRecord | None: ...

    def list_all(self) -> list[BusinessRecord]: ...

    def create(self, business: BusinessRecord) -> BusinessRecord:
        """Insert a new record; raises if the location ID is taken."""
        ...

    def update(self, business: BusinessRecord) -> BusinessRecord:
        """Replace an existing record; raises if it does not exist."""
        ...


class ReviewRepository(Protocol):
    def get(self, review_id: str) -> ReviewRecord | None: ...

    def list_for_location(self, location_id: str, skip: int, take: int) -> list[ReviewRecord]:
        """Reviews for a location, newest ``review_date`` first."""
        ...

    def count_for_location(self, location_id: str) -> int: ...

    def upsert(self, review: ReviewRecord) -> ReviewRecord:
        """Insert or replace by ID, keeping the stored ``created_at``."""
        ...
