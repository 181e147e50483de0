"""Schemas shared across review processing."""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, Field

from app.schemas.base import CamelModel


class ReviewRecord(CamelModel):
    id: str = Field(..., min_length=1)
    location_id: str
    reviewer_name: str = "Anonymous"
    rating: int = 0
    text: str = ""
    review_date: datetime
    reply: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AddReviewRequest(CamelModel):
    id: Optional[str] = None
    business_id: Optional[str] = None
    reviewer_name: Optional[str] = None
    rating: int = 0
    text: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("text", "comment", "Comment"),
        description="Review comment",
    )
    review_date: Optional[datetime] = None
    reply: Optional[str] = None


class AddReviewResponse(CamelModel):
    success: bool
    review_id: str
    message: str


class GetReviewsResult(CamelModel):
    reviews: list[ReviewRecord] = Field(default_factory=list)
    total_count: int = 0
