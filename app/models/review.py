"""Review model."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from app.core.config import settings
from app.db.base import Base


class Review(Base):
    """Review fetched from Google (or added directly)."""

    __tablename__ = settings.reviews_table

    id = Column(String(255), primary_key=True)  # Google reviewId
    location_id = Column(String(255), nullable=False, index=True)
    reviewer_name = Column(String(255), nullable=False, default="Anonymous")
    rating = Column(Integer, nullable=False, default=0)
    text = Column(Text, nullable=False, default="")
    review_date = Column(DateTime, nullable=False, index=True)
    reply = Column(Text)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime)
