"""Business model."""

from sqlalchemy import Column, DateTime, String, Text

from app.core.config import settings
from app.db.base import Base


class Business(Base):
    """Google Business Profile location linked to an external profile."""

    __tablename__ = settings.businesses_table

    location_id = Column(String(255), primary_key=True)  # bare location ID
    resource_name = Column(String(512))  # accounts/{a}/locations/{l}
    display_name = Column(String(255), nullable=False, default="")
    address = Column(Text)
    linked_profile_id = Column(String(64), index=True)
    last_sync_time = Column(DateTime)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime)
