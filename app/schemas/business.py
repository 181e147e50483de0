"""Pydantic schemas for linked businesses."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.core.exceptions import ErrorKind
from app.schemas.base import CamelModel


class BusinessRecord(CamelModel):
    location_id: str = Field(..., min_length=1, description="Bare Google location ID")
    resource_name: Optional[str] = Field(None, description="accounts/{a}/locations/{l}")
    display_name: str = ""
    address: Optional[str] = None
    linked_profile_id: Optional[str] = None
    last_sync_time: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class LinkBusinessRequest(CamelModel):
    profile_business_id: Optional[str] = None
    google_location_id: Optional[str] = Field(
        None, description="Bare location ID or accounts/{a}/locations/{l}"
    )
    business_name: str = ""
    location: Optional[str] = None


class LinkBusinessResult(CamelModel):
    success: bool
    google_business: Optional[BusinessRecord] = None
    error_message: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
