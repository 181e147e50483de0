"""Link an external business profile to a Google location."""

from __future__ import annotations

import logging
from datetime import datetime

from app.core.clock import utcnow
from app.core.exceptions import classify_error, error_message
from app.core.locations import canonical_location_id
from app.repositories.base import BusinessRepository
from app.schemas.business import BusinessRecord, LinkBusinessResult

logger = logging.getLogger(__name__)


def _release_profile(
    businesses: BusinessRepository,
    profile_id: str,
    location_id: str,
    now: datetime,
) -> BusinessRecord | None:
    """Detach ``profile_id`` from any other location so it stays linked to one.

    Returns the holder as it was before the change, so it can be put back.
    """
    holder = businesses.get_by_profile_id(profile_id)
    if holder is None or holder.location_id == location_id:
        return None
    previous = holder.model_copy()
    logger.info("Moving profile %s from location %s to %s", profile_id, holder.location_id, location_id)
    holder.linked_profile_id = None
    holder.updated_at = now
    businesses.update(holder)
    return previous


def _save_link(
    businesses: BusinessRepository,
    location_id: str,
    resource_name: str | None,
    profile_id: str,
    business_name: str,
    address: str | None,
    now: datetime,
) -> BusinessRecord:
    existing = businesses.get(location_id)
    if existing:
        existing.display_name = business_name
        if address:
            existing.address = address
        if resource_name:
            existing.resource_name = resource_name
        existing.linked_profile_id = profile_id
        existing.updated_at = now
        business = businesses.update(existing)
        logger.info("Updated business %s linked to profile %s", location_id, profile_id)
        return business

    business = businesses.create(
        BusinessRecord(
            location_id=location_id,
            resource_name=resource_name,
            display_name=business_name,
            address=address or None,
            linked_profile_id=profile_id,
            created_at=now,
            updated_at=now,
        )
    )
    logger.info("Created business %s linked to profile %s", location_id, profile_id)
    return business


def link_business(
    businesses: BusinessRepository,
    profile_id: str,
    google_location_id: str,
    business_name: str,
    address: str | None = None,
) -> LinkBusinessResult:
    """Create or update the business record for a location and link the profile."""
    try:
        location_id = canonical_location_id(google_location_id)
        resource_name = google_location_id if location_id != google_location_id else None
        now = utcnow()

        released = _release_profile(businesses, profile_id, location_id, now)
        try:
            business = _save_link(
                businesses, location_id, resource_name, profile_id, business_name, address, now
            )
        except Exception:
            # 저장 실패 시 이전 연결을 되돌림
            if released is not None:
                businesses.update(released)
                logger.info("Restored profile %s on location %s", profile_id, released.location_id)
            raise

        return LinkBusinessResult(success=True, google_business=business)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Linking profile %s to %s failed", profile_id, google_location_id)
        return LinkBusinessResult(
            success=False,
            error_message=error_message(exc),
            error_kind=classify_error(exc),
        )
