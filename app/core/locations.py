"""Helpers for Google location identifiers."""

LOCATIONS_SEGMENT = "/locations/"


def canonical_location_id(location_id: str) -> str:
    """Return the bare location ID.

    ``accounts/123/locations/L1`` becomes ``L1``; anything without a
    ``/locations/`` segment is returned as is.
    """
    if LOCATIONS_SEGMENT not in location_id:
        return location_id
    tail = location_id.split(LOCATIONS_SEGMENT, 1)[1]
    segment = tail.split("/", 1)[0]
    return segment or location_id


def reviews_path(location_id: str) -> str:
    """API path of the reviews collection for a location."""
    if "/" in location_id:
        return f"{location_id.strip('/')}/reviews"
    # account 없이 location ID만 있는 경우 (계정 경로 저장 권장)
    return f"locations/{location_id}/reviews"
