"""Business link endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.api.deps import get_business_repository
from app.repositories.base import BusinessRepository
from app.schemas.business import LinkBusinessRequest, LinkBusinessResult
from app.services.business_link import link_business

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/businesses", tags=["businesses"])

# .NET 쪽에서 Guid.Empty 로 넘어오는 값
NIL_PROFILE_ID = "00000000-0000-0000-0000-000000000000"


@router.post("/link", response_model=LinkBusinessResult)
def link(
    payload: LinkBusinessRequest,
    businesses: BusinessRepository = Depends(get_business_repository),
):
    """Link a profile business to a Google location."""
    profile_id = (payload.profile_business_id or "").strip()
    location_id = (payload.google_location_id or "").strip()
    if not profile_id or profile_id == NIL_PROFILE_ID or not location_id:
        raise HTTPException(
            status_code=400,
            detail="ProfileBusinessId and GoogleLocationId are required",
        )

    result = link_business(
        businesses,
        profile_id=profile_id,
        google_location_id=location_id,
        business_name=payload.business_name,
        address=payload.location,
    )
    if not result.success:
        return JSONResponse(status_code=500, content=result.model_dump(mode="json", by_alias=True))
    return result
