"""Expose schemas for easier import."""

from app.schemas.business import (  # noqa: F401
    BusinessRecord,
    LinkBusinessRequest,
    LinkBusinessResult,
)
from app.schemas.review import (  # noqa: F401
    AddReviewRequest,
    AddReviewResponse,
    GetReviewsResult,
    ReviewRecord,
)
from app.schemas.ingest import (  # noqa: F401
    IngestReviewsRequest,
    IngestReviewsResult,
    ReviewSweepSummary,
)
