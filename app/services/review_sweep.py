"""Ingest reviews for every linked business."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Iterable

from app.core.locations import canonical_location_id
from app.repositories.base import BusinessRepository, ReviewRepository
from app.schemas.ingest import ReviewSweepSummary
from app.services.google_api import ReviewSource
from app.services.review_ingest import ingest_reviews

logger = logging.getLogger(__name__)


async def sweep_reviews(
    source: ReviewSource,
    reviews: ReviewRepository,
    businesses: BusinessRepository,
    location_ids: Iterable[str] | None = None,
) -> ReviewSweepSummary:
    """Run ingestion for each stored business; one failure does not stop the rest.

    ``location_ids`` limits the sweep to the given locations (bare IDs or
    resource paths) instead of every stored business.
    """
    if location_ids is None:
        stored = await asyncio.to_thread(businesses.list_all)
        targets = [b.resource_name or b.location_id for b in stored]
    else:
        targets = list(dict.fromkeys(location_ids))
    logger.info("Review sweep started for %d businesses", len(targets))

    processed = 0
    ingested = 0
    failed_locations: list[str] = []

    for target in targets:
        result = await ingest_reviews(source, reviews, businesses, location_id=target)
        if result.success:
            processed += 1
            ingested += result.reviews_ingested
        else:
            failed_locations.append(canonical_location_id(target))
            logger.warning("[SKIP] location=%s: %s", target, result.error_message)

    logger.info(
        "Review sweep finished: %d processed, %d reviews, %d failures",
        processed,
        ingested,
        len(failed_locations),
    )
    return ReviewSweepSummary(
        businesses_processed=processed,
        reviews_ingested=ingested,
        failures=len(failed_locations),
        failed_locations=failed_locations,
    )


async def run_periodic_sweep(
    interval_seconds: float,
    sweep: Callable[[], Awaitable[ReviewSweepSummary]],
) -> None:
    """Call ``sweep`` every ``interval_seconds`` until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await sweep()
        except Exception:  # noqa: BLE001
            logger.exception("Scheduled review sweep failed")
