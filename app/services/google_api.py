"""Client for the Google Business Profile reviews API."""

from __future__ import annotations

import asyncio
import json
import logging
import re
import uuid
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator, Protocol

import aiohttp
from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2 import service_account

from app.core.clock import to_naive_utc, utcnow
from app.core.exceptions import ConfigurationError, GoogleApiError
from app.core.locations import canonical_location_id, reviews_path
from app.schemas.review import ReviewRecord

logger = logging.getLogger(__name__)

SCOPES = (
    "https://www.googleapis.com/auth/business.manage",
    "https://www.googleapis.com/auth/businessprofileperformance",
)
DEFAULT_BASE_URL = "https://mybusiness.googleapis.com/v4"
ANONYMOUS = "Anonymous"

# v4 API는 starRating을 enum 문자열로 내려주기도 함
STAR_RATINGS = {"ONE": 1, "TWO": 2, "THREE": 3, "FOUR": 4, "FIVE": 5}

_FRACTION = re.compile(r"\.(\d{6})\d+")


class ReviewSource(Protocol):
    async def fetch_reviews(self, location_id: str) -> list[ReviewRecord]: ...


def parse_star_rating(value: Any) -> int:
    """Accept 5, 5.0, "5" or "FIVE"; anything else is 0."""
    if isinstance(value, bool):
        return 0
    try:
        if isinstance(value, (int, float)):
            return int(value)
        if isinstance(value, str):
            text = value.strip().upper()
            if text in STAR_RATINGS:
                return STAR_RATINGS[text]
            return int(float(text))
    except (ValueError, OverflowError):
        # "1e400", "inf", "nan"
        return 0
    return 0


def parse_timestamp(value: Any) -> datetime:
    """Parse an RFC 3339 timestamp; missing or invalid values become now."""
    if not isinstance(value, str) or not value.strip():
        return utcnow()
    text = _FRACTION.sub(r".\1", value.strip())
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return to_naive_utc(datetime.fromisoformat(text))
    except ValueError:
        return utcnow()


def parse_review(item: dict[str, Any], location_id: str) -> ReviewRecord | None:
    """Map one API review object to a ReviewRecord, or None if it is unusable."""
    try:
        reviewer = item.get("reviewer") or {}
        reply_obj = item.get("reviewReply")
        reply = None
        if isinstance(reply_obj, dict) and "comment" in reply_obj:
            reply = reply_obj.get("comment")

        return ReviewRecord(
            id=item.get("reviewId") or str(uuid.uuid4()),
            location_id=location_id,
            reviewer_name=reviewer.get("displayName") or ANONYMOUS,
            rating=parse_star_rating(item.get("starRating")),
            text=item.get("comment") or "",
            review_date=parse_timestamp(item.get("createTime")),
            reply=reply,
            created_at=utcnow(),
        )
    except Exception:  # noqa: BLE001
        logger.warning("Dropping unparsable review for location %s", location_id, exc_info=True)
        return None


class GoogleApiClient:
    """Fetches every review of a location, following ``nextPageToken``."""

    def __init__(
        self,
        credentials_json: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: int = 30,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        if not credentials_json:
            raise ConfigurationError("Google credentials JSON is empty.")
        self._credentials_json = credentials_json
        self._credentials: service_account.Credentials | None = None
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session

    def _load_credentials(self) -> service_account.Credentials:
        try:
            info = json.loads(self._credentials_json)
        except json.JSONDecodeError as exc:
            raise ConfigurationError("Google credentials are not valid JSON.") from exc
        if info.get("type") != "service_account":
            raise ConfigurationError(
                "Google credentials must be a service account key (type=service_account)."
            )
        return service_account.Credentials.from_service_account_info(info, scopes=list(SCOPES))

    async def _get_access_token(self) -> str:
        if self._credentials is None:
            self._credentials = self._load_credentials()
        if not self._credentials.valid:
            # google-auth refresh는 동기 호출이라 스레드에서 실행
            await asyncio.to_thread(self._credentials.refresh, GoogleAuthRequest())
        return self._credentials.token

    @asynccontextmanager
    async def _client_session(self) -> AsyncIterator[aiohttp.ClientSession]:
        if self._session is not None:
            yield self._session
            return
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            yield session

    async def _fetch_page(
        self,
        session: aiohttp.ClientSession,
        url: str,
        access_token: str,
        page_token: str | None,
    ) -> dict[str, Any] | None:
        """Return one page of the API response, or None when the location is unknown."""
        params = {"pageToken": page_token} if page_token else None
        headers = {"Authorization": f"Bearer {access_token}", "Accept": "application/json"}
        async with session.get(url, params=params, headers=headers) as response:
            if response.status == 404:
                return None
            if response.status >= 400:
                body = await response.text()
                logger.error("Google API error: %s - %s", response.status, body)
                raise GoogleApiError(response.status, body, url)
            return await response.json(content_type=None)

    async def fetch_reviews(self, location_id: str) -> list[ReviewRecord]:
        """Fetch all reviews for ``location_id`` (bare ID or full resource path)."""
        logger.info("Fetching reviews for location %s", location_id)
        access_token = await self._get_access_token()
        url = f"{self.base_url}/{reviews_path(location_id)}"
        stored_location_id = canonical_location_id(location_id)

        reviews: list[ReviewRecord] = []
        page_token: str | None = None
        pages = 0
        async with self._client_session() as session:
            while True:
                payload = await self._fetch_page(session, url, access_token, page_token)
                if payload is None:
                    logger.warning("Business location not found: %s", location_id)
                    break
                pages += 1
                for item in payload.get("reviews") or []:
                    review = parse_review(item, stored_location_id)
                    if review is not None:
                        reviews.append(review)
                page_token = payload.get("nextPageToken") or None
                if not page_token:
                    break

        logger.info(
            "Fetched %d reviews in %d page(s) for location %s", len(reviews), pages, location_id
        )
        return reviews
