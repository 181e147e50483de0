"""
등록된 모든 비즈니스의 Google 리뷰 수집
------------------------------------
1. DB에서 연결된 비즈니스 목록 가져오기
2. 각 location에 대해 Google API로 리뷰 수집
3. 리뷰 upsert 후 lastSyncTime 갱신

cron 예시 (6시간마다):
    0 */6 * * * cd /srv/google-connector && python scripts/sweep_reviews.py
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

# 환경 변수 로드
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

# app 모듈 import를 위해 경로 추가
sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config import settings
from app.core.logging_config import configure_logging
from app.db.session import SessionLocal
from app.repositories.sql import SqlBusinessRepository, SqlReviewRepository
from app.schemas.ingest import ReviewSweepSummary
from app.services.google_api import GoogleApiClient
from app.services.review_sweep import sweep_reviews
from app.services.secrets import resolve_google_credentials


async def run(location_ids: list[str] | None = None) -> ReviewSweepSummary:
    credentials_json = resolve_google_credentials(settings)
    if not credentials_json:
        raise SystemExit("Google credentials are not configured.")

    source = GoogleApiClient(
        credentials_json,
        base_url=settings.google_api_base_url,
        timeout_seconds=settings.google_api_timeout_seconds,
    )
    db = SessionLocal()
    try:
        # location을 지정하지 않으면 등록된 모든 비즈니스 처리
        return await sweep_reviews(
            source,
            SqlReviewRepository(db),
            SqlBusinessRepository(db),
            location_ids=location_ids or None,
        )
    finally:
        db.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="연결된 비즈니스의 Google 리뷰 수집 및 저장")
    parser.add_argument(
        "--location-ids",
        type=str,
        help="처리할 location ID 목록 (쉼표로 구분, 예: L1,accounts/1/locations/L2)",
    )
    args = parser.parse_args()

    configure_logging(settings.log_level)
    location_ids = None
    if args.location_ids:
        location_ids = [x.strip() for x in args.location_ids.split(",") if x.strip()]

    summary = asyncio.run(run(location_ids))

    print("\n" + "=" * 60)
    print("리뷰 수집 완료")
    print("=" * 60)
    print(f"  처리된 비즈니스: {summary.businesses_processed}개")
    print(f"  저장된 리뷰: {summary.reviews_ingested}개")
    print(f"  실패: {summary.failures}개")
    for location_id in summary.failed_locations:
        print(f"    - {location_id}")
    print("=" * 60)

    if summary.failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
