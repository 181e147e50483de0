"""
데이터베이스 스키마 초기화 스크립트
----------------------------------
google_businesses / google_reviews 테이블을 생성합니다.
"""

import sys
from pathlib import Path

# 환경 변수 로드
from dotenv import load_dotenv

# 프로젝트 루트의 .env 파일 로드
PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

# app 모듈 import를 위해 경로 추가
sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy import inspect

from app.core.logging_config import configure_logging
from app.db.init_db import init_db
from app.db.session import engine


def init_db_schema() -> None:
    """데이터베이스 스키마 초기화."""
    print("🔧 데이터베이스 스키마 초기화 중...")
    init_db(engine)
    print("✅ 테이블 생성 완료")

    print("\n📋 생성된 테이블:")
    for name in sorted(inspect(engine).get_table_names()):
        print(f"  - {name}")


if __name__ == "__main__":
    configure_logging()
    init_db_schema()
