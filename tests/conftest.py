"""Shared fixtures; the app is configured for SQLite before it is imported."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STORE_BACKEND", "memory")

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.init_db import init_db
from app.repositories.memory import (
    InMemoryBusinessRepository,
    InMemoryReviewRepository,
    InMemoryStore,
)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def businesses(store):
    return InMemoryBusinessRepository(store)


@pytest.fixture
def reviews(store):
    return InMemoryReviewRepository(store)


@pytest.fixture
def review_source():
    source = AsyncMock()
    source.fetch_reviews.return_value = []
    return source


@pytest.fixture
def db_session():
    """Session on a private in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
