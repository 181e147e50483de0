"""Business and review stores."""

from app.repositories.base import BusinessRepository, ReviewRepository  # noqa: F401
from app.repositories.memory import (  # noqa: F401
    InMemoryBusinessRepository,
    InMemoryReviewRepository,
    InMemoryStore,
)
from app.repositories.sql import SqlBusinessRepository, SqlReviewRepository  # noqa: F401
