"""Database initialization utilities."""

import logging

from sqlalchemy.engine import Engine

from app import models  # noqa: F401
from app.db.base import Base
from app.db.session import engine as default_engine

logger = logging.getLogger(__name__)


def init_db(engine: Engine | None = None) -> None:
    """Create the business and review tables if they do not exist."""
    bind = engine or default_engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ready: %s", ", ".join(sorted(Base.metadata.tables)))
