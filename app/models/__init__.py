"""ORM models; importing this package registers them on the metadata."""

from app.models.business import Business  # noqa: F401
from app.models.review import Review  # noqa: F401
