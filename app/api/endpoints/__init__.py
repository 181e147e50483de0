"""Expose API endpoint routers."""

from app.api.endpoints import businesses, reviews

__all__ = ["businesses", "reviews"]
