# src/piazza/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    interactions_router,
    posts_router,
    topics_router,
)

__all__ = [
    "auth_router",
    "posts_router",
    "interactions_router",
    "topics_router",
]
