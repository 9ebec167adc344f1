# src/piazza/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .interactions import router as interactions_router
from .posts import router as posts_router
from .topics import router as topics_router

__all__ = [
    "auth_router",
    "posts_router",
    "interactions_router",
    "topics_router",
]
