# src/piazza/models/__init__.py
"""SQLAlchemy models for the Piazza application."""

from .interaction import Interaction
from .post import Post, PostTopic
from .user import User

__all__ = [
    "Interaction",
    "Post", "PostTopic",
    "User",
]
