# src/piazza/repositories/__init__.py
"""Persistence adapters exposing the post, interaction and user stores."""

from .base import InteractionStore, PostStore
from .interaction_repo import InteractionRepository
from .post_repo import PostRepository
from .user_repo import UserRepository

__all__ = [
    "InteractionRepository",
    "InteractionStore",
    "PostRepository",
    "PostStore",
    "UserRepository",
]
