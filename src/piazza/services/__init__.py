# src/piazza/services/__init__.py
"""Business logic services for the Piazza application."""

from . import auth_service, interaction_service, post_service, topic_service

__all__ = [
    "auth_service",
    "interaction_service",
    "post_service",
    "topic_service",
]
