# src/piazza/domain/__init__.py
"""Pure domain logic: records, lifecycle, engagement, views and topic queries."""

from .engagement import Engagement, aggregate_engagement
from .lifecycle import Lifecycle, PostStatus, evaluate_lifecycle
from .records import Author, InteractionRecord, InteractionType, PostRecord, Principal
from .topics import Topic, parse_topic
from .views import CommentView, EnrichedPost, build_post_view, build_post_views

__all__ = [
    "Author",
    "CommentView",
    "Engagement",
    "EnrichedPost",
    "InteractionRecord",
    "InteractionType",
    "Lifecycle",
    "PostRecord",
    "PostStatus",
    "Principal",
    "Topic",
    "aggregate_engagement",
    "build_post_view",
    "build_post_views",
    "evaluate_lifecycle",
    "parse_topic",
]
