"""Fixed topic vocabulary."""
from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from piazza.core.errors import ValidationError


class Topic(str, Enum):
    """Topics a post can be tagged with."""

    POLITICS = "politics"
    HEALTH = "health"
    SPORT = "sport"
    TECH = "tech"


VALID_TOPICS: tuple[str, ...] = tuple(topic.value for topic in Topic)


def parse_topic(value: str, *, field: str = "topic") -> Topic:
    """Return the canonical topic for ``value``, ignoring case and padding.

    Raises:
        ValidationError: If ``value`` is not in the vocabulary.
    """
    try:
        return Topic(value.strip().lower())
    except ValueError as err:
        raise ValidationError(
            f"Unknown topic '{value}'; expected one of: {', '.join(VALID_TOPICS)}",
            field=field,
        ) from err


def parse_topics(values: Iterable[str], *, field: str = "topics") -> tuple[Topic, ...]:
    """Canonicalise a post's topic list, preserving the caller's order.

    Raises:
        ValidationError: If the list is empty, contains an unknown topic or
            names the same topic twice.
    """
    topics: list[Topic] = []
    for value in values:
        topic = parse_topic(value, field=field)
        if topic in topics:
            raise ValidationError(f"Duplicate topic '{topic.value}'", field=field)
        topics.append(topic)
    if not topics:
        raise ValidationError("At least one topic is required", field=field)
    return tuple(topics)
