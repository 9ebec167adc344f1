"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from piazza.core.errors import ValidationError as DomainValidationError
from piazza.domain.lifecycle import PostStatus
from piazza.domain.topics import parse_topics
from piazza.schemas.common import AuthorOut


def _canonical_topics(value: list[str]) -> list[str]:
    return [topic.value for topic in parse_topics(value)]


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=3, max_length=256)
    body: str = Field(..., min_length=10)
    expires_in: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Minutes until the post expires"
    )
    topics: list[str] = Field(..., min_length=1, description="Topics from the fixed vocabulary")

    @field_validator("topics")
    @classmethod
    def _validate_topics(cls, value: list[str]) -> list[str]:
        try:
            return _canonical_topics(value)
        except DomainValidationError as err:
            raise ValueError(err.detail) from err


class PostUpdate(BaseModel):
    """Schema for an owner's partial update; omitted fields stay unchanged.

    An update naming no field is rejected by the post service, after the post
    has been found and its ownership checked.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    title: str | None = Field(None, min_length=3, max_length=256)
    body: str | None = Field(None, min_length=10)
    expires_in: float | None = Field(
        None, gt=0, allow_inf_nan=False, description="New lifetime in minutes from now"
    )
    topics: list[str] | None = Field(None, min_length=1)

    @field_validator("topics")
    @classmethod
    def _validate_topics(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        try:
            return _canonical_topics(value)
        except DomainValidationError as err:
            raise ValueError(err.detail) from err


class CommentOut(BaseModel):
    """Comment embedded in an enriched post."""

    id: int
    user: AuthorOut
    comment_body: str
    created_at: datetime


class PostResponse(BaseModel):
    """Enriched post: stored fields plus derived status and engagement."""

    id: int
    title: str
    body: str
    topics: list[str]
    owner: AuthorOut
    expires_at: datetime
    expires_in: int = Field(..., description="Whole minutes left, rounded up")
    status: PostStatus
    like_count: int
    dislike_count: int
    comments: list[CommentOut]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
