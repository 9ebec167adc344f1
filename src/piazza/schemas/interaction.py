"""Interaction-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from piazza.domain.records import InteractionType
from piazza.schemas.common import AuthorOut


class InteractionCreate(BaseModel):
    """Schema for liking, disliking or commenting on a post."""

    model_config = ConfigDict(str_strip_whitespace=True)

    post_id: int
    type: Literal["like", "dislike", "comment"]
    comment_body: str | None = Field(None, description="Required for comments, forbidden otherwise")

    @model_validator(mode="after")
    def _check_comment_body(self) -> "InteractionCreate":
        if self.type == "comment" and not self.comment_body:
            raise ValueError("comment_body is required for comments")
        if self.type != "comment" and self.comment_body is not None:
            raise ValueError(f"comment_body is not allowed for a {self.type}")
        return self


class InteractionResponse(BaseModel):
    """Stored interaction returned to the caller."""

    id: int
    post_id: int
    user: AuthorOut
    type: InteractionType
    comment_body: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
