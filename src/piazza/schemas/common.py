"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class AuthorOut(BaseModel):
    """User reference embedded in posts, comments and interactions."""

    id: int
    name: str


class ErrorResponse(BaseModel):
    """Body returned for every domain error."""

    detail: str = Field(..., description="Human-readable reason the request failed.")
    field: str | None = Field(None, description="Offending input field, when known.")


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
