"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterRequest(BaseModel):
    """Schema for creating an account."""

    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(..., min_length=3, max_length=256)
    name: str = Field(..., min_length=3, max_length=256, description="Display name")
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=1024)


class LoginRequest(BaseModel):
    """Schema for exchanging credentials for an access token."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=1024)


class TokenResponse(BaseModel):
    """Bearer token returned after a successful login."""

    access_token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    """Public account information."""

    id: int
    username: str
    name: str
    email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
