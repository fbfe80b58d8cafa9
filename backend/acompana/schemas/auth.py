"""
Authentication schema models using Pydantic.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from acompana.schemas.profile import ProfileIn


class Token(BaseModel):
    """Schema for JWT token response."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RegisterRequest(BaseModel):
    """Registration payload, optionally carrying an initial profile."""

    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1)
    name: Optional[str] = None
    profile: Optional[ProfileIn] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    """Schema for user data in responses."""

    id: uuid.UUID
    email: str
    name: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class LoginResponse(Token):
    user: UserResponse


class TokenRefresh(BaseModel):
    """Schema for token refresh request."""

    refresh_token: str
