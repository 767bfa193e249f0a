"""Authentication schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field

from taskflow.schemas.base import CamelModel, CommandModel, NonBlankStr
from taskflow.schemas.user import UserRead


class RegisterRequest(CommandModel):
    """Schema for account registration."""

    email: EmailStr
    username: NonBlankStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1)
    display_name: Optional[str] = Field(None, max_length=255)


class LoginRequest(CommandModel):
    """Schema for login credentials."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthResponse(CamelModel):
    """User profile plus a freshly issued bearer token."""

    user: UserRead
    token: str
