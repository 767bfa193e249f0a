"""User profile schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from taskflow.schemas.base import CamelModel, CommandModel


class UserSummary(CamelModel):
    """Public profile fields embedded in other resources."""

    id: str
    username: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None


class UserRead(UserSummary):
    """Full profile of the authenticated user. Never includes the password hash."""

    email: str
    created_at: datetime


class ProfileUpdate(CommandModel):
    """Partial profile update; only fields present in the body are changed."""

    display_name: Optional[str] = Field(None, max_length=255)
    avatar_url: Optional[str] = Field(None, max_length=2048)
