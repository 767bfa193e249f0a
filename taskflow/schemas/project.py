"""Project schemas for request/response validation."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, model_validator

from taskflow.models.project import MemberRole
from taskflow.schemas.base import CamelModel, CommandModel, NonBlankStr
from taskflow.schemas.task import TaskListItem
from taskflow.schemas.user import UserSummary


class ProjectCreate(CommandModel):
    """Schema for creating a project. The creator becomes its owner."""

    name: NonBlankStr = Field(..., max_length=255)
    description: Optional[str] = None
    color: Optional[str] = Field(None, max_length=32)


class ProjectUpdate(CommandModel):
    """Partial project update. Omitted fields are left untouched."""

    name: Optional[NonBlankStr] = Field(None, max_length=255)
    description: Optional[str] = None
    color: Optional[str] = Field(None, min_length=1, max_length=32)

    @model_validator(mode="after")
    def _reject_null_name_or_color(self) -> "ProjectUpdate":
        for name in ("name", "color"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class MemberAdd(CommandModel):
    """Invite an existing user (by email) into a project."""

    email: EmailStr
    role: MemberRole = MemberRole.member


class MemberRead(CamelModel):
    id: str
    project_id: str
    user_id: str
    role: MemberRole
    joined_at: datetime
    user: UserSummary


class ProjectRead(CamelModel):
    """Project with its members."""

    id: str
    name: str
    description: Optional[str] = None
    color: str
    created_at: datetime
    updated_at: datetime
    members: list[MemberRead] = []


class ProjectListItem(ProjectRead):
    task_count: int = 0


class ProjectDetail(ProjectRead):
    """Project with members and all of its tasks."""

    tasks: list[TaskListItem] = []
