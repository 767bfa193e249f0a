"""Task, comment and attachment schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from taskflow.models.task import TaskPriority, TaskStatus
from taskflow.schemas.base import CamelModel, CommandModel, NonBlankStr
from taskflow.schemas.user import UserSummary


class TaskCreate(CommandModel):
    """Schema for creating a task. Status and priority default to todo/medium."""

    title: NonBlankStr = Field(..., max_length=500)
    project_id: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.todo
    priority: TaskPriority = TaskPriority.medium
    due_date: Optional[datetime] = None
    assignee_id: Optional[str] = None


# Fields that may be set but never cleared with an explicit null
_NON_NULLABLE_UPDATE_FIELDS = ("title", "status", "priority")


class TaskUpdate(CommandModel):
    """Partial task update.

    Only keys present in the body are applied. An explicit null clears
    ``dueDate``, ``assigneeId`` or ``description``; null is rejected for
    ``title``, ``status`` and ``priority``.
    """

    title: Optional[NonBlankStr] = Field(None, max_length=500)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    assignee_id: Optional[str] = None

    @model_validator(mode="after")
    def _reject_null_required(self) -> "TaskUpdate":
        for name in _NON_NULLABLE_UPDATE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class ProjectSummary(CamelModel):
    id: str
    name: str
    color: str


class TaskRead(CamelModel):
    """Task with its project summary and the creator/assignee profiles."""

    id: str
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[datetime] = None
    project_id: str
    creator_id: str
    assignee_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    project: ProjectSummary
    creator: UserSummary
    assignee: Optional[UserSummary] = None


class TaskListItem(TaskRead):
    comment_count: int = 0
    attachment_count: int = 0


class CommentCreate(CommandModel):
    content: NonBlankStr


class CommentRead(CamelModel):
    id: str
    content: str
    task_id: str
    user_id: str
    created_at: datetime
    user: UserSummary


class AttachmentRead(CamelModel):
    id: str
    filename: str
    url: str
    size: int
    mime_type: str
    task_id: str
    uploader_id: str
    created_at: datetime
    uploader: UserSummary


class TaskDetail(TaskRead):
    """Task with its full comment thread and attachment list."""

    comments: list[CommentRead] = []
    attachments: list[AttachmentRead] = []
