"""SQLAlchemy models."""

from taskflow.models.attachment import Attachment
from taskflow.models.comment import Comment
from taskflow.models.project import MemberRole, Project, ProjectMember
from taskflow.models.task import Task, TaskPriority, TaskStatus
from taskflow.models.user import User

__all__ = [
    "Attachment",
    "Comment",
    "MemberRole",
    "Project",
    "ProjectMember",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "User",
]
