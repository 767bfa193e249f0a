"""Pydantic schemas for request/response validation."""

from taskflow.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from taskflow.schemas.project import (
    MemberAdd,
    MemberRead,
    ProjectCreate,
    ProjectDetail,
    ProjectListItem,
    ProjectRead,
    ProjectUpdate,
)
from taskflow.schemas.task import (
    AttachmentRead,
    CommentCreate,
    CommentRead,
    ProjectSummary,
    TaskCreate,
    TaskDetail,
    TaskListItem,
    TaskRead,
    TaskUpdate,
)
from taskflow.schemas.team import TeamMember
from taskflow.schemas.user import ProfileUpdate, UserRead, UserSummary

__all__ = [
    # Auth
    "RegisterRequest",
    "LoginRequest",
    "AuthResponse",
    # User
    "UserSummary",
    "UserRead",
    "ProfileUpdate",
    # Project
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectRead",
    "ProjectListItem",
    "ProjectDetail",
    "MemberAdd",
    "MemberRead",
    # Task
    "TaskCreate",
    "TaskUpdate",
    "TaskRead",
    "TaskListItem",
    "TaskDetail",
    "ProjectSummary",
    # Comment / attachment
    "CommentCreate",
    "CommentRead",
    "AttachmentRead",
    # Team
    "TeamMember",
]
