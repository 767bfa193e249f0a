"""Team listing schemas."""

from __future__ import annotations

from taskflow.schemas.user import UserSummary


class TeamMember(UserSummary):
    """A user sharing at least one project with the caller."""

    email: str
    assigned_task_count: int = 0
