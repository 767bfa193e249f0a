"""Team service — people the caller shares at least one project with."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from taskflow.models import ProjectMember, Task, User
from taskflow.schemas.team import TeamMember
from taskflow.services.access import member_project_ids
from taskflow.services.tokens import Identity


def list_team(db: Session, identity: Identity) -> list[TeamMember]:
    """Users holding a membership in any of the caller's projects (caller included).

    ``assigned_task_count`` counts every task assigned to the user across all
    projects, not only the shared ones.
    """
    teammates = select(ProjectMember.user_id).where(
        ProjectMember.project_id.in_(member_project_ids(identity))
    )
    assigned = (
        select(func.count(Task.id))
        .where(Task.assignee_id == User.id)
        .correlate(User)
        .scalar_subquery()
        .label("assigned_task_count")
    )
    rows = (
        db.query(User, assigned)
        .filter(User.id.in_(teammates))
        .order_by(User.username.asc())
        .all()
    )
    members: list[TeamMember] = []
    for user, count in rows:
        member = TeamMember.model_validate(user)
        member.assigned_task_count = count or 0
        members.append(member)
    return members
