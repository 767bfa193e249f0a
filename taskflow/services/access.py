"""Project-membership access control.

Every read or write of a project, task, comment or attachment is filtered by
one rule: the caller must hold a ProjectMember row for the owning project.
``scope`` turns that rule into a SQL predicate so it becomes part of the
lookup itself. A resource that exists but belongs to someone else's project
is therefore indistinguishable from one that does not exist; both surface as
NotFoundError.

The only ownership-gated action is project deletion (``require_owner``),
which raises AuthorizationError for a project the caller can already see.
"""

from __future__ import annotations

from enum import Enum

from sqlalchemy import Select, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from taskflow.errors import AuthorizationError, NotFoundError
from taskflow.models import (
    Attachment,
    Comment,
    MemberRole,
    Project,
    ProjectMember,
    Task,
)
from taskflow.services.tokens import Identity


class ResourceKind(str, Enum):
    """Resource classes guarded by project membership."""

    project = "project"
    task = "task"
    comment = "comment"
    attachment = "attachment"


def member_project_ids(identity: Identity) -> Select:
    """Ids of every project the identity belongs to."""
    return select(ProjectMember.project_id).where(ProjectMember.user_id == identity.id)


def _visible_task_ids(identity: Identity) -> Select:
    return select(Task.id).where(Task.project_id.in_(member_project_ids(identity)))


def scope(identity: Identity, kind: ResourceKind) -> ColumnElement[bool]:
    """Predicate selecting the rows of ``kind`` visible to ``identity``.

    Compose it into the WHERE clause of every query over that resource.
    """
    if kind is ResourceKind.project:
        return Project.id.in_(member_project_ids(identity))
    if kind is ResourceKind.task:
        return Task.project_id.in_(member_project_ids(identity))
    if kind is ResourceKind.comment:
        return Comment.task_id.in_(_visible_task_ids(identity))
    if kind is ResourceKind.attachment:
        return Attachment.task_id.in_(_visible_task_ids(identity))
    raise ValueError(f"Unknown resource kind: {kind!r}")


def owner_scope(identity: Identity) -> ColumnElement[bool]:
    """Predicate selecting the projects the identity owns."""
    return Project.id.in_(
        select(ProjectMember.project_id).where(
            ProjectMember.user_id == identity.id,
            ProjectMember.role == MemberRole.owner.value,
        )
    )


def get_visible_project(db: Session, identity: Identity, project_id: str) -> Project:
    """Load a project by id through the membership scope, or raise NotFoundError."""
    project = (
        db.query(Project)
        .filter(Project.id == project_id, scope(identity, ResourceKind.project))
        .first()
    )
    if project is None:
        raise NotFoundError("Project not found")
    return project


def get_visible_task(db: Session, identity: Identity, task_id: str) -> Task:
    """Load a task by id through the membership scope, or raise NotFoundError."""
    task = (
        db.query(Task)
        .filter(Task.id == task_id, scope(identity, ResourceKind.task))
        .first()
    )
    if task is None:
        raise NotFoundError("Task not found")
    return task


def require_owner(db: Session, identity: Identity, project: Project) -> None:
    """Raise AuthorizationError unless the identity owns ``project``."""
    owned = (
        db.query(Project.id)
        .filter(Project.id == project.id, owner_scope(identity))
        .first()
    )
    if owned is None:
        raise AuthorizationError("Only owner can delete project")


def is_project_member(db: Session, project_id: str, user_id: str) -> bool:
    return (
        db.query(ProjectMember.id)
        .filter(ProjectMember.project_id == project_id, ProjectMember.user_id == user_id)
        .first()
        is not None
    )
