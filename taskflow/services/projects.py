"""Project service — membership-scoped CRUD and invitations."""

from __future__ import annotations

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from taskflow.errors import ConflictError, NotFoundError
from taskflow.models import MemberRole, Project, ProjectMember, Task, User
from taskflow.schemas.project import (
    MemberAdd,
    MemberRead,
    ProjectCreate,
    ProjectDetail,
    ProjectListItem,
    ProjectRead,
    ProjectUpdate,
)
from taskflow.services.access import (
    ResourceKind,
    get_visible_project,
    is_project_member,
    require_owner,
    scope,
)
from taskflow.services.tasks import task_counts, to_task_list_item
from taskflow.services.tokens import Identity

logger = logging.getLogger(__name__)


def list_projects(db: Session, identity: Identity) -> list[ProjectListItem]:
    """Projects the identity belongs to, most recently updated first."""
    projects = (
        db.query(Project)
        .filter(scope(identity, ResourceKind.project))
        .options(selectinload(Project.members).selectinload(ProjectMember.user))
        .order_by(Project.updated_at.desc())
        .all()
    )
    if not projects:
        return []

    counts = dict(
        db.query(Task.project_id, func.count(Task.id))
        .filter(Task.project_id.in_([p.id for p in projects]))
        .group_by(Task.project_id)
        .all()
    )
    items: list[ProjectListItem] = []
    for project in projects:
        item = ProjectListItem.model_validate(project)
        item.task_count = counts.get(project.id, 0)
        items.append(item)
    return items


def get_project(db: Session, identity: Identity, project_id: str) -> ProjectDetail:
    """Project with members and tasks (assignee, comment and attachment counts)."""
    project = get_visible_project(db, identity, project_id)
    tasks = list(project.tasks)
    comment_counts, attachment_counts = task_counts(db, [t.id for t in tasks])

    detail = ProjectDetail.model_validate(project)
    detail.tasks = [
        to_task_list_item(task, comment_counts, attachment_counts) for task in tasks
    ]
    return detail


def create_project(
    db: Session, identity: Identity, data: ProjectCreate, default_color: str
) -> ProjectRead:
    """Create a project and the creator's owner membership in one transaction."""
    project = Project(
        name=data.name,
        description=data.description,
        color=data.color or default_color,
    )
    project.members.append(ProjectMember(user_id=identity.id, role=MemberRole.owner.value))
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("Project %s created by %s", project.id, identity.id)
    return ProjectRead.model_validate(project)


def update_project(
    db: Session, identity: Identity, project_id: str, data: ProjectUpdate
) -> ProjectRead:
    """Partial update by any member."""
    project = get_visible_project(db, identity, project_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(project, key, value)
    db.commit()
    db.refresh(project)
    return ProjectRead.model_validate(project)


def delete_project(db: Session, identity: Identity, project_id: str) -> None:
    """Delete a project, its memberships and tasks. Owner only.

    Non-members get NotFoundError; members without the owner role get
    AuthorizationError and the project is left intact.
    """
    project = get_visible_project(db, identity, project_id)
    require_owner(db, identity, project)
    db.delete(project)
    db.commit()
    logger.info("Project %s deleted by %s", project_id, identity.id)


def add_member(
    db: Session, identity: Identity, project_id: str, data: MemberAdd
) -> MemberRead:
    """Invite an existing user into a project the identity belongs to."""
    project = get_visible_project(db, identity, project_id)

    user = db.query(User).filter(User.email == str(data.email)).first()
    if user is None:
        raise NotFoundError("User not found")
    if is_project_member(db, project.id, user.id):
        raise ConflictError("User is already a member")

    member = ProjectMember(project_id=project.id, user_id=user.id, role=data.role.value)
    db.add(member)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("User is already a member") from None
    db.refresh(member)
    logger.info("User %s added to project %s by %s", user.id, project.id, identity.id)
    return MemberRead.model_validate(member)
