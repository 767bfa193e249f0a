"""Task service — membership-scoped CRUD with partial-update semantics."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from taskflow.errors import ValidationError
from taskflow.models import Attachment, Comment, Task
from taskflow.schemas.task import (
    TaskCreate,
    TaskDetail,
    TaskListItem,
    TaskRead,
    TaskUpdate,
)
from taskflow.services.access import (
    ResourceKind,
    get_visible_project,
    get_visible_task,
    is_project_member,
    scope,
)
from taskflow.services.tokens import Identity

logger = logging.getLogger(__name__)


# ── Field mapping helpers ────────────────────────────────────────────


def _schema_to_model_data(data: TaskCreate | TaskUpdate, *, is_update: bool = False) -> dict:
    """Dump a command to column values; enums become their string value."""
    raw = data.model_dump(exclude_unset=is_update)
    return {
        key: value.value if isinstance(value, Enum) else value for key, value in raw.items()
    }


def _check_assignee(db: Session, project_id: str, assignee_id: Optional[str]) -> None:
    if assignee_id is not None and not is_project_member(db, project_id, assignee_id):
        raise ValidationError("Assignee must be a member of the project")


def task_counts(db: Session, task_ids: list[str]) -> tuple[dict[str, int], dict[str, int]]:
    """Comment and attachment counts per task id."""
    if not task_ids:
        return {}, {}
    comments = dict(
        db.query(Comment.task_id, func.count(Comment.id))
        .filter(Comment.task_id.in_(task_ids))
        .group_by(Comment.task_id)
        .all()
    )
    attachments = dict(
        db.query(Attachment.task_id, func.count(Attachment.id))
        .filter(Attachment.task_id.in_(task_ids))
        .group_by(Attachment.task_id)
        .all()
    )
    return comments, attachments


def to_task_list_item(
    task: Task, comment_counts: dict[str, int], attachment_counts: dict[str, int]
) -> TaskListItem:
    item = TaskListItem.model_validate(task)
    item.comment_count = comment_counts.get(task.id, 0)
    item.attachment_count = attachment_counts.get(task.id, 0)
    return item


# ── CRUD operations ─────────────────────────────────────────────────


def list_tasks(
    db: Session,
    identity: Identity,
    *,
    project_id: str | None = None,
    status: str | None = None,
    priority: str | None = None,
    assignee_id: str | None = None,
) -> list[TaskListItem]:
    """Tasks in the identity's projects, most recently updated first."""
    query = (
        db.query(Task)
        .filter(scope(identity, ResourceKind.task))
        .options(
            selectinload(Task.project),
            selectinload(Task.creator),
            selectinload(Task.assignee),
        )
    )
    if project_id:
        query = query.filter(Task.project_id == project_id)
    if status:
        query = query.filter(Task.status == status)
    if priority:
        query = query.filter(Task.priority == priority)
    if assignee_id:
        query = query.filter(Task.assignee_id == assignee_id)

    tasks = query.order_by(Task.updated_at.desc()).all()
    comment_counts, attachment_counts = task_counts(db, [t.id for t in tasks])
    return [to_task_list_item(t, comment_counts, attachment_counts) for t in tasks]


def get_task(db: Session, identity: Identity, task_id: str) -> TaskDetail:
    """Task with project summary, people, comments and attachments."""
    task = get_visible_task(db, identity, task_id)
    return TaskDetail.model_validate(task)


def create_task(db: Session, identity: Identity, data: TaskCreate) -> TaskRead:
    """Create a task in a project the identity belongs to.

    An inaccessible project is reported exactly like a missing one.
    """
    project = get_visible_project(db, identity, data.project_id)
    _check_assignee(db, project.id, data.assignee_id)

    task = Task(**_schema_to_model_data(data), creator_id=identity.id)
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info("Task %s created in project %s by %s", task.id, project.id, identity.id)
    return TaskRead.model_validate(task)


def update_task(
    db: Session, identity: Identity, task_id: str, data: TaskUpdate
) -> TaskRead:
    """Apply only the fields present in the request."""
    task = get_visible_task(db, identity, task_id)
    changes = _schema_to_model_data(data, is_update=True)
    if "assignee_id" in changes:
        _check_assignee(db, task.project_id, changes["assignee_id"])

    for key, value in changes.items():
        setattr(task, key, value)
    db.commit()
    db.refresh(task)
    return TaskRead.model_validate(task)


def delete_task(db: Session, identity: Identity, task_id: str) -> None:
    """Delete a task with its comments and attachment records. Any member may delete."""
    task = get_visible_task(db, identity, task_id)
    db.delete(task)
    db.commit()
    logger.info("Task %s deleted by %s", task_id, identity.id)
