"""Comment service — append-only discussion on tasks."""

from __future__ import annotations

from sqlalchemy.orm import Session, selectinload

from taskflow.models import Comment
from taskflow.schemas.task import CommentCreate, CommentRead
from taskflow.services.access import ResourceKind, get_visible_task, scope
from taskflow.services.tokens import Identity


def list_comments(db: Session, identity: Identity, task_id: str) -> list[CommentRead]:
    """Comments on a visible task, oldest first."""
    task = get_visible_task(db, identity, task_id)
    comments = (
        db.query(Comment)
        .filter(Comment.task_id == task.id, scope(identity, ResourceKind.comment))
        .options(selectinload(Comment.user))
        .order_by(Comment.created_at.asc())
        .all()
    )
    return [CommentRead.model_validate(c) for c in comments]


def create_comment(
    db: Session, identity: Identity, task_id: str, data: CommentCreate
) -> CommentRead:
    """Post a comment as the identity. The author is never taken from the request."""
    task = get_visible_task(db, identity, task_id)
    comment = Comment(content=data.content, task_id=task.id, user_id=identity.id)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return CommentRead.model_validate(comment)
