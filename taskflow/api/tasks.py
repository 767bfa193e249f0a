"""Task, comment and attachment API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from taskflow.api.deps import get_app_settings, get_db, get_storage, require_auth
from taskflow.config import Settings
from taskflow.models.task import TaskPriority, TaskStatus
from taskflow.schemas.task import (
    AttachmentRead,
    CommentCreate,
    CommentRead,
    TaskCreate,
    TaskDetail,
    TaskListItem,
    TaskRead,
    TaskUpdate,
)
from taskflow.services.attachments import create_attachment, list_attachments
from taskflow.services.comments import create_comment, list_comments
from taskflow.services.tasks import (
    create_task,
    delete_task,
    get_task,
    list_tasks,
    update_task,
)
from taskflow.services.tokens import Identity
from taskflow.storage import LocalFileStorage

router = APIRouter()


@router.get("", response_model=list[TaskListItem])
def api_list_tasks(
    project_id: str | None = Query(None, alias="projectId"),
    status: TaskStatus | None = Query(None),
    priority: TaskPriority | None = Query(None),
    assignee_id: str | None = Query(None, alias="assigneeId"),
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> list[TaskListItem]:
    """List tasks across the caller's projects, with optional filters."""
    return list_tasks(
        db,
        identity,
        project_id=project_id,
        status=status.value if status else None,
        priority=priority.value if priority else None,
        assignee_id=assignee_id,
    )


@router.post("", response_model=TaskRead, status_code=201)
def api_create_task(
    data: TaskCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> TaskRead:
    """Create a task in one of the caller's projects."""
    return create_task(db, identity, data)


@router.get("/{task_id}", response_model=TaskDetail)
def api_get_task(
    task_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> TaskDetail:
    """Get a task with comments and attachments."""
    return get_task(db, identity, task_id)


@router.put("/{task_id}", response_model=TaskRead)
def api_update_task(
    task_id: str,
    data: TaskUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> TaskRead:
    """Partially update a task. Omitted fields are left untouched."""
    return update_task(db, identity, task_id, data)


@router.delete("/{task_id}")
def api_delete_task(
    task_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> dict:
    """Delete a task. Any project member may delete."""
    delete_task(db, identity, task_id)
    return {"success": True}


@router.get("/{task_id}/comments", response_model=list[CommentRead])
def api_list_comments(
    task_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> list[CommentRead]:
    return list_comments(db, identity, task_id)


@router.post("/{task_id}/comments", response_model=CommentRead, status_code=201)
def api_create_comment(
    task_id: str,
    data: CommentCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> CommentRead:
    """Post a comment on a task."""
    return create_comment(db, identity, task_id, data)


@router.get("/{task_id}/attachments", response_model=list[AttachmentRead])
def api_list_attachments(
    task_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> list[AttachmentRead]:
    return list_attachments(db, identity, task_id)


@router.post("/{task_id}/attachments", response_model=AttachmentRead, status_code=201)
async def api_upload_attachment(
    task_id: str,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
    storage: LocalFileStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
) -> AttachmentRead:
    """Upload one file (multipart field ``file``) and attach it to a task."""
    return await create_attachment(
        db, storage, identity, task_id, file, settings.max_upload_bytes
    )
