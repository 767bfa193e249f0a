"""Attachment service — upload handling for task files."""

from __future__ import annotations

import logging

from fastapi import UploadFile
from sqlalchemy.orm import Session, selectinload

from taskflow.errors import ValidationError
from taskflow.models import Attachment
from taskflow.schemas.task import AttachmentRead
from taskflow.services.access import ResourceKind, get_visible_task, scope
from taskflow.services.tokens import Identity
from taskflow.storage import LocalFileStorage, truncate_name

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"
# Matches Attachment.filename
MAX_FILENAME_LENGTH = 255


def list_attachments(db: Session, identity: Identity, task_id: str) -> list[AttachmentRead]:
    """Attachments on a visible task, newest first."""
    task = get_visible_task(db, identity, task_id)
    attachments = (
        db.query(Attachment)
        .filter(Attachment.task_id == task.id, scope(identity, ResourceKind.attachment))
        .options(selectinload(Attachment.uploader))
        .order_by(Attachment.created_at.desc())
        .all()
    )
    return [AttachmentRead.model_validate(a) for a in attachments]


async def create_attachment(
    db: Session,
    storage: LocalFileStorage,
    identity: Identity,
    task_id: str,
    upload: UploadFile,
    max_bytes: int,
) -> AttachmentRead:
    """Store an uploaded file and link it to a task.

    Membership is checked before anything touches storage. The file is
    streamed to disk and abandoned (deleted) as soon as it grows past
    ``max_bytes``. If the metadata row cannot be written the stored file is
    removed again.
    """
    task = get_visible_task(db, identity, task_id)
    if not upload.filename:
        raise ValidationError("File is required")

    stored_name = storage.stored_name(upload.filename)
    size = await storage.save(upload, stored_name, max_bytes)

    attachment = Attachment(
        filename=truncate_name(upload.filename, MAX_FILENAME_LENGTH),
        stored_name=stored_name,
        url=storage.url_for(stored_name),
        size=size,
        mime_type=upload.content_type or DEFAULT_MIME_TYPE,
        task_id=task.id,
        uploader_id=identity.id,
    )
    db.add(attachment)
    try:
        db.commit()
    except Exception:
        db.rollback()
        storage.remove(stored_name)
        logger.warning("Removed stored file %s after failed insert", stored_name)
        raise
    db.refresh(attachment)
    logger.info("Attachment %s (%d bytes) stored on task %s", attachment.id, size, task.id)
    return AttachmentRead.model_validate(attachment)
