"""Serves stored upload files by their stored name."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from taskflow.api.deps import get_storage
from taskflow.errors import NotFoundError
from taskflow.storage import LocalFileStorage

router = APIRouter()


@router.get("/{stored_name}")
def serve_upload(
    stored_name: str,
    storage: LocalFileStorage = Depends(get_storage),
) -> FileResponse:
    """Return the stored file, or 404 when it does not exist."""
    path = storage.path_for(stored_name)
    if path is None:
        raise NotFoundError("File not found")
    return FileResponse(path)
