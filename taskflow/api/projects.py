"""Project API routes. Every route is scoped to the caller's memberships."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskflow.api.deps import get_app_settings, get_db, require_auth
from taskflow.config import Settings
from taskflow.schemas.project import (
    MemberAdd,
    MemberRead,
    ProjectCreate,
    ProjectDetail,
    ProjectListItem,
    ProjectRead,
    ProjectUpdate,
)
from taskflow.services.projects import (
    add_member,
    create_project,
    delete_project,
    get_project,
    list_projects,
    update_project,
)
from taskflow.services.tokens import Identity

router = APIRouter()


@router.get("", response_model=list[ProjectListItem])
def api_list_projects(
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> list[ProjectListItem]:
    """List projects the caller is a member of, with members and task count."""
    return list_projects(db, identity)


@router.post("", response_model=ProjectRead, status_code=201)
def api_create_project(
    data: ProjectCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
    settings: Settings = Depends(get_app_settings),
) -> ProjectRead:
    """Create a project; the caller becomes its owner."""
    return create_project(db, identity, data, settings.default_project_color)


@router.get("/{project_id}", response_model=ProjectDetail)
def api_get_project(
    project_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> ProjectDetail:
    """Get a project with its members and tasks."""
    return get_project(db, identity, project_id)


@router.put("/{project_id}", response_model=ProjectRead)
def api_update_project(
    project_id: str,
    data: ProjectUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> ProjectRead:
    """Update name, description or color. Any member may update."""
    return update_project(db, identity, project_id, data)


@router.delete("/{project_id}")
def api_delete_project(
    project_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> dict:
    """Delete a project and everything in it. Owner only."""
    delete_project(db, identity, project_id)
    return {"success": True}


@router.post("/{project_id}/members", response_model=MemberRead, status_code=201)
def api_add_member(
    project_id: str,
    data: MemberAdd,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> MemberRead:
    """Invite an existing user by email."""
    return add_member(db, identity, project_id, data)
