"""Team API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskflow.api.deps import get_db, require_auth
from taskflow.schemas.team import TeamMember
from taskflow.services.team import list_team
from taskflow.services.tokens import Identity

router = APIRouter()


@router.get("", response_model=list[TeamMember])
def api_list_team(
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> list[TeamMember]:
    """Users sharing at least one project with the caller, with assigned-task counts."""
    return list_team(db, identity)
