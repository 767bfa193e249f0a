"""Authentication API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskflow.api.deps import get_db, get_token_service, require_auth
from taskflow.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from taskflow.schemas.user import ProfileUpdate, UserRead
from taskflow.services.auth import (
    authenticate_user,
    get_user,
    register_user,
    update_profile,
)
from taskflow.services.tokens import Identity, TokenService

router = APIRouter()


@router.post("/register", response_model=AuthResponse)
def register(
    body: RegisterRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthResponse:
    """Create an account and return it with a bearer token."""
    user, token = register_user(db, tokens, body)
    return AuthResponse(user=UserRead.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthResponse:
    """Authenticate by email and password and return a bearer token.

    Logout is client-side: the client discards the token.
    """
    user, token = authenticate_user(db, tokens, str(body.email), body.password)
    return AuthResponse(user=UserRead.model_validate(user), token=token)


@router.get("/me", response_model=UserRead)
def me(
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> UserRead:
    """Return the currently authenticated user's profile."""
    return UserRead.model_validate(get_user(db, identity))


@router.put("/profile", response_model=UserRead)
def profile(
    body: ProfileUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> UserRead:
    """Update display name and/or avatar URL."""
    return UserRead.model_validate(update_profile(db, identity, body))
