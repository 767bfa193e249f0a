"""Shared FastAPI dependencies for API routes."""

from __future__ import annotations

from fastapi import Depends, Header, Request

from taskflow.config import Settings
from taskflow.db.session import get_db  # re-export
from taskflow.errors import AuthenticationError
from taskflow.services.tokens import Identity, TokenService
from taskflow.storage import LocalFileStorage

__all__ = [
    "get_db",
    "get_app_settings",
    "get_storage",
    "get_token_service",
    "require_auth",
]

BEARER_PREFIX = "Bearer "


def get_app_settings(request: Request) -> Settings:
    """Settings the application was constructed with."""
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_storage(request: Request) -> LocalFileStorage:
    return request.app.state.storage


def require_auth(
    authorization: str | None = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    """Dependency that requires a valid ``Authorization: Bearer <token>`` header.

    Returns the identity encoded in the token; raises AuthenticationError (401)
    when the header is missing or the token does not verify.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationError("Not authenticated")
    return tokens.verify(authorization[len(BEARER_PREFIX) :].strip())
