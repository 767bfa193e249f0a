"""Authentication service — registration, login and profile management."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskflow.errors import AuthenticationError, ConflictError, NotFoundError
from taskflow.models.user import User
from taskflow.schemas.auth import RegisterRequest
from taskflow.schemas.user import ProfileUpdate
from taskflow.services.tokens import Identity, TokenService

logger = logging.getLogger(__name__)


def identity_for(user: User) -> Identity:
    return Identity(id=user.id, email=user.email, username=user.username)


def create_user(
    db: Session,
    email: str,
    username: str,
    password: str,
    display_name: str | None = None,
) -> User:
    """Create a new user with hashed password.

    Email is checked before username so the first conflicting field is the
    one reported. A concurrent insert that slips past the checks is caught by
    the unique constraints and reported the same way.
    """
    if db.query(User).filter(User.email == email).first() is not None:
        raise ConflictError("Email already exists")
    if db.query(User).filter(User.username == username).first() is not None:
        raise ConflictError("Username already exists")

    user = User(email=email, username=username, display_name=display_name or username)
    user.set_password(password)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email or username already exists") from None
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def register_user(
    db: Session, tokens: TokenService, data: RegisterRequest
) -> tuple[User, str]:
    """Create an account and issue its first token."""
    user = create_user(
        db,
        email=str(data.email),
        username=data.username,
        password=data.password,
        display_name=data.display_name,
    )
    return user, tokens.issue(identity_for(user))


def authenticate_user(
    db: Session, tokens: TokenService, email: str, password: str
) -> tuple[User, str]:
    """Validate credentials and issue a token.

    Unknown email and wrong password are reported identically.
    """
    user = db.query(User).filter(User.email == email).first()
    if user is None or not user.verify_password(password):
        logger.warning("Failed login attempt")
        raise AuthenticationError("Invalid credentials")
    return user, tokens.issue(identity_for(user))


def get_user(db: Session, identity: Identity) -> User:
    """Return the account behind an identity."""
    user = db.query(User).filter(User.id == identity.id).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


def update_profile(db: Session, identity: Identity, data: ProfileUpdate) -> User:
    """Apply a partial profile update; omitted fields are left untouched."""
    user = get_user(db, identity)
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(user, key, value)
    db.commit()
    db.refresh(user)
    return user
