"""User model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import bcrypt as _bcrypt
from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskflow.db.session import Base
from taskflow.models.mixins import new_id, utc_now

if TYPE_CHECKING:
    from taskflow.models.project import ProjectMember
    from taskflow.models.task import Task

# bcrypt only looks at the first 72 bytes of the secret
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class User(Base):
    """Registered account. Never hard-deleted in normal flow."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )

    memberships: Mapped[list[ProjectMember]] = relationship(
        "ProjectMember", back_populates="user", passive_deletes=True
    )
    assigned_tasks: Mapped[list[Task]] = relationship(
        "Task", foreign_keys="Task.assignee_id", back_populates="assignee"
    )

    def set_password(self, password: str) -> None:
        """Hash and store password using bcrypt."""
        self.password_hash = _bcrypt.hashpw(_password_bytes(password), _bcrypt.gensalt()).decode(
            "utf-8"
        )

    def verify_password(self, password: str) -> bool:
        """Verify password against stored hash."""
        return _bcrypt.checkpw(_password_bytes(password), self.password_hash.encode("utf-8"))
