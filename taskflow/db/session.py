"""
Database session management. SQLAlchemy 2.x style.
"""

from collections.abc import Generator

from fastapi import Request
from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from taskflow.config import Settings, get_settings


def engine_options(settings: Settings) -> dict:
    """Keyword arguments for create_engine, per backend."""
    if settings.is_sqlite:
        return {
            "echo": settings.debug,
            "connect_args": {"check_same_thread": False},
        }
    return {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
        "echo": settings.debug,
        "connect_args": {
            "connect_timeout": settings.db_connect_timeout,
            "options": "-c timezone=UTC",
        },
    }


def enable_sqlite_foreign_keys(engine) -> None:
    """SQLite ignores ON DELETE clauses unless foreign_keys is switched on per connection."""

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(settings: Settings) -> Engine:
    """Create an engine for ``settings.database_url`` with backend-specific options."""
    new_engine = create_engine(settings.database_url, **engine_options(settings))
    if settings.is_sqlite:
        enable_sqlite_foreign_keys(new_engine)
    return new_engine


settings = get_settings()
engine = build_engine(settings)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def engine_for(app_settings: Settings) -> Engine:
    """Engine serving ``app_settings``; the process-wide one when the URL matches."""
    if app_settings.database_url == settings.database_url:
        return engine
    return build_engine(app_settings)


class Base(DeclarativeBase):
    """Declarative base for SQLAlchemy models."""


def check_db_connection(db_engine: Engine | None = None) -> None:
    """
    Verify database connectivity. Raises if unreachable.
    Call during application startup.
    """
    with (db_engine or engine).connect() as conn:
        conn.execute(text("SELECT 1"))


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency for FastAPI to get a session bound to the application's engine."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
