"""Database engine, session factory and declarative base."""

from taskflow.db.session import Base, SessionLocal, engine, get_db

__all__ = ["Base", "SessionLocal", "engine", "get_db"]
