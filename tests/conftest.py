"""
Pytest configuration and fixtures.

Tests run against an in-memory SQLite database created fresh for every test,
so no PostgreSQL server is required.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from tests.test_constants import TEST_DATABASE_URL, TEST_PASSWORD, TEST_SECRET_KEY

# Force test config before taskflow modules read the environment
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["SECRET_KEY"] = TEST_SECRET_KEY


@pytest.fixture
def engine():
    """Fresh in-memory database with all tables created."""
    from taskflow.db.session import Base, enable_sqlite_foreign_keys
    import taskflow.models  # noqa: F401

    eng = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(eng)
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory) -> Iterator[Session]:
    """Session for arranging data and asserting on stored state."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def settings(tmp_path):
    """Settings pointing uploads at a per-test temporary directory."""
    from taskflow.config import Settings

    s = Settings()
    s.upload_dir = str(tmp_path / "uploads")
    return s


@pytest.fixture
def client(settings, session_factory) -> Iterator[TestClient]:
    """TestClient for a freshly built app with get_db bound to the test database."""
    from taskflow.db.session import get_db
    from taskflow.main import create_app

    app = create_app(settings)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client: TestClient) -> Callable[..., dict]:
    """Register a user through the API; returns ``{"user": ..., "token": ..., "headers": ...}``."""

    def _register(username: str, email: str | None = None, password: str = TEST_PASSWORD) -> dict:
        resp = client.post(
            "/api/auth/register",
            json={
                "email": email or f"{username}@example.com",
                "username": username,
                "password": password,
            },
        )
        assert resp.status_code == 200, resp.text
        body = resp.json()
        body["headers"] = auth_headers(body["token"])
        return body

    return _register


@pytest.fixture
def alice(register) -> dict:
    return register("alice")


@pytest.fixture
def bob(register) -> dict:
    return register("bob")


@pytest.fixture
def carol(register) -> dict:
    return register("carol")


@pytest.fixture
def project(client: TestClient, alice: dict) -> dict:
    """Project "Launch" owned by alice."""
    resp = client.post("/api/projects", json={"name": "Launch"}, headers=alice["headers"])
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def shared_project(client: TestClient, project: dict, alice: dict, bob: dict) -> dict:
    """alice's project with bob invited as a member."""
    resp = client.post(
        f"/api/projects/{project['id']}/members",
        json={"email": bob["user"]["email"]},
        headers=alice["headers"],
    )
    assert resp.status_code == 201, resp.text
    return project


@pytest.fixture
def task(client: TestClient, project: dict, alice: dict) -> dict:
    """Task "Write docs" in alice's project."""
    resp = client.post(
        "/api/tasks",
        json={"title": "Write docs", "projectId": project["id"]},
        headers=alice["headers"],
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
