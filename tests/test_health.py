"""
Health endpoint and app database binding tests.
"""

from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from taskflow.config import Settings


def test_health_returns_ok_when_db_connected(client: TestClient) -> None:
    """Health endpoint returns 200 with database connected."""
    engine = client.app.state.engine

    mock_conn = MagicMock()
    mock_cm = MagicMock()
    mock_cm.__enter__ = MagicMock(return_value=mock_conn)
    mock_cm.__exit__ = MagicMock(return_value=False)
    with patch.object(engine, "connect", return_value=mock_cm):
        response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == "connected"
    assert "version" in data


def test_health_returns_503_when_db_unreachable(client: TestClient) -> None:
    """Health endpoint returns 503 when database is unreachable."""
    engine = client.app.state.engine

    with patch.object(engine, "connect", side_effect=Exception("Connection refused")):
        response = client.get("/health")
    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["database"] == "disconnected"


def test_app_uses_database_url_from_injected_settings(tmp_path) -> None:
    """An app built with its own database_url serves requests from that database."""
    from taskflow.db.session import Base
    from taskflow.main import create_app
    import taskflow.models  # noqa: F401

    db_file = tmp_path / "taskflow.db"
    settings = Settings()
    settings.database_url = f"sqlite:///{db_file}"
    settings.upload_dir = str(tmp_path / "uploads")

    app = create_app(settings)
    engine = app.state.engine
    assert engine.url.database == str(db_file)
    Base.metadata.create_all(engine)
    try:
        with TestClient(app) as client:
            assert client.get("/health").json()["database"] == "connected"
            resp = client.post(
                "/api/auth/register",
                json={"email": "dana@example.com", "username": "dana", "password": "pw123"},
            )
            assert resp.status_code == 200

        with engine.connect() as conn:
            count = conn.exec_driver_sql("SELECT COUNT(*) FROM users").scalar()
        assert count == 1
    finally:
        engine.dispose()
