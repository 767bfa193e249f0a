"""Cross-user isolation: non-members see 404 for everything addressed by id."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient


class TestNonMemberAccess:
    @pytest.mark.parametrize(
        "method,path,body",
        [
            ("get", "/api/projects/{project_id}", None),
            ("put", "/api/projects/{project_id}", {"name": "Hijacked"}),
            ("delete", "/api/projects/{project_id}", None),
            ("post", "/api/projects/{project_id}/members", {"email": "carol@example.com"}),
            ("get", "/api/tasks/{task_id}", None),
            ("put", "/api/tasks/{task_id}", {"status": "completed"}),
            ("delete", "/api/tasks/{task_id}", None),
            ("get", "/api/tasks/{task_id}/comments", None),
            ("post", "/api/tasks/{task_id}/comments", {"content": "Hi"}),
            ("get", "/api/tasks/{task_id}/attachments", None),
        ],
    )
    def test_returns_404(self, client: TestClient, carol, project, task, method, path, body):
        url = path.format(project_id=project["id"], task_id=task["id"])
        kwargs = {"headers": carol["headers"]}
        if body is not None:
            kwargs["json"] = body
        resp = client.request(method.upper(), url, **kwargs)
        assert resp.status_code == 404

    def test_create_task_in_foreign_project(self, client: TestClient, carol, project):
        resp = client.post(
            "/api/tasks",
            json={"title": "Sneaky", "projectId": project["id"]},
            headers=carol["headers"],
        )
        assert resp.status_code == 404

    def test_listings_exclude_foreign_data(self, client: TestClient, carol, project, task):
        assert client.get("/api/projects", headers=carol["headers"]).json() == []
        assert client.get("/api/tasks", headers=carol["headers"]).json() == []
        resp = client.get(
            "/api/tasks", params={"projectId": project["id"]}, headers=carol["headers"]
        )
        assert resp.json() == []

    def test_failed_writes_leave_data_unchanged(self, client: TestClient, alice, carol, task):
        client.put(f"/api/tasks/{task['id']}", json={"title": "Mine"}, headers=carol["headers"])
        client.delete(f"/api/tasks/{task['id']}", headers=carol["headers"])

        resp = client.get(f"/api/tasks/{task['id']}", headers=alice["headers"])
        assert resp.status_code == 200
        assert resp.json()["title"] == "Write docs"


class TestCollaborationScenario:
    def test_alice_bob_carol(self, client: TestClient, register):
        alice = register("alice", password="pw123")
        bob = register("bob")
        carol = register("carol")

        project = client.post(
            "/api/projects", json={"name": "Launch"}, headers=alice["headers"]
        ).json()
        assert project["members"][0]["role"] == "owner"

        task = client.post(
            "/api/tasks",
            json={"title": "Write docs", "projectId": project["id"]},
            headers=alice["headers"],
        ).json()
        assert (task["status"], task["priority"]) == ("todo", "medium")
        assert task["creatorId"] == alice["user"]["id"]

        invite = client.post(
            f"/api/projects/{project['id']}/members",
            json={"email": "bob@example.com"},
            headers=alice["headers"],
        )
        assert invite.status_code == 201

        alice_team = {m["username"] for m in client.get("/api/team", headers=alice["headers"]).json()}
        bob_team = {m["username"] for m in client.get("/api/team", headers=bob["headers"]).json()}
        assert "bob" in alice_team
        assert "alice" in bob_team

        updated = client.put(
            f"/api/tasks/{task['id']}", json={"status": "in_progress"}, headers=bob["headers"]
        )
        assert updated.status_code == 200

        seen = client.get(f"/api/tasks/{task['id']}", headers=alice["headers"]).json()
        assert seen["status"] == "in_progress"
        assert seen["title"] == "Write docs"

        resp = client.get(f"/api/tasks/{task['id']}", headers=carol["headers"])
        assert resp.status_code == 404
