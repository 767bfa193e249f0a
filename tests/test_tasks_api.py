"""API tests for /api/tasks."""

from __future__ import annotations

from fastapi.testclient import TestClient


class TestCreateTask:
    def test_defaults_and_creator(self, client: TestClient, alice, project):
        resp = client.post(
            "/api/tasks",
            json={"title": "Plan sprint", "projectId": project["id"]},
            headers=alice["headers"],
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data["status"] == "todo"
        assert data["priority"] == "medium"
        assert data["creatorId"] == alice["user"]["id"]
        assert data["creator"]["username"] == "alice"
        assert data["assignee"] is None
        assert data["project"] == {
            "id": project["id"],
            "name": "Launch",
            "color": project["color"],
        }

    def test_with_assignee_and_due_date(self, client: TestClient, alice, bob, shared_project):
        resp = client.post(
            "/api/tasks",
            json={
                "title": "Review",
                "projectId": shared_project["id"],
                "assigneeId": bob["user"]["id"],
                "priority": "high",
                "dueDate": "2026-12-01T12:00:00Z",
            },
            headers=alice["headers"],
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data["assigneeId"] == bob["user"]["id"]
        assert data["assignee"]["username"] == "bob"
        assert data["priority"] == "high"
        assert data["dueDate"].startswith("2026-12-01T12:00:00")

    def test_assignee_must_be_member(self, client: TestClient, alice, carol, project):
        resp = client.post(
            "/api/tasks",
            json={"title": "X", "projectId": project["id"], "assigneeId": carol["user"]["id"]},
            headers=alice["headers"],
        )
        assert resp.status_code == 400

    def test_missing_title(self, client: TestClient, alice, project):
        resp = client.post("/api/tasks", json={"projectId": project["id"]}, headers=alice["headers"])
        assert resp.status_code == 400

    def test_invalid_status(self, client: TestClient, alice, project):
        resp = client.post(
            "/api/tasks",
            json={"title": "X", "projectId": project["id"], "status": "blocked"},
            headers=alice["headers"],
        )
        assert resp.status_code == 400

    def test_unknown_project(self, client: TestClient, alice):
        resp = client.post(
            "/api/tasks", json={"title": "X", "projectId": "missing"}, headers=alice["headers"]
        )
        assert resp.status_code == 404


class TestUpdateTask:
    def test_partial_update_leaves_other_fields(self, client: TestClient, alice, project):
        created = client.post(
            "/api/tasks",
            json={
                "title": "Docs",
                "projectId": project["id"],
                "description": "Write the README",
                "priority": "high",
            },
            headers=alice["headers"],
        ).json()

        resp = client.put(
            f"/api/tasks/{created['id']}", json={"status": "completed"}, headers=alice["headers"]
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "completed"
        assert data["title"] == "Docs"
        assert data["description"] == "Write the README"
        assert data["priority"] == "high"

    def test_null_clears_due_date_and_assignee(
        self, client: TestClient, alice, bob, shared_project
    ):
        created = client.post(
            "/api/tasks",
            json={
                "title": "Ship",
                "projectId": shared_project["id"],
                "assigneeId": bob["user"]["id"],
                "dueDate": "2026-12-01T00:00:00Z",
            },
            headers=alice["headers"],
        ).json()

        resp = client.put(
            f"/api/tasks/{created['id']}",
            json={"dueDate": None, "assigneeId": None},
            headers=alice["headers"],
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["dueDate"] is None
        assert data["assigneeId"] is None
        assert data["assignee"] is None

    def test_null_title_rejected(self, client: TestClient, alice, task):
        resp = client.put(f"/api/tasks/{task['id']}", json={"title": None}, headers=alice["headers"])
        assert resp.status_code == 400

        resp = client.get(f"/api/tasks/{task['id']}", headers=alice["headers"])
        assert resp.json()["title"] == "Write docs"

    def test_blank_title_rejected(self, client: TestClient, alice, task):
        resp = client.put(f"/api/tasks/{task['id']}", json={"title": "   "}, headers=alice["headers"])
        assert resp.status_code == 400

        resp = client.get(f"/api/tasks/{task['id']}", headers=alice["headers"])
        assert resp.json()["title"] == "Write docs"

    def test_reassign_to_non_member_rejected(self, client: TestClient, alice, carol, task):
        resp = client.put(
            f"/api/tasks/{task['id']}",
            json={"assigneeId": carol["user"]["id"]},
            headers=alice["headers"],
        )
        assert resp.status_code == 400

    def test_unknown_field_rejected(self, client: TestClient, alice, task):
        resp = client.put(
            f"/api/tasks/{task['id']}", json={"projectId": "elsewhere"}, headers=alice["headers"]
        )
        assert resp.status_code == 400


class TestListTasks:
    def _create(self, client, headers, project_id, **fields):
        resp = client.post(
            "/api/tasks", json={"projectId": project_id, **fields}, headers=headers
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    def test_filters(self, client: TestClient, alice, bob, shared_project):
        h, pid = alice["headers"], shared_project["id"]
        self._create(client, h, pid, title="A", status="todo", priority="low")
        self._create(client, h, pid, title="B", status="in_progress", priority="high")
        self._create(
            client, h, pid, title="C", status="todo", priority="high", assigneeId=bob["user"]["id"]
        )
        other = client.post("/api/projects", json={"name": "Other"}, headers=h).json()
        self._create(client, h, other["id"], title="D")

        def titles(params):
            resp = client.get("/api/tasks", params=params, headers=h)
            assert resp.status_code == 200
            return sorted(t["title"] for t in resp.json())

        assert titles({}) == ["A", "B", "C", "D"]
        assert titles({"projectId": pid}) == ["A", "B", "C"]
        assert titles({"status": "todo", "projectId": pid}) == ["A", "C"]
        assert titles({"priority": "high"}) == ["B", "C"]
        assert titles({"assigneeId": bob["user"]["id"]}) == ["C"]

    def test_list_items_carry_counts(self, client: TestClient, alice, task):
        client.post(
            f"/api/tasks/{task['id']}/comments", json={"content": "one"}, headers=alice["headers"]
        )
        client.post(
            f"/api/tasks/{task['id']}/comments", json={"content": "two"}, headers=alice["headers"]
        )
        data = client.get("/api/tasks", headers=alice["headers"]).json()
        assert data[0]["commentCount"] == 2
        assert data[0]["attachmentCount"] == 0

    def test_invalid_status_filter(self, client: TestClient, alice):
        resp = client.get("/api/tasks", params={"status": "nope"}, headers=alice["headers"])
        assert resp.status_code == 400


class TestGetAndDeleteTask:
    def test_detail_includes_comments(self, client: TestClient, alice, bob, shared_project):
        created = client.post(
            "/api/tasks",
            json={"title": "Talk", "projectId": shared_project["id"]},
            headers=alice["headers"],
        ).json()
        client.post(
            f"/api/tasks/{created['id']}/comments",
            json={"content": "Hello from bob"},
            headers=bob["headers"],
        )
        resp = client.get(f"/api/tasks/{created['id']}", headers=alice["headers"])
        assert resp.status_code == 200
        data = resp.json()
        assert [c["content"] for c in data["comments"]] == ["Hello from bob"]
        assert data["comments"][0]["user"]["username"] == "bob"
        assert data["attachments"] == []

    def test_any_member_may_delete(self, client: TestClient, alice, bob, shared_project):
        created = client.post(
            "/api/tasks",
            json={"title": "Temp", "projectId": shared_project["id"]},
            headers=alice["headers"],
        ).json()
        resp = client.delete(f"/api/tasks/{created['id']}", headers=bob["headers"])
        assert resp.status_code == 200
        assert resp.json() == {"success": True}

        resp = client.get(f"/api/tasks/{created['id']}", headers=alice["headers"])
        assert resp.status_code == 404
