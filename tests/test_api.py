from __future__ import annotations

import json
from pathlib import Path

from fastapi.testclient import TestClient


def test_end_to_end_lifecycle(client: TestClient) -> None:
    res = client.post("/tasks", json={"title": "Buy milk"})
    assert res.status_code == 201
    created = res.json()
    assert created["isCompleted"] is False
    assert created["priority"] == "low"

    listed = client.get("/tasks").json()
    assert [t["title"] for t in listed] == ["Buy milk"]

    res = client.put("/tasks", json={"id": created["id"], "isCompleted": True})
    assert res.status_code == 200
    assert res.json()["isCompleted"] is True

    page = client.get("/partials/tasks")
    assert "Completed (1)" in page.text
    assert "text-decoration-line-through" in page.text

    res = client.delete("/tasks", params={"id": created["id"]})
    assert res.status_code == 200
    assert res.json() == {"success": True}
    assert client.get("/tasks").json() == []


def test_create_persists_to_file(client: TestClient, tasks_path: Path) -> None:
    client.post("/tasks", json={"title": "Write report", "priority": "high", "dueDate": "2025-06-01"})
    data = json.loads(tasks_path.read_text(encoding="utf-8"))
    assert data[0]["title"] == "Write report"
    assert data[0]["dueDate"] == "2025-06-01"


def test_create_without_title(client: TestClient, tasks_path: Path) -> None:
    res = client.post("/tasks", json={"description": "no title"})
    assert res.status_code == 400
    assert "error" in res.json()
    assert not tasks_path.exists()


def test_create_with_unknown_priority(client: TestClient) -> None:
    res = client.post("/tasks", json={"title": "x", "priority": "urgent"})
    assert res.status_code == 400
    assert "error" in res.json()


def test_update_ignores_immutable_fields(client: TestClient) -> None:
    created = client.post("/tasks", json={"title": "x"}).json()

    res = client.put(
        "/tasks",
        json={"id": created["id"], "createdAt": "1999-01-01T00:00:00Z", "title": "y"},
    )

    body = res.json()
    assert body["id"] == created["id"]
    assert body["createdAt"] == created["createdAt"]
    assert body["title"] == "y"


def test_update_unknown_id(client: TestClient) -> None:
    res = client.put("/tasks", json={"id": "missing", "isCompleted": True})
    assert res.status_code == 404
    assert res.json() == {"error": "Task not found"}


def test_update_without_id(client: TestClient) -> None:
    assert client.put("/tasks", json={"isCompleted": True}).status_code == 400


def test_delete_requires_id(client: TestClient) -> None:
    res = client.delete("/tasks")
    assert res.status_code == 400
    assert "error" in res.json()


def test_delete_unknown_id(client: TestClient) -> None:
    client.post("/tasks", json={"title": "keep"})
    res = client.delete("/tasks", params={"id": "missing"})
    assert res.status_code == 404
    assert len(client.get("/tasks").json()) == 1


def test_get_single_task(client: TestClient) -> None:
    created = client.post("/tasks", json={"title": "x"}).json()
    assert client.get(f"/tasks/{created['id']}").json()["title"] == "x"
    assert client.get("/tasks/missing").status_code == 404


def test_corrupt_file_is_a_server_error(client: TestClient, tasks_path: Path) -> None:
    tasks_path.write_text("not json", encoding="utf-8")
    res = client.get("/tasks")
    assert res.status_code == 500
    assert "error" in res.json()


def test_home_page_sorts_pending_tasks(client: TestClient) -> None:
    client.post("/tasks", json={"title": "Low one", "priority": "low", "dueDate": "2025-01-01"})
    client.post("/tasks", json={"title": "High one", "priority": "high"})

    by_priority = client.get("/").text
    assert by_priority.index("High one") < by_priority.index("Low one")

    by_date = client.get("/partials/tasks", params={"sort": "date"}).text
    assert by_date.index("Low one") < by_date.index("High one")


def test_request_id_header_and_health(client: TestClient) -> None:
    res = client.get("/health", headers={"X-Request-ID": "abc"})
    assert res.json() == {"status": "ok"}
    assert res.headers["X-Request-ID"] == "abc"


def test_create_blank_optional_fields_use_defaults(client: TestClient) -> None:
    res = client.post("/tasks", json={"title": "x", "description": "", "priority": "", "dueDate": ""})
    assert res.status_code == 201
    body = res.json()
    assert body["description"] == ""
    assert body["priority"] == "low"
    assert body["dueDate"] is None


def test_create_null_optional_fields_use_defaults(client: TestClient) -> None:
    res = client.post("/tasks", json={"title": "x", "description": None, "priority": None, "dueDate": None})
    assert res.status_code == 201
    body = res.json()
    assert body["description"] == ""
    assert body["priority"] == "low"
    assert body["dueDate"] is None


def test_non_utf8_file_is_a_json_server_error(client: TestClient, tasks_path: Path) -> None:
    tasks_path.write_bytes(b"\xff\xfe[]")
    res = client.get("/tasks")
    assert res.status_code == 500
    assert "error" in res.json()


def test_malformed_json_body_message_has_no_offset(client: TestClient) -> None:
    res = client.post("/tasks", content=b'{"title": ', headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    message = res.json()["error"]
    assert not message.split(":")[0].strip().isdigit()
