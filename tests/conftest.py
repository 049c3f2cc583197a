# tests/conftest.py

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

# main.py builds a module-level app on import; keep its logs out of the repo
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="task-tracker-logs-"))

import pytest
from fastapi.testclient import TestClient

from task_tracker.app.main import create_app
from task_tracker.infra.store.task_store_json import JsonFileTaskStore
from task_tracker.infra.store.task_store_memory import InMemoryTaskStore
from task_tracker.services.task_service import TaskService

FIXED_NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def tasks_path(tmp_path: Path) -> Path:
    return tmp_path / "tasks-db.json"


@pytest.fixture()
def json_store(tasks_path: Path) -> JsonFileTaskStore:
    return JsonFileTaskStore(tasks_path)


@pytest.fixture()
def memory_store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture()
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture()
def service(memory_store: InMemoryTaskStore, fixed_now: datetime) -> TaskService:
    """Service over the in-memory store with a frozen clock."""
    return TaskService(memory_store, clock=lambda: fixed_now)


@pytest.fixture()
def client(tasks_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    with TestClient(create_app(str(tasks_path))) as c:
        yield c
