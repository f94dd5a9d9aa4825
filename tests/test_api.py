import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from backend.app import api
from backend.app.config import Settings


@pytest.fixture
def client():
    return TestClient(api.app)


def use_collection(monkeypatch, path: Path) -> None:
    monkeypatch.setattr(api, "settings", Settings(tasks_path=path))


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_bundled_collection(client):
    body = client.get("/v1/tasks").json()
    assert body["ok"] is True
    assert body["count"] == 6
    assert body["rejected"] == []
    assert body["tasks"][0]["taskId"] == "hover_01"


def test_invalid_descriptors_are_reported(client, monkeypatch, tmp_path):
    path = tmp_path / "stages.json"
    path.write_text(
        json.dumps(
            [
                {"id": "bad", "kind": "spin", "timeLimitSeconds": 10},
                {"id": "ok", "kind": "click", "timeLimitSeconds": 10,
                 "targets": [{"id": 1, "x": 5, "y": 5, "radius": 5}]},
            ]
        ),
        encoding="utf-8",
    )
    use_collection(monkeypatch, path)
    body = client.get("/v1/tasks").json()
    assert [t["id"] for t in body["tasks"]] == ["ok"]
    assert body["rejected"][0]["task_id"] == "bad"


def test_missing_collection_is_unavailable(client, monkeypatch, tmp_path):
    use_collection(monkeypatch, tmp_path / "missing.json")
    response = client.get("/v1/tasks")
    assert response.status_code == 503
    assert response.json()["detail"] == "tasks_unavailable"
