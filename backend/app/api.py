import json
import logging
from typing import Any

from fastapi import FastAPI, HTTPException

from backend.app.config import load_settings
from game.runtime.task_loader import load_tasks

logger = logging.getLogger(__name__)

settings = load_settings()
app = FastAPI(title="Mouse Practice Tasks API", version="0.1.0")


def read_collection() -> Any:
    try:
        return json.loads(settings.tasks_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Task collection %s unavailable: %s", settings.tasks_path, exc)
        raise HTTPException(status_code=503, detail="tasks_unavailable") from None


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


@app.get("/v1/tasks")
def list_tasks() -> dict[str, Any]:
    payload = read_collection()
    raw = payload.get("tasks") if isinstance(payload, dict) else payload
    _, rejected = load_tasks(raw)
    rejected_indices = {entry["index"] for entry in rejected}

    # Serve the raw descriptors so clients parse the provider format.
    served = [
        entry for idx, entry in enumerate(raw if isinstance(raw, list) else []) if idx not in rejected_indices
    ]
    return {
        "ok": True,
        "tasks": served,
        "count": len(served),
        "rejected": rejected,
    }
