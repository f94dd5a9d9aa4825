import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Tuple
from urllib import error, request
from urllib.parse import urlparse

from game.runtime.models import Task
from game.runtime.task_loader import load_tasks

logger = logging.getLogger(__name__)


# Built-in smoke-test set used whenever the provider is unreachable or empty.
FALLBACK_TASKS: List[dict] = [
    {
        "taskId": "hover_01",
        "type": "hover",
        "difficulty": 1,
        "title": {"hiragana": "じゅんばんどおりマウスをかざそう", "kanji": "順番通りマウスをかざそう"},
        "targets": [
            {"id": 1, "x": 150, "y": 150, "radius": 60},
            {"id": 2, "x": 400, "y": 200, "radius": 60},
            {"id": 3, "x": 650, "y": 150, "radius": 60},
            {"id": 4, "x": 400, "y": 350, "radius": 60},
            {"id": 5, "x": 250, "y": 300, "radius": 60},
        ],
        "hoverDuration": 500,
        "timeLimit": 45,
    },
    {
        "taskId": "click_01",
        "type": "click",
        "difficulty": 2,
        "title": {"hiragana": "じゅんばんどおりクリックしよう", "kanji": "順番通りクリックしよう"},
        "targets": [
            {"id": 1, "x": 200, "y": 200, "radius": 60},
            {"id": 2, "x": 500, "y": 150, "radius": 60},
            {"id": 3, "x": 700, "y": 250, "radius": 60},
            {"id": 4, "x": 350, "y": 350, "radius": 60},
            {"id": 5, "x": 550, "y": 350, "radius": 60},
        ],
        "timeLimit": 40,
    },
    {
        "taskId": "doubleclick_01",
        "type": "doubleclick",
        "difficulty": 3,
        "title": {"hiragana": "じゅんばんどおりダブルクリックしよう", "kanji": "順番通りダブルクリックしよう"},
        "targets": [
            {"id": 1, "x": 250, "y": 250, "radius": 70},
            {"id": 2, "x": 550, "y": 250, "radius": 70},
            {"id": 3, "x": 400, "y": 350, "radius": 70},
        ],
        "doubleClickInterval": 500,
        "timeLimit": 50,
    },
]


def fallback_tasks() -> List[Task]:
    tasks, _ = load_tasks(FALLBACK_TASKS)
    return tasks


class TaskSource:
    """
    Reads the task collection from an http(s) URL or a local JSON file.
    Any transport, decode or validation failure yields the built-in set.
    """

    def __init__(self, url: str = "", local_path: str = "", timeout_sec: float = 2.5) -> None:
        self.url = (url or "").strip()
        self.local_path = (local_path or "").strip()
        self.timeout_sec = max(0.5, timeout_sec)
        self.last_error: str = ""

    @staticmethod
    def is_valid_url(url: str) -> bool:
        parsed = urlparse((url or "").strip())
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)

    def fetch(self) -> Tuple[List[Task], bool]:
        """Return (tasks, used_fallback)."""
        payload = self._read_payload()
        if payload is None:
            logger.warning("Task source unavailable (%s), using built-in tasks", self.last_error)
            return fallback_tasks(), True

        tasks, rejected = load_tasks(payload)
        if rejected:
            logger.warning("Task source: %s descriptor(s) rejected", len(rejected))
        if not tasks:
            self.last_error = "no_valid_tasks"
            logger.warning("Task source returned no valid tasks, using built-in tasks")
            return fallback_tasks(), True
        logger.info("Loaded %s tasks", len(tasks))
        return tasks, False

    def _read_payload(self) -> Optional[Any]:
        if self.local_path:
            return self._read_file(Path(self.local_path))
        if self.is_valid_url(self.url):
            return self._read_url(self.url)
        self.last_error = "no_source"
        return None

    def _read_file(self, path: Path) -> Optional[Any]:
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            self.last_error = "file_error"
            return None

    def _read_url(self, url: str) -> Optional[Any]:
        req = request.Request(url, headers={"Accept": "application/json"}, method="GET")
        try:
            with request.urlopen(req, timeout=self.timeout_sec) as resp:
                if resp.status != 200:
                    self.last_error = "status_error"
                    return None
                raw = resp.read().decode("utf-8") or "{}"
                return json.loads(raw)
        except (error.URLError, error.HTTPError, TimeoutError, OSError, json.JSONDecodeError):
            self.last_error = "connection_error"
            return None
