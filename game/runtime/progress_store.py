from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from game.runtime.models import Outcome

logger = logging.getLogger(__name__)


class ProgressStore:
    """
    Best result per task, kept in a small JSON file:
    {"progress": {task_id: outcome_record}}.
    A missing or unreadable file reads as empty.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def get_best(self, task_id: str) -> Optional[Outcome]:
        record = self._load().get(task_id)
        if not isinstance(record, dict):
            return None
        try:
            return Outcome.from_record({**record, "task_id": task_id})
        except (KeyError, TypeError, ValueError):
            return None

    def record_if_better(self, task_id: str, outcome: Outcome) -> bool:
        progress = self._load()
        current = self.get_best(task_id)
        if current is not None and outcome.star_rating <= current.star_rating:
            return False
        progress[task_id] = outcome.to_record()
        self._save(progress)
        logger.info("Progress for %s improved to %s stars", task_id, outcome.star_rating)
        return True

    def best_stars(self) -> dict[str, int]:
        stars: dict[str, int] = {}
        for task_id in self._load():
            best = self.get_best(task_id)
            if best is not None:
                stars[task_id] = best.star_rating
        return stars

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.warning("Progress file %s is unreadable, starting empty", self.path)
            return {}
        progress = payload.get("progress") if isinstance(payload, dict) else None
        if isinstance(progress, dict):
            return progress
        return {}

    def _save(self, progress: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(
            json.dumps({"progress": progress}, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        tmp.replace(self.path)
