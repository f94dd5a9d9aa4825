from __future__ import annotations

import json
from pathlib import Path


def load_source_url(settings_path: Path, default_url: str, env_url: str = "") -> str:
    """
    Resolve the task provider URL: environment value, then the saved
    settings file, then the default. A missing file is created with the
    default; a broken one is ignored.
    """
    env_url = (env_url or "").strip()
    resolved_default = env_url or default_url

    if not settings_path.exists():
        # Only the default is persisted; an env value applies to this run.
        save_source_url(settings_path, default_url)
        return resolved_default

    try:
        payload = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return resolved_default
    if not isinstance(payload, dict):
        return resolved_default
    if env_url:
        return env_url
    return str(payload.get("tasks_url", resolved_default)).strip() or resolved_default


def save_source_url(settings_path: Path, tasks_url: str) -> None:
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(
        json.dumps({"tasks_url": tasks_url.strip()}, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
