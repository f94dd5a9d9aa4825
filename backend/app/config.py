import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    tasks_path: Path


def load_settings() -> Settings:
    root_dir = Path(__file__).resolve().parents[2]
    tasks_default = root_dir / "backend" / "data" / "stages.json"
    tasks_path = Path(os.getenv("MOUSE_TRAINER_TASKS_PATH", str(tasks_default))).expanduser()
    return Settings(tasks_path=tasks_path)
