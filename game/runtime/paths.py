import os
import sys
from pathlib import Path


APP_NAME = "MousePractice"
DATA_DIR_ENV = "MOUSE_TRAINER_DATA_DIR"


def _platform_root() -> Path:
    home = Path.home()
    if sys.platform.startswith("win"):
        return Path(os.getenv("APPDATA") or home / "AppData" / "Roaming")
    if sys.platform == "darwin":
        return home / "Library" / "Application Support"
    return Path(os.getenv("XDG_DATA_HOME") or home / ".local" / "share")


def app_data_dir() -> Path:
    """Where progress, the outcome journal and source settings live."""
    override = os.getenv(DATA_DIR_ENV, "").strip()
    candidates = [Path(override).expanduser()] if override else [_platform_root() / APP_NAME]
    # Read-only home directories still get a usable location.
    candidates.append(Path.cwd() / ".mouse_practice")
    for candidate in candidates:
        try:
            candidate.mkdir(parents=True, exist_ok=True)
        except OSError:
            continue
        return candidate
    raise OSError("no writable data directory")


def app_data_path(*parts: str) -> Path:
    return app_data_dir().joinpath(*parts)
