import os
from dataclasses import dataclass


DEFAULT_TASKS_URL = "https://raw.githubusercontent.com/iteensetagayakaminoge/mouse_practice_json/main/stages.json"


@dataclass(frozen=True)
class WindowConfig:
    width: int = 800
    height: int = 600
    fps: int = 60
    title: str = "Mouse Practice"


@dataclass(frozen=True)
class GestureConfig:
    min_trace_points: int = 10
    trace_threshold_factor: float = 3.0
    trace_pass_rate: float = 60.0
    curve_end_threshold: float = 50.0


@dataclass(frozen=True)
class ScoringConfig:
    discrete_weights: tuple = (0.4, 0.6)  # time / accuracy
    continuous_weights: tuple = (0.3, 0.7)
    error_penalty: int = 10
    star_thresholds: tuple = ((90, 5), (70, 4), (50, 3), (30, 2))
    min_stars: int = 1


@dataclass(frozen=True)
class TaskDefaults:
    hover_duration_ms: int = 500
    double_click_interval_ms: int = 500
    drag_item_size: int = 80


@dataclass(frozen=True)
class SourceConfig:
    default_url: str = DEFAULT_TASKS_URL
    timeout_sec: float = 2.5
    local_path: str = ""
    env_url: str = ""


def load_source_config() -> SourceConfig:
    env_url = os.getenv("MOUSE_TRAINER_TASKS_URL", "").strip()
    local_path = os.getenv("MOUSE_TRAINER_TASKS_FILE", "").strip()
    return SourceConfig(local_path=local_path, env_url=env_url)


def load_log_level(default: str = "INFO") -> str:
    return os.getenv("MOUSE_TRAINER_LOG_LEVEL", default).strip().upper() or default
