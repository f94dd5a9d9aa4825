import math
from typing import List

import pytest

from game.runtime.models import (
    KIND_CLICK,
    KIND_DOUBLE_CLICK,
    KIND_DRAG_CURVE,
    KIND_DRAG_DISCRETE,
    KIND_HOVER,
    KIND_TRACE,
    SHAPE_CIRCLE,
    CurvePath,
    DragItem,
    Rect,
    Shape,
    Target,
    Task,
)
from game.runtime.progress_store import ProgressStore


def make_targets(count: int) -> tuple:
    return tuple(Target(target_id=str(i + 1), center=(100.0 + 120 * i, 200.0), radius=50.0) for i in range(count))


def pointer_task(kind: str = KIND_CLICK, count: int = 5, time_limit: int = 40, **kwargs) -> Task:
    return Task(
        task_id=f"{kind}_test",
        kind=kind,
        difficulty=1,
        time_limit_seconds=time_limit,
        title={"hiragana": "てすと", "kanji": "テスト"},
        targets=make_targets(count),
        **kwargs,
    )


@pytest.fixture
def click_task() -> Task:
    return pointer_task(KIND_CLICK)


@pytest.fixture
def hover_task() -> Task:
    return pointer_task(KIND_HOVER, count=3, hover_duration_ms=500)


@pytest.fixture
def double_click_task() -> Task:
    return pointer_task(KIND_DOUBLE_CLICK, count=3, double_click_interval_ms=500)


@pytest.fixture
def drag_task() -> Task:
    return Task(
        task_id="drag_test",
        kind=KIND_DRAG_DISCRETE,
        difficulty=2,
        time_limit_seconds=60,
        items=(
            DragItem(item_id="a", start=(50.0, 100.0), zone=Rect(500.0, 80.0, 120.0, 120.0)),
            DragItem(item_id="b", start=(50.0, 300.0), zone=Rect(500.0, 280.0, 120.0, 120.0)),
        ),
    )


@pytest.fixture
def curve_task() -> Task:
    return Task(
        task_id="curve_test",
        kind=KIND_DRAG_CURVE,
        difficulty=3,
        time_limit_seconds=60,
        path=CurvePath(points=((100.0, 300.0), (400.0, 300.0), (700.0, 300.0)), path_width=40.0, path_type="line"),
        start=(60.0, 260.0),
        end_threshold=50.0,
    )


@pytest.fixture
def trace_task() -> Task:
    return Task(
        task_id="trace_test",
        kind=KIND_TRACE,
        difficulty=3,
        time_limit_seconds=60,
        shape=Shape(shape_type=SHAPE_CIRCLE, line_width=8.0, center=(400.0, 300.0), radius=100.0),
    )


@pytest.fixture
def progress_store(tmp_path) -> ProgressStore:
    return ProgressStore(tmp_path / "progress.json")


def circle_points(center, radius: float, count: int) -> List[tuple]:
    return [
        (center[0] + radius * math.cos(2 * math.pi * i / count), center[1] + radius * math.sin(2 * math.pi * i / count))
        for i in range(count)
    ]
