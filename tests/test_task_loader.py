import json
from pathlib import Path

import pytest

from data.task_source import FALLBACK_TASKS
from game.runtime.models import (
    KIND_CLICK,
    KIND_DOUBLE_CLICK,
    KIND_DRAG_CURVE,
    KIND_DRAG_DISCRETE,
    KIND_HOVER,
    KIND_TRACE,
    SHAPE_STAR,
)
from game.runtime.task_loader import TaskValidationError, load_task, load_tasks

STAGES = Path(__file__).resolve().parents[1] / "backend" / "data" / "stages.json"


def click_descriptor(**overrides):
    raw = {
        "id": "c1",
        "kind": "click",
        "difficulty": 2,
        "timeLimitSeconds": 30,
        "targets": [{"id": 1, "x": 100, "y": 100, "radius": 40}, {"id": 2, "x": 300, "y": 100, "radius": 40}],
    }
    raw.update(overrides)
    return raw


def test_canonical_click_descriptor():
    task = load_task(click_descriptor())
    assert task.kind == KIND_CLICK
    assert task.time_limit_seconds == 30
    assert [t.target_id for t in task.targets] == ["1", "2"]
    assert task.targets[1].center == (300.0, 100.0)


def test_provider_aliases():
    task = load_task(
        {
            "taskId": "dc",
            "type": "doubleclick",
            "timeLimit": 50,
            "targets": [{"id": 1, "x": 1, "y": 2, "radius": 3}],
            "doubleClickInterval": 400,
        }
    )
    assert task.task_id == "dc"
    assert task.kind == KIND_DOUBLE_CLICK
    assert task.double_click_interval_ms == 400


def test_durations_default_to_500():
    hover = load_task(click_descriptor(kind="hover"))
    double = load_task(click_descriptor(kind="doubleClick"))
    assert hover.kind == KIND_HOVER
    assert hover.hover_duration_ms == 500
    assert double.double_click_interval_ms == 500


@pytest.mark.parametrize(
    "overrides, reason",
    [
        ({"kind": "wiggle"}, "unknown kind"),
        ({"timeLimitSeconds": 0}, "timeLimitSeconds must be positive"),
        ({"targets": []}, "targets must be a non-empty list"),
        ({"hoverDurationMs": -5, "kind": "hover"}, "hoverDurationMs must be positive"),
        ({"id": ""}, "id is required"),
        ({"timeLimitSeconds": 0.5}, "timeLimitSeconds must be positive"),
        ({"timeLimitSeconds": "nan"}, "timeLimitSeconds must be finite"),
        ({"timeLimitSeconds": float("inf")}, "timeLimitSeconds must be finite"),
        ({"kind": "doubleClick", "doubleClickIntervalMs": 0.5}, "doubleClickIntervalMs must be positive"),
        ({"targets": [{"id": 1, "x": 1, "y": 1, "radius": float("nan")}]}, "targets[0].radius must be finite"),
    ],
)
def test_invalid_descriptors(overrides, reason):
    with pytest.raises(TaskValidationError) as exc:
        load_task(click_descriptor(**overrides))
    assert reason in exc.value.reason


def test_title_string_and_difficulty_clamp():
    task = load_task(click_descriptor(title="Click!", difficulty=9))
    assert task.title_for("kanji") == "Click!"
    assert task.difficulty == 5


def test_drag_items_from_provider_fields():
    task = load_task(
        {
            "taskId": "d",
            "type": "drag_vertical",
            "timeLimit": 60,
            "items": [
                {"id": "x", "startX": 1, "startY": 2, "targetX": 10, "targetY": 20, "targetWidth": 30, "targetHeight": 40}
            ],
        }
    )
    assert task.kind == KIND_DRAG_DISCRETE
    assert task.layout == "drag_vertical"
    assert task.items[0].start == (1.0, 2.0)
    assert task.items[0].zone.bottom == 60


def test_duplicate_item_ids_rejected():
    item = {"id": "x", "start": [0, 0], "zone": {"x": 0, "y": 0, "width": 10, "height": 10}}
    with pytest.raises(TaskValidationError):
        load_task({"id": "d", "kind": "dragDiscrete", "timeLimitSeconds": 10, "items": [item, item]})


def test_curve_needs_two_points():
    raw = {
        "id": "cv",
        "kind": "dragCurve",
        "timeLimitSeconds": 10,
        "path": {"points": [{"x": 0, "y": 0}], "pathWidth": 10},
        "start": {"x": 0, "y": 0},
    }
    with pytest.raises(TaskValidationError):
        load_task(raw)
    raw["path"]["points"].append({"x": 100, "y": 0})
    task = load_task(raw)
    assert task.kind == KIND_DRAG_CURVE
    assert task.end_threshold == 50


def test_star_shape():
    task = load_task(
        {
            "id": "s",
            "kind": "trace",
            "timeLimitSeconds": 10,
            "shape": {
                "type": "star", "centerX": 0, "centerY": 0, "points": 5,
                "innerRadius": 40, "outerRadius": 100, "lineWidth": 6,
            },
        }
    )
    assert task.kind == KIND_TRACE
    assert task.shape.shape_type == SHAPE_STAR
    assert task.shape.points == 5


def test_load_tasks_skips_invalid_and_duplicates():
    tasks, rejected = load_tasks(
        {"tasks": [click_descriptor(), click_descriptor(kind="nope", id="bad"), click_descriptor()]}
    )
    assert [t.task_id for t in tasks] == ["c1"]
    assert [r["index"] for r in rejected] == [1, 2]
    assert rejected[1]["reason"] == "duplicate id"


def test_load_tasks_rejects_non_list():
    tasks, rejected = load_tasks({"tasks": "nope"})
    assert tasks == []
    assert len(rejected) == 1


def test_fallback_and_bundled_collections_are_valid():
    tasks, rejected = load_tasks(FALLBACK_TASKS)
    assert len(tasks) == 3 and rejected == []

    stages = json.loads(STAGES.read_text(encoding="utf-8"))
    tasks, rejected = load_tasks(stages)
    assert rejected == []
    assert {t.kind for t in tasks} == {
        KIND_HOVER, KIND_CLICK, KIND_DOUBLE_CLICK, KIND_DRAG_DISCRETE, KIND_DRAG_CURVE, KIND_TRACE,
    }


def test_non_finite_json_numbers_are_rejected_not_raised():
    raw = json.loads(
        '[{"id": "inf", "kind": "click", "timeLimit": Infinity, "targets": [{"id": 1, "x": 1, "y": 1, "radius": 5}]},'
        ' {"id": "nan", "kind": "trace", "timeLimit": 10,'
        '  "shape": {"type": "circle", "centerX": 0, "centerY": 0, "radius": 10, "lineWidth": NaN}}]'
    )
    tasks, rejected = load_tasks(raw + [click_descriptor()])
    assert [t.task_id for t in tasks] == ["c1"]
    assert [r["task_id"] for r in rejected] == ["inf", "nan"]
