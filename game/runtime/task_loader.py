from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from config.settings import GestureConfig, TaskDefaults
from game.runtime.models import (
    ALL_KINDS,
    KIND_CLICK,
    KIND_DOUBLE_CLICK,
    KIND_DRAG_CURVE,
    KIND_DRAG_DISCRETE,
    KIND_HOVER,
    KIND_TRACE,
    POINTER_KINDS,
    SHAPE_CIRCLE,
    SHAPE_SQUARE,
    SHAPE_STAR,
    SHAPE_TRIANGLE,
    CurvePath,
    DragItem,
    Rect,
    Shape,
    Target,
    Task,
)

logger = logging.getLogger(__name__)

# Provider type names -> canonical kinds
KIND_ALIASES = {
    "hover": KIND_HOVER,
    "click": KIND_CLICK,
    "doubleclick": KIND_DOUBLE_CLICK,
    "doubleClick": KIND_DOUBLE_CLICK,
    "double_click": KIND_DOUBLE_CLICK,
    "dragDiscrete": KIND_DRAG_DISCRETE,
    "drag": KIND_DRAG_DISCRETE,
    "drag_horizontal": KIND_DRAG_DISCRETE,
    "drag_vertical": KIND_DRAG_DISCRETE,
    "dragCurve": KIND_DRAG_CURVE,
    "drag_curve": KIND_DRAG_CURVE,
    "trace": KIND_TRACE,
}

SHAPE_TYPES = (SHAPE_CIRCLE, SHAPE_SQUARE, SHAPE_TRIANGLE, SHAPE_STAR)

DEFAULTS = TaskDefaults()
GESTURE = GestureConfig()


class TaskValidationError(ValueError):
    def __init__(self, reason: str, task_id: Optional[str] = None) -> None:
        self.reason = reason
        self.task_id = task_id
        prefix = f"task {task_id!r}: " if task_id else ""
        super().__init__(prefix + reason)


def _pick(raw: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def _number(value: Any, what: str, task_id: Optional[str]) -> float:
    if isinstance(value, bool):
        raise TaskValidationError(f"{what} must be a number", task_id)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise TaskValidationError(f"{what} must be a number", task_id) from None
    if not math.isfinite(number):
        raise TaskValidationError(f"{what} must be finite", task_id)
    return number


def _point(raw: Any, what: str, task_id: Optional[str]) -> Tuple[float, float]:
    if isinstance(raw, dict):
        return _number(raw.get("x"), f"{what}.x", task_id), _number(raw.get("y"), f"{what}.y", task_id)
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        return _number(raw[0], f"{what}.x", task_id), _number(raw[1], f"{what}.y", task_id)
    raise TaskValidationError(f"{what} must be a point", task_id)


def _positive(value: float, what: str, task_id: Optional[str]) -> float:
    if value <= 0:
        raise TaskValidationError(f"{what} must be positive", task_id)
    return value


def _positive_int(value: float, what: str, task_id: Optional[str]) -> int:
    # Checked after truncation: 0.5 seconds is not a usable limit.
    return int(_positive(int(value), what, task_id))


def _targets(raw: Dict[str, Any], task_id: str) -> Tuple[Target, ...]:
    entries = raw.get("targets")
    if not isinstance(entries, list) or not entries:
        raise TaskValidationError("targets must be a non-empty list", task_id)
    targets = []
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise TaskValidationError(f"targets[{idx}] must be an object", task_id)
        what = f"targets[{idx}]"
        center = _point(_pick(entry, "center", default=entry), what, task_id)
        radius = _positive(_number(entry.get("radius"), f"{what}.radius", task_id), f"{what}.radius", task_id)
        target_id = str(_pick(entry, "id", default=idx + 1))
        targets.append(Target(target_id=target_id, center=center, radius=radius))
    return tuple(targets)


def _items(raw: Dict[str, Any], task_id: str) -> Tuple[DragItem, ...]:
    entries = raw.get("items")
    if not isinstance(entries, list) or not entries:
        raise TaskValidationError("items must be a non-empty list", task_id)
    items = []
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise TaskValidationError(f"items[{idx}] must be an object", task_id)
        what = f"items[{idx}]"
        start = _point(
            _pick(entry, "start", default={"x": entry.get("startX"), "y": entry.get("startY")}),
            f"{what}.start",
            task_id,
        )
        zone_raw = entry.get("zone")
        if isinstance(zone_raw, dict):
            zx, zy = zone_raw.get("x"), zone_raw.get("y")
            zw, zh = zone_raw.get("width"), zone_raw.get("height")
        else:
            zx, zy = entry.get("targetX"), entry.get("targetY")
            zw, zh = entry.get("targetWidth"), entry.get("targetHeight")
        zone = Rect(
            x=_number(zx, f"{what}.zone.x", task_id),
            y=_number(zy, f"{what}.zone.y", task_id),
            width=_positive(_number(zw, f"{what}.zone.width", task_id), f"{what}.zone.width", task_id),
            height=_positive(_number(zh, f"{what}.zone.height", task_id), f"{what}.zone.height", task_id),
        )
        item_id = str(_pick(entry, "id", default=idx + 1))
        items.append(DragItem(item_id=item_id, start=start, zone=zone, icon=str(entry.get("icon", ""))))
    ids = [item.item_id for item in items]
    if len(set(ids)) != len(ids):
        raise TaskValidationError("item ids must be unique", task_id)
    return tuple(items)


def _path(raw: Dict[str, Any], task_id: str) -> CurvePath:
    path_raw = raw.get("path")
    if not isinstance(path_raw, dict):
        raise TaskValidationError("path is required", task_id)
    points_raw = path_raw.get("points")
    if not isinstance(points_raw, list) or len(points_raw) < 2:
        raise TaskValidationError("path needs at least 2 control points", task_id)
    points = tuple(_point(p, f"path.points[{i}]", task_id) for i, p in enumerate(points_raw))
    width = _positive(_number(path_raw.get("pathWidth"), "path.pathWidth", task_id), "path.pathWidth", task_id)
    return CurvePath(points=points, path_width=width, path_type=str(path_raw.get("type", "bezier")))


def _shape(raw: Dict[str, Any], task_id: str) -> Shape:
    shape_raw = raw.get("shape")
    if not isinstance(shape_raw, dict):
        raise TaskValidationError("shape is required", task_id)
    shape_type = shape_raw.get("type")
    if shape_type not in SHAPE_TYPES:
        raise TaskValidationError(f"unknown shape type {shape_type!r}", task_id)
    line_width = _positive(
        _number(shape_raw.get("lineWidth"), "shape.lineWidth", task_id), "shape.lineWidth", task_id
    )

    def num(key: str) -> float:
        return _number(shape_raw.get(key), f"shape.{key}", task_id)

    if shape_type == SHAPE_CIRCLE:
        return Shape(
            shape_type=shape_type,
            line_width=line_width,
            center=(num("centerX"), num("centerY")),
            radius=_positive(num("radius"), "shape.radius", task_id),
        )
    if shape_type == SHAPE_SQUARE:
        return Shape(
            shape_type=shape_type,
            line_width=line_width,
            origin=(num("x"), num("y")),
            size=_positive(num("size"), "shape.size", task_id),
        )
    if shape_type == SHAPE_TRIANGLE:
        vertices = tuple((num(f"x{i}"), num(f"y{i}")) for i in (1, 2, 3))
        return Shape(shape_type=shape_type, line_width=line_width, vertices=vertices)

    inner = _positive(num("innerRadius"), "shape.innerRadius", task_id)
    outer = _positive(num("outerRadius"), "shape.outerRadius", task_id)
    if inner > outer:
        raise TaskValidationError("shape.innerRadius must not exceed outerRadius", task_id)
    return Shape(
        shape_type=shape_type,
        line_width=line_width,
        center=(num("centerX"), num("centerY")),
        points=_positive_int(num("points"), "shape.points", task_id),
        inner_radius=inner,
        outer_radius=outer,
    )


def load_task(raw: Any) -> Task:
    """
    Validate one task descriptor and build an immutable Task.

    Accepts both the canonical names (``id``, ``kind``, ``timeLimitSeconds``,
    ``hoverDurationMs``, ...) and the provider's JSON shape (``taskId``,
    ``type``, ``timeLimit``, ``hoverDuration``, ...). Raises
    TaskValidationError on any structural problem.
    """
    if not isinstance(raw, dict):
        raise TaskValidationError("descriptor must be an object")

    task_id = _pick(raw, "id", "taskId")
    if task_id is None or str(task_id).strip() == "":
        raise TaskValidationError("id is required")
    task_id = str(task_id)

    raw_kind = _pick(raw, "kind", "type")
    kind = KIND_ALIASES.get(str(raw_kind)) if raw_kind is not None else None
    if kind not in ALL_KINDS:
        raise TaskValidationError(f"unknown kind {raw_kind!r}", task_id)

    time_limit = _positive_int(
        _number(_pick(raw, "timeLimitSeconds", "timeLimit"), "timeLimitSeconds", task_id), "timeLimitSeconds", task_id
    )

    difficulty = int(_number(raw.get("difficulty", 1), "difficulty", task_id))
    difficulty = max(1, min(5, difficulty))

    title = raw.get("title") or {}
    if isinstance(title, str):
        title = {"default": title}
    if not isinstance(title, dict):
        raise TaskValidationError("title must be a string or a mapping", task_id)

    fields: Dict[str, Any] = {
        "task_id": task_id,
        "kind": kind,
        "difficulty": difficulty,
        "time_limit_seconds": time_limit,
        "title": {str(k): str(v) for k, v in title.items()},
    }

    if kind in POINTER_KINDS:
        fields["targets"] = _targets(raw, task_id)
    if kind == KIND_HOVER:
        dwell = _number(
            _pick(raw, "hoverDurationMs", "hoverDuration", default=DEFAULTS.hover_duration_ms),
            "hoverDurationMs",
            task_id,
        )
        fields["hover_duration_ms"] = _positive_int(dwell, "hoverDurationMs", task_id)
    if kind == KIND_DOUBLE_CLICK:
        interval = _number(
            _pick(raw, "doubleClickIntervalMs", "doubleClickInterval", default=DEFAULTS.double_click_interval_ms),
            "doubleClickIntervalMs",
            task_id,
        )
        fields["double_click_interval_ms"] = _positive_int(interval, "doubleClickIntervalMs", task_id)
    if kind == KIND_DRAG_DISCRETE:
        fields["items"] = _items(raw, task_id)
        fields["layout"] = str(raw_kind) if raw_kind != kind else ""
    if kind == KIND_DRAG_CURVE:
        fields["path"] = _path(raw, task_id)
        fields["start"] = _point(
            _pick(raw, "start", default={"x": raw.get("startX"), "y": raw.get("startY")}), "start", task_id
        )
        threshold = _number(
            _pick(raw, "endThreshold", default=GESTURE.curve_end_threshold), "endThreshold", task_id
        )
        fields["end_threshold"] = _positive(threshold, "endThreshold", task_id)
        fields["icon"] = str(raw.get("icon", ""))
    if kind == KIND_TRACE:
        fields["shape"] = _shape(raw, task_id)

    return Task(**fields)


def load_tasks(raw: Any) -> Tuple[List[Task], List[Dict[str, Any]]]:
    """
    Validate a collection (``{"tasks": [...]}`` or a bare list).

    Returns the valid tasks and a list of rejections
    (``{"index", "task_id", "reason"}``); rejected descriptors are logged and
    skipped. Duplicate ids keep the first occurrence.
    """
    if isinstance(raw, dict):
        raw = raw.get("tasks")
    if not isinstance(raw, list):
        return [], [{"index": None, "task_id": None, "reason": "collection must be a list of tasks"}]

    tasks: List[Task] = []
    rejected: List[Dict[str, Any]] = []
    seen = set()
    for idx, entry in enumerate(raw):
        try:
            task = load_task(entry)
        except TaskValidationError as exc:
            logger.warning("Rejected task descriptor #%s: %s", idx, exc)
            rejected.append({"index": idx, "task_id": exc.task_id, "reason": exc.reason})
            continue
        if task.task_id in seen:
            logger.warning("Rejected task descriptor #%s: duplicate id %r", idx, task.task_id)
            rejected.append({"index": idx, "task_id": task.task_id, "reason": "duplicate id"})
            continue
        seen.add(task.task_id)
        tasks.append(task)
    return tasks, rejected
