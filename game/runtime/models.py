from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


Point = Tuple[float, float]

KIND_HOVER = "hover"
KIND_CLICK = "click"
KIND_DOUBLE_CLICK = "doubleClick"
KIND_DRAG_DISCRETE = "dragDiscrete"
KIND_DRAG_CURVE = "dragCurve"
KIND_TRACE = "trace"

POINTER_KINDS = (KIND_HOVER, KIND_CLICK, KIND_DOUBLE_CLICK)
CONTINUOUS_KINDS = (KIND_DRAG_CURVE, KIND_TRACE)
ALL_KINDS = POINTER_KINDS + (KIND_DRAG_DISCRETE,) + CONTINUOUS_KINDS

SHAPE_CIRCLE = "circle"
SHAPE_SQUARE = "square"
SHAPE_TRIANGLE = "triangle"
SHAPE_STAR = "star"


@dataclass(frozen=True)
class Target:
    target_id: str
    center: Point
    radius: float


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class DragItem:
    item_id: str
    start: Point
    zone: Rect
    icon: str = ""


@dataclass(frozen=True)
class CurvePath:
    points: Tuple[Point, ...]
    path_width: float
    path_type: str = "bezier"


@dataclass(frozen=True)
class Shape:
    """
    Shape to trace. Only the fields of the given shape_type are meaningful:
    circle -> center, radius; square -> origin, size;
    triangle -> vertices; star -> center, points, inner/outer radius.
    """
    shape_type: str
    line_width: float
    center: Point = (0.0, 0.0)
    radius: float = 0.0
    origin: Point = (0.0, 0.0)
    size: float = 0.0
    vertices: Tuple[Point, ...] = ()
    points: int = 5
    inner_radius: float = 0.0
    outer_radius: float = 0.0


@dataclass(frozen=True)
class Task:
    task_id: str
    kind: str
    difficulty: int
    time_limit_seconds: int
    title: Dict[str, str] = field(default_factory=dict)
    targets: Tuple[Target, ...] = ()
    hover_duration_ms: int = 0
    double_click_interval_ms: int = 0
    items: Tuple[DragItem, ...] = ()
    layout: str = ""
    path: Optional[CurvePath] = None
    start: Point = (0.0, 0.0)
    end_threshold: float = 0.0
    icon: str = ""
    shape: Optional[Shape] = None

    def title_for(self, script: str) -> str:
        if script in self.title:
            return self.title[script]
        for value in self.title.values():
            return value
        return self.task_id

    def step_count(self) -> int:
        if self.kind in POINTER_KINDS:
            return len(self.targets)
        if self.kind == KIND_DRAG_DISCRETE:
            return len(self.items)
        return 1


# Interaction kinds (what the presentation layer feeds in)
POINTER_ENTER = "pointer_enter"
POINTER_LEAVE = "pointer_leave"
CLICK = "click"
DRAG_START = "drag_start"
DRAG_MOVE = "drag_move"
DRAG_END = "drag_end"
DROP = "drop"


@dataclass(frozen=True)
class Interaction:
    kind: str
    target_id: Optional[str] = None
    point: Optional[Point] = None
    item_id: Optional[str] = None
    zone_id: Optional[str] = None
    overlap: bool = False
    session_id: Optional[str] = None


def pointer_enter(target_id: str, session_id: Optional[str] = None) -> Interaction:
    return Interaction(kind=POINTER_ENTER, target_id=target_id, session_id=session_id)


def pointer_leave(target_id: str, session_id: Optional[str] = None) -> Interaction:
    return Interaction(kind=POINTER_LEAVE, target_id=target_id, session_id=session_id)


def click(target_id: str, session_id: Optional[str] = None) -> Interaction:
    return Interaction(kind=CLICK, target_id=target_id, session_id=session_id)


def drag_start(point: Point, session_id: Optional[str] = None) -> Interaction:
    return Interaction(kind=DRAG_START, point=point, session_id=session_id)


def drag_move(point: Point, session_id: Optional[str] = None) -> Interaction:
    return Interaction(kind=DRAG_MOVE, point=point, session_id=session_id)


def drag_end(point: Point, session_id: Optional[str] = None) -> Interaction:
    return Interaction(kind=DRAG_END, point=point, session_id=session_id)


def drop(item_id: str, zone_id: Optional[str], overlap: bool, session_id: Optional[str] = None) -> Interaction:
    return Interaction(kind=DROP, item_id=item_id, zone_id=zone_id, overlap=overlap, session_id=session_id)


@dataclass(frozen=True)
class Outcome:
    task_id: str
    final_score: int
    star_rating: int
    elapsed_seconds: float
    error_count: int
    timed_out: bool = False
    completed_at: str = ""

    def to_record(self) -> Dict[str, Any]:
        return {
            "task_id": self.task_id,
            "final_score": self.final_score,
            "star_rating": self.star_rating,
            "elapsed_seconds": self.elapsed_seconds,
            "error_count": self.error_count,
            "timed_out": self.timed_out,
            "completed_at": self.completed_at,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Outcome":
        return cls(
            task_id=str(record["task_id"]),
            final_score=int(record.get("final_score", 0)),
            star_rating=int(record.get("star_rating", 1)),
            elapsed_seconds=float(record.get("elapsed_seconds", 0.0)),
            error_count=int(record.get("error_count", 0)),
            timed_out=bool(record.get("timed_out", False)),
            completed_at=str(record.get("completed_at", "")),
        )


# Feedback kinds (what the engine emits for the presentation layer)
STEP_SUCCEEDED = "step_succeeded"
STEP_FAILED = "step_failed"
NEED_SECOND_CLICK = "need_second_click"
GESTURE_NEEDS_RETRY = "gesture_needs_retry"
TASK_COMPLETED = "task_completed"
HINT_CHANGED = "hint_changed"

REASON_WRONG_ORDER = "wrong_order"
REASON_MISSED_ZONE = "missed_zone"
REASON_NOT_AT_END = "not_at_end"
REASON_LOW_MATCH = "low_match"


@dataclass(frozen=True)
class Feedback:
    kind: str
    session_id: str
    target_id: Optional[str] = None
    reason: Optional[str] = None
    remaining: Optional[int] = None
    match_rate: Optional[float] = None
    outcome: Optional[Outcome] = None
