from game.runtime.models import (
    KIND_CLICK,
    KIND_DOUBLE_CLICK,
    KIND_DRAG_CURVE,
    KIND_DRAG_DISCRETE,
    KIND_HOVER,
    KIND_TRACE,
)
from game.tasks.click import ClickTask
from game.tasks.double_click import DoubleClickTask
from game.tasks.drag_curve import DragCurveTask
from game.tasks.drag_discrete import DragDiscreteTask
from game.tasks.hover import HoverTask
from game.tasks.trace import TraceTask

HANDLERS = {
    KIND_HOVER: HoverTask,
    KIND_CLICK: ClickTask,
    KIND_DOUBLE_CLICK: DoubleClickTask,
    KIND_DRAG_DISCRETE: DragDiscreteTask,
    KIND_DRAG_CURVE: DragCurveTask,
    KIND_TRACE: TraceTask,
}

__all__ = [
    "HANDLERS",
    "HoverTask",
    "ClickTask",
    "DoubleClickTask",
    "DragDiscreteTask",
    "DragCurveTask",
    "TraceTask",
]
