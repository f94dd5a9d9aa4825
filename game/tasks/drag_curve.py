from typing import List

from game.geometry import distance, distance_to_polyline
from game.runtime.models import (
    DRAG_END,
    DRAG_MOVE,
    DRAG_START,
    GESTURE_NEEDS_RETRY,
    KIND_DRAG_CURVE,
    REASON_NOT_AT_END,
    STEP_SUCCEEDED,
    Feedback,
    Interaction,
)
from game.runtime.session import Session
from game.tasks.base import TaskBase


def curve_accuracy(deviations: List[float], path_width: float) -> float:
    if not deviations:
        return 0.0
    average = sum(deviations) / len(deviations)
    return max(0.0, min(100.0, 100.0 - average / path_width * 100.0))


class DragCurveTask(TaskBase):
    kind = KIND_DRAG_CURVE
    continuous = True

    def handle_event(self, session: Session, event: Interaction, now_ms: int) -> List[Feedback]:
        path = self.task.path
        if event.kind == DRAG_START:
            session.gesture_active = True
            session.deviations = []
            return []

        if not session.gesture_active:
            return []

        if event.kind == DRAG_MOVE:
            if event.point is not None:
                session.deviations.append(distance_to_polyline(event.point, path.points))
            return []

        if event.kind != DRAG_END:
            return []

        session.gesture_active = False
        # A release without a position never counts as reaching the end.
        if event.point is not None and distance(event.point, path.points[-1]) < self.task.end_threshold:
            session.score = curve_accuracy(session.deviations, path.path_width)
            session.current_step = 1
            session.deviations = []
            return [self.feedback(session, STEP_SUCCEEDED, match_rate=session.score)]

        session.error_count += 1
        session.deviations = []
        return [self.feedback(session, GESTURE_NEEDS_RETRY, reason=REASON_NOT_AT_END)]

    def is_done(self, session: Session) -> bool:
        return session.current_step >= 1

    def accuracy_score(self, session: Session) -> float:
        return float(session.score)
