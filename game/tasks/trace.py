from typing import List

from game.geometry import shape_match_rate
from game.runtime.models import (
    DRAG_END,
    DRAG_MOVE,
    DRAG_START,
    GESTURE_NEEDS_RETRY,
    KIND_TRACE,
    REASON_LOW_MATCH,
    STEP_SUCCEEDED,
    Feedback,
    Interaction,
)
from game.runtime.session import Session
from game.scoring import round_half_up
from game.tasks.base import TaskBase


class TraceTask(TaskBase):
    kind = KIND_TRACE
    continuous = True

    def handle_event(self, session: Session, event: Interaction, now_ms: int) -> List[Feedback]:
        if event.kind == DRAG_START:
            session.gesture_active = True
            session.drawn_points = [event.point] if event.point is not None else []
            return []

        if not session.gesture_active:
            return []

        if event.kind == DRAG_MOVE:
            if event.point is not None:
                session.drawn_points.append(event.point)
            return []

        if event.kind != DRAG_END:
            return []

        session.gesture_active = False
        rate = shape_match_rate(session.drawn_points, self.task.shape, self.gesture)
        session.drawn_points = []
        # score tracks the latest attempt, passing or not
        session.score = round_half_up(rate)
        if rate >= self.gesture.trace_pass_rate:
            session.current_step = 1
            return [self.feedback(session, STEP_SUCCEEDED, match_rate=rate)]

        session.error_count += 1
        return [self.feedback(session, GESTURE_NEEDS_RETRY, reason=REASON_LOW_MATCH, match_rate=rate)]

    def is_done(self, session: Session) -> bool:
        return session.current_step >= 1

    def accuracy_score(self, session: Session) -> float:
        return float(session.score)
