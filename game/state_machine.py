import logging
import math
import uuid
from typing import List, Optional

from config.settings import GestureConfig, ScoringConfig
from game.runtime.models import TASK_COMPLETED, Feedback, Interaction, Outcome, Task
from game.runtime.session import STATE_ACTIVE, STATE_CANCELLED, STATE_COMPLETED, Session
from game.scoring import build_outcome
from game.tasks import HANDLERS
from game.tasks.base import TaskBase

logger = logging.getLogger(__name__)


class SessionMachine:
    """
    Drives one Session from ACTIVE to COMPLETED.

    Everything arrives through two entry points, called one at a time by the
    owner's loop:
    - handle_event() for pointer interactions
    - update() every frame (hover dwell and the time limit)

    Both return the feedback events produced by the transition. Once the
    session is completed or cancelled, both are no-ops.
    """

    def __init__(
        self,
        task: Task,
        now_ms: int,
        session_id: Optional[str] = None,
        gesture: Optional[GestureConfig] = None,
        scoring: Optional[ScoringConfig] = None,
    ) -> None:
        handler_cls = HANDLERS.get(task.kind)
        if handler_cls is None:
            raise ValueError(f"Unsupported task kind: {task.kind}")
        self.scoring = scoring or ScoringConfig()
        self.handler: TaskBase = handler_cls(task, gesture=gesture, scoring=self.scoring)
        self.session = Session(
            session_id=session_id or uuid.uuid4().hex,
            task=task,
            started_ms=now_ms,
        )

    @property
    def session_id(self) -> str:
        return self.session.session_id

    @property
    def task(self) -> Task:
        return self.session.task

    @property
    def outcome(self) -> Optional[Outcome]:
        return self.session.outcome

    def begin(self, now_ms: int) -> List[Feedback]:
        logger.info("Session %s started for task %s", self.session_id, self.task.task_id)
        return self.handler.begin(self.session, now_ms)

    def is_active(self) -> bool:
        return self.session.is_active()

    def is_complete(self) -> bool:
        return self.session.state == STATE_COMPLETED

    def elapsed_seconds(self, now_ms: int) -> float:
        return max(0, now_ms - self.session.started_ms) / 1000.0

    def remaining_seconds(self, now_ms: int) -> int:
        elapsed = int(math.floor(self.elapsed_seconds(now_ms)))
        return max(0, self.task.time_limit_seconds - elapsed)

    def handle_event(self, event: Interaction, now_ms: int) -> List[Feedback]:
        if not self.is_active():
            return []
        if event.session_id is not None and event.session_id != self.session_id:
            logger.debug("Event for session %s dropped by %s", event.session_id, self.session_id)
            return []
        # The deadline may pass between frames; it wins over a late interaction.
        if self._expired(now_ms):
            return self._time_out(now_ms)
        out = self.handler.handle_event(self.session, event, now_ms)
        if self.handler.is_done(self.session):
            out.extend(self._complete(now_ms, timed_out=False))
        return out

    def update(self, now_ms: int) -> List[Feedback]:
        if not self.is_active():
            return []
        out = self.handler.update(self.session, now_ms)
        if self.handler.is_done(self.session):
            out.extend(self._complete(now_ms, timed_out=False))
            return out
        if self._expired(now_ms):
            out.extend(self._time_out(now_ms))
        return out

    def _expired(self, now_ms: int) -> bool:
        return self.elapsed_seconds(now_ms) >= self.task.time_limit_seconds

    def _time_out(self, now_ms: int) -> List[Feedback]:
        logger.info("Session %s timed out at step %s", self.session_id, self.session.current_step)
        return self._complete(now_ms, timed_out=True)

    def cancel(self) -> None:
        if not self.is_active():
            return
        self.session.state = STATE_CANCELLED
        self.session.clear_dwell()
        self.session.clear_pending_click()
        self.session.gesture_active = False
        logger.debug("Session %s cancelled", self.session_id)

    def _complete(self, now_ms: int, timed_out: bool) -> List[Feedback]:
        session = self.session
        session.clear_dwell()
        session.clear_pending_click()
        session.gesture_active = False
        session.deviations = []
        session.drawn_points = []
        session.outcome = build_outcome(
            task_id=self.task.task_id,
            elapsed_seconds=self.elapsed_seconds(now_ms),
            time_limit_seconds=self.task.time_limit_seconds,
            accuracy_score=self.handler.accuracy_score(session),
            error_count=session.error_count,
            weights=self.handler.weights,
            timed_out=timed_out,
            config=self.scoring,
        )
        session.state = STATE_COMPLETED
        logger.info(
            "Session %s completed: score=%s stars=%s errors=%s",
            self.session_id,
            session.outcome.final_score,
            session.outcome.star_rating,
            session.outcome.error_count,
        )
        return [Feedback(kind=TASK_COMPLETED, session_id=self.session_id, outcome=session.outcome)]


__all__ = ["SessionMachine", "STATE_ACTIVE", "STATE_COMPLETED", "STATE_CANCELLED"]
